"""Tests for clipread.engine."""

import math

import pytest

from clipread.config import ReaderConfig
from clipread.engine import (
    EMPTY,
    PAUSED,
    PLAYING,
    ReaderEngine,
    Snapshot,
    SessionState,
    format_time,
    progress_label,
)
from clipread.errors import NothingToReadError


def loaded(*tokens: str) -> ReaderEngine:
    engine = ReaderEngine()
    engine.load(tokens)
    return engine


class TestLoad:
    def test_fresh_engine_is_empty(self, engine: ReaderEngine) -> None:
        assert engine.status == EMPTY
        assert engine.state.wpm == 350

    def test_load_pauses_at_start(self) -> None:
        engine = loaded("a", "b", "c")
        assert engine.status == PAUSED
        assert engine.state.cursor == 0
        assert engine.state.tokens == ("a", "b", "c")

    def test_empty_load_raises_and_keeps_state(self) -> None:
        engine = loaded("a", "b")
        engine.toggle_play()
        with pytest.raises(NothingToReadError) as exc:
            engine.load([])
        assert exc.value.reason == NothingToReadError.NO_TOKENS
        assert engine.state.tokens == ("a", "b")

    def test_empty_load_never_plays(self, engine: ReaderEngine) -> None:
        with pytest.raises(NothingToReadError):
            engine.load([])
        assert engine.status == EMPTY
        assert engine.state.running is False

    def test_reload_stops_playback(self) -> None:
        engine = loaded("a", "b", "c")
        engine.toggle_play()
        engine.advance()
        engine.load(["x", "y"])
        assert engine.state == SessionState(("x", "y"), 0, False, 350)


class TestPlayback:
    def test_play_to_end(self) -> None:
        engine = loaded("a", "b", "c")
        engine.toggle_play()
        engine.advance()
        engine.advance()
        assert engine.state.cursor == 2
        assert engine.state.running is True

        engine.advance()
        assert engine.state.cursor == 2
        assert engine.state.running is False

    def test_toggle_flips(self) -> None:
        engine = loaded("a", "b", "c")
        assert engine.toggle_play().running is True
        assert engine.status == PLAYING
        assert engine.toggle_play().running is False

    def test_toggle_at_end_restarts(self) -> None:
        engine = loaded("a", "b", "c")
        engine.seek(10)
        state = engine.toggle_play()
        assert state.cursor == 0
        assert state.running is True

    def test_toggle_on_empty_is_noop(self, engine: ReaderEngine) -> None:
        assert engine.toggle_play().running is False

    def test_single_token(self) -> None:
        engine = loaded("only")
        engine.toggle_play()
        assert engine.state.running is True
        engine.advance()
        assert engine.state == SessionState(("only",), 0, False, 350)


class TestSeek:
    def test_clamps_at_start(self) -> None:
        engine = loaded(*[str(i) for i in range(20)])
        engine.seek(3)
        assert engine.seek(-10).cursor == 0

    def test_clamps_at_end(self) -> None:
        engine = loaded(*[str(i) for i in range(5)])
        assert engine.forward().cursor == 4

    def test_rewind_forward_use_skip(self) -> None:
        engine = loaded(*[str(i) for i in range(30)])
        assert engine.forward().cursor == 10
        assert engine.forward().cursor == 20
        assert engine.rewind().cursor == 10

    def test_explicit_zero_skip_stays_put(self) -> None:
        engine = loaded(*[str(i) for i in range(30)])
        engine.seek(5)
        assert engine.forward(0).cursor == 5
        assert engine.rewind(0).cursor == 5
        assert engine.forward(3).cursor == 8

    def test_seek_keeps_running(self) -> None:
        engine = loaded(*[str(i) for i in range(30)])
        engine.toggle_play()
        assert engine.seek(5).running is True

    def test_seek_on_empty(self, engine: ReaderEngine) -> None:
        assert engine.seek(-3).cursor == 0
        assert engine.seek(3).cursor == 0


class TestPace:
    @pytest.mark.parametrize("wpm,expected", [(2000, 1000), (0, 50), (-5, 50), (400, 400)])
    def test_set_pace_clamps(self, engine: ReaderEngine, wpm: int, expected: int) -> None:
        assert engine.set_pace(wpm).wpm == expected

    def test_steps(self, engine: ReaderEngine) -> None:
        assert engine.faster().wpm == 400
        assert engine.slower().wpm == 350

    def test_step_respects_bounds(self) -> None:
        engine = ReaderEngine(ReaderConfig(default_wpm=1000))
        assert engine.faster().wpm == 1000
        engine.set_pace(50)
        assert engine.slower().wpm == 50

    def test_interval(self, engine: ReaderEngine) -> None:
        engine.set_pace(300)
        assert engine.interval_ms == pytest.approx(200.0)

    def test_pace_keeps_cursor(self) -> None:
        engine = loaded("a", "b", "c")
        engine.toggle_play()
        engine.advance()
        assert engine.set_pace(500).cursor == 1


class TestSnapshot:
    def test_empty(self, engine: ReaderEngine) -> None:
        snap = engine.snapshot()
        assert snap.current_token == ""
        assert snap.progress_fraction == 0.0
        assert snap.words_remaining == 0
        assert snap.status == EMPTY

    def test_single_token_progress(self) -> None:
        assert loaded("one").snapshot().progress_fraction == 0.0

    def test_progress_and_remaining(self) -> None:
        engine = loaded("a", "b", "c", "d", "e")
        engine.seek(2)
        snap = engine.snapshot()
        assert snap.current_token == "c"
        assert snap.progress_fraction == pytest.approx(0.5)
        assert snap.words_remaining == 2

    def test_estimated_seconds(self) -> None:
        engine = loaded(*["w"] * 101)
        engine.set_pace(300)
        snap = engine.snapshot()
        assert snap.words_remaining == 100
        assert snap.estimated_seconds_remaining == pytest.approx(20.0)
        assert format_time(snap.estimated_seconds_remaining) == "0:20"


class TestFormatting:
    @pytest.mark.parametrize(
        "seconds,expected",
        [(0, "0:00"), (20.0, "0:20"), (59.9, "0:59"), (150, "2:30"), (3600, "60:00"),
         (-1, "0:00"), (math.inf, "0:00"), (math.nan, "0:00")],
    )
    def test_format_time(self, seconds: float, expected: str) -> None:
        assert format_time(seconds) == expected

    def test_progress_label_rounds_half_up(self) -> None:
        snap = Snapshot("x", 1, 201, False, 350, PAUSED, 1 / 200, 199, 0.0)
        assert progress_label(snap) == "2 / 201 (1%)"

    def test_progress_label(self) -> None:
        engine = loaded("a", "b", "c")
        engine.seek(1)
        assert progress_label(engine.snapshot()) == "2 / 3 (50%)"

    def test_progress_label_empty(self, engine: ReaderEngine) -> None:
        assert progress_label(engine.snapshot()) == "0 / 0 (0%)"
