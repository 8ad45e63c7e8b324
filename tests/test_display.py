"""Tests for clipread.display."""

from clipread.display import ACTIONS, INSTRUCTIONS_MARKDOWN, build_view, metadata
from clipread.engine import ReaderEngine
from clipread.render import render_word


def test_empty_view(engine: ReaderEngine) -> None:
    view = build_view(engine.snapshot())
    assert view["markdown"] == INSTRUCTIONS_MARKDOWN
    assert view["metadata"] is None


def test_view_renders_current_word(engine: ReaderEngine) -> None:
    engine.load(["alpha", "beta"])
    engine.seek(1)
    view = build_view(engine.snapshot())
    assert view["image"] == render_word("beta")
    assert view["index"] == 1


def test_metadata_labels(engine: ReaderEngine) -> None:
    engine.load(["w"] * 101)
    engine.set_pace(300)
    engine.toggle_play()
    assert metadata(engine.snapshot()) == {
        "Speed": "300 WPM",
        "Status": "▶ Playing",
        "Progress": "1 / 101 (0%)",
        "Time Left": "0:20",
    }


def test_actions_have_unique_shortcuts() -> None:
    shortcuts = [a.shortcut for a in ACTIONS]
    assert len(set(shortcuts)) == len(shortcuts)
