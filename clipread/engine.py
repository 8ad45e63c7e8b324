"""
RSVP playback engine.

``ReaderEngine`` owns the session state and exposes the transitions the
host drives: load, toggle play, timer advance, seek and pace changes. Each
transition stores and returns a new immutable ``SessionState``. The engine
never touches a timer or a UI; the host compares states before and after a
transition and arms or disarms its timer accordingly.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from clipread.config import DEFAULT_CONFIG, ReaderConfig
from clipread.errors import NothingToReadError

logger = logging.getLogger(__name__)

EMPTY = "empty"
PAUSED = "paused"
PLAYING = "playing"


@dataclass(frozen=True)
class SessionState:
    tokens: Tuple[str, ...] = ()
    cursor: int = 0
    running: bool = False
    wpm: int = DEFAULT_CONFIG.default_wpm

    @property
    def last_index(self) -> int:
        return max(0, len(self.tokens) - 1)

    @property
    def status(self) -> str:
        if not self.tokens:
            return EMPTY
        return PLAYING if self.running else PAUSED

    @property
    def current_token(self) -> str:
        if not self.tokens:
            return ""
        return self.tokens[self.cursor]


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a session, consumed by the rendering surface."""

    current_token: str
    index: int
    total: int
    running: bool
    wpm: int
    status: str
    progress_fraction: float
    words_remaining: int
    estimated_seconds_remaining: float

    @classmethod
    def from_state(cls, state: SessionState) -> "Snapshot":
        total = len(state.tokens)
        fraction = state.cursor / (total - 1) if total >= 2 else 0.0
        remaining = max(0, total - state.cursor - 1)
        return cls(
            current_token=state.current_token,
            index=state.cursor,
            total=total,
            running=state.running,
            wpm=state.wpm,
            status=state.status,
            progress_fraction=fraction,
            words_remaining=remaining,
            estimated_seconds_remaining=remaining_seconds(remaining, state.wpm),
        )


def remaining_seconds(words_left: int, wpm: int) -> float:
    if wpm <= 0:
        return 0.0
    return words_left / wpm * 60


def format_time(seconds: float) -> str:
    """Format ``seconds`` as ``M:SS``; negative or non-finite input gives ``0:00``."""
    if not math.isfinite(seconds) or seconds < 0:
        return "0:00"
    mins, secs = divmod(int(seconds), 60)
    return f"{mins}:{secs:02d}"


def progress_percent(snapshot: Snapshot) -> int:
    # half-up rounding, not banker's
    return int(math.floor(snapshot.progress_fraction * 100 + 0.5))


def progress_label(snapshot: Snapshot) -> str:
    if not snapshot.total:
        return "0 / 0 (0%)"
    return f"{snapshot.index + 1} / {snapshot.total} ({progress_percent(snapshot)}%)"


class ReaderEngine:
    def __init__(self, config: ReaderConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self.state = SessionState(wpm=config.default_wpm)

    @property
    def status(self) -> str:
        return self.state.status

    @property
    def interval_ms(self) -> float:
        """Timer period for the current pace."""
        return 60_000 / self.state.wpm

    def snapshot(self) -> Snapshot:
        return Snapshot.from_state(self.state)

    def _commit(self, state: SessionState) -> SessionState:
        self.state = state
        return state

    def clamp_pace(self, wpm: int) -> int:
        return max(self.config.min_wpm, min(self.config.max_wpm, int(wpm)))

    def load(self, tokens: Sequence[str]) -> SessionState:
        """Replace the token sequence and pause at the first token.

        An empty sequence raises ``NothingToReadError`` and leaves the
        current state untouched.
        """
        tokens = tuple(tokens)
        if not tokens:
            raise NothingToReadError(NothingToReadError.NO_TOKENS)
        logger.debug("Loaded %d tokens", len(tokens))
        return self._commit(replace(self.state, tokens=tokens, cursor=0, running=False))

    def toggle_play(self) -> SessionState:
        state = self.state
        if not state.tokens:
            return state
        if state.cursor >= state.last_index and not state.running:
            return self._commit(replace(state, cursor=0, running=True))
        return self._commit(replace(state, running=not state.running))

    def advance(self) -> SessionState:
        """Move one token forward; stop at the last token."""
        state = self.state
        if state.cursor >= state.last_index:
            if state.running:
                logger.debug("Reached end of text at token %d", state.cursor)
            return self._commit(replace(state, running=False))
        return self._commit(replace(state, cursor=state.cursor + 1))

    def seek(self, delta: int) -> SessionState:
        state = self.state
        cursor = max(0, min(state.last_index, state.cursor + int(delta)))
        return self._commit(replace(state, cursor=cursor))

    def rewind(self, words: Optional[int] = None) -> SessionState:
        return self.seek(-(self.config.skip_words if words is None else words))

    def forward(self, words: Optional[int] = None) -> SessionState:
        return self.seek(self.config.skip_words if words is None else words)

    def set_pace(self, wpm: int) -> SessionState:
        return self._commit(replace(self.state, wpm=self.clamp_pace(wpm)))

    def faster(self) -> SessionState:
        return self.set_pace(self.state.wpm + self.config.wpm_step)

    def slower(self) -> SessionState:
        return self.set_pace(self.state.wpm - self.config.wpm_step)
