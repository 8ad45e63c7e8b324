from __future__ import annotations


class ClipreadError(Exception):
    """Base class for recoverable reader failures."""


class NothingToReadError(ClipreadError):
    """Acquired text was empty or produced no tokens."""

    EMPTY_INPUT = "empty-input"
    NO_TOKENS = "no-tokens"

    def __init__(self, reason: str = NO_TOKENS, message: str = "") -> None:
        self.reason = reason
        super().__init__(message or f"Nothing to read ({reason})")


class TextSourceError(ClipreadError):
    """The text source itself failed (clipboard unavailable, unreadable file...)."""
