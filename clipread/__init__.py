"""Clipboard RSVP speed reader with ORP highlighting."""

from clipread.engine import ReaderEngine, SessionState, Snapshot
from clipread.errors import ClipreadError, NothingToReadError, TextSourceError
from clipread.orp import orp_index, split_at_orp
from clipread.render import render_word
from clipread.tokenizer import tokenize

__all__ = [
    "ClipreadError",
    "NothingToReadError",
    "ReaderEngine",
    "SessionState",
    "Snapshot",
    "TextSourceError",
    "orp_index",
    "render_word",
    "split_at_orp",
    "tokenize",
]

__version__ = "0.1.0"
