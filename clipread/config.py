"""
Reader configuration.

Immutable config objects passed into the engine, renderer and web host so
none of them reach for ambient state. ``ReaderConfig.from_env`` lets the
launcher override defaults through ``CLIPREAD_*`` variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

ENV_PREFIX = "CLIPREAD_"


@dataclass(frozen=True)
class ReaderConfig:
    """
    Playback and host settings.

    Attributes:
        default_wpm: Pace of a fresh session.
        min_wpm: Lower bound of the pace interval.
        max_wpm: Upper bound of the pace interval.
        wpm_step: Increment used by the faster/slower actions.
        skip_words: Tokens jumped by the rewind/forward actions.
        host: Interface the Flask server binds to.
        port: Port the Flask server listens on.
        max_upload_mb: Upload limit for PDF/EPUB documents.
    """

    default_wpm: int = 350
    min_wpm: int = 50
    max_wpm: int = 1000
    wpm_step: int = 50
    skip_words: int = 10
    host: str = "127.0.0.1"
    port: int = 5000
    max_upload_mb: int = 200

    def __post_init__(self) -> None:
        if self.min_wpm <= 0:
            raise ValueError(f"min_wpm must be positive, got {self.min_wpm}")
        if self.max_wpm < self.min_wpm:
            raise ValueError(
                f"max_wpm ({self.max_wpm}) must not be below min_wpm ({self.min_wpm})"
            )
        if not self.min_wpm <= self.default_wpm <= self.max_wpm:
            raise ValueError(
                f"default_wpm ({self.default_wpm}) must lie in "
                f"[{self.min_wpm}, {self.max_wpm}]"
            )
        if self.wpm_step <= 0:
            raise ValueError(f"wpm_step must be positive, got {self.wpm_step}")
        if self.skip_words <= 0:
            raise ValueError(f"skip_words must be positive, got {self.skip_words}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ReaderConfig":
        """Build a config, overriding defaults from ``CLIPREAD_<FIELD>`` variables."""
        environ = os.environ if environ is None else environ
        overrides = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            if f.type in ("int", int):
                try:
                    overrides[f.name] = int(raw)
                except ValueError:
                    raise ValueError(f"{ENV_PREFIX}{f.name.upper()} must be an integer, got {raw!r}") from None
            else:
                overrides[f.name] = raw
        return cls(**overrides)


@dataclass(frozen=True)
class FrameStyle:
    """Canvas geometry and colours of a rendered word frame."""

    width: int = 600
    height: int = 120
    font_size: int = 48
    font_family: str = "Monaco, Menlo, Consolas, monospace"
    bg_color: str = "#1a1a1a"
    text_color: str = "#ffffff"
    orp_color: str = "#ff4444"
    guide_color: str = "#444444"
    pivot_color: str = "#666666"

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"canvas must be positive, got {self.width}x{self.height}")
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive, got {self.font_size}")

    @property
    def char_width(self) -> float:
        # monospace advance approximation
        return self.font_size * 0.6


DEFAULT_CONFIG = ReaderConfig()
DEFAULT_STYLE = FrameStyle()
