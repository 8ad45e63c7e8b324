"""
Host adapter around ``ReaderEngine``.

The session is the only place that talks to the timer. After every engine
transition it compares the new state with the armed schedule and re-arms or
disarms so that exactly one schedule is live while playing and none
otherwise. All calls go through one lock because the web host serves
requests and timer ticks from different threads.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from clipread.engine import ReaderEngine, SessionState, Snapshot
from clipread.errors import NothingToReadError, TextSourceError
from clipread.sources import TextSource, read_clipboard
from clipread.timers import IntervalTimer, ThreadingIntervalTimer
from clipread.tokenizer import tokenize

logger = logging.getLogger(__name__)

SUCCESS = "success"
FAILURE = "failure"

CLIPBOARD = "clipboard"
DOCUMENT = "document"


@dataclass(frozen=True)
class Notice:
    """A transient message for the host to show, e.g. as a toast."""

    style: str
    title: str
    message: str

    def to_dict(self) -> dict:
        return {"style": self.style, "title": self.title, "message": self.message}


EMPTY_NOTICES = {
    CLIPBOARD: Notice(FAILURE, "Clipboard Empty", "Copy some text to your clipboard first"),
    DOCUMENT: Notice(FAILURE, "Document Empty", "No extractable text found. (Scanned PDF likely needs OCR.)"),
}
NO_TOKENS_NOTICES = {
    CLIPBOARD: Notice(FAILURE, "No Words Found", "Clipboard doesn't contain readable text"),
    DOCUMENT: Notice(FAILURE, "No Words Found", "Document doesn't contain readable text"),
}
SOURCE_FAILED_NOTICE = Notice(FAILURE, "Error", "Failed to read clipboard")

Listener = Callable[[Snapshot], None]
NoticeHandler = Callable[[Notice], None]


def log_notice(notice: Notice) -> None:
    level = logging.INFO if notice.style == SUCCESS else logging.WARNING
    logger.log(level, "%s: %s", notice.title, notice.message)


class ReaderSession:
    def __init__(
        self,
        engine: Optional[ReaderEngine] = None,
        timer: Optional[IntervalTimer] = None,
        source: TextSource = read_clipboard,
        show_notice: NoticeHandler = log_notice,
    ) -> None:
        self.engine = engine or ReaderEngine()
        self.timer = timer or ThreadingIntervalTimer()
        self.source = source
        self.show_notice = show_notice
        self.last_notice: Optional[Notice] = None
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()
        self._handle: Optional[object] = None
        self._generation: Optional[object] = None
        self._armed_wpm: Optional[int] = None

    # -- observers ---------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for new snapshots; returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> Snapshot:
        with self._lock:
            return self.engine.snapshot()

    @property
    def state(self) -> SessionState:
        with self._lock:
            return self.engine.state

    @property
    def timer_armed(self) -> bool:
        return self._handle is not None

    def _publish(self) -> Snapshot:
        snap = self.engine.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception("Snapshot listener %r failed", listener)
        return snap

    def _notify(self, notice: Notice) -> None:
        self.last_notice = notice
        self.show_notice(notice)

    # -- timer coordination ------------------------------------------------

    def _disarm(self) -> None:
        if self._handle is not None:
            self.timer.disarm(self._handle)
        self._handle = None
        self._generation = None
        self._armed_wpm = None

    def _arm(self) -> None:
        self._disarm()
        generation = object()
        self._generation = generation
        self._armed_wpm = self.engine.state.wpm
        self._handle = self.timer.arm(self.engine.interval_ms, lambda: self._on_tick(generation))

    def _sync_timer(self) -> None:
        state = self.engine.state
        if not state.running:
            self._disarm()
        elif self._handle is None or state.wpm != self._armed_wpm:
            self._arm()

    def _on_tick(self, generation: object) -> None:
        with self._lock:
            # late tick from a schedule that was replaced or disarmed
            if generation is not self._generation:
                return
            self.engine.advance()
            self._sync_timer()
            self._publish()

    def _apply(self, transition: Callable[..., SessionState], *args) -> Snapshot:
        with self._lock:
            transition(*args)
            self._sync_timer()
            return self._publish()

    # -- actions -----------------------------------------------------------

    def toggle_play(self) -> Snapshot:
        return self._apply(self.engine.toggle_play)

    def seek(self, delta: int) -> Snapshot:
        return self._apply(self.engine.seek, delta)

    def rewind(self) -> Snapshot:
        return self._apply(self.engine.rewind)

    def forward(self) -> Snapshot:
        return self._apply(self.engine.forward)

    def set_pace(self, wpm: int) -> Snapshot:
        return self._apply(self.engine.set_pace, wpm)

    def faster(self) -> Snapshot:
        return self._apply(self.engine.faster)

    def slower(self) -> Snapshot:
        return self._apply(self.engine.slower)

    def load_text(self, text: Optional[str], origin: str = CLIPBOARD) -> bool:
        """Tokenize ``text`` and load it; returns False (with a notice) if nothing is readable."""
        if not text or not text.strip():
            self._notify(EMPTY_NOTICES[origin])
            return False

        tokens = tokenize(text)
        with self._lock:
            try:
                self.engine.load(tokens)
            except NothingToReadError:
                self._notify(NO_TOKENS_NOTICES[origin])
                return False
            self._sync_timer()
            self._publish()

        self._notify(Notice(SUCCESS, "Text Loaded", f"{len(tokens)} words ready to read"))
        return True

    def reload(self) -> bool:
        """Read the text source again and load whatever it returns.

        Identical consecutive reads are loaded again, which rewinds to the
        first word.
        """
        try:
            text = self.source()
        except TextSourceError:
            logger.warning("Text source failed", exc_info=True)
            self._notify(SOURCE_FAILED_NOTICE)
            return False
        except Exception:
            logger.exception("Unexpected text source failure")
            self._notify(SOURCE_FAILED_NOTICE)
            return False
        return self.load_text(text, CLIPBOARD)

    def start(self) -> bool:
        return self.reload()

    def close(self) -> None:
        with self._lock:
            self._disarm()
            self._listeners.clear()
