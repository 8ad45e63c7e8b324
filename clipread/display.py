"""View model handed to the rendering surface on every tick."""

from __future__ import annotations

from typing import Dict, List, NamedTuple

from clipread.config import DEFAULT_STYLE, FrameStyle
from clipread.engine import Snapshot, format_time, progress_label
from clipread.render import render_word

INSTRUCTIONS_MARKDOWN = """
# Speed Reader

No text loaded. Copy text to your clipboard and press **⌘R** to reload.

## Instructions
1. Copy text to your clipboard
2. Press **⌘R** to load the text
3. Press **Space** to start/pause reading
4. Use **⌘↑**/**⌘↓** to adjust speed
5. Use **←**/**→** to skip backward/forward
"""

PLAYING_LABEL = "▶ Playing"
PAUSED_LABEL = "⏸ Paused"


class Action(NamedTuple):
    name: str
    title: str
    section: str
    shortcut: str


# name -> ReaderSession method of the same name
ACTIONS: List[Action] = [
    Action("toggle_play", "Play/Pause", "Playback", "space"),
    Action("rewind", "Rewind 10 Words", "Playback", "arrowLeft"),
    Action("forward", "Forward 10 Words", "Playback", "arrowRight"),
    Action("faster", "Speed Up (+50 WPM)", "Speed", "cmd+arrowUp"),
    Action("slower", "Slow Down (-50 WPM)", "Speed", "cmd+arrowDown"),
    Action("reload", "Reload Clipboard", "Other", "cmd+r"),
]
ACTION_NAMES = {a.name for a in ACTIONS}


def metadata(snapshot: Snapshot) -> Dict[str, str]:
    return {
        "Speed": f"{snapshot.wpm} WPM",
        "Status": PLAYING_LABEL if snapshot.running else PAUSED_LABEL,
        "Progress": progress_label(snapshot),
        "Time Left": format_time(snapshot.estimated_seconds_remaining),
    }


def build_view(snapshot: Snapshot, style: FrameStyle = DEFAULT_STYLE) -> dict:
    if not snapshot.total:
        return {
            "markdown": INSTRUCTIONS_MARKDOWN,
            "image": None,
            "metadata": None,
            "status": snapshot.status,
            "index": 0,
            "total": 0,
        }

    image = render_word(snapshot.current_token, style)
    return {
        "markdown": f"![word]({image})",
        "image": image,
        "metadata": metadata(snapshot),
        "status": snapshot.status,
        "index": snapshot.index,
        "total": snapshot.total,
    }
