from __future__ import annotations

import base64
import html
import re

from clipread.config import DEFAULT_STYLE, FrameStyle
from clipread.orp import orp_index, split_at_orp

GUIDE_INSET = 50
GUIDE_ABOVE = 30
GUIDE_BELOW = 35
TICK_LENGTH = 10

# characters XML 1.0 does not allow, lone surrogates included
INVALID_XML_RE = re.compile("[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")
REPLACEMENT_CHAR = "\ufffd"


def escape_xml(text: str) -> str:
    # one replacement per bad character keeps the monospace layout intact
    text = INVALID_XML_RE.sub(REPLACEMENT_CHAR, text)
    # quote=True covers both quote characters
    return html.escape(text, quote=True)


def render_word_svg(word: str, style: FrameStyle = DEFAULT_STYLE) -> str:
    """Draw ``word`` with its ORP letter pinned to the canvas centre.

    The text run starts ``orp_index * char_width + char_width / 2`` left of
    centre, which puts the middle of the pivot glyph on the centre column
    whatever the word length.
    """
    before, orp, after = split_at_orp(word)

    width = style.width
    height = style.height
    center_x = width / 2
    center_y = height / 2
    char_width = style.char_width

    start_x = center_x - orp_index(word) * char_width - char_width / 2
    text_y = center_y + style.font_size / 3

    guide_y1 = center_y - GUIDE_ABOVE
    guide_y2 = center_y + GUIDE_BELOW

    runs = [f"<tspan>{escape_xml(before)}</tspan>"] if before else []
    if orp:
        runs.append(f'<tspan fill="{style.orp_color}">{escape_xml(orp)}</tspan>')
    if after:
        runs.append(f"<tspan>{escape_xml(after)}</tspan>")

    text_runs = "".join(runs)

    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" viewBox="0 0 {width} {height}">
  <rect width="{width}" height="{height}" fill="{style.bg_color}"/>
  <line x1="{GUIDE_INSET}" y1="{guide_y1}" x2="{width - GUIDE_INSET}" y2="{guide_y1}" stroke="{style.guide_color}" stroke-width="1"/>
  <line x1="{GUIDE_INSET}" y1="{guide_y2}" x2="{width - GUIDE_INSET}" y2="{guide_y2}" stroke="{style.guide_color}" stroke-width="1"/>
  <line x1="{center_x}" y1="{guide_y1 - TICK_LENGTH}" x2="{center_x}" y2="{guide_y1}" stroke="{style.pivot_color}" stroke-width="2"/>
  <line x1="{center_x}" y1="{guide_y2}" x2="{center_x}" y2="{guide_y2 + TICK_LENGTH}" stroke="{style.pivot_color}" stroke-width="2"/>
  <text x="{start_x}" y="{text_y}" font-family="{escape_xml(style.font_family)}" font-size="{style.font_size}" fill="{style.text_color}" xml:space="preserve">{text_runs}</text>
</svg>"""


def svg_to_data_uri(svg: str) -> str:
    encoded = base64.b64encode(svg.encode("utf-8", errors="replace")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


def render_word(word: str, style: FrameStyle = DEFAULT_STYLE) -> str:
    """Render ``word`` straight to a self-contained data URI."""
    return svg_to_data_uri(render_word_svg(word, style))
