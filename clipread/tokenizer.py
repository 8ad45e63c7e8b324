from __future__ import annotations

import re
from typing import List, Optional

WHITESPACE_RE = re.compile(r"\s+", re.UNICODE)


def normalize_whitespace(text: Optional[str]) -> str:
    if not text:
        return ""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"[ \t]+\n", "\n", text)
    text = re.sub(r"\n[ \t]+", "\n", text)
    text = re.sub(r"[ \t]{2,}", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def tokenize(text: Optional[str]) -> List[str]:
    """Split text into display words, keeping attached punctuation.

    Any run of whitespace (newlines and tabs included) separates two words.
    Empty or whitespace-only input gives an empty list.
    """
    if not text or not isinstance(text, str):
        return []
    return [word for word in WHITESPACE_RE.split(text.strip()) if word]
