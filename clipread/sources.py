"""
Text sources for the reader.

The clipboard is the primary source; PDF and EPUB documents can be uploaded
through the web surface as an alternative. Every failure is raised as
``TextSourceError`` so the session can turn it into a notice.
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Callable, List, Tuple

import pyperclip
from bs4 import BeautifulSoup
from ebooklib import epub
from pypdf import PdfReader

from clipread.errors import TextSourceError
from clipread.tokenizer import normalize_whitespace

logger = logging.getLogger(__name__)

TextSource = Callable[[], str]

ALLOWED_EXTENSIONS = {".pdf", ".epub"}


def read_clipboard() -> str:
    try:
        text = pyperclip.paste()
    except pyperclip.PyperclipException as e:
        raise TextSourceError(f"Failed to read clipboard: {e}") from e
    return text or ""


def html_to_text(markup) -> str:
    soup = BeautifulSoup(markup, "html.parser")
    for tag in soup(["script", "style", "nav"]):
        tag.decompose()
    return normalize_whitespace(soup.get_text(separator=" ", strip=True))


def extract_text_from_pdf(path: str) -> str:
    try:
        pages = list(PdfReader(path).pages)
    except Exception as e:
        raise TextSourceError(f"Unreadable PDF: {e}") from e

    pages_text: List[str] = []
    for i, page in enumerate(pages):
        try:
            txt = page.extract_text() or ""
        except Exception:
            logger.warning("Could not extract text from page %d of %s", i + 1, path, exc_info=True)
            txt = ""
        pages_text.append(txt)
    return normalize_whitespace("\n\n".join(pages_text))


def extract_text_from_epub(path: str) -> str:
    try:
        book = epub.read_epub(path)
    except Exception:
        logger.warning("ebooklib could not open %s, reading archive directly", path, exc_info=True)
        return extract_text_from_epub_archive(path)

    parts: List[str] = []
    for item in book.get_items():
        media_type = str(getattr(item, "media_type", ""))
        if "application/xhtml+xml" not in media_type and "text/html" not in media_type:
            continue
        text = html_to_text(item.get_content())
        if text:
            parts.append(text)
    if parts:
        return normalize_whitespace("\n\n".join(parts))

    return extract_text_from_epub_archive(path)


def extract_text_from_epub_archive(path: str) -> str:
    """Read every (X)HTML member of the EPUB zip in name order."""
    if not zipfile.is_zipfile(path):
        raise TextSourceError("Invalid EPUB file (not a zip archive).")

    html_files: List[Tuple[str, bytes]] = []
    with zipfile.ZipFile(path, "r") as zf:
        for name in zf.namelist():
            if name.lower().endswith((".xhtml", ".html", ".htm")):
                html_files.append((name, zf.read(name)))

    if not html_files:
        raise TextSourceError("No readable HTML/XHTML content found in EPUB.")

    html_files.sort(key=lambda x: x[0])
    parts = [text for text in (html_to_text(raw) for _, raw in html_files) if text]
    return normalize_whitespace("\n\n".join(parts))


def allowed_file(filename: str) -> bool:
    return Path(filename).suffix.lower() in ALLOWED_EXTENSIONS


def extract_text_from_file(path: str) -> str:
    ext = Path(path).suffix.lower()
    if ext == ".pdf":
        return extract_text_from_pdf(path)
    if ext == ".epub":
        return extract_text_from_epub(path)
    raise TextSourceError(f"Unsupported file type: {ext} (expected .pdf or .epub)")
