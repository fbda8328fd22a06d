# supersearch/infrastructure/text_normalizer.py

import html
import re
from typing import Optional

from bs4 import BeautifulSoup


NBSP_ENTITY = "&nbsp;"

_LINE_BREAK_RUNS   = re.compile(r"[\r\n]+")
_BLANK_RUNS        = re.compile(r"[\t ]+")
_OUTSIDE_ALLOW_SET = re.compile(r"[^a-z0-9\-!@#$%^&*()_+=.,? ]", re.IGNORECASE)
_WHITESPACE_RUNS   = re.compile(r"\s+")


def strip_markup(text: str) -> str:
    """Drop every tag, keeping only the text nodes. Script and style bodies go too."""
    soup = BeautifulSoup(text, "html.parser")
    for element in soup(["script", "style"]):
        element.decompose()
    return soup.get_text()


def normalize_content(raw: Optional[str]) -> str:
    """
    Turn a raw HTML body into the plain text stored in the snapshot.

    Lossy on purpose: emoji, non-Latin scripts and stray punctuation all
    become spaces. The result never holds a tag, an &nbsp; or two
    consecutive whitespace characters.
    """
    if not raw:
        return ""

    text = raw.replace(NBSP_ENTITY, " ")
    text = html.unescape(text)
    text = strip_markup(text)
    text = _LINE_BREAK_RUNS.sub(" ", text)
    text = _BLANK_RUNS.sub(" ", text)
    text = _OUTSIDE_ALLOW_SET.sub(" ", text)
    # the allow-set pass can open new gaps
    return _WHITESPACE_RUNS.sub(" ", text).strip()
