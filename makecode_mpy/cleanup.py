"""Text cleanup for code copied out of a browser editor."""

import re
import unicodedata

_TRAILING_WS_RE = re.compile(r"[ \t]+$")
_BLANK_RUN_RE = re.compile(r"\n{3,}")
_QUOTES_RE = re.compile("[\u2018\u2019\u201c\u201d]")
_DASHES_RE = re.compile("[\u2013\u2014]")
_ZERO_WIDTH_RE = re.compile("[\u200b-\u200d\ufeff]")


def clean_python_code(code) -> str:
    """Normalize line endings, tabs, trailing spaces and blank-line runs.

    Non-string input yields an empty string. Non-empty output ends with a newline.
    """
    if not isinstance(code, str):
        return ""
    cleaned = code.replace("\r\n", "\n").replace("\r", "\n")
    cleaned = "\n".join(
        _TRAILING_WS_RE.sub("", line.replace("\t", "    "))
        for line in cleaned.split("\n")
    )
    cleaned = _BLANK_RUN_RE.sub("\n\n", cleaned).strip()
    if cleaned and not cleaned.endswith("\n"):
        cleaned += "\n"
    return cleaned


def normalize_unicode(text: str, nfkc: bool = True, remove_zero_width: bool = True) -> str:
    """Replace typographic characters editors sneak into code with ASCII."""
    if nfkc:
        text = unicodedata.normalize("NFKC", text)
    text = _QUOTES_RE.sub('"', text)
    text = _DASHES_RE.sub("-", text)
    if remove_zero_width:
        text = _ZERO_WIDTH_RE.sub("", text)
    return text.replace("\u00a0", " ")
