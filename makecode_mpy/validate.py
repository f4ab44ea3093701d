"""Heuristic syntax checks for converted MicroPython.

These are line-based heuristics for user feedback, not a parser. Brackets
inside string literals are counted like any other.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_MESSAGES: dict[str, str] = {
    "indentationError": 'Indentation error: expected an indented line after ":"',
    "unbalancedParentheses": "Unbalanced parentheses ({count})",
    "unbalancedBrackets": "Unbalanced brackets ({count})",
    "unbalancedBraces": "Unbalanced braces ({count})",
    "missingImportMusic": 'Missing import: add "import music" or "from microbit import *"',
    "missingImportRadio": 'Missing import: add "import radio" or "from microbit import *"',
    "errorLine": "Line {line}: {message}",
    "validationErrors": "Problems found in the converted code:\n\n{errors}",
}

_PAIRS = [
    ("(", ")", "unbalancedParentheses"),
    ("[", "]", "unbalancedBrackets"),
    ("{", "}", "unbalancedBraces"),
]
_SAME_LEVEL_RE = re.compile(r"^(elif|else|except|finally)\b")
_INDENT_RE = re.compile(r"^(\s*)")


@dataclass(frozen=True)
class Diagnostic:
    line: int
    message: str

    def to_dict(self) -> dict:
        return {"line": self.line, "message": self.message}


def _messages(overrides: dict | None) -> dict[str, str]:
    merged = dict(DEFAULT_MESSAGES)
    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})
    return merged


def _signed(count: int) -> str:
    return f"+{count}" if count > 0 else str(count)


def _indent_width(line: str) -> int:
    return len(_INDENT_RE.match(line).group(1))


def validate(code: str, messages: dict | None = None) -> list[Diagnostic]:
    """Return diagnostics for unbalanced delimiters, indentation and imports."""
    msg = _messages(messages)
    diagnostics: list[Diagnostic] = []
    lines = code.split("\n")
    balance = {key: 0 for _, _, key in _PAIRS}

    for i, line in enumerate(lines):
        for opener, closer, key in _PAIRS:
            balance[key] += line.count(opener) - line.count(closer)

        if i == 0:
            continue
        prev = lines[i - 1]
        current = line.strip()
        if not prev.strip().endswith(":") or not current or current.startswith("#"):
            continue
        if _indent_width(line) <= _indent_width(prev) and not _SAME_LEVEL_RE.match(current):
            diagnostics.append(Diagnostic(i + 1, msg["indentationError"]))

    for _, _, key in _PAIRS:
        if balance[key] != 0:
            diagnostics.append(Diagnostic(len(lines), msg[key].replace("{count}", _signed(balance[key]))))

    has_wildcard = "from microbit import" in code
    if "music." in code and "import music" not in code and not has_wildcard:
        diagnostics.append(Diagnostic(1, msg["missingImportMusic"]))
    if "radio." in code and "import radio" not in code and not has_wildcard:
        diagnostics.append(Diagnostic(1, msg["missingImportRadio"]))

    return diagnostics


def format_diagnostics(diagnostics: list[Diagnostic], messages: dict | None = None) -> str:
    """Render diagnostics as one user-facing block of text ('' when there are none)."""
    if not diagnostics:
        return ""
    msg = _messages(messages)
    lines = "\n".join(
        msg["errorLine"].replace("{line}", str(d.line)).replace("{message}", d.message)
        for d in diagnostics
    )
    return msg["validationErrors"].replace("{errors}", lines)
