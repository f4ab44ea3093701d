"""MakeCode Python to MicroPython conversion pipeline.

``convert`` never raises on string input: anything it does not recognise is
left as it was.
"""

from __future__ import annotations

import logging
import re

from makecode_mpy.cleanup import clean_python_code
from makecode_mpy.detect import is_makecode_source
from makecode_mpy.handlers import collect_handlers, integrate_handlers
from makecode_mpy.rewrites import list_rewrites

logger = logging.getLogger(__name__)

MICROBIT_IMPORT = "from microbit import *"
MAIN_FILENAME = "main.py"

_IMPORT_MICROBIT_RE = re.compile(r"^(from microbit import \*)", re.MULTILINE)
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def normalize(text: str) -> str:
    """Trim the document, unify line endings and expand tabs."""
    text = text.strip().replace("\r\n", "\n").replace("\r", "\n")
    return "\n".join(line.replace("\t", "    ") for line in text.split("\n"))


def has_microbit_import(text: str) -> bool:
    return _IMPORT_MICROBIT_RE.search(text) is not None


def _insert_after_microbit_import(text: str, statement: str) -> str:
    return _IMPORT_MICROBIT_RE.sub(lambda m: f"{m.group(1)}\n{statement}", text, count=1)


def add_imports(text: str) -> str:
    """Prepend the microbit wildcard import and any module imports the code needs."""
    if not has_microbit_import(text):
        text = f"{MICROBIT_IMPORT}\n\n{text}"

    needs_struct = "radio.send_value" in text or "radio.receive_value" in text
    if needs_struct and "import struct" not in text:
        text = _insert_after_microbit_import(text, "import struct")
    if "music." in text and "import music" not in text:
        text = _insert_after_microbit_import(text, "import music")
    if "radio." in text and "import radio" not in text:
        text = _insert_after_microbit_import(text, "import radio")
    return text


def apply_rewrites(text: str) -> str:
    """Run every registered API rewrite pass in order."""
    for rewrite in list_rewrites():
        text = rewrite.apply(text)
        logger.debug("Applied rewrite pass %s", rewrite.name)
    return text


def collapse_blank_lines(text: str) -> str:
    return _BLANK_RUN_RE.sub("\n\n", text)


def finalize(text: str) -> str:
    """Ensure exactly one trailing newline."""
    return text.rstrip("\n") + "\n"


def convert(source: str) -> str:
    """Convert MakeCode-flavoured Python into micro:bit MicroPython."""
    text = normalize(source)
    text = add_imports(text)
    text = apply_rewrites(text)
    text, handlers = collect_handlers(text)
    text = collapse_blank_lines(text)
    text = integrate_handlers(text, handlers)
    return finalize(text)


def prepare_source(code) -> tuple[str, bool]:
    """Clean editor text and turn it into a main.py body.

    Returns (text, converted) where converted is True when the MakeCode
    pipeline ran. Plain MicroPython only gets the microbit import header.
    """
    cleaned = clean_python_code(code)
    if is_makecode_source(cleaned):
        logger.debug("MakeCode markers found, converting")
        return convert(cleaned), True
    if not has_microbit_import(cleaned):
        cleaned = f"{MICROBIT_IMPORT}\n\n{cleaned}"
    return finalize(cleaned), False
