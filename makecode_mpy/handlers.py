"""Event-handler collection and polling-loop synthesis.

MakeCode registers callbacks (``basic.forever``, ``input.on_button_pressed``,
...) that MicroPython has no equivalent for. The registrations are stripped
from the source and re-emitted as checks inside a single ``while True:`` loop.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from makecode_mpy.rewrites.inputs import button_object

logger = logging.getLogger(__name__)

_FOREVER_RE = re.compile(r"basic\.forever\s*\(\s*(\w+)\s*\)")
_BUTTON_PRESSED_RE = re.compile(r"input\.on_button_pressed\s*\(\s*Button\.([AB])\s*,\s*(\w+)\s*\)")
_GESTURE_RE = re.compile(r"input\.on_gesture\s*\(\s*Gesture\.(\w+)\s*,\s*(\w+)\s*\)")
_LOGO_EVENT_RE = re.compile(r"input\.on_logo_event\s*\(\s*TouchButtonEvent\.(\w+)\s*,\s*(\w+)\s*\)")
_MAIN_LOOP_RE = re.compile(r"^\s*while True:")
_INDENT_RE = re.compile(r"^(\s*)")

DEFAULT_FOREVER_NAME = "on_forever"
POLL_INTERVAL_MS = 10


@dataclass(frozen=True)
class EventHandlerBinding:
    kind: str      # "button", "gesture" or "logo"
    target: str    # "button_a"/"button_b", gesture name, or "pin_logo"
    function: str

    def condition(self) -> str:
        """The MicroPython expression polled for this trigger."""
        if self.kind == "gesture":
            return f'accelerometer.was_gesture("{self.target}")'
        if self.kind == "logo":
            return "pin_logo.is_touched()"
        return f"{self.target}.was_pressed()"


@dataclass(frozen=True)
class HandlerSet:
    bindings: tuple[EventHandlerBinding, ...] = ()
    forever: str | None = None

    def is_empty(self) -> bool:
        return not self.bindings and self.forever is None


def collect_handlers(text: str) -> tuple[str, HandlerSet]:
    """Strip handler registrations from text and return them as a HandlerSet."""
    forever = None
    m = _FOREVER_RE.search(text)
    if m:
        forever = m.group(1)
        text = _FOREVER_RE.sub("", text)

    buttons: list[EventHandlerBinding] = []
    gestures: list[EventHandlerBinding] = []
    logos: list[EventHandlerBinding] = []

    def _button(m):
        buttons.append(EventHandlerBinding("button", button_object(m.group(1)), m.group(2)))
        return ""

    def _gesture(m):
        gestures.append(EventHandlerBinding("gesture", m.group(1).lower(), m.group(2)))
        return ""

    def _logo(m):
        logos.append(EventHandlerBinding("logo", "pin_logo", m.group(2)))
        return ""

    text = _BUTTON_PRESSED_RE.sub(_button, text)
    text = _GESTURE_RE.sub(_gesture, text)
    text = _LOGO_EVENT_RE.sub(_logo, text)

    handlers = HandlerSet(bindings=tuple(buttons + gestures + logos), forever=forever)
    logger.debug("Collected %d event bindings, forever=%s", len(handlers.bindings), forever)
    return text, handlers


def _defines(text: str, function: str) -> bool:
    return f"def {function}" in text


def _indent_of(line: str) -> str:
    return _INDENT_RE.match(line).group(1)


def _handler_lines(bindings, indent: str) -> list[str]:
    lines = []
    for binding in bindings:
        lines.append(f"{indent}if {binding.condition()}:")
        lines.append(f"{indent}    {binding.function}()")
    return lines


def _find_main_loop(lines: list[str]) -> int:
    """Index of the first `while True:` line, or -1."""
    for i, line in enumerate(lines):
        if _MAIN_LOOP_RE.match(line):
            return i
    return -1


def _end_of_block(lines: list[str], def_index: int) -> int:
    """Index of the last non-blank line of the block opened at def_index."""
    def_indent = len(_indent_of(lines[def_index]))
    end = def_index
    for j in range(def_index + 1, len(lines)):
        line = lines[j]
        if not line.strip():
            continue
        if len(_indent_of(line)) <= def_indent:
            break
        end = j
    return end


def integrate_handlers(text: str, handlers: HandlerSet) -> str:
    """Emit polling checks for the collected handlers into a main loop."""
    if handlers.is_empty():
        return text

    lines = text.split("\n")
    loop_index = _find_main_loop(lines)

    if loop_index >= 0:
        if not handlers.bindings:
            # Forever-only code that already loops is left as written
            logger.debug("Existing loop found, leaving forever %s alone", handlers.forever)
            return text
        logger.debug("Merging handlers into existing loop at line %d", loop_index + 1)
        return "\n".join(_merge_into_loop(text, lines, loop_index, handlers))

    if handlers.bindings:
        logger.debug("Appending a new polling loop")
        return "\n".join(lines + _new_loop(text, lines, handlers))

    logger.debug("Synthesizing a loop after def %s", handlers.forever)
    return "\n".join(_loop_after_forever(lines, handlers.forever))


def _merge_into_loop(text, lines, loop_index, handlers) -> list[str]:
    loop_indent = _indent_of(lines[loop_index])
    next_line = lines[loop_index + 1] if loop_index + 1 < len(lines) else ""
    indent = _indent_of(next_line)
    if not next_line.strip() or len(indent) <= len(loop_indent):
        indent = loop_indent + "    "

    inserted = _handler_lines(handlers.bindings, indent)
    if handlers.forever and _defines(text, handlers.forever):
        inserted.append(f"{indent}{handlers.forever}()")
    return lines[:loop_index + 1] + inserted + lines[loop_index + 1:]


def _new_loop(text, lines, handlers) -> list[str]:
    # Text ending in a newline already leaves one blank line before the loop
    block = [] if lines and not lines[-1].strip() else [""]
    block.append("while True:")
    block.extend(_handler_lines(handlers.bindings, "    "))
    forever = handlers.forever or DEFAULT_FOREVER_NAME
    if _defines(text, forever):
        block.append(f"    {forever}()")
    block.append(f"    sleep({POLL_INTERVAL_MS})")
    return block


def _loop_after_forever(lines, forever) -> list[str]:
    def_re = re.compile(rf"^(\s*)def\s+{re.escape(forever)}\s*\(")
    for i, line in enumerate(lines):
        if def_re.match(line):
            end = _end_of_block(lines, i)
            loop = ["", "while True:", f"    {forever}()", f"    sleep({POLL_INTERVAL_MS})"]
            return lines[:end + 1] + loop + lines[end + 1:]
    logger.debug("No definition found for forever function %s", forever)
    return lines
