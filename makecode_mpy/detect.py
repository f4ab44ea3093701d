"""MakeCode source detection for makecode-mpy."""

# Substrings only MakeCode's Python export produces. Code without any of them
# is treated as plain MicroPython.
MAKECODE_MARKERS = [
    "basic.",
    "IconNames.",
    "basic.forever",
    "input.on_",
    "pins.analog_pitch",
]


def is_makecode_source(text: str) -> bool:
    """Return True if the text looks like MakeCode-flavoured Python."""
    return any(marker in text for marker in MAKECODE_MARKERS)
