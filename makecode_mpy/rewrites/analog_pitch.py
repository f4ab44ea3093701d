"""pins.analog_pitch emulation with a PWM period and a half duty cycle.

MicroPython's music module only drives the speaker pin, so a tone on an
arbitrary pin becomes two statements on that pin. The line is rewritten as a
whole to keep its indentation.
"""

import re

from makecode_mpy.rewrite import RewritePass
from makecode_mpy.rewrites import register_rewrite

PWM_DUTY_CYCLE = 512

_ANALOG_PITCH_RE = re.compile(r"pins\.analog_pitch\s*\(\s*(\w+)\s*,\s*(\w+)\s*\)")
_INDENT_RE = re.compile(r"^(\s*)")


def pin_expression(pin: str) -> str:
    """'0' -> 'pin0'. Anything else is assumed to already name a pin object."""
    if re.fullmatch(r"\d+", pin):
        return f"pin{pin}"
    return pin


class AnalogPitchRewrite(RewritePass):

    @property
    def name(self):
        return "analog_pitch"

    def apply(self, text: str) -> str:
        if not _ANALOG_PITCH_RE.search(text):
            return text

        out = []
        for line in text.split("\n"):
            m = _ANALOG_PITCH_RE.search(line)
            if not m:
                out.append(line)
                continue
            indent = _INDENT_RE.match(line).group(1)
            pin = pin_expression(m.group(1))
            freq = m.group(2)
            out.append(f"{indent}{pin}.set_analog_period_microseconds(int(1000000 / {freq}))")
            out.append(f"{indent}{pin}.write_analog({PWM_DUTY_CYCLE})")
        return "\n".join(out)


register_rewrite(AnalogPitchRewrite())
