"""input.* sensor and button reads."""

from makecode_mpy.rewrite import RulePass, rule
from makecode_mpy.rewrites import register_rewrite


def button_object(letter: str) -> str:
    """Button.A / Button.B letter to the microbit button object name."""
    return "button_a" if letter.lower() == "a" else "button_b"


class InputRewrite(RulePass):

    rules = (
        rule(
            r"input\.button_is_pressed\s*\(\s*Button\.([AB])\s*\)",
            lambda m: f"{button_object(m.group(1))}.is_pressed()",
        ),
        rule(
            r"input\.acceleration\s*\(\s*Dimension\.([XYZ])\s*\)",
            lambda m: f"accelerometer.get_{m.group(1).lower()}()",
        ),
        rule(r"input\.compass_heading\s*\(\s*\)", "compass.heading()"),
        rule(r"input\.calibrate_compass\s*\(\s*\)", "compass.calibrate()"),
        rule(r"input\.temperature\s*\(\s*\)", "temperature()"),
    )

    @property
    def name(self):
        return "input"


register_rewrite(InputRewrite())
