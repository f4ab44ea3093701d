"""pins.* digital and analog I/O on numbered edge pins."""

from makecode_mpy.rewrite import RulePass, rule
from makecode_mpy.rewrites import register_rewrite


class PinRewrite(RulePass):

    rules = (
        rule(
            r"pins\.digital_write_pin\s*\(\s*DigitalPin\.P(\d+)\s*,\s*([^)]+)\s*\)",
            r"pin\1.write_digital(\2)",
        ),
        rule(r"pins\.digital_read_pin\s*\(\s*DigitalPin\.P(\d+)\s*\)", r"pin\1.read_digital()"),
        rule(
            r"pins\.analog_write_pin\s*\(\s*AnalogPin\.P(\d+)\s*,\s*([^)]+)\s*\)",
            r"pin\1.write_analog(\2)",
        ),
        rule(r"pins\.analog_read_pin\s*\(\s*AnalogPin\.P(\d+)\s*\)", r"pin\1.read_analog()"),
    )

    @property
    def name(self):
        return "pins"


register_rewrite(PinRewrite())
