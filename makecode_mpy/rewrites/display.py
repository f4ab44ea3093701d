"""basic.* display calls to the microbit display API."""

from makecode_mpy.icons import image_constant
from makecode_mpy.rewrite import RulePass, rule
from makecode_mpy.rewrites import register_rewrite


def _show_icon(match) -> str:
    return f"display.show(Image.{image_constant(match.group(1))})"


class DisplayRewrite(RulePass):

    rules = (
        rule(r"basic\.show_icon\s*\(\s*IconNames\.(\w+)\s*\)", _show_icon),
        rule(r"basic\.clear_screen\s*\(\s*\)", "display.clear()"),
        rule(r"basic\.show_string\s*\(\s*([^)]+)\s*\)", r"display.scroll(\1)"),
        rule(r"basic\.show_number\s*\(\s*([^)]+)\s*\)", r"display.scroll(str(\1))"),
        # Namespace swaps for whatever the specific rules above left behind
        rule(r"basic\.show\s*\(", "display.show("),
        rule(r"basic\.clear\s*\(", "display.clear("),
        rule(r"basic\.pause\s*\(", "sleep("),
    )

    @property
    def name(self):
        return "display"


register_rewrite(DisplayRewrite())
