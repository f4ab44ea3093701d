"""music.* tones and radio.* messaging."""

from makecode_mpy.rewrite import RulePass, rule
from makecode_mpy.rewrites import register_rewrite

# Numbers travel as one signed byte, matching radio.send_value's packing
RECEIVE_VALUE_EXPR = '(lambda v: struct.unpack("<b", v)[0] if v else None)(radio.receive())'


class MusicRadioRewrite(RulePass):

    rules = (
        rule(r"music\.play_tone\s*\(\s*([^,]+)\s*,\s*([^)]+)\s*\)", r"music.pitch(\1, \2)"),
        rule(r"music\.stop_all_sounds\s*\(\s*\)", "music.stop()"),
        rule(r"radio\.send_string\s*\(\s*([^)]+)\s*\)", r"radio.send(\1)"),
        rule(r"radio\.receive_string\s*\(\s*\)", "radio.receive()"),
        rule(r"radio\.send_value\s*\(\s*[^,]+,\s*([^)]+)\s*\)", r'radio.send(struct.pack("<b", \1))'),
        rule(r"radio\.receive_value\s*\(\s*\)", lambda m: RECEIVE_VALUE_EXPR),
        rule(r"radio\.set_group\s*\(\s*([^)]+)\s*\)", r"radio.config(group=\1)"),
    )

    @property
    def name(self):
        return "music_radio"


register_rewrite(MusicRadioRewrite())
