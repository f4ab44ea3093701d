"""Tests for the makecode-mpy CLI."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from makecode_mpy.cli import main
from makecode_mpy.devices import MicrobitDrive, PortInfo


MAKECODE = "def on_a():\n    basic.show_icon(IconNames.Heart)\ninput.on_button_pressed(Button.A, on_a)\n"


@pytest.fixture
def runner():
    return CliRunner()


class TestConvert:
    def test_writes_main_py(self, runner):
        with runner.isolated_filesystem():
            Path("prog.py").write_text(MAKECODE)
            result = runner.invoke(main, ["convert", "prog.py"])
            assert result.exit_code == 0
            assert "Converted MakeCode" in result.output
            code = Path("main.py").read_text()
            assert "display.show(Image.HEART)" in code
            assert "if button_a.was_pressed():" in code

    def test_output_option(self, runner):
        with runner.isolated_filesystem():
            Path("prog.py").write_text(MAKECODE)
            result = runner.invoke(main, ["convert", "prog.py", "-o", "out/main.py"])
            assert result.exit_code == 0
            assert Path("out/main.py").exists()

    def test_output_directory_from_config(self, runner):
        with runner.isolated_filesystem():
            Path("makecode.toml").write_text('[output]\ndirectory = "build"\n')
            Path("prog.py").write_text(MAKECODE)
            result = runner.invoke(main, ["convert", "prog.py"])
            assert result.exit_code == 0
            assert Path("build/main.py").exists()

    def test_stdout(self, runner):
        with runner.isolated_filesystem():
            Path("prog.py").write_text("basic.pause(5)")
            result = runner.invoke(main, ["convert", "prog.py", "--stdout"])
            assert result.exit_code == 0
            assert result.output == "from microbit import *\n\nsleep(5)\n"
            assert not Path("main.py").exists()

    def test_stdin(self, runner):
        result = runner.invoke(main, ["convert", "-", "--stdout"], input="basic.clear_screen()\n")
        assert result.exit_code == 0
        assert "display.clear()" in result.output

    def test_plain_micropython_copied(self, runner):
        with runner.isolated_filesystem():
            Path("prog.py").write_text("display.scroll('hi')\n")
            result = runner.invoke(main, ["convert", "prog.py"])
            assert result.exit_code == 0
            assert "Copied MicroPython" in result.output
            assert Path("main.py").read_text().startswith("from microbit import *\n")

    def test_smart_quotes_normalized(self, runner):
        with runner.isolated_filesystem():
            Path("prog.py").write_text("basic.show_string(\u201chi\u201d)", encoding="utf-8")
            result = runner.invoke(main, ["convert", "prog.py", "--stdout"])
            assert 'display.scroll("hi")' in result.output

    def test_validation_warning(self, runner):
        with runner.isolated_filesystem():
            Path("prog.py").write_text("basic.show_number((1)")
            result = runner.invoke(main, ["convert", "prog.py"])
            assert result.exit_code == 0
            assert "Warning" in result.output
            assert "Unbalanced parentheses (+1)" in result.output

    def test_no_validate(self, runner):
        with runner.isolated_filesystem():
            Path("prog.py").write_text("basic.show_number((1)")
            result = runner.invoke(main, ["convert", "prog.py", "--no-validate"])
            assert "Warning" not in result.output

    def test_missing_file(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["convert", "nope.py"])
            assert result.exit_code == 1
            assert "File not found" in result.output


class TestCheck:
    def test_clean_file(self, runner):
        with runner.isolated_filesystem():
            Path("main.py").write_text("from microbit import *\n\ndisplay.show(Image.HEART)\n")
            result = runner.invoke(main, ["check", "main.py"])
            assert result.exit_code == 0
            assert "No problems found." in result.output

    def test_problems_exit_nonzero(self, runner):
        with runner.isolated_filesystem():
            Path("main.py").write_text("radio.send('hi')")
            result = runner.invoke(main, ["check", "main.py"])
            assert result.exit_code == 1
            assert "Line 1:" in result.output

    def test_json(self, runner):
        with runner.isolated_filesystem():
            Path("main.py").write_text("print(")
            result = runner.invoke(main, ["check", "main.py", "--json"])
            data = json.loads(result.output)
            assert data == [{"line": 1, "message": "Unbalanced parentheses (+1)"}]

    def test_messages_from_config(self, runner):
        with runner.isolated_filesystem():
            Path("makecode.toml").write_text('[validation.messages]\nunbalancedParentheses = "Parens {count}"\n')
            Path("main.py").write_text("print(")
            result = runner.invoke(main, ["check", "main.py"])
            assert "Parens +1" in result.output

    def test_quoted_message_set_from_cli(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["config", "validation.messages.missingImportRadio", 'add "import radio"'])
            assert result.exit_code == 0
            Path("main.py").write_text("radio.send('hi')")
            result = runner.invoke(main, ["check", "main.py"])
            assert result.exit_code == 1
            assert 'Line 1: add "import radio"' in result.output

    def test_invalid_config_is_reported(self, runner):
        with runner.isolated_filesystem():
            Path("makecode.toml").write_text('[validation]\nenabled = "x"y"\n')
            Path("main.py").write_text("print(1)")
            result = runner.invoke(main, ["check", "main.py"])
            assert result.exit_code == 1
            assert "Error: Invalid makecode.toml" in result.output


class TestDetect:
    def test_makecode(self, runner):
        with runner.isolated_filesystem():
            Path("prog.py").write_text(MAKECODE)
            result = runner.invoke(main, ["detect", "prog.py"])
            assert result.output.strip() == "MakeCode Python"

    def test_micropython(self, runner):
        with runner.isolated_filesystem():
            Path("prog.py").write_text("from microbit import *\n")
            result = runner.invoke(main, ["detect", "prog.py"])
            assert result.output.strip() == "MicroPython"


class TestIcons:
    def test_lists_mapping(self, runner):
        result = runner.invoke(main, ["icons"])
        assert result.exit_code == 0
        assert "IconNames.Heart" in result.output
        assert "Image.HEART_SMALL" in result.output


class TestDevices:
    @patch("makecode_mpy.cli.find_microbit_drives", return_value=[])
    @patch("makecode_mpy.cli.list_microbit_ports", return_value=[])
    def test_none_found(self, mock_ports, mock_drives, runner):
        result = runner.invoke(main, ["devices"])
        assert result.exit_code == 0
        assert "No micro:bit found" in result.output

    @patch("makecode_mpy.cli.list_microbit_ports")
    def test_lists_ports_and_drives(self, mock_ports, runner, tmp_path):
        mock_ports.return_value = [PortInfo("/dev/ttyACM0", "mbed Serial Port", "USB VID:PID=0D28:0204", "0D28")]
        drive = tmp_path / "MICROBIT"
        drive.mkdir()
        (drive / "DETAILS.TXT").write_text("Interface Version: 0255\n")
        result = runner.invoke(main, ["devices", "--mount-root", str(tmp_path)])
        assert result.exit_code == 0
        assert "/dev/ttyACM0" in result.output
        assert "MICROBIT" in result.output
        assert "0255" in result.output

    @patch("makecode_mpy.cli.find_microbit_drives")
    @patch("makecode_mpy.cli.list_microbit_ports", return_value=[])
    def test_json(self, mock_ports, mock_drives, runner, tmp_path):
        mock_drives.return_value = [MicrobitDrive(path=tmp_path, failed=True)]
        result = runner.invoke(main, ["devices", "--json"])
        data = json.loads(result.output)
        assert data["ports"] == []
        assert data["drives"][0]["failed"] is True


class TestConfigCommand:
    def test_set_and_get(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["config", "output.directory", "build"])
            assert result.exit_code == 0
            assert "Set output.directory = build" in result.output
            result = runner.invoke(main, ["config", "output.directory"])
            assert "output.directory = build" in result.output

    def test_unset_key(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["config", "output.directory"])
            assert "is not set" in result.output

    def test_list(self, runner):
        with runner.isolated_filesystem():
            Path("makecode.toml").write_text('[output]\nfilename = "code.py"\n')
            result = runner.invoke(main, ["config", "--list"])
            assert "output.filename = code.py" in result.output

    def test_list_empty(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["config", "--list"])
            assert "No configuration found." in result.output

    def test_bad_key(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["config", "directory", "x"])
            assert result.exit_code == 1
            assert "Error" in result.output

    def test_get_from_invalid_config(self, runner):
        with runner.isolated_filesystem():
            Path("makecode.toml").write_text("[output\n")
            result = runner.invoke(main, ["config", "output.directory"])
            assert result.exit_code == 1
            assert "Error: Invalid makecode.toml" in result.output


class TestVerbose:
    def test_verbose_flag_accepted(self, runner):
        result = runner.invoke(main, ["-v", "icons"])
        assert result.exit_code == 0
