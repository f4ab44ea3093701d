"""CLI entry point for makecode-mpy."""

import json as jsonmod
import logging
import sys
from pathlib import Path

import click

from makecode_mpy.cleanup import normalize_unicode
from makecode_mpy.config import (
    CONFIG_FILENAME, load_or_default, get_config_value, set_config_value, list_config,
)
from makecode_mpy.convert import prepare_source
from makecode_mpy.detect import is_makecode_source
from makecode_mpy.devices import find_microbit_drives, list_microbit_ports
from makecode_mpy.icons import ICON_MAP
from makecode_mpy.validate import format_diagnostics, validate


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Show debug output from the converter.")
def main(verbose):
    """Convert MakeCode Python into micro:bit MicroPython."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


def _read_source(source: str) -> str:
    """Read a source file, or stdin for '-', and normalize pasted characters."""
    if source == "-":
        text = sys.stdin.read()
    else:
        path = Path(source)
        if not path.is_file():
            click.echo(f"Error: File not found: {source}", err=True)
            raise SystemExit(1)
        text = path.read_text(encoding="utf-8", errors="replace")
    return normalize_unicode(text)


def _load_config(project_dir: Path):
    try:
        return load_or_default(project_dir)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@main.command()
@click.argument("source")
@click.option("--output", "-o", "output", type=click.Path(), help="Output file (default: main.py from makecode.toml).")
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the converted code instead of writing it.")
@click.option("--no-validate", is_flag=True, help="Skip the syntax checks.")
def convert(source, output, to_stdout, no_validate):
    """Convert SOURCE (a file, or - for stdin) into main.py."""
    project_dir = Path.cwd()
    config = _load_config(project_dir)
    code, converted = prepare_source(_read_source(source))

    if converted and not no_validate and config.validation.enabled:
        diagnostics = validate(code, config.validation.messages)
        if diagnostics:
            click.echo(f"Warning: {format_diagnostics(diagnostics, config.validation.messages)}", err=True)

    if to_stdout:
        click.echo(code, nl=False)
        return

    out_path = Path(output) if output else config.output_path(project_dir)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(code, encoding="utf-8")
    kind = "Converted MakeCode" if converted else "Copied MicroPython"
    click.echo(f"{kind} to {out_path}")


@main.command()
@click.argument("source")
@click.option("--json", "use_json", is_flag=True, help="Output JSON.")
def check(source, use_json):
    """Run the syntax checks on SOURCE without converting it."""
    config = _load_config(Path.cwd())
    diagnostics = validate(_read_source(source), config.validation.messages)

    if use_json:
        click.echo(jsonmod.dumps([d.to_dict() for d in diagnostics], indent=2))
    elif diagnostics:
        click.echo(format_diagnostics(diagnostics, config.validation.messages))
    else:
        click.echo("No problems found.")

    if diagnostics:
        raise SystemExit(1)


@main.command()
@click.argument("source")
def detect(source):
    """Report whether SOURCE is MakeCode Python."""
    if is_makecode_source(_read_source(source)):
        click.echo("MakeCode Python")
    else:
        click.echo("MicroPython")


@main.command()
def icons():
    """List the MakeCode icon names and their Image constants."""
    click.echo(f"Icons ({len(ICON_MAP)}):\n")
    for name, constant in ICON_MAP.items():
        click.echo(f"  IconNames.{name:<20} Image.{constant}")


@main.command()
@click.option("--mount-root", "roots", multiple=True, type=click.Path(), help="Look for drives under this directory.")
@click.option("--json", "use_json", is_flag=True, help="Output JSON.")
def devices(roots, use_json):
    """List connected micro:bit serial ports and drives."""
    ports = list_microbit_ports()
    drives = find_microbit_drives(list(roots) if roots else None)

    if use_json:
        click.echo(jsonmod.dumps({
            "ports": [{"device": p.device, "description": p.description, "hwid": p.hwid} for p in ports],
            "drives": [d.to_dict() for d in drives],
        }, indent=2))
        return

    if not ports and not drives:
        click.echo("No micro:bit found. Is it connected via USB?")
        return
    for p in ports:
        click.echo(f"  serial  {p.device:<25} {p.description}")
    for d in drives:
        version = d.details.get("Interface Version", "")
        status = " (FAIL.TXT present)" if d.failed else ""
        click.echo(f"  drive   {str(d.path):<25} {version}{status}")


@main.command("config")
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("--list", "show_list", is_flag=True, help="Show all config values.")
def config_cmd(key, value, show_list):
    """Get or set makecode.toml configuration values."""
    project_dir = Path.cwd()

    if show_list:
        try:
            values = list_config(project_dir)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(1)
        if not values:
            click.echo("No configuration found.")
            return
        for k, v in sorted(values.items()):
            click.echo(f"  {k} = {v}")
        return

    if key and value:
        try:
            set_config_value(project_dir, key, value)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(1)
        click.echo(f"Set {key} = {value}")
        return

    if key:
        try:
            val = get_config_value(project_dir, key)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(1)
        if val is None:
            click.echo(f"{key} is not set.")
        else:
            click.echo(f"{key} = {val}")
        return

    click.echo(f"Usage: makecode-mpy config <KEY> [VALUE] or makecode-mpy config --list ({CONFIG_FILENAME})")
