"""Project configuration for makecode-mpy (makecode.toml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib
except ImportError:
    try:
        import tomli as tomllib  # type: ignore[no-redef]
    except ImportError:
        tomllib = None  # type: ignore[assignment]

CONFIG_FILENAME = "makecode.toml"


@dataclass
class OutputConfig:
    directory: str | None = None
    filename: str = "main.py"


@dataclass
class ValidationConfig:
    enabled: bool = True
    messages: dict = field(default_factory=dict)


@dataclass
class ProjectConfig:
    output: OutputConfig = field(default_factory=OutputConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)

    def output_path(self, project_dir: Path | str) -> Path:
        """Where the converted main.py goes."""
        base = Path(project_dir)
        if self.output.directory:
            base = base / self.output.directory
        return base / self.output.filename


def _read_toml(toml_path: Path) -> dict:
    if tomllib is None:
        raise ImportError("No TOML parser available (need Python 3.11+ or tomli)")
    with open(toml_path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid {toml_path.name}: {e}") from e


def load_project_config(project_dir: Path | str) -> ProjectConfig:
    """Parse makecode.toml and return a typed ProjectConfig."""
    project_dir = Path(project_dir)
    toml_path = project_dir / CONFIG_FILENAME
    if not toml_path.exists():
        raise FileNotFoundError(f"{CONFIG_FILENAME} not found in {project_dir}")

    data = _read_toml(toml_path)
    output_data = data.get("output", {})
    validation_data = data.get("validation", {})

    output = OutputConfig(
        directory=output_data.get("directory"),
        filename=output_data.get("filename", "main.py"),
    )
    validation = ValidationConfig(
        enabled=validation_data.get("enabled", True),
        messages=dict(validation_data.get("messages", {})),
    )
    return ProjectConfig(output=output, validation=validation)


def load_or_default(project_dir: Path | str) -> ProjectConfig:
    """Like load_project_config, but a missing file means defaults."""
    try:
        return load_project_config(project_dir)
    except FileNotFoundError:
        return ProjectConfig()


def get_config_value(project_dir: Path | str, key: str):
    """Dotted key lookup, e.g. 'output.directory', 'validation.messages.errorLine'."""
    toml_path = Path(project_dir) / CONFIG_FILENAME
    if not toml_path.exists() or tomllib is None:
        return None

    value = _read_toml(toml_path)
    for part in key.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _format_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def _coerce(value):
    if not isinstance(value, str):
        return value
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        return value


def set_config_value(project_dir: Path | str, key: str, value) -> None:
    """Write a value to makecode.toml using line-based editing.

    The first dotted part names the section; the rest is written as a TOML
    dotted key inside it.
    """
    toml_path = Path(project_dir) / CONFIG_FILENAME
    value = _coerce(value)

    parts = key.split(".", 1)
    if len(parts) != 2:
        raise ValueError(f"Key must be dotted (section.key), got: {key}")
    section, k = parts
    val_str = _format_value(value)

    if toml_path.exists():
        lines = toml_path.read_text().splitlines(keepends=True)
    else:
        lines = []

    section_header = f"[{section}]"
    section_idx = None
    key_idx = None
    next_section_idx = None

    for i, line in enumerate(lines):
        stripped = line.strip()
        if stripped == section_header:
            section_idx = i
        elif section_idx is not None and next_section_idx is None:
            if stripped.startswith("[") and stripped.endswith("]"):
                next_section_idx = i
            elif re.match(rf"^{re.escape(k)}\s*=", stripped):
                key_idx = i

    if key_idx is not None:
        lines[key_idx] = f"{k} = {val_str}\n"
    elif section_idx is not None:
        insert_at = next_section_idx if next_section_idx is not None else len(lines)
        lines.insert(insert_at, f"{k} = {val_str}\n")
    else:
        if lines and not lines[-1].endswith("\n"):
            lines.append("\n")
        if lines:
            lines.append("\n")
        lines.append(f"{section_header}\n")
        lines.append(f"{k} = {val_str}\n")

    toml_path.write_text("".join(lines))


def _flatten(prefix: str, value, out: dict) -> None:
    if isinstance(value, dict):
        for k, v in value.items():
            _flatten(f"{prefix}.{k}" if prefix else k, v, out)
    else:
        out[prefix] = value


def list_config(project_dir: Path | str) -> dict:
    """Return a flat dotted-key dict of all config values."""
    toml_path = Path(project_dir) / CONFIG_FILENAME
    if not toml_path.exists() or tomllib is None:
        return {}

    result: dict = {}
    _flatten("", _read_toml(toml_path), result)
    return result
