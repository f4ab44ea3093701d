"""micro:bit discovery: USB serial ports and mass-storage drives."""

from __future__ import annotations

import getpass
import string
import sys
from dataclasses import dataclass, field
from pathlib import Path

from serial.tools.list_ports import comports

MICROBIT_VID = "0D28"
DETAILS_FILENAME = "DETAILS.TXT"
FAIL_FILENAME = "FAIL.TXT"


@dataclass
class PortInfo:
    device: str
    description: str
    hwid: str
    vid: str | None = None


@dataclass
class MicrobitDrive:
    path: Path
    details: dict[str, str] = field(default_factory=dict)
    failed: bool = False

    def to_dict(self) -> dict:
        return {"path": str(self.path), "details": self.details, "failed": self.failed}


def normalize_vid(vid) -> str | None:
    """Normalize a USB vendor id: 0x0d28, '0D28' and 3368 all give '0D28'."""
    if vid is None or vid == "":
        return None
    if isinstance(vid, int):
        return f"{vid:04X}"
    text = str(vid).strip().upper()
    if text.startswith("0X"):
        text = text[2:]
    return text.zfill(4)


def list_microbit_ports() -> list[PortInfo]:
    """List serial ports whose USB vendor id is the micro:bit's."""
    ports = []
    for p in comports():
        vid = normalize_vid(getattr(p, "vid", None))
        if vid != MICROBIT_VID:
            continue
        ports.append(PortInfo(
            device=p.device,
            description=p.description,
            hwid=p.hwid,
            vid=vid,
        ))
    return ports


def parse_details(text: str) -> dict[str, str]:
    """Parse the 'Key: Value' lines of a DETAILS.TXT file."""
    details = {}
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if sep and key.strip():
            details[key.strip()] = value.strip()
    return details


def default_mount_roots() -> list[Path]:
    """Directories under which removable drives are mounted on this platform."""
    if sys.platform.startswith("win"):
        return [Path(f"{letter}:/") for letter in string.ascii_uppercase[3:]]
    if sys.platform == "darwin":
        return [Path("/Volumes")]
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        # No passwd entry for this uid (common in containers)
        return [Path("/media")]
    return [Path("/media") / user, Path("/run/media") / user, Path("/media")]


def _candidates(root: Path):
    # A root can itself be a drive (Windows letters) or hold mounted volumes
    yield root
    try:
        yield from (p for p in root.iterdir() if p.is_dir())
    except OSError:
        return


def find_microbit_drives(roots: list[Path | str] | None = None) -> list[MicrobitDrive]:
    """Find mounted volumes that carry a micro:bit DETAILS.TXT."""
    roots = [Path(r) for r in roots] if roots is not None else default_mount_roots()
    drives = []
    seen = set()
    for root in roots:
        for candidate in _candidates(root):
            details_path = candidate / DETAILS_FILENAME
            try:
                if not details_path.is_file():
                    continue
                details = parse_details(details_path.read_text(errors="ignore"))
            except OSError:
                continue
            resolved = candidate.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            drives.append(MicrobitDrive(
                path=candidate,
                details=details,
                failed=(candidate / FAIL_FILENAME).exists(),
            ))
    return drives
