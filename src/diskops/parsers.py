"""
Parsers for captured tool output.

Most formats are whitespace-delimited columns; each parser documents which
column it reads. Lines that do not have the expected shape are skipped.
"""

import re
from typing import List

from .schema import FilesystemEntry, MountEntry

GUID_MARKER = "Disk identifier (GUID)"
_OCTAL_ESCAPE = re.compile(r"\\([0-7]{3})")


def parse_df(text: str) -> List[FilesystemEntry]:
    """Parse `df --output=source,fstype`: column 1 is the source, column 2 the type.

    The header row ("Filesystem Type") is kept like any other row; it never
    matches a /dev source so lookups are unaffected.
    """
    entries: List[FilesystemEntry] = []
    for line in text.splitlines():
        parts = line.split()
        if len(parts) >= 2:
            entries.append(FilesystemEntry(source=parts[0], fstype=parts[1]))
    return entries


def find_filesystem_type(entries: List[FilesystemEntry], source: str) -> str:
    """Type of the first entry whose source equals source exactly, else ""."""
    for e in entries:
        if e.source == source:
            return e.fstype
    return ""


def parse_disk_guid(text: str) -> str:
    """Extract the GUID from `sgdisk -p` output.

    The line reads "Disk identifier (GUID): <uuid>", so the uuid is the 4th token.
    """
    for line in text.splitlines():
        if GUID_MARKER in line:
            parts = line.split()
            if len(parts) >= 4:
                return parts[3]
    return ""


def _unescape_octal(value: str) -> str:
    # /proc/mounts style escapes: \040 space, \011 tab, \012 newline, \134 backslash.
    return _OCTAL_ESCAPE.sub(lambda m: chr(int(m.group(1), 8)), value)


def parse_mount_table(text: str) -> List[MountEntry]:
    """Parse `mount` output: <device> on <path> type <fstype> (<options>).

    The path may contain spaces, printed either literally or as \\040, so it
    is taken as everything between the first " on " and the last " type ".
    Octal escapes are decoded so lookups compare against the real path.
    """
    entries: List[MountEntry] = []
    for line in text.splitlines():
        device, sep, rest = line.strip().partition(" on ")
        if not sep or not device or " " in device:
            continue
        target, sep, tail = rest.rpartition(" type ")
        fstype = ""
        options: List[str] = []
        if sep:
            parts = tail.split()
            if parts:
                fstype = parts[0]
            if len(parts) >= 2 and parts[1].startswith("("):
                options = [o for o in parts[1].strip("()").split(",") if o]
        else:
            target = rest
        target = target.strip()
        if not target:
            continue
        entries.append(MountEntry(
            device=_unescape_octal(device),
            mount_point=_unescape_octal(target),
            fstype=fstype,
            options=options,
        ))
    return entries


def find_mount_point(entries: List[MountEntry], device_path: str) -> str:
    """Mount point of the first entry for device_path, else ""."""
    for e in entries:
        if e.device == device_path:
            return e.mount_point
    return ""


def find_mounted_device(entries: List[MountEntry], mount_point: str) -> str:
    """Source device of the first entry mounted at mount_point, else ""."""
    for e in entries:
        if e.mount_point == mount_point:
            return e.device
    return ""


def parse_parent_names(text: str) -> List[str]:
    """Parse `lsblk -n -l --output PKNAME`: one parent name per line.

    Top-level devices have no parent and print a blank line; those are dropped.
    """
    return [line.strip() for line in text.splitlines() if line.strip()]
