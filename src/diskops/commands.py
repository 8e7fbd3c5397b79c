"""
Command builders. Every OS tool invocation is assembled here as an argv list;
nothing is interpolated into a shell string.
"""

from typing import List, Sequence


def privileged(cmd: Sequence[str], privilege_command: Sequence[str]) -> List[str]:
    """Prefix cmd with the elevation command (e.g. sudo), if any."""
    return [*privilege_command, *cmd]


def dev_path(device_name: str) -> str:
    return f"/dev/{device_name}"


def df_filesystems() -> List[str]:
    return ["df", "--output=source,fstype"]


def sgdisk_print(device_name: str) -> List[str]:
    return ["sgdisk", "-p", dev_path(device_name)]


def mount_table() -> List[str]:
    return ["mount"]


def lsblk_parent_names() -> List[str]:
    # -n: no header, -l: list (not tree) output, so each line is a bare PKNAME.
    return ["lsblk", "--all", "-n", "-l", "--output", "PKNAME"]


def mkfs(device_path: str, program: str = "mkfs.ext4") -> List[str]:
    return [program, device_path]


def mount(device_path: str, mount_path: str, options: str = "") -> List[str]:
    """mount argv; options is a comma-separated list passed through verbatim."""
    if options:
        return ["mount", "-o", options, device_path, mount_path]
    return ["mount", device_path, mount_path]


def umount(device_path: str) -> List[str]:
    return ["umount", device_path]


def chown_recursive(owner: str, path: str) -> List[str]:
    return ["chown", "-R", owner, path]
