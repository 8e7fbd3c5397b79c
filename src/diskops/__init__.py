"""Block device and filesystem administration over system tools."""

from .config import Settings
from .device import UMOUNT_NOT_MOUNTED, CurrentUserCache, DeviceOps
from .errors import CommandError, DeviceCommandError, DiskOpsError
from .executor import CommandExecutor, RunResult, Runner, make_runner, subprocess_runner
from .schema import CurrentUser, FilesystemEntry, MountEntry

__all__ = [
    "CommandError",
    "CommandExecutor",
    "CurrentUser",
    "CurrentUserCache",
    "DeviceCommandError",
    "DeviceOps",
    "DiskOpsError",
    "FilesystemEntry",
    "MountEntry",
    "RunResult",
    "Runner",
    "Settings",
    "UMOUNT_NOT_MOUNTED",
    "make_runner",
    "subprocess_runner",
]
