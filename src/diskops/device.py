"""Device operations facade: filesystem type, format, UUID, mounts, children, ownership.

Each operation builds one argv command, runs it through the CommandExecutor
and parses the trimmed output. Absence (not mounted, no GUID, no children)
is an empty result, not an error.
"""

import os
import pwd
import sys
import threading
from typing import Callable, List, Optional

from . import commands, parsers
from .config import Settings
from .errors import CommandError, DeviceCommandError
from .executor import CommandExecutor, make_runner
from .schema import CurrentUser, MountEntry

_DEBUG = bool(os.environ.get("DISKOPS_DEBUG", ""))

# umount exit status meaning the target is not mounted.
UMOUNT_NOT_MOUNTED = 32


def _debug(msg: str) -> None:
    if _DEBUG:
        print(f"[diskops] device: {msg}", file=sys.stderr)


def _warn(msg: str) -> None:
    print(f"[diskops] device: {msg}", file=sys.stderr)


def lookup_current_user() -> CurrentUser:
    """Resolve the real uid of this process to a passwd entry."""
    entry = pwd.getpwuid(os.getuid())
    return CurrentUser(name=entry.pw_name, uid=entry.pw_uid, gid=entry.pw_gid)


class CurrentUserCache:
    """Lazily resolved current user.

    A successful lookup is kept for the life of the cache; a failed one is
    not, so the next get() tries again.
    """

    def __init__(self, resolver: Callable[[], CurrentUser] = lookup_current_user):
        self._resolver = resolver
        self._user: Optional[CurrentUser] = None
        self._lock = threading.Lock()

    def get(self) -> CurrentUser:
        with self._lock:
            if self._user is None:
                self._user = self._resolver()
                _debug(f"resolved current user {self._user.name} (uid={self._user.uid})")
            return self._user


class DeviceOps:
    """Block device and filesystem operations layered on a CommandExecutor."""

    def __init__(
        self,
        executor: Optional[CommandExecutor] = None,
        settings: Optional[Settings] = None,
        user_cache: Optional[CurrentUserCache] = None,
    ):
        self.settings = settings if settings is not None else Settings.from_env()
        if executor is None:
            executor = CommandExecutor(make_runner(self.settings.command_timeout))
        self._executor = executor
        self._users = user_cache if user_cache is not None else CurrentUserCache()

    def _run(self, label: str, cmd: List[str]) -> str:
        try:
            return self._executor.execute_command(label, *cmd)
        except CommandError as e:
            raise DeviceCommandError(label, e) from e

    def _sudo(self, cmd: List[str]) -> List[str]:
        return commands.privileged(cmd, self.settings.privilege_command)

    def get_filesystem_type(self, device: str) -> str:
        """Filesystem type of a mounted device given its leaf name (e.g. "sda1").

        Returns "" when the device is not listed.
        """
        out = self._run(f"get filesystem type for {device}", commands.df_filesystems())
        return parsers.find_filesystem_type(parsers.parse_df(out), commands.dev_path(device))

    def format_device(self, device_path: str) -> None:
        """Create an ext4 filesystem on device_path. Destroys existing data; no checks are made."""
        self._run(
            f"mkfs.ext4 {device_path}",
            self._sudo(commands.mkfs(device_path, self.settings.mkfs_program)),
        )

    def get_disk_uuid(self, device_name: str) -> str:
        """GUID of the disk's partition table, or "" if it cannot be read.

        A failed lookup is common (e.g. no GPT) and is not an error.
        """
        try:
            out = self._executor.execute_command(
                f"get disk {device_name} uuid", *commands.sgdisk_print(device_name)
            )
        except CommandError as e:
            _warn(f"unknown disk uuid for {commands.dev_path(device_name)}: {e}")
            return ""
        return parsers.parse_disk_guid(out)

    def list_mounts(self) -> List[MountEntry]:
        """Every row of the current mount table, in the order mount prints them."""
        out = self._run("list mounts", commands.mount_table())
        return parsers.parse_mount_table(out)

    def get_mount_point(self, device_name: str) -> str:
        """Mount point of /dev/<device_name>; "" if it is not mounted."""
        out = self._run(f"get mount point for {device_name}", commands.mount_table())
        return parsers.find_mount_point(parsers.parse_mount_table(out), commands.dev_path(device_name))

    def get_device_from_mount_point(self, mount_point: str) -> str:
        """Device mounted at mount_point; "" if nothing is."""
        out = self._run(f"get device from mount point {mount_point}", commands.mount_table())
        return parsers.find_mounted_device(parsers.parse_mount_table(out), mount_point)

    def mount(self, device_path: str, mount_path: str) -> None:
        self.mount_with_options(device_path, mount_path, "")

    def mount_with_options(self, device_path: str, mount_path: str, options: str = "") -> None:
        """Mount device_path at mount_path, creating the directory first.

        options is a comma-separated list handed to mount -o as-is. A failure to
        create the directory is reported but mount is still attempted.
        """
        try:
            os.makedirs(mount_path, mode=self.settings.mount_dir_mode, exist_ok=True)
        except OSError as exc:
            _warn(f"cannot create mount path {mount_path}: {exc}")
        self._run(
            f"mount {device_path}",
            self._sudo(commands.mount(device_path, mount_path, options)),
        )

    def unmount(self, device_path: str) -> None:
        """Unmount device_path. Unmounting something that is not mounted succeeds."""
        label = f"umount {device_path}"
        try:
            self._executor.execute_command(label, *self._sudo(commands.umount(device_path)))
        except CommandError as e:
            if e.exit_status != UMOUNT_NOT_MOUNTED:
                raise DeviceCommandError(label, e) from e
            _warn(f"ignoring exit status {UMOUNT_NOT_MOUNTED} from unmount of device {device_path}: {e}")

    def has_children(self, device: str) -> bool:
        """True if any block device lists device as its parent (e.g. partitions of a disk)."""
        out = self._run(f"check children for device {device}", commands.lsblk_parent_names())
        return device in parsers.parse_parent_names(out)

    def chown_for_current_user(self, path: str) -> None:
        """Recursively give path to the current user. Best effort: failures are only reported."""
        try:
            user = self._users.get()
        except Exception as exc:
            _warn(f"unable to find current user: {exc}")
            return
        label = f"chown {path}"
        try:
            self._executor.execute_command(
                label, *self._sudo(commands.chown_recursive(user.owner_spec, path))
            )
        except Exception as exc:
            _warn(f"command {label} failed: {exc}")
