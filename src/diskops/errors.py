"""
Error taxonomy for device operations.

CommandError describes a single failed invocation; DeviceCommandError is what
DeviceOps raises so callers can tell which logical operation failed.
"""

from typing import List, Optional


class DiskOpsError(Exception):
    """Base class for all diskops errors."""


class CommandError(DiskOpsError):
    """A command exited non-zero (or could not be run at all)."""

    def __init__(
        self,
        label: str,
        cmd: List[str],
        exit_status: int,
        stderr: str = "",
    ):
        self.label = label
        self.cmd = list(cmd)
        self.exit_status = exit_status
        self.stderr = stderr
        detail = f": {stderr.strip()}" if stderr and stderr.strip() else ""
        super().__init__(f"{label} exited with status {exit_status}{detail}")


class DeviceCommandError(DiskOpsError):
    """A device operation failed; __cause__ holds the underlying CommandError."""

    def __init__(self, label: str, cause: Optional[Exception] = None):
        self.label = label
        msg = f"command {label} failed"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)
