"""
Structured results parsed from tool output.
"""

from typing import List

from pydantic import BaseModel, Field


class FilesystemEntry(BaseModel):
    """One row of df --output=source,fstype."""

    source: str
    fstype: str = ""


class MountEntry(BaseModel):
    """One row of mount output: <device> on <mount_point> type <fstype> (<options>)."""

    device: str
    mount_point: str
    fstype: str = ""
    options: List[str] = Field(default_factory=list)


class CurrentUser(BaseModel):
    """Identity of the user running the process."""

    name: str
    uid: int
    gid: int

    @property
    def owner_spec(self) -> str:
        """user:group argument for chown. The group is the user's own name."""
        return f"{self.name}:{self.name}"
