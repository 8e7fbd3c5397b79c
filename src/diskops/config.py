"""
Runtime settings. Defaults suit a normal (non-root) caller on Linux;
each field can be overridden from DISKOPS_* environment variables.
"""

import os
import shlex
from typing import List, Mapping, Optional

from pydantic import BaseModel, Field

from .executor import DEFAULT_TIMEOUT


class Settings(BaseModel):
    # Prefix for commands that need elevation; empty list runs them directly.
    privilege_command: List[str] = Field(default_factory=lambda: ["sudo"])
    mkfs_program: str = "mkfs.ext4"
    mount_dir_mode: int = 0o755
    command_timeout: int = Field(default=DEFAULT_TIMEOUT, gt=0)

    model_config = {"extra": "forbid"}

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from DISKOPS_SUDO, DISKOPS_MKFS and DISKOPS_TIMEOUT.

        DISKOPS_SUDO is shell-split, so "sudo -n" works; set it to an empty
        string when already running as root.
        """
        env = os.environ if environ is None else environ
        data = {}
        if "DISKOPS_SUDO" in env:
            data["privilege_command"] = shlex.split(env["DISKOPS_SUDO"])
        if env.get("DISKOPS_MKFS"):
            data["mkfs_program"] = env["DISKOPS_MKFS"]
        if env.get("DISKOPS_TIMEOUT"):
            data["command_timeout"] = env["DISKOPS_TIMEOUT"]
        return cls(**data)
