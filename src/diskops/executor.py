"""
Command execution abstraction.

DeviceOps hands every argv list to a CommandExecutor, which delegates the
actual spawn to a pluggable runner. A non-zero exit becomes CommandError
carrying the status, so callers can single out codes such as umount's 32.
"""

import shlex
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from .errors import CommandError

DEFAULT_TIMEOUT = 300

# Return codes for failures that happen before the tool itself exits.
TIMED_OUT = -1
NOT_FOUND = 127


@dataclass
class RunResult:
    """Captured output and exit status of one tool invocation."""

    stdout: str
    stderr: str
    returncode: int


class Runner(Protocol):
    """Anything that takes an argv list and reports what the tool printed.

    The default spawns processes; tests substitute canned df/mount/lsblk output.
    """

    def __call__(self, cmd: List[str], *, cwd: Optional[str] = None) -> RunResult:
        ...


def _text(value) -> str:
    if not value:
        return ""
    return value.decode(errors="replace") if isinstance(value, bytes) else value


def subprocess_runner(
    cmd: List[str],
    *,
    cwd: Optional[str] = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> RunResult:
    """Spawn cmd and wait for it. A hung tool or a missing binary becomes a
    non-zero RunResult instead of an exception."""
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, cwd=cwd, timeout=timeout)
    except subprocess.TimeoutExpired as exc:
        return RunResult(
            stdout=_text(exc.stdout),
            stderr=f"Command timed out after {exc.timeout}s",
            returncode=TIMED_OUT,
        )
    except FileNotFoundError:
        return RunResult(stdout="", stderr="Command not found", returncode=NOT_FOUND)
    return RunResult(stdout=proc.stdout or "", stderr=proc.stderr or "", returncode=proc.returncode)


def make_runner(timeout: int = DEFAULT_TIMEOUT, cwd: Optional[str] = None) -> Runner:
    """subprocess_runner bound to one timeout (and optionally a working directory)."""
    def run(cmd: List[str], *, cwd: Optional[str] = cwd) -> RunResult:
        return subprocess_runner(cmd, cwd=cwd, timeout=timeout)
    return run


def render_pipeline(*stages: Sequence[str]) -> str:
    """Quote each argv stage for the shell and join them with pipes."""
    if not stages:
        raise ValueError("a pipeline needs at least one stage")
    return " | ".join(shlex.join(list(stage)) for stage in stages)


class CommandExecutor:
    """Runs argv-style commands and shell pipelines, raising CommandError on failure.

    label is a human-readable description used only in error messages.
    """

    def __init__(self, runner: Optional[Runner] = None):
        self._runner = runner if runner is not None else make_runner()

    def _run(self, label: str, cmd: List[str]) -> str:
        r = self._runner(cmd)
        if r.returncode != 0:
            raise CommandError(label, cmd, r.returncode, r.stderr)
        return r.stdout.strip()

    def execute_command(self, label: str, program: str, *args: str) -> str:
        """Run program with args; return trimmed stdout."""
        return self._run(label, [program, *args])

    def execute_pipeline(self, label: str, *stages: Sequence[str]) -> str:
        """Run argv stages as a single shell pipeline; return trimmed stdout.

        Every stage is quoted, so arguments never reach the shell unescaped.
        pipefail makes a failure in any stage fail the whole pipeline.
        """
        expression = render_pipeline(*stages)
        return self._run(label, ["bash", "-o", "pipefail", "-c", expression])
