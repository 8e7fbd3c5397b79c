"""Shared test helpers: scripted runner and captured-output fixtures."""

from pathlib import Path
from typing import Dict, List, Optional

from diskops.executor import RunResult

FIXTURES = Path(__file__).parent / "fixtures"


class ScriptedRunner:
    """Runner that records every command and answers from a table keyed by program name.

    Programs after the privilege prefix are matched, so "sudo umount x" is keyed by "umount".
    Unknown programs fail with status 127.
    """

    def __init__(self, responses: Optional[Dict[str, RunResult]] = None):
        self.responses = dict(responses or {})
        self.calls: List[List[str]] = []

    def __call__(self, cmd, *, cwd=None):
        self.calls.append(list(cmd))
        program = cmd[1] if cmd[0] == "sudo" else cmd[0]
        return self.responses.get(program, RunResult(stdout="", stderr="command not found", returncode=127))


def ok(stdout: str = "") -> RunResult:
    return RunResult(stdout=stdout, stderr="", returncode=0)


def fail(returncode: int, stderr: str = "") -> RunResult:
    return RunResult(stdout="", stderr=stderr, returncode=returncode)


def fixture_text(name: str) -> str:
    return (FIXTURES / name).read_text()
