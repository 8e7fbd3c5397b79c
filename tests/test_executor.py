"""
Tests for the command executor and the default subprocess runner.
"""

import subprocess
import sys
from unittest.mock import patch

import pytest

from diskops.errors import CommandError
from diskops.executor import CommandExecutor, RunResult, make_runner, render_pipeline, subprocess_runner

from tests.helpers import ScriptedRunner, fail, ok


def test_execute_command_returns_trimmed_stdout():
    runner = ScriptedRunner({"lsblk": ok("  sda\nsda  \n\n")})
    out = CommandExecutor(runner).execute_command("list", "lsblk", "-n")
    assert out == "sda\nsda"
    assert runner.calls == [["lsblk", "-n"]]


def test_execute_command_raises_with_exit_status():
    runner = ScriptedRunner({"umount": fail(32, "umount: /dev/sdb1: not mounted.\n")})
    with pytest.raises(CommandError) as excinfo:
        CommandExecutor(runner).execute_command("umount /dev/sdb1", "umount", "/dev/sdb1")
    err = excinfo.value
    assert err.exit_status == 32
    assert err.label == "umount /dev/sdb1"
    assert err.cmd == ["umount", "/dev/sdb1"]
    assert "not mounted" in str(err)


def test_render_pipeline_quotes_each_stage():
    expr = render_pipeline(["df", "--output=source,fstype"], ["grep", "^/dev/sda1 "])
    assert expr == "df --output=source,fstype | grep '^/dev/sda1 '"
    assert render_pipeline(["echo", "a; rm -rf /"]) == "echo 'a; rm -rf /'"


def test_render_pipeline_requires_a_stage():
    with pytest.raises(ValueError):
        render_pipeline()


def test_execute_pipeline_runs_under_pipefail():
    runner = ScriptedRunner({"bash": ok("ext4\n")})
    out = CommandExecutor(runner).execute_pipeline("fs", ["df"], ["awk", "{print $2}"])
    assert out == "ext4"
    assert runner.calls == [["bash", "-o", "pipefail", "-c", "df | awk '{print $2}'"]]


def test_execute_pipeline_failure():
    runner = ScriptedRunner({"bash": fail(1)})
    with pytest.raises(CommandError) as excinfo:
        CommandExecutor(runner).execute_pipeline("fs", ["false"])
    assert excinfo.value.exit_status == 1


def test_subprocess_runner_runs_command():
    r = subprocess_runner([sys.executable, "-c", "print('hello')"])
    assert r.returncode == 0
    assert r.stdout.strip() == "hello"


def test_subprocess_runner_missing_program():
    r = subprocess_runner(["diskops-no-such-program-xyz"])
    assert r.returncode == 127
    assert r.stderr == "Command not found"


def test_subprocess_runner_timeout():
    with patch("diskops.executor.subprocess.run", side_effect=subprocess.TimeoutExpired(["mount"], 5)):
        r = subprocess_runner(["mount"], timeout=5)
    assert r.returncode == -1
    assert "timed out after 5" in r.stderr


def test_make_runner_passes_timeout():
    with patch("diskops.executor.subprocess_runner", return_value=RunResult("", "", 0)) as mock_run:
        make_runner(timeout=42, cwd="/tmp")(["mount"])
    mock_run.assert_called_once_with(["mount"], cwd="/tmp", timeout=42)


def test_subprocess_runner_timeout_keeps_partial_output():
    expired = subprocess.TimeoutExpired(["lsblk"], 5, output=b"sda\n")
    with patch("diskops.executor.subprocess.run", side_effect=expired):
        r = subprocess_runner(["lsblk"], timeout=5)
    assert r.returncode == -1
    assert r.stdout == "sda\n"
