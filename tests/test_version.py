import subprocess
from unittest import mock

import pytest

from suiarb.version import build_version, get_git_commit


def _fake_git(log_output, status_output, branch_output):
    outputs = {"log": log_output, "status": status_output, "rev-parse": branch_output}
    calls = []

    def run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, stdout=outputs[cmd[1]].encode(), stderr=b"")

    return run, calls


def test_clean_checkout():
    run, calls = _fake_git("abc1234,2024-01-02", "", "main\n")
    with mock.patch("subprocess.run", side_effect=run):
        assert get_git_commit() == '"main-abc1234@2024-01-02"'
    assert calls[0][:2] == ["git", "log"]
    assert ["git", "status", "-s"] in calls
    assert ["git", "rev-parse", "--abbrev-ref", "HEAD"] in calls


def test_dirty_checkout():
    run, _ = _fake_git("abc1234,2024-01-02\n", " M file.py\n", "dev\n")
    with mock.patch("subprocess.run", side_effect=run):
        assert get_git_commit() == '"dev-abc1234-dirty@2024-01-02"'


def test_build_version_strips_quotes():
    run, _ = _fake_git("abc1234,2024-01-02", "", "main\n")
    with mock.patch("subprocess.run", side_effect=run):
        assert build_version() == "main-abc1234@2024-01-02"


def test_unexpected_log_output():
    run, _ = _fake_git("", "", "")
    with mock.patch("subprocess.run", side_effect=run):
        with pytest.raises(ValueError, match="Unexpected output format"):
            get_git_commit()