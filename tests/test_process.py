from __future__ import annotations

import sys
from pathlib import Path

import pytest

from dotforge.install import MissingCommandError, SubprocessRunner, require_commands


def test_run_captures_output_and_returncode(tmp_path: Path) -> None:
    runner = SubprocessRunner()

    result = runner.run(
        [sys.executable, "-c", "import os,sys; print(os.getcwd()); sys.exit(3)"],
        cwd=tmp_path,
    )

    assert result.returncode == 3
    assert not result.ok
    assert Path(result.stdout.strip()).resolve() == tmp_path.resolve()


def test_missing_executable_returns_127() -> None:
    result = SubprocessRunner().run(["dotforge-no-such-binary", "--version"])

    assert result.returncode == 127
    assert "command not found" in result.error_text()


def test_require_commands_lists_every_missing_one(fake_commands) -> None:
    fake_commands.available = {"git"}

    with pytest.raises(MissingCommandError) as exc:
        require_commands(fake_commands, ["git", "curl", "paru"])

    assert exc.value.missing == ["curl", "paru"]
    assert str(exc.value) == "Missing command: curl, paru"


def test_which_returns_none_for_unknown_command() -> None:
    assert SubprocessRunner().which("dotforge-no-such-binary") is None
