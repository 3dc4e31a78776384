# tests/test_cli.py
from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from dotforge.cli import run_cli
from dotforge.install import CommandResult


def _env(home: Path) -> dict[str, str]:
    return {"HOME": str(home)}


def _write_catalog(path: Path, configs: dict) -> Path:
    path.write_text(json.dumps({"configs": configs}), encoding="utf-8")
    return path


def test_list_prints_available_configs(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = _write_catalog(tmp_path / "catalog.json", {"rofi": "rofi", "fish": "fish"})

    code = run_cli(["--catalog", str(cfg), "list"], environ=_env(tmp_path))
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out == ["Available configs:", "  - fish", "  - rofi"]


def test_list_default_catalog(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = run_cli(["list"], environ=_env(tmp_path))
    out = capsys.readouterr().out

    assert code == 0
    assert "  - hypr" in out
    assert "  - gtk-4.0" in out


def test_install_clones_and_reports(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], fake_commands
) -> None:
    cfg = _write_catalog(
        tmp_path / "catalog.json", {"nvim": "nvim", "fish": "fish", "rofi": "rofi"}
    )
    (tmp_path / ".config" / "fish").mkdir(parents=True)

    code = run_cli(
        ["--catalog", str(cfg), "install", "--skip-deps", "-j", "2"],
        commands=fake_commands,
        environ=_env(tmp_path),
    )
    captured = capsys.readouterr()

    assert code == 0
    assert "OK nvim" in captured.out
    assert "OK rofi" in captured.out
    assert "SKIP fish (already exists)" in captured.out
    assert "2 succeeded, 0 failed, 1 skipped" in captured.out
    assert "Installed nvim" in captured.err
    assert (tmp_path / ".config" / "nvim" / "config").exists()
    assert not (tmp_path / ".cache" / "dotforge" / "install.lock").exists()

    logs = list((tmp_path / ".local" / "share" / "dotforge").glob("install-*.log"))
    assert len(logs) == 1
    assert "Installed rofi" in logs[0].read_text(encoding="utf-8")


def test_install_selected_configs_with_user(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], fake_commands
) -> None:
    code = run_cli(
        ["--user", "someone", "install", "-s", "hypr", "nope"],
        commands=fake_commands,
        environ=_env(tmp_path),
    )
    captured = capsys.readouterr()

    assert code == 0
    assert fake_commands.clones() == [
        (
            "git",
            "clone",
            "--quiet",
            "https://github.com/someone/hyprland",
            str(tmp_path / ".config" / "hypr"),
        )
    ]
    assert "Unknown config: nope" in captured.err


def test_install_installs_packages(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], fake_commands
) -> None:
    cfg = _write_catalog(tmp_path / "catalog.json", {"nvim": "nvim"})
    fake_commands.available.add("pacman")
    fake_commands.on("curl", result=CommandResult(("curl",), 0, "neovim\n", ""))
    fake_commands.on("pacman", "-Q", result=CommandResult(("pacman",), 1))

    code = run_cli(
        ["--catalog", str(cfg), "install"], commands=fake_commands, environ=_env(tmp_path)
    )
    _ = capsys.readouterr()

    assert code == 0
    assert ("pacman", "-S", "--needed", "--noconfirm", "neovim") in fake_commands.calls


def test_install_failure_returns_1(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], fake_commands
) -> None:
    cfg = _write_catalog(tmp_path / "catalog.json", {"nvim": "nvim", "fish": "fish"})
    fake_commands.on(
        "git",
        "clone",
        "--quiet",
        "https://github.com/erffy-dots/nvim",
        result=CommandResult(("git",), 128, "", "fatal: not found"),
    )

    code = run_cli(
        ["--catalog", str(cfg), "install", "-s"],
        commands=fake_commands,
        environ=_env(tmp_path),
    )
    out = capsys.readouterr().out

    assert code == 1
    assert "FAIL nvim" in out
    assert "fatal: not found" in out
    assert "OK fish" in out


def test_install_dry_run_clones_nothing(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], fake_commands
) -> None:
    code = run_cli(
        ["install", "--dry-run", "--skip-deps", "nvim"],
        commands=fake_commands,
        environ=_env(tmp_path),
    )
    captured = capsys.readouterr()

    assert code == 0
    assert fake_commands.clones() == []
    assert "Would clone https://github.com/erffy-dots/nvim" in captured.err
    assert not (tmp_path / ".local" / "share" / "dotforge").exists()


def test_missing_git_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], fake_commands
) -> None:
    fake_commands.available = {"curl"}

    code = run_cli(["install"], commands=fake_commands, environ=_env(tmp_path))
    captured = capsys.readouterr()

    assert code == 2
    assert "Missing command: git" in captured.err
    assert fake_commands.calls == []


def test_held_lock_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], fake_commands
) -> None:
    lock = tmp_path / ".cache" / "dotforge" / "install.lock"
    lock.parent.mkdir(parents=True)
    lock.write_text("1\n", encoding="utf-8")

    code = run_cli(["install", "-s"], commands=fake_commands, environ=_env(tmp_path))
    captured = capsys.readouterr()

    assert code == 2
    assert "Another instance is running" in captured.err
    assert lock.exists()


def test_invalid_catalog_path_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = run_cli(
        ["--catalog", str(tmp_path / "missing.json"), "list"], environ=_env(tmp_path)
    )
    captured = capsys.readouterr()

    assert code == 2
    assert captured.err != ""


@pytest.mark.parametrize("value", ["0", "-1", "many"])
def test_bad_parallel_is_a_usage_error(tmp_path: Path, value: str) -> None:
    with pytest.raises(SystemExit) as exc:
        run_cli(["install", "-j", value], environ=_env(tmp_path))

    assert exc.value.code == 2


# -------------------------
# subconfig
# -------------------------


def test_subconfig_installs_and_cleans(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], fake_commands
) -> None:
    code = run_cli(
        ["subconfig", "nvim", "--dir-name", "nvim-custom"],
        commands=fake_commands,
        environ=_env(tmp_path),
    )
    out = capsys.readouterr().out

    dest = tmp_path / ".config" / "nvim-custom"
    assert code == 0
    assert fake_commands.clones()[0][-2:] == ("https://github.com/erffy-dots/nvim", str(dest))
    assert (dest / "config").exists()
    assert not (dest / ".git").exists()
    assert f"- Review {dest}" in out


def test_subconfig_declined_overwrite_returns_1(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    fake_commands,
) -> None:
    (tmp_path / ".config" / "rofi").mkdir(parents=True)
    monkeypatch.setattr("builtins.input", lambda _prompt: "n")

    code = run_cli(["subconfig", "rofi"], commands=fake_commands, environ=_env(tmp_path))
    _ = capsys.readouterr()

    assert code == 1
    assert fake_commands.calls == []


def test_subconfig_confirmed_overwrite_backs_up(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    fake_commands,
) -> None:
    existing = tmp_path / ".config" / "rofi"
    existing.mkdir(parents=True)
    (existing / "marker").write_text("old", encoding="utf-8")
    prompts = []
    monkeypatch.setattr("builtins.input", lambda prompt: prompts.append(prompt) or "y")

    code = run_cli(["subconfig", "rofi"], commands=fake_commands, environ=_env(tmp_path))
    _ = capsys.readouterr()

    assert code == 0
    assert prompts == [f"Overwrite existing config at {existing}? [y/N]: "]
    assert (tmp_path / ".config" / "rofi.bak" / "marker").exists()
    assert (existing / "config").exists()


def test_subconfig_rejects_paths(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = run_cli(["subconfig", "../etc"], environ=_env(tmp_path))

    assert code == 2
    assert "Invalid config name" in capsys.readouterr().err


# -------------------------
# flags
# -------------------------


def test_flags_generates_files(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    flags = tmp_path / "flags.json"
    flags.write_text(
        json.dumps({"code": {"paths": ["~/.config/code-flags.conf"], "list": ["x"]}}),
        encoding="utf-8",
    )

    code = run_cli(["flags", "--file", str(flags)], environ=_env(tmp_path))
    captured = capsys.readouterr()

    assert code == 0
    assert (tmp_path / ".config" / "code-flags.conf").read_text(encoding="utf-8") == "--x\n"
    assert "Successfully generated" in captured.err


def test_flags_unknown_app_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    flags = tmp_path / "flags.json"
    flags.write_text(json.dumps({"code": {"paths": [], "list": []}}), encoding="utf-8")

    code = run_cli(["flags", "nope", "--file", str(flags)], environ=_env(tmp_path))

    assert code == 2
    assert "Unknown app: nope" in capsys.readouterr().err


# -------------------------
# logging lifecycle
# -------------------------


def test_install_closes_log_handlers(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], fake_commands
) -> None:
    cfg = _write_catalog(tmp_path / "catalog.json", {"nvim": "nvim"})

    code = run_cli(
        ["--catalog", str(cfg), "install", "-s"],
        commands=fake_commands,
        environ=_env(tmp_path),
    )
    _ = capsys.readouterr()

    assert code == 0
    assert logging.getLogger("dotforge").handlers == []
    (log,) = (tmp_path / ".local" / "share" / "dotforge").glob("install-*.log")
    assert "Done." in log.read_text(encoding="utf-8")


def test_install_closes_log_handlers_on_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], fake_commands
) -> None:
    fake_commands.available = set()

    code = run_cli(["install"], commands=fake_commands, environ=_env(tmp_path))
    _ = capsys.readouterr()

    assert code == 2
    assert logging.getLogger("dotforge").handlers == []
