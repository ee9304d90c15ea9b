"""CLI tests for resolve/path/capture/doctor commands and their diagnostics."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from codexpath.cli import app
from tests.fs_fakes import write_executable

_CLEARED_ENV: dict[str, str | None] = {
    "CODEX_CLI_PATH": None,
    "CODEXPATH_BINARY": None,
    "CODEXPATH_OVERRIDE_ENV": None,
    "CODEXPATH_SHELL": None,
    "CODEXPATH_CAPTURE_TIMEOUT": None,
    "CODEXPATH_HOME": None,
    "CODEXPATH_PURPOSES": None,
}


def _env(**values: str) -> dict[str, str | None]:
    """Return an isolated CLI environment with explicit overrides."""

    env = dict(_CLEARED_ENV)
    env.update(values)
    return env


def _login_shell(tmp_path: Path, reported_path: str) -> Path:
    """Create a fake shell that prints a fixed PATH, whatever its arguments."""

    return write_executable(
        tmp_path / "fake-login-shell",
        f'#!/bin/sh\nprintf %s "{reported_path}"\n',
    )


def test_resolve_prints_binary_found_on_inherited_path(tmp_path: Path) -> None:
    """`resolve` should print the absolute path from the inherited PATH."""

    tool = write_executable(tmp_path / "bin" / "codex")
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["resolve", "--home", str(tmp_path / "home")],
        env=_env(PATH=str(tool.parent)),
    )

    assert result.exit_code == 0
    assert result.output.strip() == str(tool)


def test_resolve_uses_override_variable(tmp_path: Path) -> None:
    """An executable override should be printed even when PATH has another copy."""

    on_path = write_executable(tmp_path / "bin" / "codex")
    override = write_executable(tmp_path / "pinned" / "codex")
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["resolve"],
        env=_env(PATH=str(on_path.parent), CODEX_CLI_PATH=str(override)),
    )

    assert result.exit_code == 0
    assert result.output.strip() == str(override)


def test_resolve_with_capture_uses_login_shell_path(tmp_path: Path) -> None:
    """`--capture` should let the login shell PATH contribute to resolution."""

    empty_dir = tmp_path / "empty"
    empty_dir.mkdir()
    tool = write_executable(tmp_path / "nvm" / "bin" / "codex-capture-test")
    shell = _login_shell(tmp_path, f"/usr/bin:{tool.parent}")
    runner = CliRunner()

    result = runner.invoke(
        app,
        [
            "resolve",
            "--binary",
            "codex-capture-test",
            "--shell",
            str(shell),
            "--home",
            str(tmp_path / "home"),
            "--capture",
        ],
        env=_env(PATH=str(empty_dir)),
    )

    assert result.exit_code == 0
    assert result.output.strip() == str(tool)


def test_resolve_reports_missing_binary_with_hint(tmp_path: Path) -> None:
    """A total miss should exit 1 with stage-aware diagnostics and a hint."""

    empty_dir = tmp_path / "empty"
    empty_dir.mkdir()
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["resolve", "--binary", "codexpath-missing-tool", "--home", str(tmp_path / "home")],
        env=_env(PATH=str(empty_dir)),
    )

    assert result.exit_code == 1
    assert "resolve failed at stage `resolve`" in result.output
    assert "`codexpath-missing-tool` was not found." in result.output
    assert "Hint: Install it, set `CODEX_CLI_PATH`" in result.output


def test_path_prints_effective_path_for_node_tooling() -> None:
    """`path` should merge inherited and baseline directories without duplicates."""

    runner = CliRunner()

    result = runner.invoke(
        app,
        ["path", "--purpose", "nodeTooling", "--home", "/home/test"],
        env=_env(PATH="/custom/bin:/usr/bin:/usr/local/bin"),
    )

    assert result.exit_code == 0
    assert result.output.strip() == ":".join(
        [
            "/custom/bin",
            "/usr/bin",
            "/usr/local/bin",
            "/opt/homebrew/bin",
            "/home/test/.local/bin",
            "/home/test/bin",
            "/home/test/.bun/bin",
            "/home/test/.npm-global/bin",
            "/home/test/.local/share/fnm",
            "/home/test/.fnm",
        ]
    )


def test_path_includes_resolved_binary_directory_for_rpc(tmp_path: Path) -> None:
    """RPC purpose should add the override binary's directory to PATH."""

    override = write_executable(tmp_path / "pinned" / "codex")
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["path", "--purpose", "rpc", "--home", "/home/test"],
        env=_env(PATH="/usr/bin", CODEX_CLI_PATH=str(override)),
    )

    assert result.exit_code == 0
    assert result.output.strip().split(":")[-1] == str(override.parent)


def test_path_rejects_unknown_purpose() -> None:
    """Unknown purposes should fail at the `purposes` stage."""

    runner = CliRunner()

    result = runner.invoke(app, ["path", "--purpose", "deploy"], env=_env(PATH="/usr/bin"))

    assert result.exit_code == 1
    assert "path failed at stage `purposes`" in result.output


def test_capture_prints_login_shell_path(tmp_path: Path) -> None:
    """`capture` should print the PATH reported by the login shell."""

    shell = _login_shell(tmp_path, "/from/profile/bin:/usr/bin")
    runner = CliRunner()

    result = runner.invoke(app, ["capture", "--shell", str(shell)], env=_env(PATH="/usr/bin"))

    assert result.exit_code == 0
    assert result.output.strip() == "/from/profile/bin:/usr/bin"


def test_capture_reports_unlaunchable_shell(tmp_path: Path) -> None:
    """A shell that cannot start should surface as a capture-stage failure."""

    runner = CliRunner()

    result = runner.invoke(
        app,
        ["capture", "--shell", str(tmp_path / "no-such-shell"), "--timeout", "1"],
        env=_env(PATH="/usr/bin"),
    )

    assert result.exit_code == 1
    assert "capture failed at stage `capture`" in result.output


def test_doctor_prints_snapshot_and_search_locations(tmp_path: Path) -> None:
    """`doctor` should render the snapshot, capture state, and probed locations."""

    tool = write_executable(tmp_path / "login" / "codex-doctor-test")
    shell = _login_shell(tmp_path, str(tool.parent))
    nvm_root = tmp_path / "home" / ".nvm" / "versions" / "node"
    (nvm_root / "v20.1.0").mkdir(parents=True)
    runner = CliRunner()

    result = runner.invoke(
        app,
        [
            "doctor",
            "--binary",
            "codex-doctor-test",
            "--shell",
            str(shell),
            "--home",
            str(tmp_path / "home"),
        ],
        env=_env(PATH="/usr/bin"),
    )

    assert result.exit_code == 0
    assert f"Binary: {tool}" in result.output
    assert f"Login shell PATH: {tool.parent}" in result.output
    assert "Login shell capture: captured" in result.output
    assert "Candidates:" in result.output
    assert f"[x] {nvm_root} (1 versions)" in result.output
    assert f"[ ] {tmp_path / 'home'}/.local/share/fnm (missing)" in result.output


def test_resolve_reports_missing_config_file() -> None:
    """A missing `--config` path should fail at the config stage."""

    runner = CliRunner()

    result = runner.invoke(
        app,
        ["resolve", "--config", "missing-codexpath.yaml"],
        env=_env(PATH="/usr/bin"),
    )

    assert result.exit_code == 1
    assert "resolve failed at stage `config`" in result.output
    assert "Config file not found: `missing-codexpath.yaml`." in result.output


def test_resolve_verbose_emits_phase_logs(tmp_path: Path) -> None:
    """`--verbose` should emit resolution phase lines alongside the result."""

    tool = write_executable(tmp_path / "bin" / "codex")
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["resolve", "--verbose", "--home", str(tmp_path / "home")],
        env=_env(PATH=str(tool.parent)),
    )

    assert result.exit_code == 0
    assert "[phase] level=DEBUG stage=resolve event=resolved" in result.output
    assert "source=path" in result.output
