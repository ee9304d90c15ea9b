"""Command-line interface for codexpath.

Responsibilities:
- Expose diagnostics commands for binary lookup and PATH assembly.
- Convert CLI arguments into `LocatorConfig` and run the resolution core.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import echo_search_locations, echo_snapshot, exit_with_command_error
from .cli_runtime import build_session, parse_purpose_options
from .errors import ResolutionStageError
from .parsing import join_search_path

app = typer.Typer(
    name="codexpath",
    no_args_is_help=True,
    help="Locate the Codex CLI and build the PATH used to launch it.",
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML config file with lookup defaults."),
]
BinaryOption = Annotated[
    str | None,
    typer.Option("--binary", help="Executable file name to look up (default: `codex`)."),
]
ShellOption = Annotated[
    str | None,
    typer.Option("--shell", help="Shell used for login PATH capture (default: `$SHELL`)."),
]
TimeoutOption = Annotated[
    float | None,
    typer.Option("--timeout", help="Login shell capture timeout in seconds."),
]
HomeOption = Annotated[
    str | None,
    typer.Option("--home", help="Home directory used for candidate locations."),
]
CaptureOption = Annotated[
    bool,
    typer.Option(
        "--capture/--no-capture",
        help="Capture the login shell PATH before resolving.",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Emit resolution phase logs on stderr."),
]
PurposeOption = Annotated[
    list[str] | None,
    typer.Option(
        "--purpose",
        help="Invocation purpose: `rpc`, `tty`, or `nodeTooling`. Repeatable.",
    ),
]


@app.command("resolve")
def resolve_command(
    config_file: ConfigOption = None,
    binary: BinaryOption = None,
    shell: ShellOption = None,
    timeout: TimeoutOption = None,
    home: HomeOption = None,
    capture: CaptureOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Print the absolute path of the target binary."""

    try:
        session = build_session(
            config_file=config_file,
            binary=binary,
            shell=shell,
            timeout=timeout,
            home=home,
            verbose=verbose,
        )
        login_path = session.capture_login_path() if capture else session.cache.current
        resolved = session.locator.resolve(session.env, login_path)
        if resolved is None:
            raise ResolutionStageError(
                stage="resolve",
                detail=f"`{session.config.binary_name}` was not found.",
                hint=(
                    f"Install it, set `{session.config.override_env_key}` to its absolute "
                    "path, or retry with `--capture` to include the login shell PATH."
                ),
            )
    except Exception as exc:
        exit_with_command_error("resolve", exc)

    typer.echo(resolved)


@app.command("path")
def path_command(
    purpose: PurposeOption = None,
    config_file: ConfigOption = None,
    binary: BinaryOption = None,
    shell: ShellOption = None,
    timeout: TimeoutOption = None,
    home: HomeOption = None,
    capture: CaptureOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Print the effective PATH for the given invocation purposes."""

    try:
        session = build_session(
            config_file=config_file,
            binary=binary,
            shell=shell,
            timeout=timeout,
            home=home,
            verbose=verbose,
        )
        purposes = parse_purpose_options(purpose, session.config.purposes)
        login_path = session.capture_login_path() if capture else session.cache.current
        effective = session.builder.effective_path(purposes, session.env, login_path)
    except Exception as exc:
        exit_with_command_error("path", exc)

    typer.echo(effective)


@app.command("capture")
def capture_command(
    config_file: ConfigOption = None,
    shell: ShellOption = None,
    timeout: TimeoutOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Run the login shell once and print the PATH it reports."""

    try:
        session = build_session(
            config_file=config_file,
            shell=shell,
            timeout=timeout,
            verbose=verbose,
        )
        login_path = session.capture_login_path()
        if login_path is None:
            raise ResolutionStageError(
                stage="capture",
                detail="Login shell did not report a PATH.",
                hint=(
                    "Check that the shell starts non-interactively, or raise `--timeout` "
                    "if its profile is slow."
                ),
            )
    except Exception as exc:
        exit_with_command_error("capture", exc)

    typer.echo(join_search_path(login_path))


@app.command("doctor")
def doctor_command(
    purpose: PurposeOption = None,
    config_file: ConfigOption = None,
    binary: BinaryOption = None,
    shell: ShellOption = None,
    timeout: TimeoutOption = None,
    home: HomeOption = None,
    capture: CaptureOption = True,
    verbose: VerboseOption = False,
) -> None:
    """Print a diagnostics snapshot and every location the lookup checks."""

    try:
        session = build_session(
            config_file=config_file,
            binary=binary,
            shell=shell,
            timeout=timeout,
            home=home,
            verbose=verbose,
        )
        purposes = parse_purpose_options(purpose, session.config.purposes)
        if capture:
            session.capture_login_path()
        snapshot = session.builder.debug_snapshot(purposes, session.cache, session.env)
    except Exception as exc:
        exit_with_command_error("doctor", exc)

    echo_snapshot(snapshot, session.cache.state)
    echo_search_locations(session.locator)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
