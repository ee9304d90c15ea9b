"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
debug snapshots, and searched locations.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import ResolutionStageError
from .locator import BinaryLocator
from .models import CaptureState, PathDebugSnapshot


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, ResolutionStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_snapshot(snapshot: PathDebugSnapshot, capture_state: CaptureState) -> None:
    """Print the debug snapshot rows and the capture lifecycle state."""

    for line in snapshot.as_lines():
        typer.echo(line)
    typer.echo(f"Login shell capture: {capture_state.value}")


def echo_search_locations(locator: BinaryLocator) -> None:
    """Print static candidates and version-manager roots with availability marks."""

    filesystem = locator.filesystem
    typer.echo("Candidates:")
    for candidate in locator.candidate_paths():
        mark = "x" if filesystem.is_executable(candidate) else " "
        typer.echo(f"  [{mark}] {candidate}")
    typer.echo("Version manager roots:")
    for root in locator.version_manager_roots():
        try:
            count = len(filesystem.list_directory(root))
        except OSError:
            typer.echo(f"  [ ] {root} (missing)")
            continue
        typer.echo(f"  [x] {root} ({count} versions)")
