"""Unit tests for shared datatypes, parsing helpers, and phase logging."""

from __future__ import annotations

import io

import pytest

from codexpath.models import InvocationPurpose, PathDebugSnapshot, requires_binary_directory
from codexpath.parsing import dedupe_preserving_order, split_search_path
from codexpath.telemetry.logger import ResolutionLogger


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("rpc", InvocationPurpose.RPC),
        ("RPC", InvocationPurpose.RPC),
        ("tty", InvocationPurpose.INTERACTIVE_TERMINAL),
        ("interactiveTerminal", InvocationPurpose.INTERACTIVE_TERMINAL),
        ("interactive-terminal", InvocationPurpose.INTERACTIVE_TERMINAL),
        (" nodeTooling ", InvocationPurpose.NODE_TOOLING),
        ("node_tooling", InvocationPurpose.NODE_TOOLING),
    ],
)
def test_invocation_purpose_parse_accepts_values_names_and_alias(
    token: str, expected: InvocationPurpose
) -> None:
    """Purpose parsing should accept values, member names, and `tty`."""

    assert InvocationPurpose.parse(token) is expected


def test_invocation_purpose_parse_rejects_unknown_token() -> None:
    """Unknown purposes should list supported values."""

    with pytest.raises(ValueError, match="supported: rpc, interactiveTerminal, nodeTooling"):
        InvocationPurpose.parse("deploy")


def test_requires_binary_directory_only_for_rpc_and_terminal() -> None:
    """Only RPC and interactive terminal purposes need the binary directory."""

    assert requires_binary_directory({InvocationPurpose.RPC})
    assert requires_binary_directory(
        [InvocationPurpose.NODE_TOOLING, InvocationPurpose.INTERACTIVE_TERMINAL]
    )
    assert not requires_binary_directory({InvocationPurpose.NODE_TOOLING})
    assert not requires_binary_directory(set())


def test_search_path_helpers_drop_blanks_and_keep_first_occurrence() -> None:
    """Split and dedupe helpers should preserve first-seen order."""

    assert split_search_path(None) == []
    assert split_search_path(":/a::/b:") == ["/a", "/b"]
    assert dedupe_preserving_order(["/a", "", "/b", "/a", "/c", "/b"]) == ["/a", "/b", "/c"]


def test_path_debug_snapshot_renders_resolved_values() -> None:
    """Snapshot rows should show resolved values verbatim."""

    snapshot = PathDebugSnapshot(
        binary_path="/opt/homebrew/bin/codex",
        effective_path="/usr/bin:/opt/homebrew/bin",
        login_shell_path="/usr/bin",
    )

    assert snapshot.as_lines() == [
        "Binary: /opt/homebrew/bin/codex",
        "Effective PATH: /usr/bin:/opt/homebrew/bin",
        "Login shell PATH: /usr/bin",
    ]


def test_resolution_logger_formats_sanitized_sorted_context() -> None:
    """Phase lines should sort context keys and sanitize unsafe characters."""

    sink = io.StringIO()
    run_logger = ResolutionLogger(sink=sink, level="DEBUG")

    run_logger.log_resolution("candidate", "codex", "/Users/dev/My Tools/codex")
    run_logger.log_capture_event("timeout", shell="/bin/zsh", timeout=0.5)

    assert sink.getvalue().splitlines() == [
        "[phase] level=DEBUG stage=resolve event=resolved binary=codex "
        "path=/Users/dev/My_Tools/codex source=candidate",
        "[phase] level=WARNING stage=capture event=timeout shell=/bin/zsh timeout=0.5",
    ]


def test_resolution_logger_filters_debug_lines_at_info_level() -> None:
    """Resolution detail lines are debug-only and hidden at the default level."""

    sink = io.StringIO()
    run_logger = ResolutionLogger(sink=sink)

    run_logger.log_resolution("miss", "codex", None)

    assert sink.getvalue() == ""
