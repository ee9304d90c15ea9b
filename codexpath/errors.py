"""Domain exceptions for CLI-facing resolution diagnostics.

The resolution core itself reports misses as `None`; these errors are raised
only at the command layer, where a miss has to become a user-facing failure.
"""

from __future__ import annotations


class ResolutionStageError(RuntimeError):
    """Raised when a command cannot complete a specific resolution stage."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped resolution error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint
