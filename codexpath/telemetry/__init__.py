"""Telemetry and observability scaffolds.

This package emits run events for deterministic capture/resolution auditing.
"""

from .logger import ResolutionLogger

__all__ = ["ResolutionLogger"]
