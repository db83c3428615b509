"""Reporters for presenting coverage results in the terminal."""

from __future__ import annotations

from covhtml.reporters.terminal import CLIReporter, reporter

__all__ = [
    "CLIReporter",
    "reporter",
]
