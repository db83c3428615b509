"""End-to-end HTML report generation from a gocov JSON stream."""

from __future__ import annotations

import logging
import os
import sys
import time
from typing import IO, TYPE_CHECKING, Any

from covhtml.adapters.coverage import GocovJSONAdapter
from covhtml.errors import InputReadError, StylesheetNotFoundError
from covhtml.models.coverage import MergeRule
from covhtml.report.accumulator import PackageAccumulator
from covhtml.report.renderer import print_report
from covhtml.themes import DEFAULT_THEME, ThemeName, get_theme

if TYPE_CHECKING:
    from covhtml.report.renderer import TemplateData
    from covhtml.themes import Theme

logger = logging.getLogger(__name__)

_MILLISECONDS_PER_SECOND = 1000.0


def format_elapsed(seconds: float) -> str:
    """Format a wall-clock duration for the diagnostics line."""
    if seconds < 1.0:
        return f"{seconds * _MILLISECONDS_PER_SECOND:.3f}ms"
    return f"{seconds:.3f}s"


def read_input(stream: IO[Any]) -> bytes:
    """Read the whole coverage stream as bytes.

    Raises:
        InputReadError: If the stream cannot be read.
    """
    try:
        data = stream.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(str(e)) from e
    if isinstance(data, str):
        return data.encode("utf-8")
    return data


def load_packages(
    stream: IO[Any], merge_rule: MergeRule = MergeRule.ADD
) -> PackageAccumulator:
    """Read, decode and accumulate all packages from *stream*."""
    data = read_input(stream)
    adapter = GocovJSONAdapter()
    packages = adapter.decode(data)
    logger.debug("Decoded %d package record(s) with %s", len(packages), adapter.name)

    accumulator = PackageAccumulator(merge_rule)
    for pkg in packages:
        accumulator.add_package(pkg)
    logger.info(
        "Accumulated %d package record(s) into %d package(s)", len(packages), len(accumulator)
    )
    return accumulator


def html_report_coverage(
    stream: IO[Any],
    css: str = "",
    *,
    theme: Theme | ThemeName | str = DEFAULT_THEME,
    out: IO[str] | None = None,
    err: IO[str] | None = None,
    merge_rule: MergeRule = MergeRule.ADD,
) -> TemplateData:
    """Write an HTML coverage report for the gocov JSON data in *stream*.

    Args:
        stream: Binary or text stream holding the gocov JSON document.
        css: Path of a custom stylesheet; empty to use the theme's default.
        theme: Theme object or identifier.
        out: Destination of the report (default: stdout).
        err: Destination of the timing line (default: stderr).
        merge_rule: How duplicate package records combine.

    Returns:
        The data handed to the theme template.

    Raises:
        StylesheetNotFoundError: If *css* is set but does not exist. Checked
            before any input is read.
        InputReadError: If *stream* cannot be read.
        DecodeError: If the input is not a gocov JSON document.
        StylesheetReadError: If the custom stylesheet cannot be read.
        RenderError: If the template fails.
    """
    t0 = time.perf_counter()
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr

    if css and not os.path.exists(css):
        raise StylesheetNotFoundError(f"{css} does not exist")

    selected = theme if not isinstance(theme, (str, ThemeName)) else get_theme(theme)

    accumulator = load_packages(stream, merge_rule)
    out.write("\n")
    try:
        return print_report(out, accumulator.packages, selected, css)
    finally:
        err.write(f"Took {format_elapsed(time.perf_counter() - t0)}\n")
