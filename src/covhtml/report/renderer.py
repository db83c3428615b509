"""Assemble report data and hand it to a theme for rendering."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TextIO

from covhtml.errors import CovHTMLError, RenderError, StylesheetReadError
from covhtml.models.coverage import Package
from covhtml.report.builder import ReportPackage, build_report_package

if TYPE_CHECKING:
    from collections.abc import Iterable

    from covhtml.themes.base import Theme

logger = logging.getLogger(__name__)

REPORT_TOTAL_NAME = "Report Total"


@dataclass
class TemplateData:
    """Everything a theme template receives."""

    style: str
    """Inline CSS for the document."""

    packages: list[ReportPackage] = field(default_factory=list)
    """One entry per package, in name order."""

    command: str = ""
    """Command line hint for regenerating the report."""

    overview: ReportPackage | None = None
    """Cross-package totals; only set when there are several packages."""

    theme_name: str = ""
    """Name of the theme rendering the data."""


def read_stylesheet(path: str) -> str:
    """Return the full contents of a custom stylesheet.

    Bytes that are not valid UTF-8 are replaced rather than rejected.

    Raises:
        StylesheetReadError: If the file cannot be opened or read.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise StylesheetReadError(f"cannot read {path}: {e}") from e


def build_overview(packages: list[ReportPackage]) -> ReportPackage:
    """Sum statement totals across packages into a synthetic total row."""
    return ReportPackage(
        package=Package(name=REPORT_TOTAL_NAME),
        total_statements=sum(rp.total_statements for rp in packages),
        reached_statements=sum(rp.reached_statements for rp in packages),
    )


def build_template_data(packages: Iterable[Package], theme: Theme, css: str) -> TemplateData:
    """Build the render data for *packages* (already sorted and merged)."""
    report_packages: list[ReportPackage] = []
    names: list[str] = []
    for pkg in packages:
        report_packages.append(build_report_package(pkg))
        names.append(pkg.name)

    data = TemplateData(
        style=css,
        packages=report_packages,
        command=f"gocov test {' '.join(names)} | covhtml render -t {theme.name}",
        theme_name=theme.name,
    )
    if len(report_packages) > 1:
        data.overview = build_overview(report_packages)
    return data


def print_report(
    out: TextIO,
    packages: Iterable[Package],
    theme: Theme,
    stylesheet: str = "",
) -> TemplateData:
    """Render a coverage report for *packages* to *out*.

    Args:
        out: Text stream receiving the rendered document.
        packages: Packages in the order they should appear.
        theme: Theme providing the default style and the template.
        stylesheet: Path of a custom stylesheet to inline instead of the
            theme's default; empty for the default.

    Returns:
        The data handed to the template.

    Raises:
        StylesheetReadError: If the custom stylesheet cannot be read.
        RenderError: If the template fails.
    """
    css = read_stylesheet(stylesheet) if stylesheet else theme.style
    data = build_template_data(packages, theme, css)
    logger.info("Rendering %d package(s) with theme %s", len(data.packages), theme.name)

    try:
        theme.engine.render(data, out)
    except CovHTMLError:
        raise
    except Exception as e:
        raise RenderError(str(e)) from e
    return data
