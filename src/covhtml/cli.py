"""covhtml CLI — top-level command group."""

from __future__ import annotations

import io
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

import click
import yaml
from rich.console import Console

from covhtml import __version__
from covhtml.config import CovHTMLConfig, load_config, validate_config
from covhtml.errors import CovHTMLError
from covhtml.models.coverage import MergeRule
from covhtml.report.builder import build_report_package
from covhtml.report.renderer import build_overview
from covhtml.reporters.terminal import reporter
from covhtml.runner import html_report_coverage, load_packages
from covhtml.themes import DEFAULT_THEME, ThemeName, get_theme, list_themes

if TYPE_CHECKING:
    from covhtml.report.builder import ReportPackage

logger = logging.getLogger(__name__)
console = Console()

_THEME_CHOICES = [t.value for t in ThemeName]
_MERGE_RULE_CHOICES = [r.value for r in MergeRule]


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_config_or_abort(path: str) -> CovHTMLConfig:
    try:
        return load_config(path)
    except (OSError, yaml.YAMLError) as e:
        reporter.print_error(f"Failed to load configuration: {e}")
        raise click.Abort from e


def _resolve_merge_rule(value: str) -> MergeRule:
    try:
        return MergeRule(value)
    except ValueError as e:
        reporter.print_error(
            f"Unknown merge rule {value!r} (expected one of {', '.join(_MERGE_RULE_CHOICES)})"
        )
        raise click.Abort from e


def _config_to_dict(config: CovHTMLConfig) -> dict[str, Any]:
    """Convert CovHTMLConfig to dictionary for display."""
    result = asdict(config)
    # Remove the raw field as it's redundant
    result.pop("raw", None)
    return result


_input_argument = click.argument(
    "input_file",
    metavar="[INPUT]",
    required=False,
    default="-",
    type=click.File("rb"),
)

_path_option = click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Directory holding .covhtml.yml.",
)

_merge_rule_option = click.option(
    "--merge-rule",
    type=click.Choice(_MERGE_RULE_CHOICES),
    default=None,
    help="How duplicate package records combine (default: add).",
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.version_option(version=__version__, prog_name="covhtml")
def cli(*, verbose: bool) -> None:
    """covhtml — render gocov JSON coverage data as an HTML report."""
    _configure_logging(verbose=verbose)


@cli.command()
@_input_argument
@click.option(
    "-s",
    "--stylesheet",
    default=None,
    type=click.Path(dir_okay=False),
    help="Custom stylesheet to inline instead of the theme's default.",
)
@click.option(
    "-t",
    "--theme",
    type=click.Choice(_THEME_CHOICES),
    default=None,
    help=f"Report theme (default: {DEFAULT_THEME.value}).",
)
@click.option(
    "-o",
    "--output",
    default=None,
    type=click.Path(dir_okay=False),
    help="Write the report to a file instead of stdout.",
)
@_merge_rule_option
@_path_option
def render(
    input_file: IO[bytes],
    stylesheet: str | None,
    theme: str | None,
    output: str | None,
    merge_rule: str | None,
    path: str,
) -> None:
    """Render an HTML coverage report from gocov JSON.

    INPUT is a gocov JSON file; reads stdin when omitted or '-'.

    Example:
      gocov test ./... | covhtml render > coverage.html
      covhtml render coverage.json -t kit -o coverage.html
    """
    config = _load_config_or_abort(path)
    theme_name = theme or config.report.theme
    css = stylesheet if stylesheet is not None else config.stylesheet_path
    rule = _resolve_merge_rule(merge_rule or config.report.merge_rule)
    if output is None and config.report.output:
        output = str(Path(config.root) / config.report.output)

    try:
        if output:
            # An existing report is only replaced once rendering succeeded.
            buf = io.StringIO()
            data = html_report_coverage(
                input_file, css, theme=theme_name, out=buf, merge_rule=rule
            )
            Path(output).write_text(buf.getvalue(), encoding="utf-8")
            reporter.print_success(f"Report written to {output} ({len(data.packages)} package(s))")
        else:
            html_report_coverage(input_file, css, theme=theme_name, merge_rule=rule)
    except CovHTMLError as e:
        reporter.print_error(f"HTML report: {e}")
        raise click.Abort from e
    except OSError as e:
        reporter.print_error(f"Cannot write report: {e}")
        raise click.Abort from e


@cli.command()
@_input_argument
@_merge_rule_option
@_path_option
def summary(input_file: IO[bytes], merge_rule: str | None, path: str) -> None:
    """Print a per-package coverage table for gocov JSON.

    Example:
      gocov test ./... | covhtml summary
    """
    config = _load_config_or_abort(path)
    rule = _resolve_merge_rule(merge_rule or config.report.merge_rule)

    try:
        accumulator = load_packages(input_file, rule)
    except CovHTMLError as e:
        reporter.print_error(str(e))
        raise click.Abort from e

    packages: list[ReportPackage] = [build_report_package(pkg) for pkg in accumulator]
    if not packages:
        reporter.print_warning("No packages in coverage data.")
        return
    overview = build_overview(packages) if len(packages) > 1 else None
    reporter.print_coverage_summary(packages, overview)


@cli.command()
def themes() -> None:
    """List the available report themes."""
    reporter.print_themes(list_themes(), DEFAULT_THEME.value)
    reporter.print_info("Select one with -t/--theme on render or css.")


@cli.command()
@click.option(
    "-t",
    "--theme",
    type=click.Choice(_THEME_CHOICES),
    default=DEFAULT_THEME.value,
    show_default=True,
    help="Theme whose stylesheet to print.",
)
def css(theme: str) -> None:
    """Print a theme's default stylesheet, e.g. as a base for --stylesheet."""
    click.echo(get_theme(theme).style, nl=False)


@cli.group("config")
def config_group() -> None:
    """Inspect `.covhtml.yml` configuration."""


@config_group.command("show")
@_path_option
@click.option(
    "--json-output",
    "as_json",
    is_flag=True,
    help="Output as JSON instead of YAML.",
)
def config_show(path: str, *, as_json: bool) -> None:
    """Display the resolved configuration.

    Example:
      covhtml config show
      covhtml config show --json-output
    """
    config_dict = _config_to_dict(_load_config_or_abort(path))

    if as_json:
        click.echo(json.dumps(config_dict, indent=2))
    else:
        console.print()
        console.print("[bold cyan]Configuration:[/bold cyan]")
        console.print()
        click.echo(yaml.safe_dump(config_dict, sort_keys=False, default_flow_style=False))


@config_group.command("validate")
@_path_option
def config_validate(path: str) -> None:
    """Validate `.covhtml.yml` values.

    Example:
      covhtml config validate
    """
    errors = validate_config(_load_config_or_abort(path))

    if not errors:
        reporter.print_success("Configuration is valid!")
        return

    reporter.print_error(f"Found {len(errors)} configuration error(s):")
    reporter.err_console.print()
    for idx, error in enumerate(errors, start=1):
        reporter.err_console.print(f"  {idx}. [red]{error}[/red]")
    reporter.err_console.print()
    raise click.Abort
