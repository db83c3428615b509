"""Theme bundle and the Jinja2 template engine used by the built-in themes."""

from __future__ import annotations

import dataclasses
import functools
from dataclasses import dataclass
from importlib import resources
from typing import TYPE_CHECKING, Protocol, TextIO

from jinja2 import Environment, PackageLoader, StrictUndefined

from covhtml.report.annotate import annotate_function

if TYPE_CHECKING:
    from covhtml.report.renderer import TemplateData

_HIGH_COVERAGE = 80.0
_MEDIUM_COVERAGE = 50.0


class TemplateEngine(Protocol):
    """Anything that can turn report data into a document."""

    def render(self, data: TemplateData, out: TextIO) -> None:
        """Write the rendered document for *data* to *out*."""


@dataclass(frozen=True)
class Theme:
    """A named bundle of default stylesheet and template."""

    name: str
    description: str
    style: str
    engine: TemplateEngine


def _percent(value: float) -> str:
    return f"{value:.2f}%"


def _coverage_class(percentage: float) -> str:
    """Map a coverage percentage to a CSS class."""
    if percentage >= _HIGH_COVERAGE:
        return "high"
    if percentage >= _MEDIUM_COVERAGE:
        return "medium"
    return "low"


@functools.cache
def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("covhtml.themes", "templates"),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    env.filters.update({"percent": _percent, "coverage_class": _coverage_class})
    env.globals.update({"annotate": annotate_function})
    return env


def load_style(filename: str) -> str:
    """Read a stylesheet shipped with the built-in themes."""
    return (resources.files("covhtml.themes") / "templates" / filename).read_text(
        encoding="utf-8"
    )


class JinjaTemplateEngine:
    """Render report data with a Jinja2 template from the theme package."""

    def __init__(self, template_name: str) -> None:
        self.template_name = template_name

    def render(self, data: TemplateData, out: TextIO) -> None:
        template = _environment().get_template(self.template_name)
        context = {f.name: getattr(data, f.name) for f in dataclasses.fields(data)}
        template.stream(context).dump(out)
