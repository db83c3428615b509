"""Configuration parsing from ``.covhtml.yml``."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from covhtml.models.coverage import MergeRule
from covhtml.themes import DEFAULT_THEME, ThemeName

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".covhtml.yml"

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")


def _resolve_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var = match.group(1)
        resolved = os.environ.get(var)
        if resolved is None:
            logger.warning("Environment variable %s is not set (referenced in config)", var)
            return ""
        return resolved

    return _ENV_VAR_RE.sub(_replace, value)


def _resolve_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively resolve environment variables in a dictionary."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str):
            result[key] = _resolve_env_vars(value)
        elif isinstance(value, dict):
            result[key] = _resolve_dict(value)
        elif isinstance(value, list):
            result[key] = [
                _resolve_env_vars(item) if isinstance(item, str) else item for item in value
            ]
        else:
            result[key] = value
    return result


@dataclass
class ReportConfig:
    """Report rendering configuration."""

    theme: str = DEFAULT_THEME.value
    """Theme identifier (golang, kit)."""

    stylesheet: str = ""
    """Custom stylesheet path (empty = theme default)."""

    output: str = ""
    """Output file for the HTML report (empty = stdout)."""

    merge_rule: str = MergeRule.ADD.value
    """How duplicate package records combine: add, max or replace."""


@dataclass
class CovHTMLConfig:
    """Complete covhtml configuration from ``.covhtml.yml``."""

    root: str
    """Directory the configuration was loaded from."""

    report: ReportConfig = field(default_factory=ReportConfig)
    """Report rendering configuration."""

    raw: dict[str, Any] = field(default_factory=dict)
    """Raw parsed YAML for extension/debugging."""

    @property
    def stylesheet_path(self) -> str:
        """Stylesheet path resolved against the config root (empty if unset)."""
        if not self.report.stylesheet:
            return ""
        return str(Path(self.root) / Path(self.report.stylesheet).expanduser())


def _parse_report_config(raw: dict[str, Any]) -> ReportConfig:
    """Parse the report section from raw YAML."""
    report_raw = raw.get("report", {})
    if not isinstance(report_raw, dict):
        report_raw = {}

    return ReportConfig(
        theme=str(report_raw.get("theme", os.environ.get("COVHTML_THEME", DEFAULT_THEME.value))),
        stylesheet=str(report_raw.get("stylesheet", os.environ.get("COVHTML_STYLESHEET", ""))),
        output=str(report_raw.get("output", "")),
        merge_rule=str(report_raw.get("merge_rule", MergeRule.ADD.value)),
    )


def load_config(root: str | Path) -> CovHTMLConfig:
    """Load and parse ``.covhtml.yml`` from *root*.

    Falls back to defaults and environment variables when the file is missing
    or incomplete.
    """
    root_path = Path(root).resolve()
    config_file = root_path / CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_file.is_file():
        parsed = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        if isinstance(parsed, dict):
            raw = _resolve_dict(parsed)
        logger.debug("Loaded configuration from %s", config_file)

    return CovHTMLConfig(root=str(root_path), report=_parse_report_config(raw), raw=raw)


def _validate_report_config(config: CovHTMLConfig) -> list[str]:
    """Validate report settings."""
    errors: list[str] = []
    report = config.report

    themes = {t.value for t in ThemeName}
    if report.theme not in themes:
        errors.append(
            f"report.theme must be one of {', '.join(sorted(themes))} (got: {report.theme})"
        )

    rules = {r.value for r in MergeRule}
    if report.merge_rule not in rules:
        errors.append(
            f"report.merge_rule must be one of {', '.join(sorted(rules))} "
            f"(got: {report.merge_rule})"
        )

    if report.stylesheet and not Path(config.stylesheet_path).is_file():
        errors.append(f"report.stylesheet does not exist: {config.stylesheet_path}")

    return errors


def validate_config(config: CovHTMLConfig) -> list[str]:
    """Validate the configuration and return a list of error messages.

    Returns an empty list if the configuration is valid.
    """
    return _validate_report_config(config)
