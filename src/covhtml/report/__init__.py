"""Report assembly: accumulation, per-package aggregation and rendering."""

from covhtml.report.accumulator import PackageAccumulator
from covhtml.report.builder import (
    ReportFunction,
    ReportPackage,
    build_report_package,
    compare_report_functions,
    reverse,
)
from covhtml.report.renderer import REPORT_TOTAL_NAME, TemplateData, print_report

__all__ = [
    "REPORT_TOTAL_NAME",
    "PackageAccumulator",
    "ReportFunction",
    "ReportPackage",
    "TemplateData",
    "build_report_package",
    "compare_report_functions",
    "print_report",
    "reverse",
]
