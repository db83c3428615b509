"""Per-package aggregation of statement coverage."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from covhtml.models.coverage import Function, Package, Statement

    Comparator = Callable[["ReportFunction", "ReportFunction"], int]


@dataclass(frozen=True)
class ReportFunction:
    """A function together with the number of its statements that ran."""

    function: Function
    statements_reached: int

    @property
    def name(self) -> str:
        return self.function.name

    @property
    def file(self) -> str:
        return self.function.file

    @property
    def statements(self) -> list[Statement]:
        return self.function.statements

    @property
    def ratio_reached(self) -> float:
        """Fraction of statements reached (0.0 for a function without statements)."""
        if not self.function.statements:
            return 0.0
        return self.statements_reached / len(self.function.statements)

    @property
    def percentage_reached(self) -> float:
        return self.ratio_reached * 100.0


@dataclass(frozen=True)
class ReportPackage:
    """A package with its report functions and statement totals."""

    package: Package
    functions: list[ReportFunction] = field(default_factory=list)
    total_statements: int = 0
    reached_statements: int = 0

    @property
    def name(self) -> str:
        return self.package.name

    @property
    def percentage_reached(self) -> float:
        """Statement coverage percentage (0.0 when there are no statements)."""
        if self.total_statements == 0:
            return 0.0
        return self.reached_statements / self.total_statements * 100.0


def compare_report_functions(a: ReportFunction, b: ReportFunction) -> int:
    """Natural ascending order: by reached ratio, then by statement count."""
    left, right = a.ratio_reached, b.ratio_reached
    if left != right:
        return -1 if left < right else 1
    return (len(a.statements) > len(b.statements)) - (len(a.statements) < len(b.statements))


def reverse(cmp: Comparator) -> Comparator:
    """Wrap a comparator so that it orders its operands the other way round."""

    def _reversed(a: ReportFunction, b: ReportFunction) -> int:
        return cmp(b, a)

    return _reversed


def build_report_package(package: Package) -> ReportPackage:
    """Count reached statements per function and total them for the package.

    Functions come back sorted in descending natural order, i.e. best covered
    first.
    """
    functions: list[ReportFunction] = []
    total = 0
    reached_total = 0
    for fn in package.functions:
        reached = sum(1 for stmt in fn.statements if stmt.is_covered)
        functions.append(ReportFunction(function=fn, statements_reached=reached))
        total += len(fn.statements)
        reached_total += reached

    functions.sort(key=functools.cmp_to_key(reverse(compare_report_functions)))
    return ReportPackage(
        package=package,
        functions=functions,
        total_statements=total,
        reached_statements=reached_total,
    )
