"""Sorted, de-duplicating collection of package coverage records."""

from __future__ import annotations

import bisect
import logging
from typing import TYPE_CHECKING

from covhtml.models.coverage import MergeRule

if TYPE_CHECKING:
    from collections.abc import Iterator

    from covhtml.models.coverage import Package

logger = logging.getLogger(__name__)


class PackageAccumulator:
    """Keeps packages sorted by name, merging records that share a name."""

    def __init__(self, merge_rule: MergeRule = MergeRule.ADD) -> None:
        self._packages: list[Package] = []
        self._merge_rule = merge_rule

    @property
    def merge_rule(self) -> MergeRule:
        return self._merge_rule

    @property
    def packages(self) -> tuple[Package, ...]:
        """Stored packages in name order."""
        return tuple(self._packages)

    def __len__(self) -> int:
        return len(self._packages)

    def __iter__(self) -> Iterator[Package]:
        return iter(self._packages)

    def add_package(self, package: Package) -> None:
        """Add a package, merging it into an existing entry of the same name."""
        i = bisect.bisect_left(self._packages, package.name, key=lambda p: p.name)
        if i < len(self._packages) and self._packages[i].name == package.name:
            logger.debug("Merging duplicate package %s", package.name)
            self._packages[i].accumulate(package, self._merge_rule)
        else:
            self._packages.insert(i, package)

    def clear(self) -> None:
        """Discard all accumulated packages."""
        self._packages = []
