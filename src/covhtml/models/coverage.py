"""Coverage data models decoded from gocov JSON output."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum

from covhtml.errors import AccumulateError

logger = logging.getLogger(__name__)


class MergeRule(Enum):
    """How reached counts combine when the same statement is seen twice."""

    ADD = "add"
    MAX = "max"
    REPLACE = "replace"

    def combine(self, current: int, incoming: int) -> int:
        """Return the merged reached count for one statement."""
        if self is MergeRule.MAX:
            return max(current, incoming)
        if self is MergeRule.REPLACE:
            return incoming
        return current + incoming


@dataclass
class Statement:
    """A single statement and the number of times it was executed."""

    start: int = 0
    """Byte offset of the statement start in the source file."""

    end: int = 0
    """Byte offset of the statement end in the source file."""

    reached: int = 0
    """Execution count (0 means never executed)."""

    @property
    def is_covered(self) -> bool:
        """Return True if this statement was executed at least once."""
        return self.reached > 0


@dataclass
class Function:
    """A function and its statements."""

    name: str
    file: str = ""
    start: int = 0
    end: int = 0
    statements: list[Statement] = field(default_factory=list)

    def accumulate(self, other: Function, rule: MergeRule = MergeRule.ADD) -> None:
        """Merge the reached counts of *other* into this function.

        The two functions must describe the same source range with the same
        statements. Nothing is modified when they don't.

        Raises:
            AccumulateError: If the functions do not line up.
        """
        if self.name != other.name:
            raise AccumulateError(f"function names do not match: {self.name!r} != {other.name!r}")
        if self.file != other.file:
            raise AccumulateError(f"source files do not match: {self.file!r} != {other.file!r}")
        if (self.start, self.end) != (other.start, other.end):
            raise AccumulateError(
                f"offsets of {self.name} do not match: "
                f"{self.start}-{self.end} != {other.start}-{other.end}"
            )
        if len(self.statements) != len(other.statements):
            raise AccumulateError(
                f"statement counts of {self.name} do not match: "
                f"{len(self.statements)} != {len(other.statements)}"
            )
        for mine, theirs in zip(self.statements, other.statements, strict=True):
            if (mine.start, mine.end) != (theirs.start, theirs.end):
                raise AccumulateError(
                    f"statement offsets in {self.name} do not match: "
                    f"{mine.start}-{mine.end} != {theirs.start}-{theirs.end}"
                )

        for mine, theirs in zip(self.statements, other.statements, strict=True):
            mine.reached = rule.combine(mine.reached, theirs.reached)


def _function_key(fn: Function) -> tuple[str, str, int, int]:
    return fn.name, fn.file, fn.start, fn.end


@dataclass
class Package:
    """A named package holding the coverage of its functions."""

    name: str
    functions: list[Function] = field(default_factory=list)

    def accumulate(self, other: Package, rule: MergeRule = MergeRule.ADD) -> None:
        """Merge another observation of the same package into this one.

        Functions are matched by name, file and offsets, so several functions
        sharing a name in one file (e.g. ``init``) merge independently.
        Functions only present in *other* are appended; a matched function
        whose statements disagree is skipped with a warning and the rest of
        the merge proceeds.

        Raises:
            AccumulateError: If the package names differ.
        """
        if self.name != other.name:
            raise AccumulateError(f"package names do not match: {self.name!r} != {other.name!r}")

        index = {_function_key(fn): fn for fn in self.functions}
        for incoming in other.functions:
            existing = index.get(_function_key(incoming))
            if existing is None:
                added = copy.deepcopy(incoming)
                self.functions.append(added)
                index[_function_key(added)] = added
                continue
            try:
                existing.accumulate(incoming, rule)
            except AccumulateError as e:
                logger.warning("Skipping %s in package %s: %s", incoming.name, self.name, e)
