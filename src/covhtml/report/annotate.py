"""Annotated source listings for the function detail view."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from covhtml.models.coverage import Function

logger = logging.getLogger(__name__)

COVERED = "covered"
UNCOVERED = "uncovered"
NEUTRAL = "neutral"


@dataclass(frozen=True)
class SourceLine:
    """One line of function source with its coverage status."""

    number: int
    text: str
    status: str


def _line_of(data: bytes, offset: int) -> int:
    """Return the 1-based line number containing byte *offset*."""
    return data.count(b"\n", 0, offset) + 1


def annotate_function(fn: Function) -> list[SourceLine]:
    """Return the function's source lines, each tagged covered/uncovered/neutral.

    A line is uncovered when any statement touching it never ran, covered
    when all statements touching it ran, and neutral otherwise. An empty list
    is returned when the source cannot be read or the offsets are out of range.
    """
    if not fn.file:
        return []
    try:
        data = Path(fn.file).read_bytes()
    except OSError as e:
        logger.debug("No source for %s: %s", fn.name, e)
        return []
    if not 0 <= fn.start < fn.end <= len(data):
        logger.debug("Offsets %d-%d of %s are outside %s", fn.start, fn.end, fn.name, fn.file)
        return []

    first_line = _line_of(data, fn.start)
    statuses: dict[int, str] = {}
    for stmt in fn.statements:
        if stmt.end <= stmt.start:
            continue
        status = COVERED if stmt.is_covered else UNCOVERED
        for number in range(_line_of(data, stmt.start), _line_of(data, stmt.end - 1) + 1):
            if statuses.get(number) != UNCOVERED:
                statuses[number] = status

    # Split on "\n" only so numbering agrees with _line_of.
    lines = data[fn.start : fn.end].decode("utf-8", errors="replace").split("\n")
    if lines[-1] == "":
        lines.pop()
    return [
        SourceLine(
            number=number, text=line.removesuffix("\r"), status=statuses.get(number, NEUTRAL)
        )
        for number, line in enumerate(lines, start=first_line)
    ]
