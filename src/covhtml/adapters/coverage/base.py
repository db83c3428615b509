"""Base class for coverage adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from covhtml.models.coverage import Package


class CoverageAdapter(ABC):
    """Abstract base class for coverage record decoders.

    Each concrete adapter knows one already-decoded structured coverage format
    and translates it into a list of :class:`~covhtml.models.coverage.Package`.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Adapter identifier (e.g. 'gocov_json')."""

    @abstractmethod
    def decode(self, data: bytes) -> list[Package]:
        """Decode raw bytes into packages.

        Raises:
            DecodeError: If the data does not have the expected shape.
        """

