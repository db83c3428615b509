"""Coverage adapters for decoding coverage records."""

from covhtml.adapters.coverage.base import CoverageAdapter
from covhtml.adapters.coverage.gocov_json import GocovJSONAdapter

__all__ = [
    "CoverageAdapter",
    "GocovJSONAdapter",
]
