"""gocov JSON adapter — decode the output of ``gocov test`` / ``gocov convert``.

The document is a JSON object whose ``Packages`` field lists packages, each
with functions and statements::

    {"Packages": [{"Name": "pkg/a", "Functions": [
        {"Name": "F", "File": "/src/a.go", "Start": 10, "End": 80,
         "Statements": [{"Start": 20, "End": 30, "Reached": 1}]}]}]}

Field names are matched case-insensitively and unknown fields are ignored,
the same way the gocov tool itself decodes this format.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from covhtml.adapters.coverage.base import CoverageAdapter
from covhtml.errors import DecodeError
from covhtml.models.coverage import Function, Package, Statement

logger = logging.getLogger(__name__)


def _field(obj: dict[str, Any], key: str) -> Any:
    """Look up *key* in *obj*, preferring an exact match over a case-insensitive one."""
    if key in obj:
        return obj[key]
    folded = key.casefold()
    for name, value in obj.items():
        if name.casefold() == folded:
            return value
    return None


def _object(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"{where}: expected an object, got {type(value).__name__}")
    return value


def _list(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"{where}: expected an array, got {type(value).__name__}")
    return value


def _string(value: Any, where: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"{where}: expected a string, got {type(value).__name__}")
    return value


def _integer(value: Any, where: str) -> int:
    if value is None:
        return 0
    # bool is an int subclass; JSON true/false is not a number.
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"{where}: expected an integer, got {type(value).__name__}")
    return value


def _decode_statement(raw: Any, where: str) -> Statement:
    obj = _object(raw, where)
    reached = _integer(_field(obj, "Reached"), f"{where}.Reached")
    if reached < 0:
        raise DecodeError(f"{where}.Reached: must not be negative (got {reached})")
    return Statement(
        start=_integer(_field(obj, "Start"), f"{where}.Start"),
        end=_integer(_field(obj, "End"), f"{where}.End"),
        reached=reached,
    )


def _decode_function(raw: Any, where: str) -> Function:
    obj = _object(raw, where)
    statements = _list(_field(obj, "Statements"), f"{where}.Statements")
    return Function(
        name=_string(_field(obj, "Name"), f"{where}.Name"),
        file=_string(_field(obj, "File"), f"{where}.File"),
        start=_integer(_field(obj, "Start"), f"{where}.Start"),
        end=_integer(_field(obj, "End"), f"{where}.End"),
        statements=[
            _decode_statement(stmt, f"{where}.Statements[{i}]")
            for i, stmt in enumerate(statements)
        ],
    )


def _decode_package(raw: Any, where: str) -> Package:
    obj = _object(raw, where)
    functions = _list(_field(obj, "Functions"), f"{where}.Functions")
    return Package(
        name=_string(_field(obj, "Name"), f"{where}.Name"),
        functions=[
            _decode_function(fn, f"{where}.Functions[{i}]") for i, fn in enumerate(functions)
        ],
    )


class GocovJSONAdapter(CoverageAdapter):
    """Decoder for gocov's JSON coverage document."""

    @property
    def name(self) -> str:
        return "gocov_json"

    def decode(self, data: bytes) -> list[Package]:
        """Decode a gocov JSON document into packages.

        Args:
            data: Raw bytes of the JSON document.

        Returns:
            Packages in document order (duplicates are kept; merging is the
            accumulator's job).

        Raises:
            DecodeError: If the bytes are not a JSON object of the gocov shape.
        """
        try:
            document = json.loads(data)
        except UnicodeDecodeError as e:
            raise DecodeError(f"input is not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise DecodeError(f"invalid JSON: {e}") from e

        root = _object(document, "document")
        raw_packages = _list(_field(root, "Packages"), "Packages")
        packages = [_decode_package(pkg, f"Packages[{i}]") for i, pkg in enumerate(raw_packages)]
        logger.debug("Decoded %d package record(s)", len(packages))
        return packages
