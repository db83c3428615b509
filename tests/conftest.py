"""Shared helpers and fixtures for covhtml tests."""

from __future__ import annotations

import json
from typing import Any

import pytest

from covhtml.models.coverage import Function, Package, Statement

# ── Builders ─────────────────────────────────────────────────────


def make_function(name: str, reached: list[int], *, file: str = "", start: int = 0) -> Function:
    """Build a function whose statements have the given reached counts."""
    return Function(
        name=name,
        file=file,
        start=start,
        end=start + 100,
        statements=[
            Statement(start=start + i, end=start + i + 1, reached=r) for i, r in enumerate(reached)
        ],
    )


def make_package(name: str, *functions: Function) -> Package:
    return Package(name=name, functions=list(functions))


def gocov_document(packages: list[dict[str, Any]]) -> bytes:
    """Encode raw package dicts as a gocov JSON document."""
    return json.dumps({"Packages": packages}).encode("utf-8")


# ── Fixtures ─────────────────────────────────────────────────────


@pytest.fixture
def single_package_json() -> bytes:
    """The one-package document used by the end-to-end scenarios."""
    return gocov_document(
        [
            {
                "Name": "pkg/a",
                "Functions": [
                    {"Name": "F", "Statements": [{"Reached": 1}, {"Reached": 0}]},
                ],
            }
        ]
    )


@pytest.fixture
def two_package_json() -> bytes:
    return gocov_document(
        [
            {
                "Name": "pkg/b",
                "Functions": [
                    {"Name": "G", "Statements": [{"Reached": 3}, {"Reached": 2}, {"Reached": 0}]},
                ],
            },
            {
                "Name": "pkg/a",
                "Functions": [
                    {"Name": "F", "Statements": [{"Reached": 1}, {"Reached": 0}]},
                ],
            },
        ]
    )
