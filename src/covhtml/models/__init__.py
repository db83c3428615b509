"""Data models for covhtml."""

from covhtml.models.coverage import Function, MergeRule, Package, Statement

__all__ = [
    "Function",
    "MergeRule",
    "Package",
    "Statement",
]
