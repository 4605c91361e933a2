"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class Quantifier(str, Enum):
    """Array quantifier for pattern-array predicates.

    Values are the SQL keywords so they can be rendered directly.
    """

    ANY = "ANY"
    ALL = "ALL"


class SystemSchemas(str, Enum):
    """Which base catalog query variant to start from."""

    INCLUDE = "INCLUDE"
    EXCLUDE = "EXCLUDE"

    @classmethod
    def from_flag(cls, include_system_schemas: bool) -> "SystemSchemas":
        return cls.INCLUDE if include_system_schemas else cls.EXCLUDE


__all__ = ["Quantifier", "SystemSchemas"]
