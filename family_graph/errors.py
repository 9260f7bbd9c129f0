"""
errors.py - Exception hierarchy for family_graph.

Data-quality problems never raise; they are recorded as anomalies on the
affected entity. The exceptions here cover the remaining cases: resolution
failures returned to an immediate caller, configuration mistakes detected at
startup, and persisted store failures that abort a run.

Module: family_graph.errors
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

__all__ = [
    'FamilyGraphError',
    'InvalidPlaceNameError',
    'ConfigurationError',
    'UnknownFieldError',
    'StoreError',
    'IdentityError',
]


class FamilyGraphError(Exception):
    """Base class for all family_graph errors."""


class InvalidPlaceNameError(FamilyGraphError, ValueError):
    """Raised by the gazetteer when a place name normalizes to nothing."""

    def __init__(self, raw_name: str):
        self.raw_name = raw_name
        super().__init__(f"invalid place name: {raw_name!r}")


class ConfigurationError(FamilyGraphError):
    """Fatal configuration problem detected at startup."""


class UnknownFieldError(ConfigurationError):
    """An override refers to an entity kind or field that is not registered."""

    def __init__(self, kind: str, field_name: str, operation: str = "replace"):
        self.kind = kind
        self.field_name = field_name
        self.operation = operation
        super().__init__(f"unknown {operation} field {field_name!r} for kind {kind!r}")


class StoreError(FamilyGraphError):
    """
    Failure reading or writing one of the persisted stores.

    Attributes:
        store (str): Which store failed ("identity map", "gazetteer", "annotations").
        path (Optional[Path]): File involved, if any.
    """

    def __init__(self, store: str, message: str, path: Optional[Union[str, Path]] = None):
        self.store = store
        self.path = Path(path) if path else None
        location = f" ({self.path})" if self.path else ""
        super().__init__(f"{store}{location}: {message}")


class IdentityError(FamilyGraphError):
    """Invalid alias operation on the identity map."""
