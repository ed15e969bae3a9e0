"""Exceptions raised while pricing or recording an estimate."""

from __future__ import annotations

from typing import Any


class EstimateError(Exception):
    """Base class for failures that prevent an estimate from being priced."""


class ReferenceDataNotFound(EstimateError):
    """Raised when a reference lookup matches no row."""

    table: str = "reference"

    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"No {self.table} row found for {key!r}.")


class UnknownPackageType(ReferenceDataNotFound):
    table = "package_box"


class UnknownService(ReferenceDataNotFound):
    table = "optional_service"


class ConfigurationError(EstimateError):
    """Reference tables or configuration are missing an expected entry."""


class IncorrectResultSize(ConfigurationError):
    """Raised when a lookup expected exactly one row but matched several."""

    def __init__(self, table: str, key: Any, actual: int, expected: int = 1):
        self.table = table
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Incorrect result size for {table} {key!r}: expected {expected}, actual {actual}."
        )


class NoCapacityAvailable(EstimateError):
    """No truck tier can carry the requested number of boxes."""

    def __init__(self, total_boxes: int):
        self.total_boxes = total_boxes
        super().__init__(f"Shipment too large: no truck can carry {total_boxes} boxes.")


class PersistenceError(Exception):
    """The estimate was priced but the request could not be saved."""
