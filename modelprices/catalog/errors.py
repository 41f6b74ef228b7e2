"""Error taxonomy for loading and pricing model records."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class ModelPricesError(Exception):
    """Base class for all errors raised by modelprices."""


class RecordInvalid(ModelPricesError):
    """Raised when a raw entry cannot be turned into a record at all."""

    def __init__(self, model_id: object, reason: str):
        self.model_id = model_id
        self.reason = reason
        super().__init__(f"{model_id}: {reason}")


class CostUnavailable(ModelPricesError):
    """Raised when a record has no value for the requested cost kind."""

    def __init__(self, model_id: str, kind: str):
        self.model_id = model_id
        self.kind = kind
        super().__init__(f"{model_id} has no '{kind}' cost")


class UnitMismatch(ModelPricesError):
    """Raised when a volume is applied to a cost that is not priced per unit of volume."""

    def __init__(self, kind: str, unit: str):
        self.kind = kind
        self.unit = unit
        super().__init__(f"'{kind}' is priced per {unit} and cannot be scaled by volume")


class SourceError(ModelPricesError):
    """Raised when a document cannot be read or decoded."""


class IssueKind(str, Enum):
    RECORD_INVALID = "record_invalid"              # Entry rejected
    FIELD_TYPE_MISMATCH = "field_type_mismatch"    # Field dropped
    DUPLICATE_ID = "duplicate_id"                  # Later entry replaced earlier one
    NEGATIVE_COST = "negative_cost"                # Cost dropped
    CONTEXT_INCONSISTENT = "context_inconsistent"  # input + output > total, kept as-is


class Issue(NamedTuple):
    """One problem found while loading an entry."""
    kind: IssueKind
    message: str
    field: str | None = None

    @property
    def is_error(self) -> bool:
        return self.kind is IssueKind.RECORD_INVALID

    def __str__(self) -> str:
        where = f" [{self.field}]" if self.field else ""
        return f"{self.kind.value}{where}: {self.message}"
