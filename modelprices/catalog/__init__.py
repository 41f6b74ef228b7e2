"""Loading, validation, querying and pricing of model records."""

from modelprices.catalog.costs import cost_per_volume, estimate_request_cost, per_million_tokens, unit_cost
from modelprices.catalog.errors import (
    CostUnavailable,
    Issue,
    IssueKind,
    ModelPricesError,
    RecordInvalid,
    SourceError,
    UnitMismatch,
)
from modelprices.catalog.loader import Dataset, LoadReport, dump_dataset, load_dataset
from modelprices.catalog.models import ContextLimits, CostKind, Mode, ModelRecord
from modelprices.catalog.validator import validate_entry

__all__ = [
    "ContextLimits",
    "CostKind",
    "CostUnavailable",
    "Dataset",
    "Issue",
    "IssueKind",
    "LoadReport",
    "Mode",
    "ModelPricesError",
    "ModelRecord",
    "RecordInvalid",
    "SourceError",
    "UnitMismatch",
    "cost_per_volume",
    "dump_dataset",
    "estimate_request_cost",
    "load_dataset",
    "per_million_tokens",
    "unit_cost",
    "validate_entry",
]
