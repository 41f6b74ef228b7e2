"""
Per-entry validation of the raw pricing document.

Only the entry's overall shape is fatal: anything other than a JSON object is
rejected with ``RecordInvalid``. Every field is optional, and a field with the
wrong type is reported as an ``Issue`` and left out of the record instead of
failing the entry.
"""

from __future__ import annotations

import copy
import math
import re
from collections.abc import Mapping
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from modelprices.catalog.errors import Issue, IssueKind, RecordInvalid
from modelprices.catalog.models import (
    CAPABILITY_PREFIX,
    PROVIDER_KEY,
    ContextLimits,
    CostKind,
    ModelRecord,
)

LIMIT_KEYS = ("max_tokens", "max_input_tokens", "max_output_tokens")
COST_KEYS = {kind.value: kind for kind in CostKind}
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _mismatch(key: str, expected: str, value: Any) -> Issue:
    return Issue(
        IssueKind.FIELD_TYPE_MISMATCH,
        f"expected {expected}, got {type(value).__name__} {value!r}",
        key,
    )


def _read_limit(key: str, value: Any, issues: List[Issue]) -> Optional[int]:
    if not _is_number(value) or (isinstance(value, float) and not value.is_integer()):
        issues.append(_mismatch(key, "a non-negative integer", value))
        return None
    if value < 0:
        issues.append(_mismatch(key, "a non-negative integer", value))
        return None
    return int(value)


def _read_cost(key: str, value: Any, issues: List[Issue]) -> Optional[float]:
    if not _is_number(value):
        issues.append(_mismatch(key, "a number", value))
        return None
    try:
        cost = float(value)
    except OverflowError:
        # JSON integers have no size limit
        cost = math.inf
    if not math.isfinite(cost):
        issues.append(_mismatch(key, "a finite number", value))
        return None
    if cost < 0:
        issues.append(Issue(IssueKind.NEGATIVE_COST, f"negative cost {value!r} ignored", key))
        return None
    return cost


def _read_string(key: str, value: Any, issues: List[Issue]) -> Optional[str]:
    if not isinstance(value, str):
        issues.append(_mismatch(key, "a string", value))
        return None
    return value


def _read_date(key: str, value: Any, issues: List[Issue]) -> Optional[date]:
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        issues.append(_mismatch(key, "a YYYY-MM-DD date", value))
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        issues.append(_mismatch(key, "a YYYY-MM-DD date", value))
        return None


def validate_entry(model_id: str, raw: Any) -> Tuple[ModelRecord, List[Issue]]:
    """
    Validate one raw entry and build its record.

    Args:
        model_id: The entry's key in the document.
        raw: The decoded entry value.

    Returns:
        The record and the (possibly empty) list of recoverable issues.

    Raises:
        RecordInvalid: If the entry is not an object.
    """
    if not isinstance(raw, Mapping):
        raise RecordInvalid(model_id, "not an object")

    issues: List[Issue] = []
    limits: Dict[str, int] = {}
    costs: Dict[CostKind, float] = {}
    capabilities: Dict[str, bool] = {}
    extra: Dict[str, Any] = {}
    fields: Dict[str, Any] = {}

    for key, value in raw.items():
        if not isinstance(key, str):
            issues.append(Issue(IssueKind.FIELD_TYPE_MISMATCH, f"non-string key {key!r} dropped"))
            continue

        if key in LIMIT_KEYS:
            limit = _read_limit(key, value, issues)
            if limit is not None:
                limits[key] = limit
        elif key in COST_KEYS:
            cost = _read_cost(key, value, issues)
            if cost is not None:
                costs[COST_KEYS[key]] = cost
        elif key.startswith(CAPABILITY_PREFIX):
            if isinstance(value, bool):
                capabilities[key[len(CAPABILITY_PREFIX):]] = value
            else:
                issues.append(_mismatch(key, "a boolean", value))
        elif key == PROVIDER_KEY:
            fields["provider"] = _read_string(key, value, issues)
        elif key in ("mode", "source"):
            fields[key] = _read_string(key, value, issues)
        elif key == "deprecation_date":
            fields[key] = _read_date(key, value, issues)
        else:
            extra[key] = copy.deepcopy(value)

    context_limits = ContextLimits(**limits)
    if not context_limits.is_consistent:
        issues.append(Issue(
            IssueKind.CONTEXT_INCONSISTENT,
            f"max_input_tokens + max_output_tokens exceeds max_tokens "
            f"({context_limits.max_input_tokens} + {context_limits.max_output_tokens} "
            f"> {context_limits.max_tokens})",
            "max_tokens",
        ))

    record = ModelRecord(
        id=model_id,
        context_limits=context_limits,
        costs=costs,
        capabilities=capabilities,
        extra=extra,
        **fields,
    )
    return record, issues
