"""
Read-only queries over a Dataset.

Every function here is a pure function of its arguments. Selections are lazy:
iterating one re-runs its predicate against the dataset each time, nothing is
cached between iterations.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Iterable, Iterator, List, Literal, Optional, Tuple

from modelprices.catalog.loader import Dataset, Pair
from modelprices.catalog.models import CostKind, Mode, ModelRecord

Predicate = Callable[[ModelRecord], bool]
SortKey = Callable[[ModelRecord], Any]
Direction = Literal["asc", "desc"]


class Selection:
    """Restartable view of the records of a dataset matching a predicate."""

    def __init__(self, dataset: Dataset, predicate: Predicate):
        self._dataset = dataset
        self._predicate = predicate

    def __iter__(self) -> Iterator[Pair]:
        predicate = self._predicate
        return ((model_id, record) for model_id, record in self._dataset if predicate(record))

    def __repr__(self) -> str:
        return f"Selection(dataset={len(self._dataset)} records)"

    def ids(self) -> List[str]:
        return [model_id for model_id, _ in self]


def filter_records(dataset: Dataset, predicate: Predicate) -> Selection:
    return Selection(dataset, predicate)


# ── Predicates ──────────────────────────────────────────────────────────────

def by_provider(name: str) -> Predicate:
    """Records without a provider never match."""
    return lambda record: record.provider is not None and record.provider == name


def by_mode(mode: Mode | str) -> Predicate:
    wanted = mode.value if isinstance(mode, Mode) else mode
    return lambda record: record.mode == wanted


def with_capability(name: str) -> Predicate:
    return lambda record: record.supports(name)


def has_cost(kind: CostKind) -> Predicate:
    return lambda record: record.cost(kind) is not None


def max_cost(kind: CostKind, limit: float) -> Predicate:
    """Records priced at or below ``limit``. Unknown cost does not match."""
    def check(record: ModelRecord) -> bool:
        value = record.cost(kind)
        return value is not None and value <= limit
    return check


def min_context(tokens: int) -> Predicate:
    """Records whose input window (or total, when input is unknown) holds ``tokens``."""
    def check(record: ModelRecord) -> bool:
        window = context_key(record)
        return window is not None and window >= tokens
    return check


def not_deprecated(on: date) -> Predicate:
    return lambda record: not record.is_deprecated(on)


def all_of(*predicates: Predicate) -> Predicate:
    return lambda record: all(predicate(record) for predicate in predicates)


def records_by_provider(dataset: Dataset, name: str) -> Selection:
    return filter_records(dataset, by_provider(name))


def records_by_mode(dataset: Dataset, mode: Mode | str) -> Selection:
    return filter_records(dataset, by_mode(mode))


def records_with_capability(dataset: Dataset, name: str) -> Selection:
    return filter_records(dataset, with_capability(name))


# ── Sorting ─────────────────────────────────────────────────────────────────

def cost_key(kind: CostKind) -> SortKey:
    return lambda record: record.cost(kind)


def context_key(record: ModelRecord) -> Optional[int]:
    limits = record.context_limits
    if limits.max_input_tokens is not None:
        return limits.max_input_tokens
    return limits.max_tokens


def sort_by(pairs: Iterable[Pair], key: SortKey, direction: Direction = "asc") -> List[Pair]:
    """
    Stable sort of (id, record) pairs.

    Records whose key is None are placed after all others in both directions,
    keeping their original relative order.
    """
    if direction not in ("asc", "desc"):
        raise ValueError(f"direction must be 'asc' or 'desc', got {direction!r}")

    known: List[Tuple[Any, Pair]] = []
    unknown: List[Pair] = []
    for pair in pairs:
        value = key(pair[1])
        if value is None:
            unknown.append(pair)
        else:
            known.append((value, pair))

    # reverse=True keeps equal elements in original order
    known.sort(key=lambda item: item[0], reverse=direction == "desc")
    return [pair for _, pair in known] + unknown


def top_n(pairs: Iterable[Pair], n: int) -> List[Pair]:
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    result = []
    if n == 0:
        return result
    for pair in pairs:
        result.append(pair)
        if len(result) == n:
            break
    return result


# ── Aggregates ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CostSummary:
    kind: CostKind
    count: int
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    mean: Optional[float] = None


def count_by_provider(pairs: Iterable[Pair]) -> Dict[str, int]:
    """Record counts per provider, in first-seen order. Records without one are skipped."""
    counts: Dict[str, int] = {}
    for _, record in pairs:
        if record.provider is not None:
            counts[record.provider] = counts.get(record.provider, 0) + 1
    return counts


def count_by_mode(pairs: Iterable[Pair]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for _, record in pairs:
        if record.mode is not None:
            counts[record.mode] = counts.get(record.mode, 0) + 1
    return counts


def cost_summary(pairs: Iterable[Pair], kind: CostKind) -> CostSummary:
    """Min, max and mean of one cost kind over the records that have it."""
    values = [record.cost(kind) for _, record in pairs]
    values = [value for value in values if value is not None]
    if not values:
        return CostSummary(kind, 0)
    return CostSummary(
        kind,
        len(values),
        minimum=min(values),
        maximum=max(values),
        mean=sum(values) / len(values),
    )
