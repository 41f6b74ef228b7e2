"""
Cost normalization for model records.

Prices are stored per unit (per token, per image, per second, per 1k calls,
per GB per day). Results are never rounded here and a missing price is never
read as zero: callers get ``CostUnavailable`` and decide what to show.
"""

from modelprices.catalog.errors import CostUnavailable, UnitMismatch
from modelprices.catalog.models import CostKind, ModelRecord

PER_MILLION = 1_000_000


def unit_cost(record: ModelRecord, kind: CostKind) -> float:
    """Return the stored per-unit price of ``kind``."""
    value = record.cost(kind)
    if value is None:
        raise CostUnavailable(record.id, kind.value)
    return value


def cost_per_volume(record: ModelRecord, kind: CostKind, volume: float) -> float:
    """
    Price of ``volume`` units of ``kind`` (e.g. 1,000,000 tokens).

    Raises:
        UnitMismatch: If ``kind`` is a flat per-call or per-day rate.
        CostUnavailable: If the record has no price for ``kind``.
        ValueError: If ``volume`` is negative.
    """
    if not kind.scalable:
        raise UnitMismatch(kind.value, kind.unit)
    if volume < 0:
        raise ValueError(f"volume must be non-negative, got {volume}")
    return unit_cost(record, kind) * volume


def per_million_tokens(record: ModelRecord, kind: CostKind) -> float:
    if kind.unit != "token":
        raise UnitMismatch(kind.value, kind.unit)
    return cost_per_volume(record, kind, PER_MILLION)


def estimate_request_cost(record: ModelRecord, input_tokens: int, output_tokens: int) -> float:
    """Cost of one request. A side with zero tokens does not need a price."""
    total = 0.0
    if input_tokens:
        total += cost_per_volume(record, CostKind.INPUT_TOKEN, input_tokens)
    if output_tokens:
        total += cost_per_volume(record, CostKind.OUTPUT_TOKEN, output_tokens)
    return total
