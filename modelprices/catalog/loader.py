"""Build an immutable Dataset from a decoded pricing document."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from loguru import logger

from modelprices.catalog.errors import Issue, IssueKind, RecordInvalid, SourceError
from modelprices.catalog.models import ModelRecord
from modelprices.catalog.validator import validate_entry

# The upstream document carries a schema description under this key
DEFAULT_SKIP = ("sample_spec",)

Pair = Tuple[str, ModelRecord]


@dataclass(frozen=True)
class LoadReport:
    """Problems found during a load, keyed by model id."""
    issues: Mapping[str, Tuple[Issue, ...]] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "issues", MappingProxyType(dict(self.issues)))

    @property
    def errors(self) -> Dict[str, Tuple[Issue, ...]]:
        """Ids rejected entirely, with their issues."""
        return {
            model_id: found for model_id, found in self.issues.items()
            if any(issue.is_error for issue in found)
        }

    @property
    def warnings(self) -> Dict[str, Tuple[Issue, ...]]:
        """Recoverable issues of every id, rejected ids included."""
        result = {}
        for model_id, found in self.issues.items():
            recoverable = tuple(issue for issue in found if not issue.is_error)
            if recoverable:
                result[model_id] = recoverable
        return result

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def issue_count(self) -> int:
        return sum(len(found) for found in self.issues.values())

    def for_id(self, model_id: str) -> Tuple[Issue, ...]:
        return self.issues.get(model_id, ())


@dataclass(frozen=True)
class Dataset:
    """Validated records in document order. Never modified after construction."""
    pairs: Tuple[Pair, ...] = ()
    report: LoadReport = field(default_factory=LoadReport)
    _index: Dict[str, ModelRecord] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "pairs", tuple(self.pairs))
        object.__setattr__(self, "_index", dict(self.pairs))

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[Pair]:
        return iter(self.pairs)

    def __contains__(self, model_id: object) -> bool:
        return model_id in self._index

    def get(self, model_id: str) -> Optional[ModelRecord]:
        return self._index.get(model_id)

    def ids(self) -> List[str]:
        return [model_id for model_id, _ in self.pairs]

    def records(self) -> List[ModelRecord]:
        return [record for _, record in self.pairs]

    def providers(self) -> List[str]:
        """Distinct providers in first-seen order."""
        seen: Dict[str, None] = {}
        for _, record in self.pairs:
            if record.provider is not None:
                seen.setdefault(record.provider, None)
        return list(seen)


def _iter_entries(document: Any) -> Iterable[Tuple[Any, Any]]:
    if isinstance(document, Mapping):
        return document.items()
    if isinstance(document, (list, tuple)):
        for item in document:
            if not isinstance(item, (list, tuple)) or len(item) != 2:
                raise SourceError(f"Expected (id, entry) pairs, got {item!r}")
        return document
    raise SourceError(f"Document must be a JSON object, got {type(document).__name__}")


def load_dataset(document: Any, *, skip: Iterable[str] = DEFAULT_SKIP) -> Dataset:
    """
    Validate every entry of a decoded document and collect the usable records.

    Args:
        document: A mapping of model id to entry, or a sequence of (id, entry)
            pairs when duplicate keys must survive decoding.
        skip: Ids that are not model entries and are ignored.

    Returns:
        The Dataset. Rejected entries are absent from its records and listed in
        ``dataset.report``; no single entry can make the load fail.

    Raises:
        SourceError: If the document itself is not an object or pair sequence.
    """
    skipped = set(skip)
    records: Dict[str, Optional[ModelRecord]] = {}
    issues: Dict[str, List[Issue]] = {}

    for key, raw in _iter_entries(document):
        if not isinstance(key, str):
            # Kept apart from real ids so "1" and 1 never collide
            model_id = f"<non-string id {key!r}>"
            records[model_id] = None
            issues[model_id] = [Issue(IssueKind.RECORD_INVALID, "model id is not a string")]
            continue
        if key in skipped:
            continue

        found: List[Issue] = []
        if key in records:
            # Last occurrence wins but keeps the first occurrence's position
            found.append(Issue(IssueKind.DUPLICATE_ID, "duplicate id, later entry replaces earlier one"))

        try:
            record, entry_issues = validate_entry(key, raw)
        except RecordInvalid as e:
            records[key] = None
            found.append(Issue(IssueKind.RECORD_INVALID, e.reason))
        else:
            records[key] = record
            found.extend(entry_issues)

        if found:
            issues[key] = found
        else:
            issues.pop(key, None)

    for model_id, found in issues.items():
        for issue in found:
            logger.debug(f"{model_id}: {issue}")

    pairs = tuple((model_id, record) for model_id, record in records.items() if record is not None)
    report = LoadReport({model_id: tuple(found) for model_id, found in issues.items()})
    logger.info(
        f"Loaded {len(pairs)} model records "
        f"({len(report.errors)} rejected, {report.issue_count} issues)"
    )
    return Dataset(pairs, report)


def dump_dataset(dataset: Dataset) -> Dict[str, Dict[str, Any]]:
    """Serialize a Dataset back to the document shape, unknown fields included."""
    return {model_id: record.to_raw() for model_id, record in dataset}
