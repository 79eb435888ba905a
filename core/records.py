"""
Record model shared by every analysis.

A Record is one policy row that already passed validation. A RecordSet is the
ordered, immutable collection handed to the analytics functions.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Callable, Iterable, Iterator, Optional, Tuple, Union, overload

import numpy as np
import pandas as pd

from .schema import INSURANCE_COLUMNS, NUMERIC_FIELDS
from .utils import normalize_label

FieldSpec = Union[str, Callable[["Record"], float]]


def parse_smoker(value: object) -> bool:
    """Case-insensitive "yes" test; anything else is a non-smoker."""
    return normalize_label(value) == "yes"


@dataclass(frozen=True)
class Record:
    """One insurance policy entry."""
    age: int
    sex: str
    bmi: float
    children: int
    smoker: bool
    region: str
    charges: float

    def in_region(self, fragment: str) -> bool:
        """Case-insensitive substring match, e.g. "south" matches "southeast"."""
        return normalize_label(fragment) in normalize_label(self.region)

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __str__(self) -> str:
        return (
            f"Age: {self.age} | Sex: {self.sex} | BMI: {self.bmi:.2f} | "
            f"Children: {self.children} | Smoker: {'yes' if self.smoker else 'no'} | "
            f"Region: {self.region} | Charges: {self.charges:.2f}"
        )


def field_getter(field: FieldSpec) -> Callable[[Record], float]:
    """Resolve a field name (or pass through a callable) to a Record -> number accessor."""
    if callable(field):
        return field
    if field not in NUMERIC_FIELDS:
        raise ValueError(f"Unknown numeric field {field!r}; expected one of {NUMERIC_FIELDS}")
    return lambda r: getattr(r, field)


class RecordSet:
    """
    Immutable ordered collection of Records.

    Insertion order is preserved from the source. Nothing in the package mutates a
    RecordSet after construction, so one instance can be shared by every analysis.
    """

    __slots__ = ("_records",)

    def __init__(self, records: Iterable[Record] = ()):
        self._records: Tuple[Record, ...] = tuple(records)

    @classmethod
    def from_records(cls, records: Iterable[Record], limit: Optional[int] = None) -> "RecordSet":
        rows = tuple(records)
        if limit is not None:
            rows = rows[: max(limit, 0)]
        return cls(rows)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    @overload
    def __getitem__(self, idx: int) -> Record: ...

    @overload
    def __getitem__(self, idx: slice) -> "RecordSet": ...

    def __getitem__(self, idx):
        if isinstance(idx, slice):
            return RecordSet(self._records[idx])
        return self._records[idx]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordSet):
            return NotImplemented
        return self._records == other._records

    def __hash__(self) -> int:
        return hash(self._records)

    def __repr__(self) -> str:
        return f"RecordSet(n={len(self._records)})"

    @property
    def is_empty(self) -> bool:
        return not self._records

    def values(self, field: FieldSpec) -> np.ndarray:
        """Extract one numeric field as a float array, in record order."""
        getter = field_getter(field)
        return np.array([getter(r) for r in self._records], dtype=float)

    def filter(self, predicate: Callable[[Record], bool]) -> "RecordSet":
        return RecordSet(r for r in self._records if predicate(r))

    def to_dataframe(self) -> pd.DataFrame:
        """One row per record with the canonical column order."""
        return pd.DataFrame(
            [r.as_dict() for r in self._records],
            columns=list(INSURANCE_COLUMNS),
        )
