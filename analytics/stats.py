"""
Per-field descriptive statistics.

count / mean / population std / min / max and the quartiles, computed
independently for each numeric field of a RecordSet.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Dict, Sequence

import numpy as np

from core.records import FieldSpec, RecordSet
from core.schema import NUMERIC_FIELDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatSummary:
    """Summary of one field. All values are 0.0 when count == 0."""
    count: int
    mean: float
    std: float
    min: float
    max: float
    p25: float
    p50: float
    p75: float

    @classmethod
    def empty(cls) -> "StatSummary":
        return cls(count=0, mean=0.0, std=0.0, min=0.0, max=0.0, p25=0.0, p50=0.0, p75=0.0)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    def __repr__(self) -> str:
        return (
            f"StatSummary(n={self.count}, mean={self.mean:.4f}, std={self.std:.4f}, "
            f"range=[{self.min:.4f}, {self.max:.4f}], "
            f"quartiles=({self.p25:.4f}, {self.p50:.4f}, {self.p75:.4f}))"
        )


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """
    Linear interpolation between order statistics.

    idx = (p/100) * (n-1); the result blends values[floor(idx)] and the next
    value by the fractional part, falling back to the last element when there
    is no next value. `sorted_values` must already be ascending.
    """
    if not 0.0 <= p <= 100.0:
        raise ValueError(f"percentile must be within [0, 100], got {p}")
    n = len(sorted_values)
    if n == 0:
        return 0.0
    idx = (p / 100.0) * (n - 1)
    i = int(math.floor(idx))
    frac = idx - i
    if i + 1 < n:
        return float(sorted_values[i]) * (1.0 - frac) + float(sorted_values[i + 1]) * frac
    return float(sorted_values[i])


def describe_values(values: np.ndarray) -> StatSummary:
    """Summarise a 1-D array of numbers."""
    values = np.sort(np.asarray(values, dtype=float))
    n = len(values)
    if n == 0:
        return StatSummary.empty()

    mean = float(np.mean(values))
    # population standard deviation: divide by n, not n-1
    std = float(np.sqrt(np.mean((values - mean) ** 2)))

    return StatSummary(
        count=n,
        mean=mean,
        std=std,
        min=float(values[0]),
        max=float(values[-1]),
        p25=percentile(values, 25),
        p50=percentile(values, 50),
        p75=percentile(values, 75),
    )


def describe_field(records: RecordSet, field: FieldSpec) -> StatSummary:
    """StatSummary for one field name (or Record -> number callable)."""
    if records.is_empty:
        logger.debug("describe_field(%s) on an empty RecordSet", field)
    return describe_values(records.values(field))


def describe_records(
    records: RecordSet,
    fields: Sequence[str] = NUMERIC_FIELDS,
) -> Dict[str, StatSummary]:
    """Independent StatSummary per field, keyed by field name in the given order."""
    return {name: describe_field(records, name) for name in fields}
