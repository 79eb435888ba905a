"""
Frequency histograms over a RecordSet.

Three bucket policies:
  value    — one bucket per exact value (ages), ascending, occupied keys only
  range    — equal-width half-open bins [k*w, (k+1)*w) keyed by their start;
             optionally every bin between min and max is emitted so gaps show
  category — one bucket per label (smoker / non-smoker, region)

Every builder returns None for an empty RecordSet: "no data" is a distinct
outcome from "all data in one bucket". Counts always sum to the number of
contributing records.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, Iterable, List, Literal, Optional, Sequence, Tuple, Union

from core.records import FieldSpec, Record, RecordSet, field_getter
from core.schema import NON_SMOKER_LABEL, SMOKER_LABEL
from core.utils import normalize_label

logger = logging.getLogger(__name__)

Number = Union[int, float]
HistogramKind = Literal["value", "range", "category"]


@dataclass(frozen=True)
class Histogram:
    """Ordered bucket -> count mapping plus the policy that produced it."""
    kind: HistogramKind
    buckets: Dict[Hashable, int] = field(default_factory=dict)
    bin_width: Optional[Number] = None

    @property
    def total(self) -> int:
        return sum(self.buckets.values())

    @property
    def max_count(self) -> int:
        return max(self.buckets.values(), default=0)

    def __len__(self) -> int:
        return len(self.buckets)

    def items(self) -> List[Tuple[Hashable, int]]:
        return list(self.buckets.items())

    def label(self, key: Hashable) -> str:
        if self.kind == "range":
            return f"[{_fmt(key)}, {_fmt(key + self.bin_width)})"
        return _fmt(key) if isinstance(key, (int, float)) else str(key)

    def labels(self) -> List[str]:
        return [self.label(k) for k in self.buckets]


def _fmt(x: Number) -> str:
    return f"{x:g}" if isinstance(x, float) else str(x)


def bin_start(value: Number, width: Number) -> Number:
    """floor(value / width) * width; floor division, so -0.5 with width 1 lands in [-1, 0)."""
    if width <= 0:
        raise ValueError(f"bin width must be > 0, got {width}")
    return math.floor(value / width) * width


def value_histogram(records: RecordSet, field: FieldSpec = "age") -> Optional[Histogram]:
    """One bucket per exact value, ascending."""
    if records.is_empty:
        logger.debug("value_histogram on an empty RecordSet")
        return None
    getter = field_getter(field)
    counts = Counter(getter(r) for r in records)
    return Histogram(kind="value", buckets={k: counts[k] for k in sorted(counts)})


def range_histogram(
    records: RecordSet,
    field: FieldSpec,
    width: Number,
    *,
    fill_gaps: bool = False,
) -> Optional[Histogram]:
    """
    Equal-width histogram keyed by bin start.

    fill_gaps=True emits every bin in [floor(min/w)*w, ceil((max+1)/w)*w),
    empty ones included; fill_gaps=False keeps only occupied bins.
    """
    if width <= 0:
        raise ValueError(f"bin width must be > 0, got {width}")
    if records.is_empty:
        logger.debug("range_histogram on an empty RecordSet")
        return None

    getter = field_getter(field)
    values = [getter(r) for r in records]
    # count by bin index so float keys are always produced the same way
    counts = Counter(math.floor(v / width) for v in values)

    if fill_gaps:
        first = math.floor(min(values) / width)
        stop = math.ceil((max(values) + 1) / width)
        indices: Iterable[int] = range(first, stop)
    else:
        indices = sorted(counts)

    buckets = {k * width: counts.get(k, 0) for k in indices}
    return Histogram(kind="range", buckets=buckets, bin_width=width)


def category_histogram(
    records: RecordSet,
    key: Callable[[Record], Hashable],
    *,
    order: Optional[Sequence[Hashable]] = None,
) -> Optional[Histogram]:
    """Counts per label, in `order` if given (missing labels count 0), else first-seen order."""
    if records.is_empty:
        logger.debug("category_histogram on an empty RecordSet")
        return None
    counts = Counter(key(r) for r in records)
    if order is None:
        labels: List[Hashable] = list(dict.fromkeys(key(r) for r in records))
    else:
        labels = list(order) + [k for k in counts if k not in order]
    return Histogram(kind="category", buckets={k: counts.get(k, 0) for k in labels})


def age_histogram(records: RecordSet) -> Optional[Histogram]:
    return value_histogram(records, "age")


def age_range_histogram(records: RecordSet, width: int = 10) -> Optional[Histogram]:
    """Age ranges with empty ranges kept, so gaps in the age domain are visible."""
    return range_histogram(records, "age", width, fill_gaps=True)


def bmi_histogram(records: RecordSet, width: float = 2.0) -> Optional[Histogram]:
    """BMI ranges, occupied bins only."""
    return range_histogram(records, "bmi", width, fill_gaps=False)


def smoker_histogram(records: RecordSet) -> Optional[Histogram]:
    """{"smoker": n, "non-smoker": m}; both keys present for any non-empty input."""
    return category_histogram(
        records,
        lambda r: SMOKER_LABEL if r.smoker else NON_SMOKER_LABEL,
        order=(SMOKER_LABEL, NON_SMOKER_LABEL),
    )


def region_histogram(records: RecordSet) -> Optional[Histogram]:
    """Counts per region, compared case-insensitively."""
    return category_histogram(records, lambda r: normalize_label(r.region))
