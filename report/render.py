"""
Text rendering of histograms.

horizontal — one line per bucket: label, bar, count. Bar length is
             round-half-up(count / max * width), at least 1 character for any non-zero count.
vertical   — one line per level from the tallest bucket down to 1; a bucket is
             drawn at level L iff its count >= L. A label line closes the chart.
"""

from __future__ import annotations

import math
from typing import List, Optional

from analytics.binning import Histogram

NO_DATA = "(no data)"


def render_no_data() -> List[str]:
    return [NO_DATA]


def bar_length(count: int, max_count: int, max_width: int) -> int:
    if count <= 0 or max_count <= 0:
        return 0
    # half up, so 2.5 draws 3
    return max(1, math.floor(count / max_count * max_width + 0.5))


def render_horizontal(
    hist: Optional[Histogram],
    *,
    max_width: int = 50,
    bar_char: str = "#",
) -> List[str]:
    if hist is None:
        return render_no_data()
    labels = hist.labels()
    pad = max((len(l) for l in labels), default=0)
    top = hist.max_count
    lines = []
    for label, count in zip(labels, hist.buckets.values()):
        bar = bar_char * bar_length(count, top, max_width)
        lines.append(f"{label:>{pad}} | {bar} {count}".rstrip())
    return lines


def render_vertical(
    hist: Optional[Histogram],
    *,
    filled: str = " | ",
    empty: str = "   ",
    short_labels: bool = True,
) -> List[str]:
    """
    Column chart, one column per bucket.

    With short_labels the label line uses the first character of each label
    (" S  N " for the smoker chart); otherwise each bucket key (the bin start
    for range histograms) is centred under its column, cut to the column width.
    """
    if hist is None:
        return render_no_data()
    counts = list(hist.buckets.values())
    lines = []
    for level in range(hist.max_count, 0, -1):
        lines.append("".join(filled if c >= level else empty for c in counts))

    col = len(filled)
    if short_labels:
        cells = [_first_char(l).center(col) for l in hist.labels()]
    else:
        keys = [f"{k:g}" if isinstance(k, float) else str(k) for k in hist.buckets]
        cells = [k[:col].center(col) for k in keys]
    lines.append("".join(cells))
    return lines


def _first_char(label: str) -> str:
    stripped = label.lstrip("[(").strip()
    return stripped[:1].upper() if stripped else "?"
