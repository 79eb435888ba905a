from __future__ import annotations

import math
from typing import Iterable, Optional

import pandas as pd


def require_columns(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def normalize_label(value: object) -> str:
    """Lower-case, whitespace-stripped form used for case-insensitive comparison."""
    return str(value).strip().lower()


def safe_ratio(numerator: float, denominator: float) -> Optional[float]:
    """numerator / denominator, or None when the result would not be finite."""
    if denominator == 0:
        return None
    ratio = numerator / denominator
    return ratio if math.isfinite(ratio) else None
