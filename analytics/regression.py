"""
Ordinary least squares of one numeric field on another (charges on BMI by default).

Sums are accumulated in a single pass:
    slope     = (nΣxy − ΣxΣy) / (nΣx² − (Σx)²)
    intercept = (Σy − slope·Σx) / n
    r         = (nΣxy − ΣxΣy) / sqrt(max(0, (nΣx² − (Σx)²)(nΣy² − (Σy)²)))

When n == 0 or every x is identical the regression is not computable and
fit_linear returns None instead of dividing by zero.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from core.records import FieldSpec, RecordSet, field_getter

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_START = 15.0
DEFAULT_SWEEP_STEP = 3.0
DEFAULT_SWEEP_POINTS = 11


def prediction_sweep(
    start: float = DEFAULT_SWEEP_START,
    step: float = DEFAULT_SWEEP_STEP,
    points: int = DEFAULT_SWEEP_POINTS,
) -> Tuple[float, ...]:
    """Evenly spaced x values start, start+step, ... (`points` of them)."""
    if points <= 0:
        raise ValueError("points must be > 0")
    return tuple(float(start + i * step) for i in range(points))


@dataclass(frozen=True)
class RegressionModel:
    intercept: float
    slope: float
    correlation: float
    n: int
    predictions: Tuple[Tuple[float, float], ...] = ()

    def predict(self, x: float) -> float:
        return self.intercept + self.slope * x

    @property
    def r_squared(self) -> float:
        return self.correlation ** 2

    def __repr__(self) -> str:
        return (
            f"RegressionModel(y = {self.intercept:.4f} + {self.slope:.4f}·x, "
            f"r={self.correlation:.4f}, n={self.n})"
        )


@dataclass(frozen=True)
class _Sums:
    n: int
    sx: float
    sy: float
    sxy: float
    sxx: float
    syy: float
    x_constant: bool


def _accumulate(records: RecordSet, x: FieldSpec, y: FieldSpec) -> _Sums:
    gx, gy = field_getter(x), field_getter(y)
    n = 0
    sx = sy = sxy = sxx = syy = 0.0
    first_x = None
    x_constant = True
    for r in records:
        xv, yv = float(gx(r)), float(gy(r))
        if first_x is None:
            first_x = xv
        elif xv != first_x:
            x_constant = False
        n += 1
        sx += xv
        sy += yv
        sxy += xv * yv
        sxx += xv * xv
        syy += yv * yv
    return _Sums(n=n, sx=sx, sy=sy, sxy=sxy, sxx=sxx, syy=syy, x_constant=x_constant)


def fit_linear(
    records: RecordSet,
    x: FieldSpec = "bmi",
    y: FieldSpec = "charges",
    *,
    sweep: Tuple[float, ...] = prediction_sweep(),
) -> Optional[RegressionModel]:
    """Fit y = intercept + slope·x; None when not computable."""
    s = _accumulate(records, x, y)
    if s.n == 0:
        logger.debug("fit_linear: no records")
        return None

    # checked on the raw values: cancellation can leave denom_x a tiny non-zero
    denom_x = s.n * s.sxx - s.sx * s.sx
    if s.x_constant or denom_x == 0:
        logger.debug("fit_linear: zero variance in x over %d records", s.n)
        return None

    numer = s.n * s.sxy - s.sx * s.sy
    slope = numer / denom_x
    intercept = (s.sy - slope * s.sx) / s.n

    denom_y = s.n * s.syy - s.sy * s.sy
    root = math.sqrt(max(0.0, denom_x * denom_y))
    correlation = numer / root if root != 0 else 0.0
    # cancellation can push |r| a hair past 1
    correlation = float(np.clip(correlation, -1.0, 1.0))

    if not all(math.isfinite(v) for v in (slope, intercept, correlation)):
        logger.debug("fit_linear: non-finite coefficients over %d records", s.n)
        return None

    return RegressionModel(
        intercept=intercept,
        slope=slope,
        correlation=correlation,
        n=s.n,
        predictions=tuple((xv, intercept + slope * xv) for xv in sweep),
    )
