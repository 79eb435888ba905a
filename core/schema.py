from __future__ import annotations

from typing import Tuple

# Canonical column order of the insurance CSV. The data source maps headers onto
# these names and builds one Record per valid row.
INSURANCE_COLUMNS: Tuple[str, ...] = (
    "age",
    "sex",
    "bmi",
    "children",
    "smoker",
    "region",
    "charges",
)

# Fields that can be summarised, binned or regressed.
NUMERIC_FIELDS: Tuple[str, ...] = (
    "age",
    "bmi",
    "children",
    "charges",
)

# Fields that must hold whole numbers.
INTEGER_FIELDS: Tuple[str, ...] = ("age", "children")

SMOKER_LABEL = "smoker"
NON_SMOKER_LABEL = "non-smoker"
