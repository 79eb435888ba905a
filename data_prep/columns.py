"""
Header canonicalization for insurance CSVs.
Maps the header spellings seen in the wild onto core.schema.INSURANCE_COLUMNS.
"""

from __future__ import annotations

import logging
from typing import Dict, List

import pandas as pd

from core.schema import INSURANCE_COLUMNS

logger = logging.getLogger(__name__)


_COLUMN_ALIASES: Dict[str, str] = {
    # age
    "age_years": "age",
    # sex
    "gender": "sex",
    # bmi
    "body_mass_index": "bmi",
    "bodymassindex": "bmi",
    # children
    "num_children": "children",
    "numchildren": "children",
    "dependents": "children",
    "no_of_children": "children",
    # smoker
    "is_smoker": "smoker",
    "issmoker": "smoker",
    "smoking": "smoker",
    # charges
    "charge": "charges",
    "expenses": "charges",
    "billed_amount": "charges",
}


def _header_key(name: object) -> str:
    return str(name).strip().lower().replace(" ", "_").replace("-", "_")


def canonicalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with header aliases normalized to the canonical column names.

    Headers are compared case- and whitespace-insensitively. When none of the
    canonical names can be recovered but the frame has at least as many columns
    as the schema, the leading columns are named positionally.
    """
    keys = [_header_key(c) for c in df.columns]
    renamed = [_COLUMN_ALIASES.get(k, k) for k in keys]
    out = df.copy()
    out.columns = renamed

    if out.columns.duplicated().any():
        # keep the first occurrence of each canonical name
        out = out.loc[:, ~out.columns.duplicated()]

    recognised = [c for c in INSURANCE_COLUMNS if c in out.columns]
    if not recognised and out.shape[1] >= len(INSURANCE_COLUMNS):
        logger.info("Unrecognised header %s; using positional column names.", list(df.columns))
        positional: List[str] = list(INSURANCE_COLUMNS) + [
            f"extra_{i}" for i in range(out.shape[1] - len(INSURANCE_COLUMNS))
        ]
        out.columns = positional

    return out


def select_record_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy containing ONLY the canonical columns, in canonical order.

    Missing columns are added as empty (all-null) so row validation rejects
    every row instead of failing on a KeyError; callers that need the columns
    to exist check that first.
    """
    d2 = canonicalize_columns(df)
    for col in INSURANCE_COLUMNS:
        if col not in d2.columns:
            d2[col] = None
    return d2.loc[:, list(INSURANCE_COLUMNS)].copy()
