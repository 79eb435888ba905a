"""
Row validation for insurance records before they enter a RecordSet.

A row is rejected when:
- a field is missing or blank
- a numeric field does not parse
- age / children are not written as whole numbers ("30.0" is rejected)
- age, children or charges are negative, or BMI is not positive
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from core.records import Record, parse_smoker
from core.schema import INSURANCE_COLUMNS, INTEGER_FIELDS, NUMERIC_FIELDS

_WHOLE_NUMBER = re.compile(r"[+-]?\d+")


@dataclass
class ValidationResult:
    """Collects rejected rows and informational warnings for one load."""
    rows_seen: int = 0
    rows_accepted: int = 0
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def rows_rejected(self) -> int:
        return len(self.errors)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = [f"{self.rows_accepted}/{self.rows_seen} rows accepted."]
        if self.errors:
            lines.append(f"REJECTED ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        return "\n".join(lines)


def _row_problem(row: pd.Series, numeric: pd.Series) -> Optional[str]:
    """Return the reason a row is unusable, or None if it can become a Record."""
    for col in INSURANCE_COLUMNS:
        raw = row[col]
        if raw is None or pd.isna(raw) or str(raw).strip() == "":
            return f"missing {col}"

    for col in NUMERIC_FIELDS:
        val = numeric[col]
        if not np.isfinite(val):
            return f"unparseable {col} {row[col]!r}"

    for col in INTEGER_FIELDS:
        if not _WHOLE_NUMBER.fullmatch(str(row[col]).strip()):
            return f"{col} {row[col]!r} is not a whole number"

    if numeric["age"] < 0:
        return "negative age"
    if numeric["children"] < 0:
        return "negative children"
    if numeric["charges"] < 0:
        return "negative charges"
    if numeric["bmi"] <= 0:
        return "non-positive bmi"
    return None


def validate_rows(
    frame: pd.DataFrame,
    *,
    limit: Optional[int] = None,
) -> Tuple[List[Record], ValidationResult]:
    """
    Turn a canonical-column frame into Records, skipping invalid rows.

    Rows are processed in frame order and processing stops once `limit`
    valid records have been collected. Expects the INSURANCE_COLUMNS to be
    present (see data_prep.columns.select_record_columns).
    """
    result = ValidationResult()
    records: List[Record] = []
    frame = frame.reset_index(drop=True)

    numeric = pd.DataFrame(
        {
            col: pd.to_numeric(frame[col].astype(str).str.strip(), errors="coerce")
            for col in NUMERIC_FIELDS
        },
        index=frame.index,
    )

    for pos, (idx, row) in enumerate(frame.iterrows()):
        if limit is not None and len(records) >= limit:
            break
        result.rows_seen += 1
        problem = _row_problem(row, numeric.loc[idx])
        if problem is not None:
            result.errors.append(f"row {pos + 1}: {problem}")
            continue

        records.append(
            Record(
                age=int(numeric.at[idx, "age"]),
                sex=str(row["sex"]).strip(),
                bmi=float(numeric.at[idx, "bmi"]),
                children=int(numeric.at[idx, "children"]),
                smoker=parse_smoker(row["smoker"]),
                region=str(row["region"]).strip(),
                charges=float(numeric.at[idx, "charges"]),
            )
        )

    result.rows_accepted = len(records)
    if limit is not None and len(records) < limit:
        result.warnings.append(
            f"Requested {limit} records but only {len(records)} valid rows were available."
        )
    return records, result
