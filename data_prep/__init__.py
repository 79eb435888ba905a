"""
Data preparation — reading the insurance CSV, header canonicalization, row validation.
"""

from .loader import (
    DataSourceError,
    load_insurance_csv,
    read_insurance_frame,
    read_text_csv,
    records_from_frame,
)
from .columns import canonicalize_columns, select_record_columns
from .validators import ValidationResult, validate_rows

__all__ = [
    "DataSourceError",
    "load_insurance_csv",
    "read_insurance_frame",
    "read_text_csv",
    "records_from_frame",
    "canonicalize_columns",
    "select_record_columns",
    "ValidationResult",
    "validate_rows",
]
