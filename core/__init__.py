"""
Core package — schema definitions, the record model, configuration, and shared utilities.
No analytics live here.
"""

from .schema import INSURANCE_COLUMNS, NUMERIC_FIELDS
from .config import AnalysisConfig
from .records import Record, RecordSet, parse_smoker
from .utils import require_columns, normalize_label, safe_ratio

__all__ = [
    "INSURANCE_COLUMNS",
    "NUMERIC_FIELDS",
    "AnalysisConfig",
    "Record",
    "RecordSet",
    "parse_smoker",
    "require_columns",
    "normalize_label",
    "safe_ratio",
]
