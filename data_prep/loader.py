from __future__ import annotations

import logging
from os import PathLike
from typing import Optional, Tuple, Union

import pandas as pd

from core.records import RecordSet
from core.schema import INSURANCE_COLUMNS
from core.utils import require_columns

from .columns import canonicalize_columns, select_record_columns
from .validators import ValidationResult, validate_rows

logger = logging.getLogger(__name__)


class DataSourceError(ValueError):
    """The data source could not produce a RecordSet at all."""


def read_text_csv(source) -> pd.DataFrame:
    """
    Read a CSV with every column as text.

    Rows with more fields than the header keep their leading fields (a trailing
    comma never turns the first column into an index); short rows are padded
    with NaN.
    """
    width = len(pd.read_csv(source, nrows=0).columns)
    if hasattr(source, "seek"):
        source.seek(0)
    return pd.read_csv(
        source,
        dtype=str,
        index_col=False,
        usecols=list(range(width)),
        skip_blank_lines=True,
    )


def read_insurance_frame(path: Union[str, PathLike]) -> pd.DataFrame:
    """
    Read the raw insurance CSV with every column as text.
    Raises DataSourceError when the file is missing, unreadable, has no header
    row or lacks one of the insurance columns.
    """
    try:
        raw = read_text_csv(path)
    except FileNotFoundError as exc:
        raise DataSourceError(f"File not found: {path}") from exc
    except pd.errors.EmptyDataError as exc:
        raise DataSourceError(f"No header row in {path}") from exc
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise DataSourceError(f"Could not read {path}: {exc}") from exc

    frame = canonicalize_columns(raw)
    try:
        require_columns(frame, INSURANCE_COLUMNS)
    except ValueError as exc:
        raise DataSourceError(f"{exc} in {path}") from exc
    return frame


def records_from_frame(
    frame: pd.DataFrame,
    limit: Optional[int] = None,
) -> Tuple[RecordSet, ValidationResult]:
    """Validate an in-memory frame (any header spelling) into a RecordSet."""
    if limit is not None and limit <= 0:
        raise DataSourceError("Requested record count must be > 0.")
    records, result = validate_rows(select_record_columns(frame), limit=limit)
    if result.rows_rejected:
        for err in result.errors:
            logger.debug("Rejected %s", err)
        logger.warning("Rejected %d of %d rows.", result.rows_rejected, result.rows_seen)
    return RecordSet.from_records(records, limit=limit), result


def load_insurance_csv(path: Union[str, PathLike], n: int) -> RecordSet:
    """
    Load the first `n` valid records of an insurance CSV, in file order.

    Invalid rows (missing fields, unparseable numbers) are skipped and never
    reach the RecordSet. Raises DataSourceError for n <= 0, an unreadable
    file, or a file without a usable header.
    """
    if n <= 0:
        raise DataSourceError("Requested record count must be > 0.")
    frame = read_insurance_frame(path)
    records, result = records_from_frame(frame, limit=n)
    logger.info("Loaded %d records from %s", len(records), path)
    return records
