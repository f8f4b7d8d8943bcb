"""
CSV ingestion for uploaded sales history.

Rows are kept only when sales_date, product_description and quantity_sold are all
present and truthy. Nothing here validates date formats or numeric ranges; that is
left to the feature builder.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

import pandas as pd

from .config import REQUIRED_COLUMNS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SalesRecord:
    sales_date: Any
    product_description: Any
    quantity_sold: Any


def _is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and pd.isna(value):
        return True
    if isinstance(value, str):
        return value == ""
    try:
        return not bool(value)
    except (TypeError, ValueError):
        return False


def _to_buffer(source):
    if isinstance(source, bytes):
        return io.BytesIO(source)
    if isinstance(source, str):
        return io.StringIO(source)
    if hasattr(source, "getvalue"):
        return io.BytesIO(source.getvalue())
    return source


def read_sales_csv(source, on_records: Optional[Callable[[List[SalesRecord]], None]] = None) -> List[SalesRecord]:
    """Parse a CSV with a header row into SalesRecords.

    A file that cannot be parsed, or lacks one of the required columns, yields an
    empty list. ``on_records`` receives the filtered records when given.
    """
    records: List[SalesRecord] = []
    try:
        df = pd.read_csv(_to_buffer(source), on_bad_lines="skip")
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        logger.warning(f"Could not parse uploaded CSV: {e}")
        df = pd.DataFrame()

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing and not df.empty:
        logger.warning(f"Uploaded CSV missing required columns: {missing}")
    elif not df.empty:
        df = df.astype(object).where(pd.notna(df), None)
        for row in df[list(REQUIRED_COLUMNS)].itertuples(index=False):
            if any(_is_blank(v) for v in row):
                continue
            records.append(SalesRecord(*row))

    logger.info(f"Ingested {len(records)} sales records")
    if on_records is not None:
        on_records(records)
    return records
