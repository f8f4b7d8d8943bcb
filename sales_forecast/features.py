from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .config import InvalidValuePolicy
from .ingest import SalesRecord

logger = logging.getLogger(__name__)


@dataclass
class FeatureSet:
    inputs: List[Tuple[int, int]] = field(default_factory=list)
    outputs: List[float] = field(default_factory=list)
    product_mapping: Dict[str, int] = field(default_factory=dict)
    last_observed: Optional[pd.Timestamp] = None

    def __len__(self):
        return len(self.inputs)

    @property
    def is_empty(self) -> bool:
        return not self.inputs or not self.outputs

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        X = np.asarray(self.inputs, dtype=float).reshape(-1, 2)
        y = np.asarray(self.outputs, dtype=float)
        return X, y

    def last_observed_month(self) -> Optional[int]:
        """Calendar month of the latest training date, or None when there are no rows."""
        return int(self.last_observed.month) if self.last_observed is not None else None


def _is_bool(value) -> bool:
    return isinstance(value, (bool, np.bool_))


def parse_dates(values: pd.Series) -> pd.Series:
    """
    Parse a column of date-like values into naive timestamps, NaT where unparsable.

    ISO 8601 strings go through the fast path; whatever is left is retried with
    per-element format inference so columns mixing formats still parse.
    """
    raw = pd.Series(values, dtype=object)
    raw = raw.mask(raw.map(_is_bool).astype(bool))
    dates = pd.to_datetime(raw, errors="coerce", format="ISO8601", utc=True)
    retry = dates.isna() & raw.notna()
    if retry.any():
        dates[retry] = pd.to_datetime(raw[retry], errors="coerce", format="mixed", utc=True)
    return dates.dt.tz_convert(None)


def parse_quantities(values: pd.Series) -> pd.Series:
    qty = pd.to_numeric(pd.Series(values, dtype=object), errors="coerce").astype(float)
    return qty.where(np.isfinite(qty))


def parse_month(value) -> Optional[int]:
    """Calendar month 1-12 of a date-like value, or None when it cannot be parsed."""
    ts = parse_dates(pd.Series([value], dtype=object)).iloc[0]
    return None if pd.isna(ts) else int(ts.month)


def parse_quantity(value) -> Optional[float]:
    qty = parse_quantities(pd.Series([value], dtype=object)).iloc[0]
    return None if pd.isna(qty) else float(qty)


def sales_frame(records: Optional[Sequence[SalesRecord]]) -> pd.DataFrame:
    """One row per record with the date, month and quantity columns parsed once."""
    records = list(records or [])
    frame = pd.DataFrame({
        "product": pd.Series([r.product_description for r in records], dtype=object),
        "date": parse_dates(pd.Series([r.sales_date for r in records], dtype=object)),
        "quantity": parse_quantities(pd.Series([r.quantity_sold for r in records], dtype=object)),
    })
    frame["month"] = frame["date"].dt.month
    return frame


def product_index_mapping(records: Sequence[SalesRecord]) -> Dict[str, int]:
    mapping: Dict[str, int] = {}
    for r in records:
        if r.product_description not in mapping:
            mapping[r.product_description] = len(mapping)
    return mapping


def build_features(records: Optional[Sequence[SalesRecord]],
                   policy: InvalidValuePolicy = InvalidValuePolicy.ZERO_FILL,
                   frame: Optional[pd.DataFrame] = None) -> FeatureSet:
    """
    Turn sales records into (month, product index) inputs and quantity outputs.

    Inputs and outputs are taken together from one filtered frame so they always
    stay aligned. Rows with an unparsable date are dropped. Rows with an unparsable
    quantity are zero-filled or dropped depending on ``policy``.

    Args:
        records: Ingested sales records.
        policy: Treatment of unparsable quantities.
        frame: Already parsed ``sales_frame(records)``, to avoid parsing twice.

    Returns:
        FeatureSet with the product mapping built from every record, in first-seen order.
    """
    if not records:
        logger.error("Data is empty or undefined")
        return FeatureSet()

    policy = InvalidValuePolicy(policy)
    logger.debug("Raw input data: %s", records)

    mapping = product_index_mapping(records)
    frame = sales_frame(records) if frame is None else frame

    quantity = frame["quantity"]
    if policy is InvalidValuePolicy.ZERO_FILL:
        quantity = quantity.fillna(0.0)
    valid = frame["date"].notna() & quantity.notna()
    kept = frame.loc[valid]

    features = FeatureSet(
        inputs=list(zip(kept["month"].astype(int).tolist(),
                        kept["product"].map(mapping).astype(int).tolist())),
        outputs=quantity[valid].astype(float).tolist(),
        product_mapping=mapping,
        last_observed=kept["date"].max() if not kept.empty else None,
    )

    dropped = len(frame) - len(kept)
    if dropped:
        logger.info(f"Dropped {dropped} of {len(frame)} rows with invalid values ({policy.value})")
    logger.debug("Processed inputs: %s", features.inputs)
    logger.debug("Processed outputs: %s", features.outputs)
    logger.debug("Product mapping: %s", mapping)
    return features


def actual_sales_by_month(records: Union[Sequence[SalesRecord], pd.DataFrame, None],
                          mapping: Dict[str, int],
                          how: str = "sum") -> Dict[str, List[float]]:
    """Actual quantities per product in 12 calendar-month slots (0 = January).

    ``records`` may be the records themselves or their ``sales_frame``.
    ``how="sum"`` totals repeated (product, month) observations, ``how="first"``
    keeps only the first one seen.
    """
    if how not in ("sum", "first"):
        raise ValueError(f"how must be 'sum' or 'first', got {how!r}")

    frame = records if isinstance(records, pd.DataFrame) else sales_frame(records)
    actual = {product: [0.0] * 12 for product in mapping}

    usable = frame[frame["date"].notna() & frame["quantity"].notna() & frame["product"].isin(list(mapping))]
    grouped = usable.groupby(["product", "month"], sort=False)["quantity"]
    totals = grouped.sum() if how == "sum" else grouped.first()
    for (product, month), qty in totals.items():
        actual[product][int(month) - 1] = float(qty)
    return actual
