from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from .config import HORIZON, HorizonMode
from .features import FeatureSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PredictionEntry:
    product: str
    product_index: int
    month: int
    feature_month: int
    predicted: float


def horizon_months(features: FeatureSet, mode: HorizonMode = HorizonMode.CALENDAR_MONTH_REUSE) -> List[int]:
    """Calendar months (1-12) the model is evaluated on for horizon steps 1..6.

    calendar-month-reuse evaluates months 1..6 no matter when the history ends.
    The rolling mode continues after the last observed month, wrapping past December.
    """
    mode = HorizonMode(mode)
    if mode is HorizonMode.CALENDAR_MONTH_REUSE:
        return list(range(1, HORIZON + 1))

    last = features.last_observed_month()
    if last is None:
        return list(range(1, HORIZON + 1))
    return [(last + step - 1) % 12 + 1 for step in range(1, HORIZON + 1)]


def predict_horizon(model, mapping: Dict[str, int], feature_months: List[int]) -> List[PredictionEntry]:
    predictions: List[PredictionEntry] = []
    for step, month in enumerate(feature_months, start=1):
        for product, index in mapping.items():
            x = np.array([[month, index]], dtype=float)
            predicted = float(model.predict(x)[0])
            del x
            predictions.append(PredictionEntry(
                product=product,
                product_index=index,
                month=step,
                feature_month=month,
                predicted=predicted,
            ))
    logger.info(f"Generated {len(predictions)} predictions for {len(mapping)} products")
    return predictions
