from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import pandas as pd

from .config import ForecastSettings
from .features import FeatureSet, actual_sales_by_month, build_features, sales_frame
from .ingest import SalesRecord
from .model import train_model
from .predict import PredictionEntry, horizon_months, predict_horizon

logger = logging.getLogger(__name__)


@dataclass
class ForecastRun:
    features: FeatureSet
    feature_months: List[int]
    predictions: List[PredictionEntry]
    actual_by_month: Dict[str, List[float]]
    loss_history: List[float] = field(default_factory=list)

    @property
    def products(self) -> List[str]:
        return list(self.features.product_mapping)

    def predictions_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [(p.product, p.month, p.feature_month, p.predicted) for p in self.predictions],
            columns=["Product", "Month", "Calendar Month", "Predicted Quantity"],
        )


def run_forecast(records: Optional[Sequence[SalesRecord]],
                 settings: Optional[ForecastSettings] = None,
                 actual_how: str = "sum") -> Optional[ForecastRun]:
    """Preprocess, train a fresh model and predict the 6-month horizon.

    Returns None when there is nothing usable to train on.
    """
    settings = settings or ForecastSettings()
    frame = sales_frame(records) if records else None
    features = build_features(records, settings.invalid_policy, frame=frame)
    model = train_model(features, settings)
    if model is None:
        return None

    months = horizon_months(features, settings.horizon_mode)
    predictions = predict_horizon(model, features.product_mapping, months)
    logger.debug("Predictions: %s", predictions)
    return ForecastRun(
        features=features,
        feature_months=months,
        predictions=predictions,
        actual_by_month=actual_sales_by_month(frame, features.product_mapping, how=actual_how),
        loss_history=list(model.loss_curve_),
    )


class TrainingSession:
    """Runs one training at a time for a UI session; overlapping requests are ignored.

    ``last_request_ignored`` tells an ignored request apart from a run that had
    nothing to train on, since both return None.
    """

    def __init__(self, settings: Optional[ForecastSettings] = None):
        self.settings = settings or ForecastSettings()
        self.last_run: Optional[ForecastRun] = None
        self.last_request_ignored = False
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def train_and_predict(self, records: Optional[Sequence[SalesRecord]],
                          actual_how: str = "sum") -> Optional[ForecastRun]:
        if not self._lock.acquire(blocking=False):
            logger.warning("Training already in progress; ignoring request")
            self.last_request_ignored = True
            return None
        self.last_request_ignored = False
        try:
            run = run_forecast(records, self.settings, actual_how=actual_how)
            if run is not None:
                self.last_run = run
            return run
        finally:
            self._lock.release()
