from __future__ import annotations

import logging
from typing import Optional

from sklearn.neural_network import MLPRegressor

from .config import ForecastSettings
from .features import FeatureSet

logger = logging.getLogger(__name__)


def build_model(settings: Optional[ForecastSettings] = None) -> MLPRegressor:
    """2 inputs -> dense(10, relu) -> 1 linear output, Adam on squared error."""
    settings = settings or ForecastSettings()
    return MLPRegressor(
        hidden_layer_sizes=(settings.hidden_units,),
        activation="relu",
        solver="adam",
        learning_rate_init=settings.learning_rate,
        alpha=0.0,
        shuffle=True,
        random_state=settings.seed,
    )


def train_model(features: FeatureSet, settings: Optional[ForecastSettings] = None) -> Optional[MLPRegressor]:
    """
    Fit a fresh model for exactly ``settings.epochs`` passes over the full feature set.

    Each partial_fit call is one pass, so there is no convergence check and no early
    stopping. Returns None when there is nothing to train on.
    """
    settings = settings or ForecastSettings()
    if features.is_empty:
        logger.error("Invalid input or output data")
        return None

    X, y = features.as_arrays()
    model = build_model(settings)
    logger.info(f"Training the model on {len(y)} rows for {settings.epochs} epochs...")
    for epoch in range(settings.epochs):
        model.partial_fit(X, y)
        logger.debug("Epoch %d/%d loss=%.4f", epoch + 1, settings.epochs, model.loss_)
    logger.info("Model training complete.")
    return model
