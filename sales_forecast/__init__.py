from .chart import ChartSeries, ChartSeriesSet, build_chart_series, chart_figure, color_for_index
from .config import ForecastSettings, HorizonMode, InvalidValuePolicy, configure_logging
from .features import FeatureSet, actual_sales_by_month, build_features, sales_frame
from .ingest import SalesRecord, read_sales_csv
from .model import build_model, train_model
from .predict import PredictionEntry, horizon_months, predict_horizon
from .session import ForecastRun, TrainingSession, run_forecast
