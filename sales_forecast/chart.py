"""
Reshape predictions into per-product chart series and render them with plotly.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import plotly.graph_objects as go
from plotly.colors import qualitative as qcolors

from .config import HORIZON, MONTH_LABELS
from .predict import PredictionEntry

PALETTE = qcolors.Plotly + qcolors.D3 + qcolors.Set2


@dataclass
class ChartSeries:
    label: str
    data: List[float]
    color: str
    dashed: bool = False
    kind: str = "predicted"


@dataclass
class ChartSeriesSet:
    labels: List[str] = field(default_factory=lambda: list(MONTH_LABELS))
    datasets: List[ChartSeries] = field(default_factory=list)

    def labels_for(self, kind: str) -> List[str]:
        return [s.label for s in self.datasets if s.kind == kind]


def color_for_index(index: int) -> str:
    return PALETTE[index % len(PALETTE)]


def matches_search(product, search_term: Optional[str]) -> bool:
    if not search_term:
        return True
    return search_term.lower() in str(product).lower()


def build_chart_series(predictions: Sequence[PredictionEntry],
                       search_term: Optional[str] = None,
                       selected_product: Optional[str] = None,
                       actual_by_month: Optional[Dict[str, List[float]]] = None,
                       compare_all_actuals: bool = False) -> ChartSeriesSet:
    """
    Build one predicted series per product, 6 points each, in prediction order.

    Args:
        predictions: Entries from predict_horizon.
        search_term: Case-insensitive substring a product name must contain.
        selected_product: Show only this product, with its actual sales as a dashed overlay.
        actual_by_month: 12 calendar-month actual quantities per product.
        compare_all_actuals: Add an actual series for every shown product.

    Returns:
        ChartSeriesSet whose labels are always Month 1..Month 6.
    """
    by_product: Dict[str, List[PredictionEntry]] = {}
    for p in predictions:
        by_product.setdefault(p.product, []).append(p)

    series = ChartSeriesSet()
    for product, entries in by_product.items():
        if not matches_search(product, search_term):
            continue
        if selected_product and product != selected_product:
            continue

        entries = sorted(entries, key=lambda e: e.month)[:HORIZON]
        color = color_for_index(entries[0].product_index)
        series.datasets.append(ChartSeries(
            label=str(product),
            data=[e.predicted for e in entries],
            color=color,
        ))

        show_actual = compare_all_actuals or bool(selected_product)
        if show_actual and actual_by_month is not None:
            monthly = actual_by_month.get(product, [])
            values = []
            for e in entries:
                i = e.feature_month - 1
                values.append(float(monthly[i]) if i < len(monthly) else 0.0)
            series.datasets.append(ChartSeries(
                label=f"{product} (Actual)",
                data=values,
                color=color,
                dashed=True,
                kind="actual",
            ))
    return series


def chart_figure(series_set: ChartSeriesSet, title: str = "Sales Forecast") -> go.Figure:
    fig = go.Figure()
    for s in series_set.datasets:
        fig.add_trace(go.Scatter(
            x=series_set.labels,
            y=s.data,
            mode="lines+markers",
            name=s.label,
            line=dict(color=s.color, dash="dash" if s.dashed else "solid"),
        ))
    fig.update_layout(
        title=title,
        height=500,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0),
        xaxis_title="Month",
        yaxis_title="Quantity",
    )
    return fig
