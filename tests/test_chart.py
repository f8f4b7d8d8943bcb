"""
Tests for reshaping predictions into chart series.
"""
import plotly.graph_objects as go

from sales_forecast import PredictionEntry, build_chart_series, chart_figure, color_for_index

LABELS = ["Month 1", "Month 2", "Month 3", "Month 4", "Month 5", "Month 6"]


def make_predictions(products):
    return [
        PredictionEntry(product=name, product_index=i, month=m, feature_month=m, predicted=float(m * 10 + i))
        for m in range(1, 7)
        for i, name in enumerate(products)
    ]


class TestBuildChartSeries:

    def test_one_series_per_product_with_six_points(self):
        series = build_chart_series(make_predictions(["Widget A", "Gadget B"]))

        assert series.labels == LABELS
        assert [s.label for s in series.datasets] == ["Widget A", "Gadget B"]
        assert series.datasets[0].data == [10.0, 20.0, 30.0, 40.0, 50.0, 60.0]
        assert all(len(s.data) == 6 for s in series.datasets)

    def test_labels_fixed_with_no_predictions(self):
        series = build_chart_series([])

        assert series.labels == LABELS
        assert series.datasets == []

    def test_search_is_case_insensitive_substring(self):
        series = build_chart_series(make_predictions(["Widget A", "Gadget B"]), search_term="widget")

        assert [s.label for s in series.datasets] == ["Widget A"]
        assert series.labels == LABELS

    def test_search_matches_inside_name(self):
        series = build_chart_series(make_predictions(["Widget A", "Gadget B"]), search_term="DGET")

        assert [s.label for s in series.datasets] == ["Widget A", "Gadget B"]

    def test_selected_product_adds_dashed_actual_overlay(self):
        actual = {"Widget A": [float(i) for i in range(12)], "Gadget B": [0.0] * 12}
        series = build_chart_series(
            make_predictions(["Widget A", "Gadget B"]),
            selected_product="Widget A",
            actual_by_month=actual,
        )

        assert [s.label for s in series.datasets] == ["Widget A", "Widget A (Actual)"]
        overlay = series.datasets[1]
        assert overlay.dashed
        assert overlay.kind == "actual"
        assert overlay.data == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0]

    def test_no_selection_shows_all_without_actuals(self):
        actual = {"Widget A": [1.0] * 12, "Gadget B": [1.0] * 12}
        series = build_chart_series(make_predictions(["Widget A", "Gadget B"]), actual_by_month=actual)

        assert series.labels_for("actual") == []
        assert series.labels_for("predicted") == ["Widget A", "Gadget B"]

    def test_compare_all_actuals_defaults_missing_months_to_zero(self):
        actual = {"Widget A": [5.0] + [0.0] * 11}
        series = build_chart_series(
            make_predictions(["Widget A", "Gadget B"]),
            actual_by_month=actual,
            compare_all_actuals=True,
        )

        assert series.labels_for("actual") == ["Widget A (Actual)", "Gadget B (Actual)"]
        assert series.datasets[1].data == [5.0, 0.0, 0.0, 0.0, 0.0, 0.0]
        assert series.datasets[3].data == [0.0] * 6

    def test_colors_are_stable_per_product_index(self):
        first = build_chart_series(make_predictions(["Widget A", "Gadget B"]))
        second = build_chart_series(make_predictions(["Widget A", "Gadget B"]), search_term="gadget")

        assert first.datasets[0].color == color_for_index(0)
        assert first.datasets[1].color == second.datasets[0].color == color_for_index(1)
        assert color_for_index(0) != color_for_index(1)


class TestChartFigure:

    def test_figure_has_one_trace_per_series(self):
        series = build_chart_series(
            make_predictions(["Widget A"]),
            selected_product="Widget A",
            actual_by_month={"Widget A": [1.0] * 12},
        )
        fig = chart_figure(series)

        assert isinstance(fig, go.Figure)
        assert [t.name for t in fig.data] == ["Widget A", "Widget A (Actual)"]
        assert list(fig.data[0].x) == LABELS
        assert fig.data[1].line.dash == "dash"
        assert fig.layout.title.text == "Sales Forecast"
