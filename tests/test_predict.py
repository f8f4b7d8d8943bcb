"""
Tests for the 6-month prediction driver.
"""
from sales_forecast import HorizonMode, build_features, horizon_months, predict_horizon

from tests.conftest import make_records


class FakeModel:
    """Predicts month * 10 + product index and counts evaluations."""

    def __init__(self):
        self.calls = 0

    def predict(self, X):
        self.calls += 1
        assert X.shape == (1, 2)
        return X[:, 0] * 10 + X[:, 1]


class TestPredictHorizon:

    def test_one_entry_per_month_and_product(self):
        mapping = {"Widget A": 0, "Gadget B": 1, "Gizmo C": 2}
        model = FakeModel()
        predictions = predict_horizon(model, mapping, [1, 2, 3, 4, 5, 6])

        assert len(predictions) == 18
        assert model.calls == 18
        assert {p.month for p in predictions} == {1, 2, 3, 4, 5, 6}

    def test_outer_loop_is_month_inner_is_mapping_order(self):
        mapping = {"Widget A": 0, "Gadget B": 1}
        predictions = predict_horizon(FakeModel(), mapping, [1, 2, 3, 4, 5, 6])

        assert [(p.month, p.product) for p in predictions[:4]] == [
            (1, "Widget A"), (1, "Gadget B"), (2, "Widget A"), (2, "Gadget B"),
        ]

    def test_values_come_from_the_model(self):
        predictions = predict_horizon(FakeModel(), {"Widget A": 0, "Gadget B": 1}, [1, 2, 3, 4, 5, 6])

        assert predictions[1].predicted == 11.0
        assert isinstance(predictions[1].predicted, float)

    def test_empty_mapping_yields_nothing(self):
        assert predict_horizon(FakeModel(), {}, [1, 2, 3, 4, 5, 6]) == []


class TestHorizonMonths:

    def test_calendar_month_reuse_ignores_history(self):
        features = build_features(make_records([("2024-10-01", "Widget A", 1)]))

        assert horizon_months(features, HorizonMode.CALENDAR_MONTH_REUSE) == [1, 2, 3, 4, 5, 6]

    def test_rolling_continues_after_last_month_and_wraps(self):
        features = build_features(make_records([
            ("2024-09-01", "Widget A", 1),
            ("2024-10-01", "Widget A", 1),
        ]))

        assert horizon_months(features, "rolling-horizon-from-last-observed-month") == [11, 12, 1, 2, 3, 4]

    def test_rolling_predictions_carry_feature_month(self):
        features = build_features(make_records([("2024-12-01", "Widget A", 1)]))
        months = horizon_months(features, HorizonMode.ROLLING)
        predictions = predict_horizon(FakeModel(), features.product_mapping, months)

        assert [p.month for p in predictions] == [1, 2, 3, 4, 5, 6]
        assert [p.feature_month for p in predictions] == [1, 2, 3, 4, 5, 6]
        assert predictions[0].predicted == 10.0
