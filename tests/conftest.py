"""
Pytest fixtures for sales forecasting tests.
"""
import pytest

from sales_forecast import ForecastSettings, SalesRecord


def make_records(rows):
    """Build SalesRecords from (sales_date, product_description, quantity_sold) tuples."""
    return [SalesRecord(*row) for row in rows]


SAMPLE_CSV = """sales_date,product_description,quantity_sold,store
2024-01-15,Widget A,10,North
2024-02-15,Widget A,12,North
2024-03-15,Widget A,14,South
2024-01-20,Gadget B,20,North
2024-02-20,Gadget B,22,South
2024-03-20,Gadget B,24,South
"""


@pytest.fixture
def sample_csv():
    return SAMPLE_CSV


@pytest.fixture
def two_product_records():
    """2 products x 3 months with fixed quantities."""
    return make_records([
        ("2024-01-15", "Widget A", 10),
        ("2024-02-15", "Widget A", 12),
        ("2024-03-15", "Widget A", 14),
        ("2024-01-20", "Gadget B", 20),
        ("2024-02-20", "Gadget B", 22),
        ("2024-03-20", "Gadget B", 24),
    ])


@pytest.fixture
def seeded_settings():
    return ForecastSettings(seed=7)
