"""
Streamlit building blocks shared by the app pages.
"""
from __future__ import annotations

from typing import List, Optional

import matplotlib.pyplot as plt
import streamlit as st

from .config import ForecastSettings, HorizonMode, InvalidValuePolicy
from .ingest import read_sales_csv
from .session import TrainingSession


def settings_sidebar(defaults: ForecastSettings) -> ForecastSettings:
    st.sidebar.header("Settings")
    seed = st.sidebar.text_input(
        "Random seed",
        value="" if defaults.seed is None else str(defaults.seed),
        help="Leave blank for a different random initialization on every run.",
    )
    epochs = st.sidebar.number_input("Epochs", min_value=1, max_value=500, value=defaults.epochs, step=10)
    policies = [p.value for p in InvalidValuePolicy]
    policy = st.sidebar.selectbox(
        "Invalid quantity handling",
        policies,
        index=policies.index(defaults.invalid_policy.value),
    )
    modes = [m.value for m in HorizonMode]
    mode = st.sidebar.selectbox(
        "Forecast horizon",
        modes,
        index=modes.index(defaults.horizon_mode.value),
        help="calendar-month-reuse evaluates calendar months 1-6; the rolling mode continues after the last observed month.",
    )

    seed = seed.strip()
    if seed and not seed.lstrip("-").isdigit():
        st.sidebar.warning("Seed must be a whole number; training unseeded.")
        seed = ""
    return ForecastSettings(
        epochs=int(epochs),
        seed=int(seed) if seed else None,
        invalid_policy=policy,
        horizon_mode=mode,
    )


def file_uploader_panel() -> None:
    """Upload + Process File. Stores the filtered records in st.session_state['records']."""
    uploaded = st.file_uploader("Upload CSV", type=["csv"])
    st.caption("Expected columns: `sales_date`, `product_description`, `quantity_sold`.")
    if st.button("Process File", key="process_file"):
        if uploaded is None:
            return
        read_sales_csv(uploaded, on_records=lambda records: st.session_state.update(records=records))
        st.rerun()


def training_session(settings: ForecastSettings) -> TrainingSession:
    if "training_session" not in st.session_state:
        st.session_state.training_session = TrainingSession(settings)
    session = st.session_state.training_session
    session.settings = settings
    return session


def reset_upload() -> None:
    for key in ["records", "forecast_run", "comparison_run"]:
        st.session_state.pop(key, None)


def loss_figure(loss_history: List[float]):
    fig, ax = plt.subplots(figsize=(8, 3))
    ax.plot(range(1, len(loss_history) + 1), loss_history, color="tab:blue")
    ax.set_title("Training Loss per Epoch")
    ax.set_xlabel("Epoch")
    ax.set_ylabel("Loss")
    ax.grid(True)
    return fig


def product_filter(products: List[str], key: str) -> Optional[str]:
    choice = st.radio("Product", ["All"] + [str(p) for p in products], horizontal=True, key=key)
    if choice == "All":
        return None
    return next((p for p in products if str(p) == choice), None)
