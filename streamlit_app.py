import streamlit as st

from sales_forecast import ForecastSettings, build_chart_series, chart_figure, configure_logging
from sales_forecast.ui import (
    file_uploader_panel,
    loss_figure,
    product_filter,
    reset_upload,
    settings_sidebar,
    training_session,
)

configure_logging()

st.set_page_config(
    page_title="Sales Forecasting",
    layout="wide"
)

st.title("Sales Forecasting")
st.write("---")

settings = settings_sidebar(ForecastSettings.from_env())

# -- Upload --
if "records" not in st.session_state:
    st.subheader("Upload Sales History")
    st.write("""
Upload a CSV of historical sales. A small neural network learns quantity sold from the **month** and the **product**,
then predicts the next 6 months for every product.
""")
    file_uploader_panel()
    st.stop()

records = st.session_state["records"]
st.caption(f"{len(records):,} sales records loaded.")
if st.button("Load another file", key="load_another"):
    reset_upload()
    st.rerun()

# -- Train & Predict --
session = training_session(settings)
if st.button("Train & Predict", key="train", type="primary"):
    with st.spinner("Training the model..."):
        run = session.train_and_predict(records)
    if not session.last_request_ignored:
        st.session_state["forecast_run"] = run

run = st.session_state.get("forecast_run")
if "forecast_run" in st.session_state and run is None:
    st.caption("Nothing to train on: no rows with a valid date, product and quantity.")

if run is not None:
    st.subheader("Sales Forecast")
    col1, col2 = st.columns([1, 3])
    with col1:
        search = st.text_input("Search products")
    with col2:
        selected = product_filter(run.products, key="forecast_product")

    series = build_chart_series(
        run.predictions,
        search_term=search,
        selected_product=selected,
        actual_by_month=run.actual_by_month,
    )
    st.plotly_chart(chart_figure(series), use_container_width=True)

    st.subheader("Predictions")
    st.dataframe(run.predictions_frame(), use_container_width=True)

    with st.expander("Training loss"):
        st.pyplot(loss_figure(run.loss_history))
