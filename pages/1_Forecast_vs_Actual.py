import streamlit as st

from sales_forecast import ForecastSettings, build_chart_series, chart_figure, configure_logging
from sales_forecast.ui import settings_sidebar, training_session

configure_logging()

st.set_page_config(
    page_title="Forecast vs. Actual",
    layout="wide"
)

st.title("Forecast vs. Actual Sales")
st.write("---")

st.write("""
Every product's predicted quantity is shown next to what it actually sold in the same month.
The actual line uses the **first** record found for each product and month, not a monthly total.
""")

settings = settings_sidebar(ForecastSettings.from_env())

if "records" not in st.session_state:
    st.info("Upload a CSV on the Sales Forecasting page first.")
    st.stop()

records = st.session_state["records"]
session = training_session(settings)
if st.button("Train & Predict", key="train_comparison", type="primary"):
    with st.spinner("Training the model..."):
        run = session.train_and_predict(records, actual_how="first")
    if not session.last_request_ignored:
        st.session_state["comparison_run"] = run

run = st.session_state.get("comparison_run")
if "comparison_run" in st.session_state and run is None:
    st.caption("Nothing to train on: no rows with a valid date, product and quantity.")

if run is not None:
    search = st.text_input("Search products", key="comparison_search")
    series = build_chart_series(
        run.predictions,
        search_term=search,
        actual_by_month=run.actual_by_month,
        compare_all_actuals=True,
    )
    st.plotly_chart(chart_figure(series, title="Sales Forecast vs. Actual"), use_container_width=True)
