import logging
import os

import streamlit as st

from bubblemap.data import DatasetLoadError, load_datasets_sync
from bubblemap.plotting import plot_bubble_map
from bubblemap.render import AppState
from bubblemap.utils import DEFAULT_MAP_CFG, DEFAULT_PLOT_CFG, LARGE_BUBBLE_MAP_CFG, WORLD_GEOJSON_URL

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

BOUNDARIES_SOURCE = os.environ.get("BUBBLEMAP_BOUNDARIES", WORLD_GEOJSON_URL)
RECORDS_SOURCE = os.environ.get("BUBBLEMAP_RECORDS")  # None: cause_of_deaths.csv in the data directory
MAP_CFG = LARGE_BUBBLE_MAP_CFG if os.environ.get("BUBBLEMAP_LARGE_BUBBLES") else DEFAULT_MAP_CFG

st.set_page_config(
    page_title="Causes of Death around the World",
    layout="wide",
)
DEFAULT_PLOT_CFG.apply_global()


@st.cache_resource
def _load_inputs():
    return load_datasets_sync(BOUNDARIES_SOURCE, RECORDS_SOURCE)


try:
    boundaries, dataset = _load_inputs()
except DatasetLoadError:
    # already logged by the loader; nothing is rendered
    st.stop()

if "app_state" not in st.session_state:
    st.session_state.app_state = AppState.build(boundaries, dataset, config=MAP_CFG)
app: AppState = st.session_state.app_state
controller = app.controller

st.title("Causes of Death around the World")

col_cause, col_year, col_label = st.columns([3, 6, 1])
with col_cause:
    st.selectbox(
        "Cause of death",
        controller.causes,
        index=controller.causes.index(controller.state.cause),
        key="cause_select",
        on_change=lambda: controller.on_cause_change(st.session_state.cause_select),
    )
with col_year:
    st.slider(
        "Year",
        min_value=min(controller.years),
        max_value=max(controller.years),
        value=controller.state.year,
        step=1,
        key="year_slider",
        on_change=lambda: controller.on_year_change(st.session_state.year_slider),
    )
with col_label:
    st.metric("Year", controller.year_label)

st.plotly_chart(plot_bubble_map(app.engine, title=""), use_container_width=False)
