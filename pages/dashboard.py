import streamlit as st

from rankboard.ai.analysis_pipeline import session_pipeline
from rankboard.core.config import AVAILABLE_MODELS, MODEL_NAME, load_gemini_api_key
from rankboard.core.logger import AppLogger
from rankboard.core.tracker import ExecutionTracker
from rankboard.ingest.ingestor import ImageIngestor, from_streamlit
from rankboard.ingest.slots import SLOT_SPECS, SlotStore
from rankboard.navigation.date_navigator import DateNavigator
from rankboard.reports.report_store import ReportStore
from rankboard.ui_components import display_calendar, display_report, display_slots

st.set_page_config(page_title="Ranking Dashboard", layout="wide")
st.title("📈 Ranking Screenshot Dashboard")

# --- Session State Initialization ---
if 'logger' not in st.session_state:
    st.session_state.logger = AppLogger()
if 'slot_store' not in st.session_state:
    st.session_state.slot_store = SlotStore()
if 'report_store' not in st.session_state:
    st.session_state.report_store = ReportStore()
if 'navigator' not in st.session_state:
    st.session_state.navigator = DateNavigator()
if 'tracker' not in st.session_state:
    st.session_state.tracker = ExecutionTracker()
if 'api_key' not in st.session_state:
    st.session_state.api_key = load_gemini_api_key()
if 'reset_counter' not in st.session_state:
    st.session_state.reset_counter = 0
if 'pipeline_error' not in st.session_state:
    st.session_state.pipeline_error = None

logger: AppLogger = st.session_state.logger
slot_store: SlotStore = st.session_state.slot_store
report_store: ReportStore = st.session_state.report_store
navigator: DateNavigator = st.session_state.navigator
ingestor = ImageIngestor(slot_store)

if not st.session_state.api_key:
    st.error("❌ Gemini API key not found. Set GEMINI_API_KEY or configure Infisical.")


def _accept_uploads(slot_name, uploaded_files):
    """Each uploader is recreated after use so a file is ingested only once."""
    if uploaded_files:
        ingestor.on_drop(slot_name, [from_streamlit(f) for f in uploaded_files])
        st.session_state.reset_counter += 1
        st.rerun()


def _focus(slot_name):
    ingestor.on_slot_click(slot_name)
    st.rerun()


def _remove(slot_name, item_id):
    slot_store.remove(slot_name, item_id)
    st.rerun()


# --- Sidebar: date + model ---
with st.sidebar:
    st.markdown(f"**Report date:** {navigator.selected_date}")
    if display_calendar(navigator):
        st.rerun()
    st.divider()
    model_names = list(AVAILABLE_MODELS)
    selected_model = st.selectbox(
        "Select AI Model",
        model_names,
        index=model_names.index(MODEL_NAME) if MODEL_NAME in model_names else 0,
        format_func=lambda m: AVAILABLE_MODELS[m],
    )

# --- Upload slots ---
st.subheader("Screenshots")
display_slots(slot_store, on_focus=_focus, on_remove=_remove)

upload_cols = st.columns(len(SLOT_SPECS))
for col, spec in zip(upload_cols, SLOT_SPECS):
    with col:
        files = st.file_uploader(
            f"Drop into {spec.label}",
            type=["png", "jpg", "jpeg", "webp", "gif", "bmp"],
            accept_multiple_files=spec.capacity > 1,
            key=f"uploader_{spec.name}_{st.session_state.reset_counter}",
        )
        if files and not isinstance(files, list):
            files = [files]
        _accept_uploads(spec.name, files)

focused_label = next(s.label for s in SLOT_SPECS if s.name == slot_store.focused_slot)
picked = st.file_uploader(
    f"Add to focused slot ({focused_label})",
    type=["png", "jpg", "jpeg", "webp", "gif", "bmp"],
    accept_multiple_files=True,
    key=f"uploader_focused_{st.session_state.reset_counter}",
)
if picked:
    ingestor.on_file_select([from_streamlit(f) for f in picked])
    st.session_state.reset_counter += 1
    st.rerun()

# --- Trigger ---
pipeline = session_pipeline(
    st.session_state,
    slot_store,
    report_store,
    st.session_state.api_key,
    selected_model,
    logger=logger,
    tracker=st.session_state.tracker,
)
if st.button("➕ Create Report", type="primary", use_container_width=True, disabled=pipeline.busy):
    with st.spinner("Analysing screenshots..."):
        report = pipeline.run(navigator.selected_date)
    st.session_state.pipeline_error = pipeline.error_message
    if report:
        st.rerun()

if st.session_state.pipeline_error:
    st.error(st.session_state.pipeline_error)

# --- Reports for the selected date ---
st.divider()
day_reports = report_store.filter_by_date(navigator.selected_date)
if not day_reports:
    st.info("No reports were created for this date.")
else:
    tab_cols = st.columns(len(day_reports))
    for col, report in zip(tab_cols, day_reports):
        with col:
            is_active = report.id == report_store.active_id
            if st.button(("▶ " if is_active else "") + report.title, key=f"tab_{report.id}"):
                report_store.set_active(report.id)
                st.rerun()
            if st.button("✖", key=f"delete_{report.id}", help="Delete report"):
                report_store.delete(report.id)
                st.rerun()

    active = report_store.active_report
    if active and active.date == navigator.selected_date:
        display_report(active, report_store)
    else:
        st.caption("Select a report tab above.")

# --- Log Display ---
with st.expander("View System Logs"):
    st.caption(st.session_state.tracker.summary())
    st.code("\n".join(logger.logs[::-1]), language='log')
    if st.button("Clear Logs"):
        logger.clear()
        st.rerun()
