import streamlit as st
from datetime import datetime

from rankboard.core.config import MARKET_TIMEZONE, MODEL_NAME

st.set_page_config(
    page_title="Ranking Screenshot Analyst",
    page_icon="📈",
    layout="wide"
)

st.title("📈 Ranking Screenshot Analyst")
st.subheader("AI-Powered Market Ranking Reports")

st.markdown(
    """
    Upload screenshots of the stock ranking and theme ranking screens, and a
    multimodal model turns them into structured reports, grouped by date and
    ordered by the time shown on the screen.
    """
)

st.divider()

col1, col2 = st.columns(2)

with col1:
    st.info("#### 🖼️ Upload Slots")
    st.markdown(
        """
        *   **30-second interval ranking:** up to 2 screenshots.
        *   **Intraday cumulative ranking:** up to 2 screenshots.
        *   **Themes by view rank / by change rate:** 1 screenshot each.

        At least one stock ranking and one theme screenshot are required.
        """
    )

with col2:
    st.info("#### 📊 Reports")
    st.markdown(
        """
        *   **Auto titles:** morning / lunch / afternoon / close, from the screen clock.
        *   **Calendar:** browse reports per day; future dates are locked.
        *   **In-memory only:** reports live for this session.

        👉 **Select `dashboard` in the sidebar to begin.**
        """
    )

st.divider()

with st.expander("ℹ️ System Status"):
    st.write(f"**AI Model:** {MODEL_NAME} (Gemini generateContent)")
    st.write(f"**Market Timezone:** {MARKET_TIMEZONE}")
    st.write(f"**Current Server Time:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
