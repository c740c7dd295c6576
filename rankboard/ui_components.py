import pandas as pd
import streamlit as st

from rankboard.ingest.previews import preview_png_bytes
from rankboard.ingest.slots import SLOT_SPECS, SlotStore
from rankboard.navigation.date_navigator import WEEKDAY_HEADERS, DateNavigator
from rankboard.reports.formatters import format_percent, format_price, market_display, trend_direction
from rankboard.reports.models import Report
from rankboard.reports.report_store import VIEW_CUMULATIVE, VIEW_REALTIME, ReportStore

TREND_COLORS = {"up": "#e11d48", "down": "#2563eb", "flat": "#475569"}


def escape_markdown(text):
    """Escapes special Markdown characters in a string for safe rendering."""
    if not isinstance(text, str):
        return text
    return text.replace('$', '\\$').replace('~', '\\~')


def _colored(text: str, direction: str) -> str:
    return f"<span style='color:{TREND_COLORS[direction]}'>{escape_markdown(text)}</span>"


def display_slots(slot_store: SlotStore, on_focus, on_remove):
    """Slot thumbnails with focus and delete buttons."""
    columns = st.columns(len(SLOT_SPECS))
    for col, spec in zip(columns, SLOT_SPECS):
        with col:
            with st.container(border=True):
                is_focused = slot_store.focused_slot == spec.name
                count = slot_store.count(spec.name)
                marker = "🔴 " if is_focused else ""
                suffix = f" ({count}/{spec.capacity})" if spec.capacity > 1 and count else ""
                st.markdown(f"**{marker}{spec.label}{suffix}**")
                if st.button("Focus", key=f"focus_{spec.name}", disabled=is_focused):
                    on_focus(spec.name)
                for item in slot_store.items(spec.name):
                    png = preview_png_bytes(item.preview)
                    if png:
                        st.image(png, caption=item.name or None)
                    else:
                        st.caption(item.name or "image")
                    if st.button("🗑️", key=f"remove_{item.id}", help="Remove image"):
                        on_remove(spec.name, item.id)


def display_calendar(navigator: DateNavigator):
    """Month grid; future days are disabled. Returns True when a day was picked."""
    nav_prev, title_col, nav_next = st.columns([1, 3, 1])
    with nav_prev:
        if st.button("◀", key="cal_prev"):
            navigator.change_month(-1)
            st.rerun()
    with title_col:
        st.markdown(f"**{navigator.view_year}-{navigator.view_month:02d}**")
    with nav_next:
        if st.button("▶", key="cal_next"):
            navigator.change_month(1)
            st.rerun()

    for col, header in zip(st.columns(7), WEEKDAY_HEADERS):
        col.caption(header)

    grid = navigator.month_grid()
    picked = False
    for week_start in range(0, len(grid), 7):
        week = grid[week_start:week_start + 7]
        for col, day in zip(st.columns(7), week):
            if day is None:
                col.write("")
                continue
            label = f"**{day.day}**" if day.isoformat() == navigator.selected_date else str(day.day)
            if col.button(label, key=f"day_{day.isoformat()}", disabled=not navigator.is_selectable(day)):
                picked = navigator.select(day)
    return picked


def display_market_status(report: Report):
    columns = st.columns(2)
    for col, (name, quote) in zip(columns, (("KOSPI", report.market_status.kospi),
                                            ("KOSDAQ", report.market_status.kosdaq))):
        shown = market_display(quote)
        with col:
            with st.container(border=True):
                st.caption(f"{name} MARKET")
                st.markdown(
                    f"### {_colored(shown['value'], shown['direction'])} "
                    f"{_colored(shown['change_amount'], shown['direction'])} "
                    f"{_colored(shown['change'], shown['direction'])}",
                    unsafe_allow_html=True,
                )


def _stock_frame(entries) -> pd.DataFrame:
    return pd.DataFrame(
        [{
            "Rank": entry.rank,
            "Name": entry.name,
            "Price": format_price(entry.price),
            "Change": format_percent(entry.change_percent),
        } for entry in entries],
        columns=["Rank", "Name", "Price", "Change"],
    )


def _style_change(value):
    return f"color: {TREND_COLORS[trend_direction(value)]}"


def display_stock_table(report: Report, report_store: ReportStore):
    mode = report_store.view_mode
    # The toggle only makes sense when both rankings have rows.
    if report.realtime_stocks and report.cumulative_stocks:
        mode = st.radio(
            "Ranking",
            options=[VIEW_REALTIME, VIEW_CUMULATIVE],
            index=0 if report_store.view_mode == VIEW_REALTIME else 1,
            format_func=lambda m: "30-second interval" if m == VIEW_REALTIME else "Intraday cumulative",
            horizontal=True,
            key=f"view_mode_{report.id}",
        )
        if mode != report_store.view_mode:
            report_store.set_view_mode(mode)

    entries = report.realtime_stocks if mode == VIEW_REALTIME else report.cumulative_stocks
    if not entries:
        st.info("No stocks extracted for this ranking.")
        return
    frame = _stock_frame(entries)
    st.dataframe(
        frame.style.map(_style_change, subset=["Price", "Change"]),
        hide_index=True,
        use_container_width=True,
    )


def display_themes(title: str, entries):
    with st.container(border=True):
        st.markdown(f"##### {title}")
        if not entries:
            st.caption("No themes extracted.")
            return
        for idx, theme in enumerate(entries, start=1):
            pct = format_percent(theme.change_percent)
            st.markdown(
                f"{idx}. {escape_markdown(theme.name)} "
                f"{_colored(pct, trend_direction(theme.change_percent))}",
                unsafe_allow_html=True,
            )


def display_report(report: Report, report_store: ReportStore):
    st.subheader(escape_markdown(report.title))
    display_market_status(report)
    left, right = st.columns([3, 2])
    with left:
        display_stock_table(report, report_store)
    with right:
        display_themes("Themes by view rank", report.themes_by_rank)
        display_themes("Themes by change rate", report.themes_by_change)
