import os
from datetime import datetime

import pandas as pd
import streamlit as st

from chat_engine import ChatMessage, ChatSession
from config import configure_logging, get_settings
from daily_records import ALL_STORES
from demo_data import generate_demo_records
from formatting import format_percent, make_currency_formatter
from record_store import CsvRecordStore, RecordStoreError
from visual_payload import (
    ChartPayload,
    ComparisonPayload,
    MetricsPayload,
    PredictionPayload,
    RecommendationsPayload,
    payload_to_structured,
)

SETTINGS = get_settings()
configure_logging(SETTINGS)
FMT_CURRENCY = make_currency_formatter(SETTINGS.currency_symbol)


def init_session_state():
    defaults = {
        "chat": None,
        "records": None,
        "stores": {},
        "data_source": "",
        "load_error": None,
        "pending_query": None,
    }
    for k, v in defaults.items():
        if k not in st.session_state:
            st.session_state[k] = v
    if st.session_state.chat is None:
        st.session_state.chat = ChatSession()


def load_records() -> None:
    store = CsvRecordStore(SETTINGS.data_path)
    try:
        st.session_state.records = store.list_records()
        st.session_state.stores = store.list_stores() if st.session_state.records else {}
        st.session_state.data_source = os.path.basename(SETTINGS.data_path)
        st.session_state.load_error = None
    except RecordStoreError as e:
        st.session_state.records = []
        st.session_state.stores = {}
        st.session_state.load_error = str(e)


def load_demo_records() -> None:
    records = generate_demo_records(datetime.now())
    st.session_state.records = records
    stores: dict[str, str] = {}
    for r in records:
        stores.setdefault(r.storeId, r.storeName)
    st.session_state.stores = stores
    st.session_state.data_source = "demo data"
    st.session_state.load_error = None


def _tone_color(tone: str) -> str:
    return {"positive": "green", "negative": "red"}.get(tone, "gray")


def render_payload(payload) -> None:
    if payload is None:
        return
    if isinstance(payload, ChartPayload) and payload.chart_type == "area":
        st.markdown(f"**{payload.title}**")
        df = pd.DataFrame([{"date": p.label, "sales": p.sales, "profit": p.profit} for p in payload.series])
        if not df.empty:
            st.area_chart(df.set_index("date"))
        cols = st.columns(len(payload.metrics or []) or 1)
        for col, m in zip(cols, payload.metrics or []):
            col.markdown(f"{m.label}  \n:{_tone_color(m.tone)}[**{m.value}**]")
    elif isinstance(payload, ChartPayload) and payload.chart_type == "pie":
        st.markdown(f"**{payload.title}**")
        df = pd.DataFrame([{"category": s.name, "value": s.value, "color": s.color} for s in payload.series])
        if not df.empty:
            st.vega_lite_chart(df, {
                "mark": {"type": "arc", "innerRadius": 20},
                "encoding": {
                    "theta": {"field": "value", "type": "quantitative"},
                    "color": {"field": "category", "type": "nominal",
                              "scale": {"range": df["color"].tolist()}},
                },
            })
    elif isinstance(payload, ComparisonPayload):
        st.markdown(f"**{payload.title}**")
        df = pd.DataFrame([{"store": p.name, "sales": p.sales, "profit": p.profit} for p in payload.series])
        if not df.empty:
            st.bar_chart(df.set_index("store"))
        for rec in payload.recommendations:
            st.warning(rec)
    elif isinstance(payload, PredictionPayload):
        st.markdown(f"**{payload.title}**")
        df = pd.DataFrame([{"week": p.week, "sales": p.sales} for p in payload.series])
        st.line_chart(df.set_index("week"))
        cols = st.columns(len(payload.predictions))
        for col, pred in zip(cols, payload.predictions):
            col.metric(pred.period.replace("_", " ").title(), FMT_CURRENCY(pred.value))
    elif isinstance(payload, RecommendationsPayload):
        for imp in payload.improvements:
            with st.expander(f"{imp.category}: {imp.impact} ({imp.timeframe})"):
                st.markdown("\n".join(f"- {a}" for a in imp.actions))
                st.caption(f"Expected monthly effect: {FMT_CURRENCY(imp.expected_savings)}")
        c1, c2 = st.columns(2)
        c1.metric("Current margin", format_percent(payload.current_margin))
        c2.metric("Projected margin", format_percent(payload.projected_margin))
    elif isinstance(payload, MetricsPayload):
        st.progress(min(1.0, max(0.0, payload.achievement / 100)))
        c1, c2, c3 = st.columns(3)
        c1.metric("Actual", FMT_CURRENCY(payload.current))
        c2.metric("Target", FMT_CURRENCY(payload.target))
        c3.metric("Required daily", FMT_CURRENCY(payload.daily_target))
    with st.expander("Payload (JSON)", expanded=False):
        st.json(payload_to_structured(payload))


def render_message(msg: ChatMessage, idx: int) -> None:
    with st.chat_message("assistant" if msg.role == "assistant" else "user"):
        st.markdown(msg.text)
        render_payload(msg.visual_payload)
        if msg.suggestions:
            cols = st.columns(len(msg.suggestions))
            for i, (col, s) in enumerate(zip(cols, msg.suggestions)):
                if col.button(s, key=f"suggestion_{idx}_{i}"):
                    st.session_state.pending_query = s
                    st.rerun()


def main():
    st.set_page_config(page_title="AI Business Analyst", layout="wide", initial_sidebar_state="expanded")
    init_session_state()
    if st.session_state.records is None:
        load_records()

    with st.sidebar:
        st.markdown("### Settings")
        st.divider()
        if st.button("Reload records"):
            load_records()
        if st.button("Generate demo data"):
            load_demo_records()
        records = st.session_state.records or []
        st.caption(f"**{len(records):,}** records · {st.session_state.data_source or 'no source'}")

        options = [ALL_STORES] + list(st.session_state.stores)
        store_filter = st.selectbox(
            "Store",
            options,
            format_func=lambda s: "All stores" if s == ALL_STORES else st.session_state.stores.get(s, s),
            key="store_filter",
        )

    st.title("AI Business Analyst")
    if st.session_state.load_error:
        st.error(f"Could not load records: {st.session_state.load_error}")

    chat: ChatSession = st.session_state.chat
    query = st.chat_input("Ask about sales, stores, forecasts, goals or costs")
    query = query or st.session_state.pending_query
    st.session_state.pending_query = None

    if query:
        if query == "Generate demo data":
            load_demo_records()
        with st.spinner("Analyzing..."):
            chat.ask(
                query,
                st.session_state.records or [],
                store_filter,
                datetime.now(),
                fmt_currency=FMT_CURRENCY,
                stores=st.session_state.stores,
                store_name_prefix=SETTINGS.store_name_prefix,
            )

    for idx, msg in enumerate(chat.messages):
        render_message(msg, idx)


if __name__ == "__main__":
    main()
