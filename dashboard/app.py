"""
Positions dashboard: latest reconstruction run from the positions journal.
Run from repo root: streamlit run dashboard/app.py
Or with data dir: ROUNDTRIP_DASHBOARD_DATA_DIR=/path/to/data streamlit run dashboard/app.py
"""

from decimal import Decimal

import streamlit as st

from data_reader import _data_dir, discover_journals, latest_run, position_rows

st.set_page_config(page_title="Round-trip Positions", layout="wide")
st.title("Round-trip Positions")

data_dir = _data_dir()
journals = discover_journals(data_dir)

if not journals:
    st.warning(f"No journals found under: `{data_dir}`")
    st.caption("Run `roundtrip analyze` first; it appends to data/positions.jsonl by default.")
    st.stop()

journal_path = st.selectbox("Journal", journals, format_func=lambda p: p.name)
if st.button("Refresh"):
    st.rerun()

run = latest_run(journal_path)
summary = run["summary"]

if summary is None:
    st.info("Journal has no completed run yet.")
    st.stop()

c1, c2, c3 = st.columns(3)
with c1:
    st.metric("Positions", summary.get("total_positions", 0))
with c2:
    st.metric("Net PnL", f"${Decimal(summary.get('total_pnl', '0')):,.2f}")
with c3:
    st.metric("Total Fees", f"${Decimal(summary.get('total_fees', '0')):,.5f}")

st.subheader("Positions")
st.dataframe(position_rows(run["positions"]), use_container_width=True)

st.subheader("By symbol")
st.table([
    {"Symbol": symbol, "Positions": s.get("positions"), "PnL": s.get("pnl")}
    for symbol, s in (summary.get("by_symbol") or {}).items()
])

if run["open_segments"]:
    st.subheader("Open positions (not in totals)")
    for seg in run["open_segments"]:
        st.text(f"{seg.get('symbol')}  {seg.get('direction')}  net {seg.get('net_quantity')}  ({len(seg.get('fills') or [])} fills)")

st.subheader("Position details")
for p in run["positions"]:
    with st.expander(f"#{p.get('id')} {p.get('symbol')} {p.get('direction')}  PnL {p.get('realized_pnl')}"):
        st.text(f"Entry {p.get('entry_price')} @ {p.get('entry_time')}")
        st.text(f"Exit  {p.get('exit_price')} @ {p.get('exit_time')}")
        st.text(f"Duration {p.get('duration')}  |  PnL % {p.get('realized_pnl_percent')}  |  Fees {p.get('total_fees')}")
        for i, f in enumerate(p.get("fills") or [], 1):
            st.caption(f"{i}. {f.get('side')} {f.get('quantity')} @ {f.get('price')} (fee {f.get('fee')})  {f.get('timestamp')}")
