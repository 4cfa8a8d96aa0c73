# streamlit/app.py
# Celebrity Timeline - good at the top, evil at the bottom.

from __future__ import annotations

import streamlit as st

from components.charts import timeline_figure
from data_loader import load_timeline, submit_vote

st.set_page_config(page_title="Celebrity Timeline", layout="centered", page_icon="👼")

VIEWPORT_HEIGHT_PX = 900

st.title("👼 Celebrity Timeline 😈")

timeline = load_timeline(VIEWPORT_HEIGHT_PX)
if not timeline:
    st.error("Could not load the timeline. Is the API running?")
    st.stop()

st.plotly_chart(timeline_figure(timeline, height_px=VIEWPORT_HEIGHT_PX), use_container_width=True)

items = timeline["items"]
if not items:
    st.info("No celebrities yet. Seed the store with `python -m app.scripts.seed_celebrities`.")
    st.stop()

# =====================================================================
# Vote
# =====================================================================

st.subheader("Cast your vote")
by_name = {f"{c['name']} ({c['score_label']})": c for c in items}
with st.form("vote"):
    choice = st.selectbox("Celebrity", list(by_name))
    percent = st.slider("How evil? (0 = saint, 100 = villain)", 0, 100, 50)
    submitted = st.form_submit_button("Vote")

if submitted:
    celeb = by_name[choice]
    result = submit_vote(celeb["id"], float(percent))
    if result is None:
        st.warning("Your vote could not be recorded. Nothing was changed.")
    else:
        st.success(
            f"Thanks! {result['name']} is now at {result['score']:.2f} "
            f"after {result['count']} votes."
        )
        st.rerun()
