"""
📈 Lift Progress — Streamlit Dashboard
Run: streamlit run app.py
"""
import streamlit as st
import pandas as pd
import plotly.graph_objects as go

from liftstats.config import WEIGHINS_CSV, MUSCLE_COLORS, RECOVERY_COLORS
from liftstats.exercise_stats import exercise_detail, search_summaries, sort_by_recency, summarize_exercises
from liftstats.hevy_client import fetch_all_workouts, workouts_to_sessions
from liftstats.progress import progress_detail
from liftstats.volume import format_set_display, weekly_muscle_report
from liftstats.weighins import load_weighins

# ── Page Config ──────────────────────────────────────────────────────
st.set_page_config(page_title="Lift Progress", page_icon="📈", layout="wide", initial_sidebar_state="expanded")

st.markdown("""
<style>
    div[data-testid="stMetric"] {
        background: linear-gradient(135deg, #1a1a2e 0%, #16213e 100%);
        border: 1px solid #1e3a5f; border-radius: 12px; padding: 16px;
    }
    div[data-testid="stMetric"] label { color: #94a3b8 !important; font-size: 0.85rem; }
</style>
""", unsafe_allow_html=True)

PL = dict(
    template="plotly_dark", paper_bgcolor="rgba(0,0,0,0)", plot_bgcolor="rgba(0,0,0,0)",
    font=dict(color="#e2e8f0"), margin=dict(l=40, r=20, t=40, b=40),
)

CATEGORY_BADGES = {
    "PB": "🏆 PB", "BEST_1Y": "🥇 Best 1Y", "BEST_3M": "🥈 Best 3M", "BEST_1M": "🥉 Best 1M",
    "PW": "💀 PW", "WORST_1Y": "📉 Worst 1Y", "WORST_3M": "📉 Worst 3M", "WORST_1M": "📉 Worst 1M",
}


# ── Data Loading ─────────────────────────────────────────────────────
@st.cache_data(ttl=300)
def load_data():
    sessions = workouts_to_sessions(fetch_all_workouts())
    return {"sessions": sessions, "weighins": load_weighins(WEIGHINS_CSV), "ts": pd.Timestamp.now()}


try:
    result = load_data()
    sessions, weighins, last_sync = result["sessions"], result["weighins"], result["ts"]
except Exception as e:
    st.error(f"Error loading data: {e}")
    st.stop()

# ── Sidebar ──────────────────────────────────────────────────────────
with st.sidebar:
    st.markdown("# 📈 Lift Progress")
    if st.button("🔄 Refresh", use_container_width=True):
        st.cache_data.clear()
        st.rerun()
    mins_ago = int((pd.Timestamp.now() - last_sync).total_seconds() // 60)
    st.caption("📡 Data loaded just now" if mins_ago < 1 else f"📡 Loaded {mins_ago} min ago")
    st.divider()
    page = st.radio("Section", ["📊 Progress", "🏋️ Exercises", "💪 Muscles"], label_visibility="collapsed")
    reference = st.date_input("Reference date", value=pd.Timestamp.now().date())

if not sessions:
    st.warning("No workouts logged yet.")
    st.stop()


def records_frame(records: list[dict]) -> pd.DataFrame:
    return pd.DataFrame([
        {
            "": CATEGORY_BADGES.get(r["category"], r["category"]),
            "Exercise": r["exercise_name"],
            "Set": format_set_display(r["reps"], r["weight"]),
            "Volume": f"{r['volume']:,.0f} kg",
            "Date": r["date"][:10],
        }
        for r in records
    ])


# ══════════════════════════════════════════════════════════════════════
# 📊 PROGRESS
# ══════════════════════════════════════════════════════════════════════
if page == "📊 Progress":
    period = st.radio("Period", ["weekly", "monthly"], horizontal=True)
    detail = progress_detail(period, sessions, weighins, reference)
    label = "week" if period == "weekly" else "month"

    c1, c2, c3 = st.columns(3)
    c1.metric(f"This {label}", f"{detail['current_volume']:,.0f} kg")
    c2.metric(f"Last {label}", f"{detail['previous_volume']:,.0f} kg")
    c3.metric("Change", f"{detail['percent_change']:+.1f}%")

    comp = detail["comparison"]
    fig = go.Figure()
    fig.add_trace(go.Bar(x=comp["labels"], y=comp["previous_series"], name=f"Last {label}", marker_color="#475569"))
    fig.add_trace(go.Bar(x=comp["labels"], y=comp["current_series"], name=f"This {label}", marker_color="#ef4444"))
    if comp["weight_series"] is not None:
        weights = [w if w > 0 else None for w in comp["weight_series"]]
        fig.add_trace(go.Scatter(
            x=comp["labels"], y=weights, name="Bodyweight", yaxis="y2",
            mode="lines+markers", connectgaps=True, line=dict(color="#fbbf24", width=3),
        ))
        fig.update_layout(yaxis2=dict(title="Bodyweight (kg)", overlaying="y", side="right", showgrid=False))
    fig.update_layout(**PL, barmode="group", yaxis_title="Volume (kg)", height=380)
    st.plotly_chart(fig, use_container_width=True, key="progress_chart")

    col_best, col_worst = st.columns(2)
    with col_best:
        st.markdown("### 🔥 Record breakers")
        if detail["best_records"]:
            st.dataframe(records_frame(detail["best_records"]), hide_index=True, use_container_width=True)
        else:
            st.caption("No records this period.")
    with col_worst:
        st.markdown("### 🧊 Off days")
        if detail["worst_records"]:
            st.dataframe(records_frame(detail["worst_records"]), hide_index=True, use_container_width=True)
        else:
            st.caption("Nothing below baseline.")


# ══════════════════════════════════════════════════════════════════════
# 🏋️ EXERCISES
# ══════════════════════════════════════════════════════════════════════
elif page == "🏋️ Exercises":
    query = st.text_input("🔍 Search exercise or muscle")
    summaries = sort_by_recency(search_summaries(summarize_exercises(sessions), query))
    if not summaries:
        st.info("No matching exercises.")
        st.stop()

    st.dataframe(pd.DataFrame([
        {
            "Exercise": s["name"],
            "Muscles": ", ".join(s["primary_muscles"]),
            "PB": format_set_display(s["personal_best"]["reps"], s["personal_best"]["weight"]) if s["personal_best"] else "—",
            "Sets": s["total_sets"],
            "Sessions": s["total_sessions"],
            "Last": s["last_performed_at"][:10] if s["last_performed_at"] else "—",
        }
        for s in summaries
    ]), hide_index=True, use_container_width=True)

    names = {s["name"]: s["exercise_id"] for s in summaries}
    selected = st.selectbox("Exercise detail", list(names))
    stats = exercise_detail(sessions, names[selected], reference)

    cols = st.columns(4)
    for col, (key, title) in zip(cols, [("personal_best", "All time"), ("best_1y", "1 year"),
                                        ("best_3m", "3 months"), ("best_1m", "1 month")]):
        rec = stats[key]
        col.metric(title, format_set_display(rec["reps"], rec["weight"]) if rec else "—")

    if stats["volume_by_date"]:
        vbd = pd.DataFrame(stats["volume_by_date"])
        fig = go.Figure(go.Scatter(
            x=vbd["date"], y=vbd["peak_volume"], mode="lines+markers",
            line=dict(color="#ef4444", width=3), marker=dict(size=8),
        ))
        fig.update_layout(**PL, yaxis_title="Peak set volume (kg)", height=320, showlegend=False)
        st.plotly_chart(fig, use_container_width=True, key="peak_volume")


# ══════════════════════════════════════════════════════════════════════
# 💪 MUSCLES
# ══════════════════════════════════════════════════════════════════════
elif page == "💪 Muscles":
    st.markdown("### 💪 Weekly sets per muscle")
    report = weekly_muscle_report(sessions, reference)
    if not report:
        st.info("No training logged this week.")
        st.stop()

    mr = pd.DataFrame(report)
    fig = go.Figure(go.Bar(
        x=mr["sets"], y=mr["muscle"], orientation="h",
        marker_color=[RECOVERY_COLORS.get(s, "#666") for s in mr["status"]],
        text=mr["status"], textposition="outside",
    ))
    fig.update_layout(**PL, xaxis_title="Sets (secondary = ½)", height=max(300, 28 * len(mr)),
                      yaxis=dict(autorange="reversed"))
    st.plotly_chart(fig, use_container_width=True, key="muscle_sets")

    col_table, col_pie = st.columns(2)
    with col_table:
        mr["volume"] = mr["volume"].round(0)
        st.dataframe(mr[["muscle", "sets", "volume", "status"]], hide_index=True, use_container_width=True)
    with col_pie:
        fig = go.Figure(go.Pie(
            labels=mr["muscle"], values=mr["volume"], hole=0.45,
            marker=dict(colors=mr["muscle"].map(MUSCLE_COLORS).fillna("#666").tolist()),
            textinfo="label+percent", textposition="inside",
        ))
        fig.update_layout(**PL, height=350, showlegend=False)
        st.plotly_chart(fig, use_container_width=True, key="muscle_volume")
