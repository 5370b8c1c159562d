"""Progress Page.

Weight trends, plan balance history and the adaptive bias.
"""

import streamlit as st

from fitness_coach import store
from fitness_coach.calibrator import run_calibration
from fitness_coach.config import CALIBRATION_HISTORY_LIMIT
from fitness_coach.tracker import (
    local_now,
    progress_frame,
    rolling_average_weight,
    weekly_weight_averages,
)
from fitness_coach.calculators import get_planned_daily_delta
from pages.components.charts import create_calorie_trend, create_delta_chart, create_weight_trend

st.set_page_config(page_title="Progress | Fitness Coach", page_icon="📈", layout="wide")
st.title("📈 Progress & Trends")
st.caption("Your adaptive coach is tracking your metabolism.")

profile = store.get_user_profile()
goals = store.get_goal_settings()
if not profile or not goals:
    st.warning("⚠️ Finish your profile and goals first in the Profile page.")
    st.stop()

# Automatic reality check before anything is drawn
calibration = run_calibration(local_now(profile))
if calibration:
    st.info(f"✨ {calibration.message}")

model = store.get_adaptive_model()
logs = store.get_daily_logs(CALIBRATION_HISTORY_LIMIT)

if not logs:
    st.info("Waiting for data... Keep logging to see your trends.")
    st.stop()

frame = progress_frame(profile, goals, model, logs)
rolling = rolling_average_weight(logs)

col1, col2, col3, col4 = st.columns(4)
col1.metric("Rolling Weight", f"{rolling:.1f} lb" if rolling else "---")
col2.metric("Adaptive Bias", f"{model.tdee_bias:+.0f} kcal")
col3.metric("Days Logged", len(logs))
col4.metric("Last Adjustment", model.last_calibration_date[:10] if model.last_calibration_date else "Never")

col_a, col_b = st.columns(2)
with col_a:
    st.plotly_chart(create_weight_trend(frame, goals.target_weight_lb), use_container_width=True)
with col_b:
    planned = get_planned_daily_delta(goals.mode, goals.goal_rate)
    st.plotly_chart(create_delta_chart(frame, planned), use_container_width=True)

st.plotly_chart(create_calorie_trend(frame), use_container_width=True)

st.markdown("### Weekly Averages")
weekly = weekly_weight_averages(frame)
if weekly.empty:
    st.info("No weigh-ins yet.")
else:
    st.dataframe(weekly, use_container_width=True, hide_index=True)

st.markdown("---")
st.caption(
    "💡 **How it adapts:** every 7 days, with 4+ weigh-ins in each of the last two weeks and "
    "calories logged on 5+ days, your weekly change is compared with the plan. "
    "Off by more than 0.15 lb/week? Your target moves 75 kcal."
)
