"""Today Page.

Log the day's metrics and see targets, plan balance and the coach message.
"""

from datetime import timedelta

import streamlit as st

from fitness_coach import store
from fitness_coach.config import EDITABLE_HISTORY_DAYS
from fitness_coach.tracker import local_now, run_daily_pass
from pages.components.charts import create_progress_gauge
from pages.components.coach_bar import render_coach_bar, render_plan_balance

st.set_page_config(page_title="Today | Fitness Coach", page_icon="☀️", layout="wide")
st.title("☀️ Today")

profile = store.get_user_profile()
goals = store.get_goal_settings()
if not profile or not goals:
    st.warning("⚠️ Finish your profile and goals first in the Profile page.")
    st.stop()

now = local_now(profile)
today = now.date()

selected_day = st.date_input(
    "Day",
    value=today,
    min_value=today - timedelta(days=EDITABLE_HISTORY_DAYS),
    max_value=today,
)

try:
    report, calibration = run_daily_pass(selected_day, now)
except Exception as e:
    st.error(f"❌ Could not load your data: {e}")
    st.stop()

if calibration:
    st.info(f"✨ {calibration.message}")

render_coach_bar(report.coach_message)

if report.goal_reached:
    st.balloons()
    st.success("🏆 You've reached your target weight! Consider switching to maintenance.")

log = report.log
targets = report.targets

# Targets and balance
col1, col2, col3, col4 = st.columns(4)
col1.metric("Calorie Target", f"{targets.calories} kcal")
with col2:
    render_plan_balance(report)
col3.metric("Estimated Burn", f"{report.estimated_burn} kcal",
            help=f"Likely range {report.burn_range[0]}-{report.burn_range[1]} kcal")
col4.metric("Workouts This Week", f"{report.workouts_this_week}/{targets.workouts_per_week}")

col_a, col_b, col_c = st.columns(3)
with col_a:
    st.plotly_chart(create_progress_gauge(log.calories, targets.calories, "Calories", lower_is_better=True),
                    use_container_width=True)
with col_b:
    st.plotly_chart(create_progress_gauge(log.steps, targets.steps, "Steps"), use_container_width=True)
with col_c:
    st.plotly_chart(create_progress_gauge(log.azm, targets.azm, "AZM"), use_container_width=True)

st.divider()
st.markdown("### Log Your Day")

with st.form("daily_log_form"):
    col1, col2, col3, col4, col5 = st.columns(5)

    with col1:
        weight = st.number_input(
            "Weight (lb)", min_value=0.0, max_value=700.0, step=0.1,
            value=float(log.weight_lb or 0),
            help="Leave at 0 if you haven't weighed in"
        )
    with col2:
        calories = st.number_input("Calories", min_value=0, max_value=20000, step=50,
                                   value=int(log.calories))
    with col3:
        steps = st.number_input("Steps", min_value=0, max_value=100000, step=500,
                                value=int(log.steps))
    with col4:
        azm = st.number_input("AZM", min_value=0, max_value=1440, step=5, value=int(log.azm))
    with col5:
        workout_done = st.checkbox("Workout done", value=log.workout_done)

    submitted = st.form_submit_button("📝 Save", use_container_width=True)

    if submitted:
        try:
            store.update_daily_log(
                selected_day.isoformat(),
                weight_lb=weight if weight > 0 else None,
                calories=calories,
                steps=steps,
                azm=azm,
                workout_done=workout_done,
            )
            st.success("✅ Saved")
            st.rerun()
        except Exception as e:
            st.error(f"❌ Failed to save: {e}")

with st.expander("🗑️ Delete this day's log"):
    confirm = st.checkbox(f"Yes, delete everything logged for {selected_day.isoformat()}")
    if st.button("Delete", disabled=not confirm):
        try:
            store.delete_daily_log(selected_day.isoformat())
            st.rerun()
        except Exception as e:
            st.error(f"❌ Failed to delete: {e}")

st.markdown("---")
st.caption("💡 **Tip:** A day counts once you log calories. Zero means \"not logged\".")
