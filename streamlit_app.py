"""Streamlit frontend for the Fitness Coach App.

Main entry point for the multi-page Streamlit application.
"""

import streamlit as st

from fitness_coach.config import CALIBRATION_HISTORY_LIMIT, configure_logging
from fitness_coach.db import init_db
from fitness_coach import store
from fitness_coach.tracker import compute_daily_targets, local_now

st.set_page_config(
    page_title="Fitness Coach",
    page_icon="🏋️",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Initialize DB and logging once per session
if 'db_initialized' not in st.session_state:
    configure_logging()
    init_db()
    st.session_state.db_initialized = True

profile = store.get_user_profile()
goals = store.get_goal_settings()

# Sidebar: Show current goal info
with st.sidebar:
    st.markdown("## 🏋️ Fitness Coach")
    st.markdown("---")

    if profile and goals:
        model = store.get_adaptive_model()
        logs = store.get_daily_logs(CALIBRATION_HISTORY_LIMIT)
        today = local_now(profile).date()
        targets = compute_daily_targets(profile, goals, model, logs, today)

        st.success(f"🎯 **{goals.mode.replace('-', ' ').title()}**")
        st.caption(f"Activity: {goals.activity_style.replace('-', ' ').title()}")
        st.metric("Daily Target", f"{targets.calories} kcal")
        col1, col2 = st.columns(2)
        col1.metric("Steps", f"{targets.steps:,}")
        col2.metric("AZM", f"{targets.azm}")
        st.caption(f"Adaptive bias: {model.tdee_bias:+.0f} kcal")
    else:
        st.warning("⚠️ Setup not finished")
        st.caption("Create your profile in the Profile page")

    st.markdown("---")
    st.markdown("### Navigation")
    st.markdown("- 📋 **Profile** - Profile & goals")
    st.markdown("- ☀️ **Today** - Log your day")
    st.markdown("- 📈 **Progress** - Trends & calibration")
    st.markdown("- ⚙️ **Settings** - Bias, backup, reset")

# Main home page
st.title("🏋️ Fitness Coach")

st.markdown("""
Log your weight, calories, steps and active zone minutes (AZM) every day.
Your coach turns them into a calorie target that adapts to how your body
actually responds, a daily deficit/surplus score, and one clear next step.

### Getting Started

1. **📋 Profile** - Enter your age, height, sex and starting weight, then pick a goal:
   - Fat loss, maintenance or muscle gain
   - A weekly rate (lb/week) and an activity style

2. **☀️ Today** - Log your metrics as the day goes on:
   - The coach bar tells you the single most useful thing to do next
   - See your achieved deficit or surplus against the plan

3. **📈 Progress** - Weekly weight trends:
   - Once you have two weeks of weigh-ins and calorie logs, the coach
     compares your actual trend with the plan and adjusts your target by 75 kcal
""")

if not profile:
    st.info("No profile found. Go to the Profile page to create one!")
elif not goals:
    st.info("Pick a goal on the Profile page to get your targets.")

st.markdown("---")
st.caption("💡 **Tip:** Weigh in every morning. The adaptive coach needs at least 4 weigh-ins per week.")
