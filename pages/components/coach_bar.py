"""Coach bar and daily summary components for Streamlit pages."""

import streamlit as st

from fitness_coach.coach import message_tone
from fitness_coach.models import DayReport


def render_coach_bar(message: str):
    """Render the coach message, colored by its tone."""
    tone = message_tone(message)
    if tone == "praise":
        st.success(f"🏆 {message}")
    elif tone == "warning":
        st.warning(f"⚠️ {message}")
    elif tone == "success":
        st.success(f"✨ {message}")
    else:
        st.info(f"💬 {message}")


def render_plan_balance(report: DayReport):
    """Render the achieved deficit/surplus next to the plan."""
    planned = report.targets.planned_daily_delta
    if report.achieved_delta is None:
        st.metric(report.status_label, "N/A", help="Log calories to see your balance")
        return

    st.metric(
        report.status_label,
        f"{report.achieved_delta:+.0f} kcal",
        delta=f"{report.achieved_delta - planned:+.0f} vs plan",
        delta_color="inverse" if planned < 0 else "normal",
    )
