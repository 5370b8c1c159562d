"""Profile & Goals Page.

Onboarding, profile edits and goal settings.
"""

import streamlit as st

from fitness_coach import store
from fitness_coach.calculators import (
    cm_to_feet_inches,
    feet_inches_to_cm,
    format_targets,
    suggest_target_weight,
    validate_profile_inputs,
)
from fitness_coach.config import (
    ACTIVITY_STYLES,
    CALIBRATION_HISTORY_LIMIT,
    DEFAULT_TIMEZONE,
    GOAL_MODES,
    SEXES,
)
from fitness_coach.models import GoalSettings, UserProfile
from fitness_coach.tracker import compute_daily_targets, local_now

st.set_page_config(page_title="Profile | Fitness Coach", page_icon="📋", layout="wide")
st.title("📋 Profile & Goals")

profile = store.get_user_profile()
goals = store.get_goal_settings()

if profile:
    st.markdown("### Current Profile")
    col1, col2, col3 = st.columns(3)
    ft, inches = cm_to_feet_inches(profile.height_cm)
    col1.metric("Sex", profile.sex.capitalize())
    col1.metric("Age", f"{profile.age_years} years")
    col2.metric("Height", f"{ft}'{inches}\"")
    col2.metric("Starting Weight", f"{profile.starting_weight_lb:.1f} lb")
    col3.metric("Timezone", profile.timezone)

    if goals:
        model = store.get_adaptive_model()
        logs = store.get_daily_logs(CALIBRATION_HISTORY_LIMIT)
        targets = compute_daily_targets(profile, goals, model, logs, local_now(profile).date())
        st.markdown("### Today's Targets")
        st.code(format_targets(targets), language=None)

    st.divider()
    st.markdown("### Update Profile")
else:
    st.info("No profile found. Create your profile below to get started!")

# Profile form (for create or update)
with st.form("profile_form"):
    col1, col2 = st.columns(2)
    current_ft, current_in = cm_to_feet_inches(profile.height_cm) if profile else (5, 9)

    with col1:
        sex = st.selectbox(
            "Sex",
            options=list(SEXES),
            index=SEXES.index(profile.sex) if profile else 0,
        )
        age = st.number_input("Age", min_value=1, max_value=120,
                              value=profile.age_years if profile else 25)
        weight_lb = st.number_input(
            "Starting weight (lb)",
            min_value=50.0, max_value=700.0, step=0.5,
            value=float(profile.starting_weight_lb) if profile else 165.0,
        )

    with col2:
        feet = st.number_input("Height (ft)", min_value=3, max_value=8, value=current_ft)
        inches = st.number_input("Height (in)", min_value=0, max_value=11, value=current_in)
        tz = st.text_input("Timezone", value=profile.timezone if profile else DEFAULT_TIMEZONE)

    submitted = st.form_submit_button(
        "💾 Save Profile",
        use_container_width=True
    )

    if submitted:
        tz = tz.strip() or DEFAULT_TIMEZONE
        errors = validate_profile_inputs(age, weight_lb, tz)
        if errors:
            for message in errors.values():
                st.error(f"⚠️ {message}")
        else:
            stamp = store.now_millis()
            updated = UserProfile(
                sex=sex,
                age_years=int(age),
                height_cm=feet_inches_to_cm(int(feet), int(inches)),
                starting_weight_lb=weight_lb,
                timezone=tz,
                created_at=profile.created_at if profile else stamp,
                updated_at=stamp,
            )
            try:
                store.set_user_profile(updated)
                st.success("✅ Profile saved!")
                st.rerun()
            except Exception as e:
                st.error(f"❌ Error saving profile: {e}")

if not profile:
    st.stop()

st.divider()
st.markdown("### Goals & Activity")

mode = st.selectbox(
    "Coach mode",
    options=list(GOAL_MODES),
    index=GOAL_MODES.index(goals.mode) if goals else 0,
    format_func=lambda m: m.replace("-", " ").title(),
)

with st.form("goals_form"):
    col1, col2 = st.columns(2)

    with col1:
        activity = st.selectbox(
            "Activity style",
            options=list(ACTIVITY_STYLES),
            index=ACTIVITY_STYLES.index(goals.activity_style) if goals else 1,
            format_func=lambda a: a.replace("-", " ").title(),
        )
        rate = st.select_slider(
            "Goal rate (lb/week)",
            options=[0.25, 0.5, 0.75, 1.0, 1.5, 2.0],
            value=goals.goal_rate if goals and goals.goal_rate in (0.25, 0.5, 0.75, 1.0, 1.5, 2.0) else 1.0,
            disabled=mode == "maintenance",
        )

    with col2:
        suggested = suggest_target_weight(mode, profile.starting_weight_lb)
        keep_custom = goals and goals.target_weight_customized and goals.mode == mode
        target_weight = None
        phase_weeks = None
        if mode == "maintenance":
            phase_weeks = st.number_input(
                "Phase length (weeks)", min_value=1, max_value=52,
                value=goals.target_phase_weeks if goals and goals.target_phase_weeks else 12,
            )
        else:
            target_weight = st.number_input(
                "Target weight (lb)",
                min_value=50.0, max_value=700.0, step=0.5,
                value=float(goals.target_weight_lb if keep_custom else suggested),
                help=f"Suggested: {suggested:.0f} lb",
            )

    save_goals = st.form_submit_button("🎯 Save Goals", use_container_width=True)

    if save_goals:
        customized = target_weight is not None and target_weight != suggested
        new_goals = GoalSettings(
            mode=mode,
            goal_rate=0 if mode == "maintenance" else rate,
            activity_style=activity,
            target_weight_lb=target_weight,
            target_weight_customized=customized,
            target_phase_weeks=int(phase_weeks) if phase_weeks else None,
            start_date=goals.start_date if goals else local_now(profile).date().isoformat(),
            updated_at=store.now_millis(),
        )
        try:
            store.set_goal_settings(new_goals)
            st.success("✅ Goals saved!")
            st.rerun()
        except Exception as e:
            st.error(f"❌ Error saving goals: {e}")

st.markdown("---")
st.caption("💡 **Tip:** Targets use the Mifflin-St Jeor equation, then adapt weekly to your actual weight trend.")
