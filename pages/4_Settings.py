"""Settings Page.

Manual bias override, JSON backup and full data reset.
"""

import json
from datetime import date

import streamlit as st

from fitness_coach import backup, store
from fitness_coach.calibrator import set_manual_bias
from fitness_coach.config import TDEE_BIAS_MAX, TDEE_BIAS_MIN

st.set_page_config(page_title="Settings | Fitness Coach", page_icon="⚙️", layout="wide")
st.title("⚙️ Settings")

model = store.get_adaptive_model()

# Manual bias override
st.markdown("### Adaptive Bias")
st.warning(
    "Changing the **TDEE Bias** manually overrides the coach's automatic calculations. "
    "Only do this if you know your maintenance calories."
)

with st.form("bias_form"):
    bias = st.slider(
        "TDEE bias offset (kcal)",
        min_value=TDEE_BIAS_MIN,
        max_value=TDEE_BIAS_MAX,
        step=25,
        value=int(model.tdee_bias),
    )
    if st.form_submit_button("Save Bias"):
        try:
            updated = set_manual_bias(bias)
            st.success(f"✅ Bias set to {updated.tdee_bias:+.0f} kcal")
        except Exception as e:
            st.error(f"❌ Error saving bias: {e}")

st.divider()

# Backup
st.markdown("### Backup")
col1, col2 = st.columns(2)

with col1:
    st.markdown("#### Export")
    payload = json.dumps(backup.export_data(), indent=2)
    st.download_button(
        "⬇️ Download JSON",
        data=payload,
        file_name=f"fitness-coach-export-{date.today().isoformat()}.json",
        mime="application/json",
        use_container_width=True,
    )

with col2:
    st.markdown("#### Import")
    uploaded = st.file_uploader("Restore from JSON (replaces all data)", type=["json"])
    if uploaded is not None and st.button("⬆️ Import", use_container_width=True):
        try:
            count = backup.import_data(json.loads(uploaded.getvalue()))
            st.success(f"✅ Imported {count} daily logs.")
            st.rerun()
        except ValueError as e:
            st.error(f"❌ Import failed: {e}")

st.divider()

# Reset
st.markdown("### Danger Zone")
with st.expander("🗑️ Delete all data"):
    confirmation = st.text_input("Type DELETE to confirm")
    if st.button("Delete everything", disabled=confirmation != "DELETE"):
        store.reset_all_data()
        st.success("All data deleted.")
        st.rerun()
