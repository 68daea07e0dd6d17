import logging
import streamlit as st

from src.config import CONTROL_RANGES, DEFAULTS
from src.power import InputOutOfDomain, TestParameters, analyze
from src.geometry import build_geometry
from src.charts import interactive_distribution_chart
from src.insights import build_plan_cards, plan_summary
from src.sensitivity import default_grid, sensitivity_table, display_table, table_csv_bytes
from src.pdf_report import build_pdf_bytes

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# -----------------------------
# Styling
# -----------------------------
CSS = """
<style>
.block-container { padding-top: 2rem; padding-bottom: 2rem; max-width: 1200px; }
h1, h2, h3 { letter-spacing: -0.02em; }
.small-muted { color: rgba(49, 51, 63, 0.65); font-size: 0.92rem; }
.card {
  border: 1px solid rgba(49, 51, 63, 0.12);
  border-radius: 14px;
  padding: 14px 16px;
  background: white;
}
.card-title { font-size: 0.85rem; color: rgba(49, 51, 63, 0.65); margin-bottom: 6px; }
.card-value { font-size: 1.25rem; font-weight: 750; margin: 0; }
.card-note { font-size: 0.8rem; color: rgba(49, 51, 63, 0.65); margin-top: 4px; }
.hr { height: 1px; background: rgba(49, 51, 63, 0.10); margin: 14px 0; }
.note { color: rgba(49,51,63,0.85); font-size: 0.95rem; line-height: 1.45; }
</style>
"""

st.set_page_config(page_title="A/B Test Power Explorer", layout="wide")
st.markdown(CSS, unsafe_allow_html=True)

st.markdown("## A/B Test Power Explorer")
st.markdown(
    '<div class="small-muted">Move the sliders to see how many users each group needs, '
    'and how the null and alternative distributions overlap at that sample size.</div>',
    unsafe_allow_html=True
)

# -----------------------------
# Sidebar controls (slider + number input, number is the master)
# -----------------------------
def _init_state(name, value):
    if f"{name}_num" not in st.session_state:
        st.session_state[f"{name}_num"] = value
        st.session_state[f"{name}_slider"] = value

def _sync(name, source):
    if source == "slider":
        st.session_state[f"{name}_num"] = st.session_state[f"{name}_slider"]
    else:
        rng = CONTROL_RANGES[name]
        # The slider cannot hold values outside its range; the number input can
        st.session_state[f"{name}_slider"] = min(max(st.session_state[f"{name}_num"], rng.min_value), rng.max_value)

def _control(name):
    rng = CONTROL_RANGES[name]
    st.slider(
        rng.label, rng.min_value, rng.max_value, step=rng.step, format=rng.fmt,
        key=f"{name}_slider", on_change=_sync, args=(name, "slider"), help=rng.help
    )
    st.number_input(
        f"{rng.label} (exact)", step=rng.step, format=rng.fmt,
        key=f"{name}_num", on_change=_sync, args=(name, "number"), label_visibility="collapsed"
    )
    return float(st.session_state[f"{name}_num"])

for _name in CONTROL_RANGES:
    _init_state(_name, getattr(DEFAULTS, _name))

with st.sidebar:
    st.subheader("Test parameters")
    p1 = _control("p1")
    delta = _control("delta")
    alpha = _control("alpha")
    power = _control("power")

    st.divider()
    st.subheader("PDF")
    report_title = st.text_input("Title", value="A/B test plan")

# -----------------------------
# Compute
# -----------------------------
params = TestParameters.from_effect(p1, delta, alpha, power)
try:
    analysis = analyze(params)
    error = None
except InputOutOfDomain as e:
    analysis = None
    error = e

# -----------------------------
# Plan
# -----------------------------
st.markdown('<div class="hr"></div>', unsafe_allow_html=True)
st.markdown("### Plan")

cards = build_plan_cards(analysis, error=error)
for col, card in zip(st.columns(len(cards)), cards):
    with col:
        st.markdown(
            f'<div class="card"><div class="card-title">{card["label"]}</div>'
            f'<div class="card-value">{card["value"]}</div>'
            f'<div class="card-note">{card["note"]}</div></div>',
            unsafe_allow_html=True
        )

if analysis is None:
    st.info(f"No plan for these inputs: {error}. Increase the effect size or move P₁ away from 0.")
    st.stop()

# -----------------------------
# Distributions
# -----------------------------
st.markdown('<div class="hr"></div>', unsafe_allow_html=True)
st.markdown("### Distributions")
st.plotly_chart(interactive_distribution_chart(build_geometry(analysis)), use_container_width=True)

for line in plan_summary(analysis):
    st.markdown(f'<div class="note">{line}</div>', unsafe_allow_html=True)

# -----------------------------
# Sensitivity
# -----------------------------
st.markdown('<div class="hr"></div>', unsafe_allow_html=True)
st.markdown("### Sensitivity")

deltas, powers = default_grid(delta, power)
sens = sensitivity_table(p1, alpha, deltas, powers)
st.dataframe(display_table(sens), use_container_width=True, hide_index=True)
st.download_button(
    "Download table (CSV)",
    data=table_csv_bytes(sens),
    file_name="sample_size_sensitivity.csv",
    mime="text/csv"
)

# -----------------------------
# Export PDF
# -----------------------------
st.markdown('<div class="hr"></div>', unsafe_allow_html=True)
st.markdown("### Export")

if st.button("Generate PDF"):
    pdf_bytes = build_pdf_bytes(analysis, cards, report_title=report_title, sensitivity=sens)
    st.download_button(
        "Download PDF",
        data=pdf_bytes,
        file_name="ab_test_plan.pdf",
        mime="application/pdf"
    )
