# streamlit/app.py
# RANDA 70:30 Scoring Form

from __future__ import annotations

from typing import Any, List, Optional, Tuple

import pandas as pd
import streamlit as st
from dotenv import load_dotenv

from components.charts import final_score_gauge, standards_bar_chart
from randa_scoring.config import get_settings
from randa_scoring.core.exceptions import ScoringException
from randa_scoring.core.logging import configure_logging
from randa_scoring.models.enumerations import MSLRating, label_text
from randa_scoring.scoring.evaluation_service import EvaluationService
from randa_scoring.scoring.form import EvaluationForm
from randa_scoring.scoring.rubric import PP_WEIGHT_TARGET, STANDARDS
from randa_scoring.scoring.validation import validate_weights
from randa_scoring.services.report_generator import generate_breakdown_report

load_dotenv()
settings = get_settings()
configure_logging(settings)

# =====================================================================
# Page config (must be first Streamlit call)
# =====================================================================

st.set_page_config(
    page_title="RANDA 70:30 Scoring",
    layout="wide",
    page_icon="🧮",
)

LEVEL_OPTIONS: List[Optional[int]] = [None, 1, 2, 3, 4, 5]
RATING_OPTIONS: List[Optional[MSLRating]] = [None] + list(MSLRating)

# =====================================================================
# Session state init
# =====================================================================

if "form" not in st.session_state:
    st.session_state["form"] = EvaluationForm()
if "service" not in st.session_state:
    st.session_state["service"] = EvaluationService()
# Bumped whenever the form changes outside a widget so widgets re-read their defaults
if "form_version" not in st.session_state:
    st.session_state["form_version"] = 0
if "flash" not in st.session_state:
    st.session_state["flash"] = None

form: EvaluationForm = st.session_state["form"]
service: EvaluationService = st.session_state["service"]

# =====================================================================
# Callbacks
# =====================================================================

def _bump() -> None:
    st.session_state["form_version"] += 1


def _reset() -> None:
    form.reset()
    _bump()


def _equal_weights() -> None:
    form.set_equal_weights()
    _bump()


def _load_sample() -> None:
    form.load_sample()
    _bump()


def _add_measure() -> None:
    try:
        form.add_measure()
    except ScoringException as e:
        st.session_state["flash"] = str(e)
    _bump()


def _remove_measure(measure_id: int) -> None:
    try:
        form.remove_measure(measure_id)
    except ScoringException as e:
        st.session_state["flash"] = str(e)
    _bump()


def render_kpis(items: List[Tuple[str, Any]]) -> None:
    cols = st.columns(len(items))
    for i, (label, value) in enumerate(items):
        cols[i].metric(label, value)


def key(name: str) -> str:
    return f"{name}_v{st.session_state['form_version']}"


# =====================================================================
# Sidebar
# =====================================================================

with st.sidebar:
    st.header("Form")
    st.button("Load sample data", on_click=_load_sample, use_container_width=True)
    st.button("Reset form", on_click=_reset, use_container_width=True)
    st.divider()
    st.caption(f"{settings.APP_NAME} v{settings.APP_VERSION}")
    st.markdown(f"[API docs]({settings.FASTAPI_URL.rstrip('/')}/docs)")

st.title("🧮 RANDA 70:30 Educator Effectiveness")

if st.session_state["flash"]:
    st.warning(st.session_state["flash"])
    st.session_state["flash"] = None

# =====================================================================
# Step 1: Professional Practice weights
# =====================================================================

st.subheader("Step 1: Professional Practice Weights")
st.button("Set equal weights (25% each)", on_click=_equal_weights)

weight_cols = st.columns(len(STANDARDS))
for i, std in enumerate(STANDARDS):
    value = weight_cols[i].number_input(
        f"{std.name} weight (%)",
        min_value=0.0,
        max_value=100.0,
        value=form.pp_weights[i],
        step=1.0,
        key=key(f"weight_{std.id}"),
    )
    form.set_weight(i, value)

weight_check = validate_weights(form.snapshot().pp_weights, PP_WEIGHT_TARGET)
if weight_check.valid:
    st.success(weight_check.message)
else:
    st.warning(weight_check.message)

# =====================================================================
# Step 2: Element ratings
# =====================================================================

st.subheader("Step 2: Element Ratings")
std_cols = st.columns(len(STANDARDS))
for col, std in zip(std_cols, STANDARDS):
    with col:
        st.markdown(f"**{std.name}**")
        for element_key in std.element_keys:
            current = form.element_levels.get(element_key)
            level = st.selectbox(
                f"Element {element_key[-1].upper()}",
                LEVEL_OPTIONS,
                index=LEVEL_OPTIONS.index(current),
                format_func=lambda v: "Select level" if v is None else f"Level {v}",
                key=key(f"level_{element_key}"),
            )
            form.set_level(element_key, level)

# =====================================================================
# Step 3: Measures of Student Learning
# =====================================================================

st.subheader("Step 3: Measures of Student Learning")
for idx, measure in enumerate(list(form.measures), start=1):
    c1, c2, c3 = st.columns([2, 3, 1])
    weight = c1.number_input(
        f"Measure {idx} weight (%)",
        min_value=0.0,
        max_value=30.0,
        value=measure.weight,
        step=1.0,
        key=key(f"msl_weight_{measure.measure_id}"),
    )
    rating = c2.selectbox(
        f"Measure {idx} rating",
        RATING_OPTIONS,
        index=RATING_OPTIONS.index(measure.rating),
        format_func=lambda r: "Select rating" if r is None else label_text(r),
        key=key(f"msl_rating_{measure.measure_id}"),
    )
    form.set_measure(measure.measure_id, weight=weight, rating=rating)
    c3.button(
        "Remove",
        key=key(f"remove_{measure.measure_id}"),
        on_click=_remove_measure,
        args=(measure.measure_id,),
        disabled=not form.can_remove_measure,
    )

st.button("Add measure", on_click=_add_measure, disabled=not form.can_add_measure)

report = service.evaluate(form.snapshot())
status = report.validation

if status.msl_weight_check is not None:
    if status.msl_weight_check.valid:
        st.success(status.msl_weight_check.message.replace("Total", "Measure total"))
    else:
        st.warning(status.msl_weight_check.message.replace("Total", "Measure total"))

# =====================================================================
# Progress
# =====================================================================

st.divider()
step_cols = st.columns(len(status.steps))
for col, step in zip(step_cols, status.steps):
    marker = "✅" if step.complete else ("👉" if step.current else "⬜")
    col.markdown(f"{marker} **{step.number}.** {step.label}")

# =====================================================================
# Results
# =====================================================================

st.subheader("Professional Practices (70%)")
if status.pp_ready:
    pp = report.pp
    render_kpis([
        ("PP Score", f"{float(pp.score):.2f} / 700"),
        ("Percentage", f"{float(pp.percentage):.1f}%"),
        ("Rating", label_text(pp.rating)),
    ])
    pp_df = pd.DataFrame([
        {
            "Standard": s.name,
            "Earned": f"{s.earned} / {s.possible}",
            "Weight (%)": float(s.weight),
            "Weighted (700)": float(s.weighted_score_700),
            "Rating": label_text(s.rating),
        }
        for s in pp.standards
    ])
    left, right = st.columns([3, 2])
    left.dataframe(pp_df, use_container_width=True, hide_index=True)
    right.plotly_chart(standards_bar_chart(pp_df), use_container_width=True, key="pp_bar")
else:
    st.info("Complete steps 1 and 2 to see the Professional Practices score.")

st.subheader("Measures of Student Learning (30%)")
if status.msl_ready:
    msl = report.msl
    render_kpis([
        ("MSL Score", f"{float(msl.score):.2f} / 300"),
        ("Percentage", f"{float(msl.percentage):.1f}%"),
        ("Rating", label_text(msl.rating)),
    ])
    msl_df = pd.DataFrame([
        {
            "Measure": i,
            "Weight (%)": float(m.weight),
            "Rating": label_text(m.rating),
            "Weighted (300)": float(m.weighted_score_300),
        }
        for i, m in enumerate(msl.measures, start=1)
    ])
    st.dataframe(msl_df, use_container_width=True, hide_index=True)
else:
    st.info("Complete step 3 to see the Student Learning score.")

st.subheader("Final Effectiveness Rating")
if status.ready and report.final is not None:
    final = report.final
    final_rating = label_text(final.rating)
    st.plotly_chart(
        final_score_gauge(float(final.total), final_rating),
        use_container_width=True,
        key="final_gauge",
    )
    render_kpis([
        ("Total", f"{float(final.total):.2f} / 1000"),
        ("Percentage", f"{float(final.percentage):.1f}%"),
        ("Rating", final_rating),
    ])
    if final.msl_constraint_applied:
        st.warning(
            'MSL Constraint Applied: Since MSL rating is "Less Than Expected", '
            'final rating is capped at "Effective".'
        )
    if report.insight:
        st.caption(report.insight)

    breakdown = generate_breakdown_report(report)
    with st.expander("Calculation breakdown"):
        st.markdown(breakdown)
    st.download_button(
        "Download breakdown (.md)",
        data=breakdown,
        file_name="randa_breakdown.md",
        mime="text/markdown",
    )
else:
    st.info("Complete all steps to see the final effectiveness rating.")
