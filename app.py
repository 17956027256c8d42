import streamlit as st
import pandas as pd

from gradex.aggregation import aggregate
from gradex.assistant import explain_result
from gradex.config import DEFAULT_UNITS, MAX_UNITS, MIN_UNITS, STANDING_THRESHOLDS, configure_logging
from gradex.grading import UNN_5_POINT, InvalidGradeScaleError
from gradex.history import build_history, gpa_trend, history_frame
from gradex.io_csv import *
from gradex.models import PriorCumulativeState
from gradex.standing import (
    check_course_load,
    classify_standing,
    required_gpa_for_target,
    standing_threshold,
)

configure_logging()

# ------------------------
# Streamlit UI (with optional CSV upload)
# ------------------------

st.set_page_config(
    page_title="Gradex | GPA & CGPA Calculator (5-point scale)",
    page_icon="🎓",
    layout="wide",
)

st.title("🎓 Gradex GPA & CGPA Calculator")
st.write(
    "Record your courses, scores and units. Gradex converts each score to a grade on the "
    "5-point scale, works out your semester GPA, carries your previous CGPA forward and "
    "shows every step of the calculation."
)

# ------------------------
# Grade scale (sidebar)
# ------------------------

with st.sidebar:
    st.subheader("Grade scale")
    st.caption("Edit the bands to use another institution's scale. Bands must cover 0-100 with no overlap.")
    scale_df = st.data_editor(
        scale_frame(UNN_5_POINT),
        key="scale_df",
        num_rows="dynamic",
        use_container_width=True,
    )
    try:
        scale = scale_from_frame(scale_df, name="Custom scale")
        if scale.bands == UNN_5_POINT.bands:
            scale = UNN_5_POINT
    except (InvalidGradeScaleError, ValueError) as e:
        st.error(f"Grade scale error: {e}. Using {UNN_5_POINT.name}.")
        scale = UNN_5_POINT

# ------------------------
# Input form
# ------------------------

with st.form("gpa_input_form"):
    st.subheader("1. Enter your courses")

    courses_csv = st.file_uploader(
        "Optionally upload a courses CSV (Code, Units, Score; Title, Level, Semester optional)",
        type=["csv"],
        key="courses_csv",
    )

    default_courses = pd.DataFrame(
        [
            {"Code": "MTH101", "Title": "General Mathematics I", "Units": 3, "Score": 65.0, "Level": "100", "Semester": "1st"},
            {"Code": "CHM101", "Title": "General Chemistry I", "Units": 4, "Score": 72.0, "Level": "100", "Semester": "1st"},
            {"Code": "PHY101", "Title": "General Physics I", "Units": 3, "Score": 58.0, "Level": "100", "Semester": "1st"},
        ],
        columns=COURSE_COLUMNS,
    )

    courses_seed = default_courses
    upload_error = None
    if courses_csv is not None:
        try:
            courses_seed = validate_courses_csv(read_csv_upload(courses_csv))
        except Exception as e:
            upload_error = str(e)

    if upload_error:
        st.error(f"Courses CSV error: {upload_error}")

    courses_df = st.data_editor(
        courses_seed,
        key="courses_df",
        num_rows="dynamic",
        use_container_width=True,
        column_config={
            "Units": st.column_config.NumberColumn(
                "Units", min_value=MIN_UNITS, max_value=MAX_UNITS, step=1, default=DEFAULT_UNITS
            ),
            "Score": st.column_config.NumberColumn("Score", min_value=0.0, max_value=100.0, step=1.0),
        },
    )

    st.subheader("2. Previous record (leave at 0 if this is your first semester)")
    col_cgpa, col_units = st.columns(2)
    with col_cgpa:
        prior_cgpa = st.number_input(
            "CGPA before these courses", min_value=0.0, max_value=float(UNN_5_POINT.max_points), step=0.01
        )
    with col_units:
        prior_units = st.number_input("Units completed before these courses", min_value=0, step=1)

    submitted = st.form_submit_button("Calculate", type="primary")


if submitted:
    if courses_csv is not None and upload_error:
        st.warning("Please fix the CSV upload error above (or remove the upload) and try again.")
    else:
        try:
            courses = parse_courses(courses_df)
        except ValueError as e:
            st.error(str(e))
        else:
            prior = PriorCumulativeState(float(prior_cgpa), int(prior_units))
            history = build_history(courses, prior, scale)
            result = history[-1].result if history else aggregate([], prior, scale)

            st.session_state["prior"] = prior
            st.session_state["history"] = history
            st.session_state["result"] = result
            st.session_state["scale"] = scale


# ------------------------
# Show results if we have them
# ------------------------

if "result" in st.session_state:
    result = st.session_state["result"]
    history = st.session_state["history"]
    prior = st.session_state["prior"]
    used_scale = st.session_state["scale"]

    st.markdown("---")
    st.subheader("Results")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Semester GPA", f"{result.semester_gpa_display:.2f}")
    with col2:
        st.metric("Cumulative CGPA", f"{result.cumulative_cgpa_display:.2f} / {used_scale.max_points:.1f}")
    with col3:
        st.metric("Total units", result.cumulative_units)
    with col4:
        st.metric("Standing", classify_standing(result.cumulative_cgpa))

    if result.semester_units > 0:
        load = check_course_load(result.semester_units)
        if load["status"] == "heavy":
            st.warning(load["message"])
        else:
            st.info(load["message"])

    if result.carryovers:
        st.error(
            "Carryovers (must be retaken): "
            + ", ".join(f"{e.code} ({e.score:g})" for e in result.carryovers)
        )

    st.markdown("**Course breakdown** (latest semester)")
    st.dataframe(breakdown_frame(result), use_container_width=True, hide_index=True)

    with st.expander("How this was calculated", expanded=True):
        for line in result.steps:
            st.text(line)

    if len(history) > 1:
        st.markdown("---")
        st.subheader("GPA performance")
        frame = history_frame(history)
        trend = gpa_trend(history)
        st.caption({"up": "📈 Improving", "down": "📉 Declining", "stable": "➖ Stable"}[trend])
        st.line_chart(frame.set_index("Semester")[["GPA", "CGPA"]])
        st.dataframe(frame, use_container_width=True, hide_index=True)

    # ------------------------------
    # Target planner
    # ------------------------------
    st.markdown("---")
    st.subheader("Plan ahead: what GPA do you need?")

    col_target, col_remaining = st.columns(2)
    with col_target:
        target_label = st.selectbox("Target class", [label for label, _ in STANDING_THRESHOLDS], index=0)
        target_cgpa = st.slider(
            "Target CGPA",
            min_value=0.0,
            max_value=float(used_scale.max_points),
            step=0.01,
            value=float(standing_threshold(target_label)),
        )
    with col_remaining:
        remaining_units = st.number_input("Units still to take", min_value=0, step=1, value=120)

    plan = required_gpa_for_target(result.as_prior(), target_cgpa, int(remaining_units), used_scale)
    if plan["required_gpa"] is None:
        st.info("No units remaining, so your CGPA can no longer change.")
    elif plan["possible"]:
        st.success(
            f"✅ You need an average GPA of **{max(plan['required_gpa'], 0.0):.2f}** "
            f"over your remaining {int(remaining_units)} units to finish on {target_cgpa:.2f}."
        )
    else:
        st.error(
            f"❌ Reaching {target_cgpa:.2f} would need a GPA of {plan['required_gpa']:.2f}, "
            f"above the {used_scale.max_points:.1f} maximum."
        )
    with st.expander("Planner working"):
        for line in plan["steps"]:
            st.text(line)

    with st.expander("Ask the assistant to explain my CGPA"):
        st.text(explain_result(result, scale=used_scale))

else:
    st.info("Fill in your courses and click **Calculate** to get started.")


st.header("FAQ")

st.subheader("How is my GPA calculated?")
st.write(
    "Each score is converted to a grade and grade point (A = 5, B = 4, C = 3, D = 2, E = 1, F = 0 "
    "on the default scale). Grade points are multiplied by course units, added up and divided by "
    "the total units."
)

st.subheader("How is my previous CGPA carried forward?")
st.write(
    "Your previous CGPA times the units behind it gives your previous weighted points. "
    "This semester's weighted points are added to it and the total is divided by all units so far."
)

st.subheader("What is a carryover?")
st.write("Any course whose score falls in the lowest band (below 40 by default). It has to be retaken.")

st.subheader("What data do you collect or store?")
st.write(
    "This calculator does **not** store your courses. Everything you enter is used for on-screen "
    "calculations only and is cleared when you refresh or close the page."
)
