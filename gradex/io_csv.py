from typing import List

import pandas as pd

from .config import MAX_UNITS, MIN_UNITS, SCORE_CEILING, SCORE_FLOOR
from .grading import GradeScale
from .models import AggregationResult, ScoredCourse

COURSE_COLUMNS = ["Code", "Title", "Units", "Score", "Level", "Semester"]

_ALIASES = {
    "course": "code",
    "course code": "code",
    "unit": "units",
    "credit": "units",
    "credits": "units",
    "mark": "score",
    "marks": "score",
    "sem": "semester",
}


# ------------------------
# CSV helpers (UI-side)
# ------------------------

def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]
    renames = {c: _ALIASES[c] for c in df.columns if c in _ALIASES and _ALIASES[c] not in df.columns}
    return df.rename(columns=renames)

def read_csv_upload(uploaded_file) -> pd.DataFrame:
    df = pd.read_csv(uploaded_file)
    return _normalise_cols(df)

def validate_courses_csv(df: pd.DataFrame) -> pd.DataFrame:
    required = {"code", "units", "score"}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns: {sorted(missing)}. Expected: Code, Units, Score.")
    out = df.copy()
    for optional in ("title", "level", "semester"):
        if optional not in out.columns:
            out[optional] = ""
    out = out[["code", "title", "units", "score", "level", "semester"]]
    out.columns = COURSE_COLUMNS
    return out

def _text(value) -> str:
    if value is None or pd.isna(value):
        return ""
    return str(value).strip()

def parse_courses(df: pd.DataFrame) -> List[ScoredCourse]:
    """
    Turn an edited / uploaded course table into ScoredCourse rows.

    Blank rows are skipped. Anything else that is not a valid course raises
    ValueError with the row number, so the UI can point at it.
    """
    courses = []
    seen = set()
    for position, (_, row) in enumerate(df.iterrows(), start=1):
        code = _text(row.get("Code"))
        units = row.get("Units")
        score = row.get("Score")
        if not code and (units is None or pd.isna(units)) and (score is None or pd.isna(score)):
            continue
        if not code:
            raise ValueError(f"Row {position}: course code is missing.")
        if units is None or pd.isna(units) or score is None or pd.isna(score):
            raise ValueError(f"Row {position} ({code}): units and score are both required.")

        try:
            units_value = float(units)
            score_value = float(score)
        except (TypeError, ValueError):
            raise ValueError(f"Row {position} ({code}): units and score must be numbers.")

        if not MIN_UNITS <= units_value <= MAX_UNITS or units_value != int(units_value):
            raise ValueError(
                f"Row {position} ({code}): units must be a whole number from {MIN_UNITS} to {MAX_UNITS} "
                f"(got {units_value:g})."
            )
        if not SCORE_FLOOR <= score_value <= SCORE_CEILING:
            raise ValueError(
                f"Row {position} ({code}): score must be between {SCORE_FLOOR:g} and {SCORE_CEILING:g} "
                f"(got {score_value:g})."
            )

        level = _text(row.get("Level"))
        semester = _text(row.get("Semester"))
        key = (code.upper(), level, semester)
        if key in seen:
            raise ValueError(f"Row {position}: {code} appears twice in the same semester.")
        seen.add(key)

        courses.append(
            ScoredCourse(
                code=code,
                units=int(units_value),
                score=score_value,
                title=_text(row.get("Title")),
                level=level,
                semester=semester,
            )
        )
    return courses


# ------------------------
# Result views
# ------------------------

def courses_frame(courses: List[ScoredCourse]) -> pd.DataFrame:
    rows = [
        {
            "Code": c.code,
            "Title": c.title,
            "Units": c.units,
            "Score": c.score,
            "Level": c.level,
            "Semester": c.semester,
        }
        for c in courses
    ]
    return pd.DataFrame(rows, columns=COURSE_COLUMNS)

def breakdown_frame(result: AggregationResult) -> pd.DataFrame:
    rows = [
        {
            "Code": e.code,
            "Units": e.units,
            "Score": e.score,
            "Grade": e.letter,
            "Grade point": e.grade_point,
            "Weighted points": e.weighted_points,
            "Carryover": e.carryover,
        }
        for e in result.breakdown
    ]
    return pd.DataFrame(
        rows, columns=["Code", "Units", "Score", "Grade", "Grade point", "Weighted points", "Carryover"]
    )

def steps_frame(result: AggregationResult) -> pd.DataFrame:
    return pd.DataFrame({"Step": range(1, len(result.steps) + 1), "Calculation": list(result.steps)})


# ------------------------
# Grade scale table
# ------------------------

def scale_frame(scale: GradeScale) -> pd.DataFrame:
    rows = [
        {"Grade": b.letter, "Min": b.min_score, "Max": b.max_score, "Points": b.points}
        for b in scale.bands
    ]
    return pd.DataFrame(rows, columns=["Grade", "Min", "Max", "Points"])

def scale_from_frame(df: pd.DataFrame, name: str) -> GradeScale:
    """Build a scale from an edited table; raises InvalidGradeScaleError if it is malformed."""
    rows = []
    for _, row in df.iterrows():
        if pd.isna(row.get("Grade")) or _text(row.get("Grade")) == "":
            continue
        rows.append((_text(row["Grade"]), row["Min"], row["Max"], row["Points"]))
    return GradeScale.from_rows(name, rows)
