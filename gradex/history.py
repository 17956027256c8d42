"""
Semester-by-semester history.

Courses are grouped by (level, semester) and aggregated in chronological
order, each semester seeded with the cumulative state the previous one left
behind. This is what the GPA performance chart is drawn from.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from .aggregation import aggregate
from .grading import GradeScale
from .models import NO_PRIOR, AggregationResult, PriorCumulativeState, ScoredCourse

logger = logging.getLogger(__name__)

_SEMESTER_WORDS = {"first": 1, "harmattan": 1, "second": 2, "rain": 2, "third": 3, "summer": 3}


@dataclass(frozen=True)
class SemesterRecord:
    level: str
    semester: str
    result: AggregationResult

    @property
    def label(self) -> str:
        level = self.level or "?"
        semester = self.semester or "?"
        return f"{level} {semester}"


def _level_key(level: str) -> Tuple[int, str]:
    digits = re.search(r"\d+", level or "")
    return (int(digits.group()) if digits else 0, (level or "").lower())


def _semester_key(semester: str) -> Tuple[int, str]:
    text = (semester or "").strip().lower()
    digits = re.search(r"\d+", text)
    if digits:
        return int(digits.group()), text
    for word, order in _SEMESTER_WORDS.items():
        if word in text:
            return order, text
    return 99, text


def group_by_semester(courses: Sequence[ScoredCourse]) -> List[Tuple[Tuple[str, str], List[ScoredCourse]]]:
    """Group courses by (level, semester), oldest first. Course order within a group is kept."""
    grouped: Dict[Tuple[str, str], List[ScoredCourse]] = {}
    for course in courses:
        grouped.setdefault((course.level, course.semester), []).append(course)

    keys = sorted(grouped, key=lambda k: (_level_key(k[0]), _semester_key(k[1])))
    return [(key, grouped[key]) for key in keys]


def build_history(
    courses: Sequence[ScoredCourse],
    prior: PriorCumulativeState = NO_PRIOR,
    scale: Optional[GradeScale] = None,
) -> List[SemesterRecord]:
    records: List[SemesterRecord] = []
    state = prior
    for (level, semester), semester_courses in group_by_semester(courses):
        result = aggregate(semester_courses, state, scale)
        records.append(SemesterRecord(level=level, semester=semester, result=result))
        state = result.as_prior()

    logger.debug("Built history of %d semesters", len(records))
    return records


def gpa_trend(records: Sequence[SemesterRecord]) -> str:
    if len(records) < 2:
        return "stable"
    previous = records[-2].result.semester_gpa_display
    latest = records[-1].result.semester_gpa_display
    if latest > previous:
        return "up"
    if latest < previous:
        return "down"
    return "stable"


def history_frame(records: Sequence[SemesterRecord]) -> pd.DataFrame:
    rows = []
    for record in records:
        r = record.result
        rows.append(
            {
                "Semester": record.label,
                "GPA": r.semester_gpa_display,
                "CGPA": r.cumulative_cgpa_display,
                "Units": r.semester_units,
                "Cumulative units": r.cumulative_units,
                "Carryovers": len(r.carryovers),
            }
        )
    return pd.DataFrame(
        rows, columns=["Semester", "GPA", "CGPA", "Units", "Cumulative units", "Carryovers"]
    )
