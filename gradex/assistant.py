"""
Canned explanation text for the chat assistant.

These templates run the same calculation engine as the dashboard and embed
its step log verbatim, so what the assistant says always matches what the
numbers show.
"""

from typing import Optional

from .grading import UNN_5_POINT, GradeScale
from .models import AggregationResult
from .standing import classify_standing

_STANDING_MESSAGES = {
    "First Class": "You are doing excellently. First class is within reach, keep it up.",
    "Second Class Upper": "Solid performance. You are in the second class upper range.",
    "Second Class Lower": "You are in the second class lower range. There is room to push higher.",
    "Third Class": "Your CGPA is in the third class range. Many students have turned things around from here.",
    "Pass": "Your CGPA is in the pass range. Let us work on a plan to improve.",
    "Probation": "Your CGPA is low right now. Meet your course adviser and let us plan a recovery.",
}


def grading_scale_summary(scale: Optional[GradeScale] = None) -> str:
    scale = scale or UNN_5_POINT
    lines = [f"{band.letter} gives you {band.points:g} points" for band in scale.bands]
    return "\n".join(lines)


def explain_result(result: AggregationResult, name: str = "Student", scale: Optional[GradeScale] = None) -> str:
    if result.cumulative_units == 0:
        return (
            f"You have not added any courses yet {name}\n\n"
            "Once you add them I can calculate your CGPA\n\n"
            f"Quick breakdown of grading ({result.scale})\n\n"
            f"{grading_scale_summary(scale)}\n\n"
            "To get your CGPA multiply each course unit by your grade point, "
            "add everything and divide by total units"
        )

    parts = [f"Your current CGPA is {result.cumulative_cgpa_display:.2f} {name}"]

    if result.semester_units > 0 and result.semester_gpa_display != result.cumulative_cgpa_display:
        parts.append(f"This semester GPA is {result.semester_gpa_display:.2f}")

    carryovers = result.carryovers
    if carryovers:
        codes = ", ".join(entry.code for entry in carryovers)
        plural = "s" if len(carryovers) > 1 else ""
        parts.append(f"You have {len(carryovers)} carryover{plural} ({codes}). Prioritise clearing them early")

    standing = classify_standing(result.cumulative_cgpa)
    parts.append(f"{standing}: {_STANDING_MESSAGES[standing]}")

    parts.append("Here is how it was calculated:\n" + "\n".join(result.steps))
    return "\n\n".join(parts)
