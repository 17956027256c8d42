import logging
from typing import Any, Dict, Optional, Sequence

from .aggregation import aggregate
from .config import (
    DISPLAY_PRECISION,
    INTERMEDIATE_PRECISION,
    MAX_RECOMMENDED_LOAD,
    OPTIMAL_LOAD_MAX,
    OPTIMAL_LOAD_MIN,
    PROBATION_LABEL,
    STANDING_THRESHOLDS,
)
from .grading import UNN_5_POINT, GradeScale, round_half_up
from .models import NO_PRIOR, PriorCumulativeState, ScoredCourse

logger = logging.getLogger(__name__)


STANDING_ORDER = {label: rank for rank, (label, _) in enumerate(STANDING_THRESHOLDS, start=1)}
STANDING_ORDER[PROBATION_LABEL] = len(STANDING_THRESHOLDS) + 1


# ------------------------
# Class of degree
# ------------------------
def classify_standing(cgpa: float) -> str:
    # Thresholds apply to the 2-decimal value students see
    shown = round_half_up(cgpa, DISPLAY_PRECISION)
    for label, minimum in STANDING_THRESHOLDS:
        if shown >= minimum:
            return label
    return PROBATION_LABEL


def standing_threshold(label: str) -> float:
    for name, minimum in STANDING_THRESHOLDS:
        if name == label:
            return minimum
    raise ValueError(f"Unknown standing {label!r}. Expected one of: {[n for n, _ in STANDING_THRESHOLDS]}")


# ------------------------
# Course load
# ------------------------
def check_course_load(units: int) -> Dict[str, Any]:
    if units > MAX_RECOMMENDED_LOAD:
        status = "heavy"
        message = (
            f"{units} units is above the recommended maximum of {MAX_RECOMMENDED_LOAD}. "
            f"Heavy loads tend to pull grades down; {OPTIMAL_LOAD_MIN}-{OPTIMAL_LOAD_MAX} units is a safer range."
        )
    elif OPTIMAL_LOAD_MIN <= units <= OPTIMAL_LOAD_MAX:
        status = "optimal"
        message = f"{units} units is within the optimal range ({OPTIMAL_LOAD_MIN}-{OPTIMAL_LOAD_MAX})."
    elif units < OPTIMAL_LOAD_MIN:
        status = "light"
        message = f"{units} units is a light load; the optimal range is {OPTIMAL_LOAD_MIN}-{OPTIMAL_LOAD_MAX}."
    else:
        status = "acceptable"
        message = f"{units} units is manageable but above the optimal range ({OPTIMAL_LOAD_MIN}-{OPTIMAL_LOAD_MAX})."

    return {"units": units, "status": status, "message": message}


# ------------------------
# Planning
# ------------------------
def required_gpa_for_target(
    prior: PriorCumulativeState,
    target_cgpa: float,
    remaining_units: int,
    scale: Optional[GradeScale] = None,
) -> Dict[str, Any]:
    """
    GPA needed over ``remaining_units`` to finish at ``target_cgpa``.

    ``required_gpa`` is None when no units remain; ``possible`` is True when
    the requirement lies within what the scale can award.
    """
    scale = scale or UNN_5_POINT
    completed = prior.cumulative_units if prior.has_history else 0
    current = prior.cumulative_cgpa if prior.has_history else 0.0

    total_units = completed + remaining_units
    target_points = target_cgpa * total_units
    earned_points = current * completed

    steps = [
        f"Target CGPA {target_cgpa:.2f} over {total_units} units needs {target_points:g} weighted points",
        f"Already earned: {current:g} x {completed} = {earned_points:g}",
    ]

    if remaining_units <= 0:
        steps.append("No units remaining, the CGPA can no longer change")
        return {
            "target_cgpa": target_cgpa,
            "required_gpa": None,
            "possible": round_half_up(current, DISPLAY_PRECISION) >= target_cgpa,
            "remaining_units": remaining_units,
            "steps": steps,
        }

    needed = round_half_up((target_points - earned_points) / remaining_units, INTERMEDIATE_PRECISION)
    steps.append(f"Required GPA over the remaining {remaining_units} units = {needed:g}")

    possible = needed <= scale.max_points
    if needed > scale.max_points:
        steps.append(f"Above the scale maximum of {scale.max_points:.1f}: target not reachable")
    elif needed <= 0:
        steps.append("Target already secured whatever the remaining grades")

    logger.debug("Target %.2f needs GPA %s over %d units", target_cgpa, needed, remaining_units)

    return {
        "target_cgpa": target_cgpa,
        "required_gpa": needed,
        "possible": possible,
        "remaining_units": remaining_units,
        "steps": steps,
    }


def check_plan_meets_target(
    planned: Sequence[ScoredCourse],
    target_cgpa: float,
    prior: PriorCumulativeState = NO_PRIOR,
    scale: Optional[GradeScale] = None,
) -> Dict[str, Any]:
    """Aggregate a planned semester on top of ``prior`` and compare with the target."""
    result = aggregate(planned, prior, scale)
    final = result.cumulative_cgpa_display
    final_standing = classify_standing(result.cumulative_cgpa)
    target_standing = classify_standing(target_cgpa)

    return {
        "final_cgpa": final,
        "final_standing": final_standing,
        "target_cgpa": target_cgpa,
        "target_standing": target_standing,
        "meets_target": final >= target_cgpa,
        "meets_target_standing": STANDING_ORDER[final_standing] <= STANDING_ORDER[target_standing],
        "delta_to_target": round_half_up(final - target_cgpa, DISPLAY_PRECISION),
        "result": result,
    }
