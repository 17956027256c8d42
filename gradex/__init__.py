"""
Gradex: GPA / CGPA calculation on the 5-point scale.

    from gradex import ScoredCourse, PriorCumulativeState, aggregate

    result = aggregate(
        [ScoredCourse("MTH101", 3, 65), ScoredCourse("CHM101", 4, 72)],
        PriorCumulativeState(cumulative_cgpa=3.0, cumulative_units=10),
    )
    result.cumulative_cgpa_display
    result.steps
"""

__version__ = "1.0.0"

from .grading import (
    UNN_5_POINT,
    GradeBand,
    GradeResult,
    GradeScale,
    InvalidGradeScaleError,
    classify_score,
    is_carryover,
    round_half_up,
)
from .models import (
    NO_PRIOR,
    AggregationResult,
    CourseBreakdownEntry,
    PriorCumulativeState,
    ScoredCourse,
)
from .aggregation import aggregate, calculate_gpa, carryover_courses

__all__ = [
    "__version__",
    # Grading
    "UNN_5_POINT",
    "GradeBand",
    "GradeResult",
    "GradeScale",
    "InvalidGradeScaleError",
    "classify_score",
    "is_carryover",
    "round_half_up",
    # Models
    "NO_PRIOR",
    "AggregationResult",
    "CourseBreakdownEntry",
    "PriorCumulativeState",
    "ScoredCourse",
    # Aggregation
    "aggregate",
    "calculate_gpa",
    "carryover_courses",
]
