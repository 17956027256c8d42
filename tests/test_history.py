import pytest

from gradex.aggregation import aggregate
from gradex.history import build_history, gpa_trend, group_by_semester, history_frame
from gradex.models import PriorCumulativeState, ScoredCourse


def test_group_by_semester_is_chronological():
    courses = [
        ScoredCourse("CSC201", 3, 70, level="200", semester="1st"),
        ScoredCourse("MTH102", 3, 60, level="100", semester="2nd"),
        ScoredCourse("MTH101", 3, 50, level="100", semester="1st"),
        ScoredCourse("GST101", 2, 65, level="100", semester="1st"),
    ]
    groups = group_by_semester(courses)

    assert [key for key, _ in groups] == [("100", "1st"), ("100", "2nd"), ("200", "1st")]
    assert [c.code for c in groups[0][1]] == ["MTH101", "GST101"]


def test_group_by_semester_understands_words():
    courses = [
        ScoredCourse("A", 3, 70, level="100L", semester="Second"),
        ScoredCourse("B", 3, 70, level="100L", semester="First"),
    ]
    assert [key for key, _ in group_by_semester(courses)] == [("100L", "First"), ("100L", "Second")]


def test_build_history_chains_cumulative_state(first_semester, second_semester):
    records = build_history(second_semester + first_semester)

    assert [r.label for r in records] == ["100 1st", "100 2nd"]
    first, second = records[0].result, records[1].result
    assert first.semester_gpa == 4.1
    assert first.cumulative_cgpa == 4.1

    assert second.prior_units == 10
    assert second.prior_points == 41.0
    assert second.semester_points == 6.0
    assert second.semester_gpa == 1.2
    assert second.cumulative_units == 15
    assert second.cumulative_cgpa == pytest.approx(47 / 15, abs=1e-6)
    assert second.cumulative_cgpa_display == 3.13


def test_chained_history_matches_one_shot(first_semester, second_semester):
    records = build_history(first_semester + second_semester)
    one_shot = aggregate(first_semester + second_semester)

    assert records[-1].result.cumulative_units == one_shot.cumulative_units
    assert records[-1].result.cumulative_cgpa == pytest.approx(one_shot.cumulative_cgpa, abs=1e-6)


def test_history_starts_from_prior(first_semester):
    records = build_history(first_semester, PriorCumulativeState(3.0, 30))
    assert records[0].result.prior_points == 90.0
    assert records[0].result.cumulative_units == 40


def test_empty_history():
    assert build_history([]) == []
    assert gpa_trend([]) == "stable"


def test_gpa_trend(first_semester, second_semester):
    assert gpa_trend(build_history(first_semester + second_semester)) == "down"
    assert gpa_trend(build_history(first_semester)) == "stable"

    improved = [ScoredCourse("MTH102", 3, 80, level="100", semester="2nd")]
    assert gpa_trend(build_history(first_semester + improved)) == "up"


def test_history_frame(first_semester, second_semester):
    frame = history_frame(build_history(first_semester + second_semester))

    assert list(frame.columns) == ["Semester", "GPA", "CGPA", "Units", "Cumulative units", "Carryovers"]
    assert frame["GPA"].tolist() == [4.1, 1.2]
    assert frame["CGPA"].tolist() == [4.1, 3.13]
    assert frame["Carryovers"].tolist() == [0, 1]
