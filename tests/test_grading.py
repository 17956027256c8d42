import logging
import math

import pytest

from gradex.grading import (
    UNN_5_POINT,
    GradeBand,
    GradeScale,
    InvalidGradeScaleError,
    classify_score,
    is_carryover,
    round_half_up,
)


@pytest.mark.parametrize(
    "score,letter,points",
    [
        (100, "A", 5.0),
        (70, "A", 5.0),
        (69, "B", 4.0),
        (60, "B", 4.0),
        (59, "C", 3.0),
        (50, "C", 3.0),
        (49, "D", 2.0),
        (45, "D", 2.0),
        (44, "E", 1.0),
        (40, "E", 1.0),
        (39, "F", 0.0),
        (0, "F", 0.0),
    ],
)
def test_default_band_boundaries(score, letter, points):
    result = classify_score(score)
    assert result.letter == letter
    assert result.points == points
    assert result.scale == "UNN 5-point"


def test_every_integer_score_matches_exactly_one_band():
    for score in range(0, 101):
        matches = [b for b in UNN_5_POINT.bands if b.min_score <= score <= b.max_score]
        assert len(matches) == 1
        assert classify_score(score).band == matches[0]


def test_points_never_decrease_as_score_rises():
    points = [classify_score(s).points for s in range(0, 101)]
    assert points == sorted(points)


def test_carryover_matches_failing_grade():
    for score in range(0, 101):
        assert is_carryover(score) == (classify_score(score).letter == "F")
    assert is_carryover(39)
    assert not is_carryover(40)


def test_out_of_range_scores_are_clamped(caplog):
    with caplog.at_level(logging.WARNING, logger="gradex.grading"):
        assert classify_score(-5).letter == "F"
        assert classify_score(150).letter == "A"
    assert "clamping" in caplog.text


def test_unmatched_score_falls_back_to_lowest_band():
    assert classify_score(float("nan")).letter == "F"
    assert is_carryover(float("nan"))


def test_fractional_score_takes_band_whose_lower_bound_it_reaches():
    assert classify_score(69.5).letter == "B"
    assert classify_score(39.9).letter == "F"
    assert classify_score(44.99).letter == "E"


def test_custom_scale_is_used_and_named():
    scale = GradeScale.from_rows(
        "Half-point",
        [
            ("A", 75, 100, 5.0),
            ("B+", 65, 74, 4.5),
            ("B", 55, 64, 4.0),
            ("C", 50, 54, 3.0),
            ("F", 0, 49, 0.0),
        ],
    )
    result = classify_score(66, scale)
    assert (result.letter, result.points, result.scale) == ("B+", 4.5, "Half-point")
    # Carryover follows the scale's own lowest band
    assert is_carryover(45, scale)
    assert not is_carryover(45)


def test_bands_are_ordered_highest_first_whatever_the_input_order():
    scale = GradeScale("Pass/Fail", [GradeBand(0, 49, "F", 0.0), GradeBand(50, 100, "P", 1.0)])
    assert scale.letters() == ("P", "F")
    assert scale.highest.letter == "P"
    assert scale.lowest.letter == "F"
    assert scale.max_points == 1.0


@pytest.mark.parametrize(
    "rows,message",
    [
        ([], "no bands"),
        ([("A", 50, 100, 5.0), ("F", 0, 50, 0.0)], "overlap"),
        ([("A", 60, 100, 5.0), ("F", 0, 50, 0.0)], "Gap"),
        ([("A", 60.5, 100, 5.0), ("F", 0, 59.6, 0.0)], "no band covers score 60"),
        ([("A", 50, 90, 5.0), ("F", 0, 49, 0.0)], "tops out"),
        ([("A", 50, 100, 5.0), ("F", 10, 49, 0.0)], "starts at"),
        ([("A", 50, 100, 5.0), ("A", 0, 49, 0.0)], "repeats a letter"),
        ([("A", 50, 100, 5.0), ("F", 0, 49, -1.0)], "negative points"),
        ([("A", 50, 100, 5.0), ("F", float("nan"), 49, 0.0)], "non-numeric"),
    ],
)
def test_malformed_scales_are_rejected(rows, message):
    with pytest.raises(InvalidGradeScaleError, match=message):
        GradeScale.from_rows("Broken", rows)


def test_band_with_min_above_max_is_rejected():
    with pytest.raises(InvalidGradeScaleError, match="above max"):
        GradeScale("Broken", [GradeBand(0, 100, "A", 5.0), GradeBand(60, 40, "B", 4.0)])


def test_invalid_scale_error_is_a_value_error():
    assert issubclass(InvalidGradeScaleError, ValueError)


def test_describe_lists_every_band():
    text = UNN_5_POINT.describe()
    assert text.startswith("UNN 5-point: A 70-100 = 5.0")
    assert "F 0-39 = 0.0" in text


def test_round_half_up():
    assert round_half_up(2.675, 2) == 2.68
    assert round_half_up(3.4666666, 2) == 3.47
    assert round_half_up(52 / 15, 6) == 3.466667
    assert round_half_up(0.125, 2) == 0.13
    assert math.isclose(round_half_up(4.1, 6), 4.1)
