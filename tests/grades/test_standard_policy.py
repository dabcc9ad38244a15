from __future__ import annotations

import pytest

from college_erp.grades.policy.standard_policy import StandardGradingPolicy


@pytest.mark.parametrize(
    "pct, grade",
    [
        (95, "O"),
        (90, "O"),
        (85, "A+"),
        (72, "A"),
        (60, "B+"),
        (57, "B"),
        (52, "B"),
        (50, "B"),
        (46, "C"),
        (42, "C"),
        (40, "C"),
        (39.99, "F"),
        (0, "F"),
    ],
)
def test_letter_grade_thresholds(pct, grade):
    assert StandardGradingPolicy().grade_for(pct) == grade


def test_grade_points_table():
    policy = StandardGradingPolicy()

    assert [policy.points_for(g) for g in ["O", "A+", "A", "B+", "B", "C+", "C", "D", "F"]] == [
        10, 10, 9, 8, 7, 6, 5, 4, 0,
    ]


def test_unknown_grade_scores_zero():
    policy = StandardGradingPolicy()

    assert policy.points_for("AB") == 0
    assert not policy.knows_grade("AB")


def test_pass_mark_is_configurable():
    policy = StandardGradingPolicy(pass_percentage=33)

    assert policy.pass_percentage == 33
    assert policy.is_pass(35)
    assert policy.grade_for(35) == "D"
    assert not policy.is_pass(32)
    assert policy.grade_for(32) == "F"


def test_custom_threshold_table():
    policy = StandardGradingPolicy(thresholds=[("P", 50)], grade_points={"P": 5, "F": 0})

    assert policy.grade_for(70) == "P"
    assert policy.grade_for(49) == "F"
    assert policy.points_for("P") == 5


def test_legacy_pass_mark_opens_the_d_band():
    policy = StandardGradingPolicy(pass_percentage=33)

    assert [policy.grade_for(p) for p in (45, 39, 33, 32.5)] == ["C", "D", "D", "F"]


def test_grade_below_a_raised_pass_mark_is_f():
    policy = StandardGradingPolicy(pass_percentage=45)

    assert policy.grade_for(42) == "F"
    assert not policy.is_pass(42)
    assert policy.grade_for(45) == "D"
    assert policy.grade_for(50) == "B"
