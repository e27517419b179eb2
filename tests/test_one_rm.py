import pytest

from app.core.enums import OneRMFormulaName
from app.services.one_rm import (
    calculate_1rm,
    calculate_all_1rm,
    calculate_average_1rm,
    calculate_percentage_1rm,
    estimate_reps_at_percentage,
    round_half_up,
)


def test_round_half_up():
    assert round_half_up(112.5) == 113
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2


@pytest.mark.parametrize(
    "formula, expected",
    [
        (OneRMFormulaName.EPLEY, 117),
        (OneRMFormulaName.BRZYCKI, 113),
        (OneRMFormulaName.LOMBARDI, 117),
        (OneRMFormulaName.OCONNER, 113),
        (OneRMFormulaName.MAYHEW, 119),
    ],
)
def test_formulas_for_100_by_5(formula, expected):
    assert calculate_1rm(100, 5, formula) == expected


def test_single_rep_returns_weight():
    for formula in OneRMFormulaName:
        assert calculate_1rm(140, 1, formula) == 140


def test_brzycki_is_zero_from_37_reps():
    assert calculate_1rm(50, 37, OneRMFormulaName.BRZYCKI) == 0


def test_non_positive_input_returns_zero():
    assert calculate_1rm(0, 5) == 0
    assert calculate_1rm(100, 0) == 0
    assert calculate_1rm(-20, 5) == 0


def test_all_and_average():
    assert calculate_all_1rm(100, 5) == {
        "epley": 117,
        "brzycki": 113,
        "lombardi": 117,
        "oconner": 113,
        "mayhew": 119,
    }
    assert calculate_average_1rm(100, 5) == 116


def test_percentage_of_1rm():
    assert calculate_percentage_1rm(200, 80) == 160
    assert calculate_percentage_1rm(117, 50) == 59


def test_reps_at_percentage():
    assert estimate_reps_at_percentage(80) == 8
    assert estimate_reps_at_percentage(100) == 1
    assert estimate_reps_at_percentage(120) == 1
    assert estimate_reps_at_percentage(0) == 0
    assert estimate_reps_at_percentage(10) == 30
