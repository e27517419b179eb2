"""One-rep max estimation.

Formulas (w = weight, r = reps):
- Epley:    w * (1 + r/30)
- Brzycki:  w * 36 / (37 - r)       (undefined at r >= 37 -> 0)
- Lombardi: w * r^0.10
- O'Conner: w * (1 + r/40)
- Mayhew:   100w / (52.2 + 41.9 * e^(-0.055 r))

All results are whole numbers rounded half-up (112.5 -> 113).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from app.core.enums import OneRMFormulaName

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _epley(weight: float, reps: int) -> int:
    if reps == 1:
        return round_half_up(weight)
    return round_half_up(weight * (1 + reps / 30))


def _brzycki(weight: float, reps: int) -> int:
    if reps == 1:
        return round_half_up(weight)
    if reps >= 37:
        return 0
    return round_half_up(weight * (36 / (37 - reps)))


def _lombardi(weight: float, reps: int) -> int:
    return round_half_up(weight * math.pow(reps, 0.1))


def _oconner(weight: float, reps: int) -> int:
    if reps == 1:
        return round_half_up(weight)
    return round_half_up(weight * (1 + reps / 40))


def _mayhew(weight: float, reps: int) -> int:
    if reps == 1:
        return round_half_up(weight)
    return round_half_up((100 * weight) / (52.2 + 41.9 * math.exp(-0.055 * reps)))


FORMULAS: dict[OneRMFormulaName, Callable[[float, int], int]] = {
    OneRMFormulaName.EPLEY: _epley,
    OneRMFormulaName.BRZYCKI: _brzycki,
    OneRMFormulaName.LOMBARDI: _lombardi,
    OneRMFormulaName.OCONNER: _oconner,
    OneRMFormulaName.MAYHEW: _mayhew,
}


def calculate_1rm(
    weight: float,
    reps: int,
    formula: OneRMFormulaName = OneRMFormulaName.EPLEY,
) -> int:
    """Estimate 1RM with one formula. Non-positive weight or reps -> 0."""
    if weight <= 0 or reps <= 0:
        logger.warning("1RM requested with non-positive input: weight=%s reps=%s", weight, reps)
        return 0
    result = FORMULAS[formula](weight, reps)
    logger.debug("1RM %s: %s x %s -> %s", formula.value, weight, reps, result)
    return result


def calculate_all_1rm(weight: float, reps: int) -> dict[str, int]:
    return {name.value: calculate_1rm(weight, reps, name) for name in FORMULAS}


def calculate_average_1rm(weight: float, reps: int) -> int:
    """Half-up rounded mean of every formula's (already rounded) estimate."""
    results = [fn(weight, reps) for fn in FORMULAS.values()]
    return round_half_up(sum(results) / len(results))


def calculate_percentage_1rm(one_rm: float, percentage: float) -> int:
    return round_half_up(one_rm * (percentage / 100))


def estimate_reps_at_percentage(percentage: float) -> int:
    """Inverse Epley: r = 30 * (100/pct - 1), clamped to 1..30."""
    if percentage >= 100:
        return 1
    if percentage <= 0:
        return 0
    reps = round_half_up(30 * (100 / percentage - 1))
    return max(1, min(30, reps))
