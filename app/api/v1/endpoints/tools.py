"""Calculators: one-rep max estimates and plate loading (pure logic, no DB)."""

import math

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from app.core.constants import BARBELL_WEIGHTS
from app.core.enums import OneRMFormulaName
from app.services.one_rm import (
    calculate_1rm,
    calculate_all_1rm,
    calculate_average_1rm,
    calculate_percentage_1rm,
    estimate_reps_at_percentage,
)

router = APIRouter()


# ---- One-rep max ----


class OneRMResponse(BaseModel):
    weight: float
    reps: int
    formula: OneRMFormulaName
    one_rm: int
    average: int
    all_formulas: dict[str, int]


class PercentageResponse(BaseModel):
    one_rm: float
    percentage: float
    weight: int


class RepsAtPercentageResponse(BaseModel):
    percentage: float
    reps: int


@router.get("/one-rm", response_model=OneRMResponse)
async def one_rm(
    weight: float = Query(..., gt=0),
    reps: int = Query(..., ge=1, le=100),
    formula: OneRMFormulaName = OneRMFormulaName.EPLEY,
):
    """Estimated 1RM with the chosen formula, plus every formula and their average."""
    return OneRMResponse(
        weight=weight,
        reps=reps,
        formula=formula,
        one_rm=calculate_1rm(weight, reps, formula),
        average=calculate_average_1rm(weight, reps),
        all_formulas=calculate_all_1rm(weight, reps),
    )


@router.get("/one-rm/percentage", response_model=PercentageResponse)
async def one_rm_percentage(
    one_rm: float = Query(..., gt=0),
    percentage: float = Query(..., ge=0, le=150),
):
    return PercentageResponse(
        one_rm=one_rm,
        percentage=percentage,
        weight=calculate_percentage_1rm(one_rm, percentage),
    )


@router.get("/one-rm/reps-at-percentage", response_model=RepsAtPercentageResponse)
async def reps_at_percentage(percentage: float = Query(..., ge=0, le=150)):
    """Approximate reps to failure at a percentage of 1RM (inverse Epley)."""
    return RepsAtPercentageResponse(percentage=percentage, reps=estimate_reps_at_percentage(percentage))


# ---- Plate calculator ----


class PlateCalculatorResponse(BaseModel):
    bar: str
    bar_weight: float
    per_side: float
    plates_per_side: list[float]
    total_weight: float  # bar + plates


def _plates_per_side(bar_weight: float, target: float, plates: list[float]) -> tuple[float, list[float]]:
    """Greedy split of (target - bar) / 2 into plates, heaviest first. Plates must be positive."""
    per_side = max(0.0, (target - bar_weight) / 2.0)
    loaded: list[float] = []
    remaining = per_side
    for plate in sorted(set(plates), reverse=True):
        count, remaining = divmod(remaining + 0.001, plate)  # float tolerance
        remaining -= 0.001
        loaded.extend([plate] * int(count))
    return per_side, loaded


@router.get("/plate-calculator", response_model=PlateCalculatorResponse)
async def plate_calculator(
    target_weight: float = Query(..., gt=0, allow_inf_nan=False),
    bar: str = "Olympic Barbell",
    available_plates: str = "20,15,10,5,2.5,1.25",
):
    """Plates per side to reach target_weight on one of the known bars (kg)."""
    if bar not in BARBELL_WEIGHTS:
        raise HTTPException(status_code=400, detail=f"Unknown bar: {bar}")
    try:
        plates = [float(x.strip()) for x in available_plates.split(",") if x.strip()]
    except ValueError:
        raise HTTPException(status_code=400, detail="available_plates must be comma-separated numbers") from None
    if not plates or any(not math.isfinite(p) or p <= 0 for p in plates):
        raise HTTPException(status_code=400, detail="available_plates must be positive numbers")
    bar_weight = BARBELL_WEIGHTS[bar]
    per_side, plates_per_side = _plates_per_side(bar_weight, target_weight, plates)
    return PlateCalculatorResponse(
        bar=bar,
        bar_weight=bar_weight,
        per_side=per_side,
        plates_per_side=plates_per_side,
        total_weight=bar_weight + 2 * sum(plates_per_side),
    )
