"""Progression templates and strategies (built-in data, no DB)."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.core.enums import Difficulty, ProgressionType, TargetGoal
from app.core.security import get_current_user_id
from app.schemas.progression import (
    ApplyStrategyRequest,
    ApplyStrategyResponse,
    ApplyTemplateRequest,
    ApplyTemplateResponse,
    ProgressionStrategy,
    ProgressionTemplate,
)
from app.services.progression import (
    DEFAULT_STRATEGIES,
    PROGRESSION_TEMPLATES,
    apply_progression_strategy_to_exercise,
    apply_progression_template,
    determine_exercise_type,
    get_template_by_id,
    get_templates_by_difficulty,
    get_templates_by_goal,
    get_templates_by_type,
    strategy_for_template,
    template_to_weekly_progressions,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_user_id)])


@router.get("/templates", response_model=list[ProgressionTemplate])
async def list_templates(
    goal: TargetGoal | None = None,
    difficulty: Difficulty | None = None,
    type: ProgressionType | None = None,
):
    """Built-in templates; filters combine (all must match)."""
    templates = list(PROGRESSION_TEMPLATES)
    if goal:
        ids = {t.id for t in get_templates_by_goal(goal.value)}
        templates = [t for t in templates if t.id in ids]
    if difficulty:
        ids = {t.id for t in get_templates_by_difficulty(difficulty.value)}
        templates = [t for t in templates if t.id in ids]
    if type:
        ids = {t.id for t in get_templates_by_type(type.value)}
        templates = [t for t in templates if t.id in ids]
    return templates


@router.get("/templates/{template_id}", response_model=ProgressionTemplate)
async def get_template(template_id: str):
    template = get_template_by_id(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Progression template not found")
    return template


@router.post("/templates/{template_id}/apply", response_model=ApplyTemplateResponse)
async def apply_template(template_id: str, payload: ApplyTemplateRequest):
    """Template scaled to `weeks` weeks (overrides replace fields in every week)."""
    template = get_template_by_id(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Progression template not found")
    try:
        pattern = apply_progression_template(template_id, payload.weeks, payload.overrides)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return ApplyTemplateResponse(
        template_id=template.id,
        progression_type=template.type,
        strategy=strategy_for_template(template),
        weekly_progressions=template_to_weekly_progressions(pattern),
    )


@router.get("/strategies", response_model=dict[str, ProgressionStrategy])
async def list_strategies():
    return DEFAULT_STRATEGIES


@router.post("/apply-strategy", response_model=ApplyStrategyResponse)
async def apply_strategy(payload: ApplyStrategyRequest):
    """Preview one exercise's defaults for a week under a strategy."""
    return ApplyStrategyResponse(
        exercise_type=determine_exercise_type(payload.exercise_name),
        defaults=apply_progression_strategy_to_exercise(
            payload.defaults, payload.week_intensity, payload.strategy
        ),
    )
