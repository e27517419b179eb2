"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    dashboard,
    exercises,
    export,
    health,
    mesocycles,
    preferences,
    progression,
    stats,
    tools,
    workouts,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(mesocycles.router, prefix="/mesocycles", tags=["mesocycles"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])

api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(export.router, prefix="/export", tags=["export"])
api_router.include_router(progression.router, prefix="/progression", tags=["progression"])
api_router.include_router(preferences.router, prefix="/preferences", tags=["preferences"])
api_router.include_router(tools.router, prefix="/tools", tags=["tools"])
