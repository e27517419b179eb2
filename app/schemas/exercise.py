"""Exercise catalogue schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: str | None = Field(None, max_length=50)
    primary_muscle: str | None = Field(None, max_length=100)
    tags: list[str] | None = None
    equipment_detail: str | None = Field(None, max_length=255)
    description: str | None = None


class ExerciseCreate(ExerciseBase):
    pass


class ExerciseRead(ExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    is_public: bool = True
    owner_id: UUID | None = None


class ExerciseRef(BaseModel):
    """Minimal exercise info for embedding in workout responses."""

    model_config = ConfigDict(from_attributes=True)
    id: UUID
    name: str
    primary_muscle: str | None = None
