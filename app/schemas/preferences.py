"""User preference schemas."""

from pydantic import BaseModel, ConfigDict

from app.core.enums import Theme, WeightUnit


class PreferencesUpdate(BaseModel):
    weight_unit: WeightUnit | None = None
    theme: Theme | None = None


class PreferencesRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    weight_unit: WeightUnit = WeightUnit.KG
    theme: Theme = Theme.SYSTEM
