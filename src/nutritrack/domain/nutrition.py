"""Nutrition records exchanged with the extraction relay and stored as entries."""

from pydantic import BaseModel, ConfigDict, Field


class NutritionData(BaseModel):
    """Nutrition estimate for a single food item.

    Values are opaque model estimates and are not range checked, but must be
    finite so they survive a JSON round trip.
    """

    model_config = ConfigDict(
        populate_by_name=True, frozen=True, allow_inf_nan=False
    )

    item_name: str = Field(alias="itemName")
    calories: float
    protein: float
    fat: float
    carbs: float


class FoodEntry(NutritionData):
    """A logged food item with its provenance."""

    id: str
    timestamp: int = Field(description="Creation time in epoch milliseconds")
    raw_input: str = Field(alias="rawInput")
