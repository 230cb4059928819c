from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class ProfileInputSchema(BaseModel):
    user_id: str | None = None
    sex: Literal["male", "female"] | None = Field(None, examples=["male"])
    age_years: int | None = Field(None, ge=10, le=100, examples=[30])
    birth_date: date | None = None
    height_cm: float | None = Field(None, ge=100, le=250, examples=[180])
    weight_kg: float | None = Field(None, gt=0, le=400, examples=[80])
    daily_activity: Literal["sedentary", "light", "moderate", "active", "very_active"] = "moderate"
    exercise_frequency: Literal["never", "one_to_two", "three_to_four", "five_to_six", "daily"] = "three_to_four"
    weight_unit: Literal["kilograms", "pounds"] = "kilograms"


class GoalInputSchema(BaseModel):
    objective: Literal["lose", "gain", "maintain"] = Field(..., examples=["lose"])
    starting_weight_kg: float = Field(..., gt=0, examples=[80])
    target_weight_kg: float = Field(..., gt=0, examples=[72])
    weekly_change_kg: float = Field(0.0, ge=0, examples=[0.5])


class BuilderInputSchema(BaseModel):
    preferred_diet: Literal["balanced", "low_fat", "low_carb", "keto"] = "balanced"
    calorie_floor: Literal["standard", "low"] | None = None
    training_type: Literal["none_or_relaxed_activity", "weightlifting", "cardio", "cardio_and_weightlifting"] | None = None
    calorie_distribution: Literal["even", "varied"] | None = None
    protein_intake: Literal["low", "moderate", "high", "very_high"] | None = None


class DietPlanRequest(BaseModel):
    profile: ProfileInputSchema
    goal: GoalInputSchema | None = None
    builder: BuilderInputSchema = Field(default_factory=BuilderInputSchema)
    # weekday indices, Monday = 0
    training_days: list[Annotated[int, Field(ge=0, le=6)]] | None = Field(None, max_length=7)
    workout_dates: list[date] | None = None
    training_difficulty: Literal["beginner", "intermediate", "advanced"] | None = None


class GoalSummaryRequest(BaseModel):
    goal: GoalInputSchema
    weight_unit: Literal["kilograms", "pounds"] = "kilograms"
    current_weight_kg: float | None = Field(None, gt=0)


class DayTargetSchema(BaseModel):
    calories: int
    protein_g: int
    carb_g: int
    fat_g: int


class DietPlanSchema(BaseModel):
    user_id: str | None = None
    tdee_estimate: int
    calorie_target: int
    floor_applied: bool
    objective: Literal["lose", "gain", "maintain"]
    weekly_change_kg: float
    preferred_diet: str
    calorie_floor: str
    training_type: str
    calorie_distribution: str
    protein_intake: str
    days: list[DayTargetSchema]


class SavedDietPlanSchema(BaseModel):
    plan_id: str
    created_at: datetime
    plan: DietPlanSchema


class GoalSummarySchema(BaseModel):
    objective: Literal["lose", "gain", "maintain"]
    total_weight_change_kg: float
    estimated_weeks: int
    estimated_months: int
    rate_category: Literal["conservative", "standard", "aggressive"]
    daily_calorie_delta: int
    weekly_change: float
    weight_unit: Literal["kilograms", "pounds"]
    progress: float | None = None


class APIResponse(BaseModel):
    ok: bool = True
    data: dict | None = None
    error: dict | None = None
