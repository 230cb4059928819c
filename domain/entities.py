from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal, Tuple


Sex = Literal["male", "female"]
DailyActivity = Literal["sedentary", "light", "moderate", "active", "very_active"]
ExerciseFrequency = Literal["never", "one_to_two", "three_to_four", "five_to_six", "daily"]
WeightUnit = Literal["kilograms", "pounds"]

Objective = Literal["lose", "gain", "maintain"]
GoalStatus = Literal["active", "completed", "abandoned", "paused"]
RateCategory = Literal["conservative", "standard", "aggressive"]

PreferredDiet = Literal["balanced", "low_fat", "low_carb", "keto"]
CalorieFloor = Literal["standard", "low"]
TrainingType = Literal["none_or_relaxed_activity", "weightlifting", "cardio", "cardio_and_weightlifting"]
CalorieDistribution = Literal["even", "varied"]
ProteinIntake = Literal["low", "moderate", "high", "very_high"]
Difficulty = Literal["beginner", "intermediate", "advanced"]

CONSERVATIVE_RATE_KG = 0.4
AGGRESSIVE_RATE_KG = 0.8
WEEKS_PER_MONTH = 4.33


@dataclass(frozen=True)
class UserProfile:
    user_id: str | None = None
    sex: Sex | None = None
    age_years: int | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    daily_activity: DailyActivity = "moderate"
    exercise_frequency: ExerciseFrequency = "three_to_four"
    weight_unit: WeightUnit = "kilograms"


def age_on(date_of_birth: date, on: date) -> int:
    years = on.year - date_of_birth.year
    if (on.month, on.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return years


@dataclass(frozen=True)
class WeightGoal:
    objective: Objective
    starting_weight_kg: float
    target_weight_kg: float
    weekly_change_kg: float
    goal_id: str | None = None
    user_id: str | None = None
    status: GoalStatus = "active"

    @property
    def is_losing(self) -> bool:
        return self.objective == "lose"

    @property
    def is_gaining(self) -> bool:
        return self.objective == "gain"

    @property
    def is_maintaining(self) -> bool:
        return self.objective == "maintain"

    @property
    def total_weight_change(self) -> float:
        return abs(self.target_weight_kg - self.starting_weight_kg)

    @property
    def estimated_weeks(self) -> int:
        if self.weekly_change_kg <= 0:
            return 0
        return math.ceil(self.total_weight_change / self.weekly_change_kg)

    @property
    def estimated_months(self) -> int:
        return math.ceil(self.estimated_weeks / WEEKS_PER_MONTH)

    @property
    def rate_category(self) -> RateCategory:
        if self.weekly_change_kg <= CONSERVATIVE_RATE_KG:
            return "conservative"
        if self.weekly_change_kg >= AGGRESSIVE_RATE_KG:
            return "aggressive"
        return "standard"

    def calculate_progress(self, current_weight_kg: float) -> float:
        """Fraction 0..1 of the way from starting to target weight.

        Movement away from the target counts as no progress.
        """
        if self.target_weight_kg == self.starting_weight_kg:
            return 0.0
        if self.target_weight_kg < self.starting_weight_kg:
            moving_right_way = current_weight_kg < self.starting_weight_kg
        else:
            moving_right_way = current_weight_kg > self.starting_weight_kg
        if not moving_right_way:
            return 0.0
        done = abs(self.starting_weight_kg - current_weight_kg)
        return min(max(done / self.total_weight_change, 0.0), 1.0)

    def weight_changed(self, current_weight_kg: float) -> float:
        return self.starting_weight_kg - current_weight_kg

    def weight_remaining(self, current_weight_kg: float) -> float:
        return abs(self.target_weight_kg - current_weight_kg)


@dataclass(frozen=True)
class DietPlanBuilder:
    preferred_diet: PreferredDiet = "balanced"
    calorie_floor: CalorieFloor | None = None
    training_type: TrainingType | None = None
    calorie_distribution: CalorieDistribution | None = None
    protein_intake: ProteinIntake | None = None


@dataclass(frozen=True)
class DayTarget:
    calories: int
    protein_g: int
    carb_g: int
    fat_g: int

    @property
    def macro_kcal(self) -> int:
        return self.protein_g * 4 + self.carb_g * 4 + self.fat_g * 9


@dataclass(frozen=True)
class DietPlan:
    user_id: str | None
    tdee_estimate: int
    calorie_target: int
    floor_applied: bool
    objective: Objective
    weekly_change_kg: float
    preferred_diet: PreferredDiet
    calorie_floor: CalorieFloor
    training_type: TrainingType
    calorie_distribution: CalorieDistribution
    protein_intake: ProteinIntake
    days: Tuple[DayTarget, ...]


@dataclass(frozen=True)
class SavedDietPlan:
    plan_id: str
    created_at: datetime
    plan: DietPlan
