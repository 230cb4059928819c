from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Sequence

from domain.entities import (
    CalorieDistribution,
    DayTarget,
    Difficulty,
    Objective,
    PreferredDiet,
    ProteinIntake,
    TrainingType,
    UserProfile,
)


KCAL_PER_G_PROTEIN = 4.0
KCAL_PER_G_CARB = 4.0
KCAL_PER_G_FAT = 9.0
KG_TO_LB = 2.20462

# fallbacks for incomplete profiles
DEFAULT_WEIGHT_KG = 70.0
MIN_WEIGHT_KG = 30.0
DEFAULT_HEIGHT_CM = 175.0
MIN_HEIGHT_CM = 120.0
DEFAULT_AGE = 30
MIN_AGE = 14
MIN_TDEE = 1000.0

DAILY_ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.35,
    "moderate": 1.5,
    "active": 1.7,
    "very_active": 1.9,
}

EXERCISE_FREQUENCY_ADJUSTMENTS = {
    "never": 0.0,
    "one_to_two": 0.05,
    "three_to_four": 0.10,
    "five_to_six": 0.15,
    "daily": 0.20,
}

CALORIE_FLOOR_KCAL = {
    "standard": 1200.0,
    "low": 800.0,
}

PROTEIN_G_PER_KG = {
    "low": 1.6,
    "moderate": 2.0,
    "high": 2.2,
    "very_high": 2.6,
}

# share of the day's calories given to fat
FAT_ENERGY_FRACTION = {
    "balanced": 0.30,
    "low_fat": 0.20,
}

# share of the day's calories reserved for carbs; fat takes what is left
CARB_ENERGY_FRACTION = {
    "low_carb": 0.20,
    "keto": 0.05,
}

PROTEIN_INTAKE_BY_DIFFICULTY = {
    "beginner": "moderate",
    "intermediate": "high",
    "advanced": "very_high",
}

# Monday, Wednesday, Friday
DEFAULT_TRAINING_DAYS = frozenset({0, 2, 4})


@dataclass(frozen=True)
class PlanningParams:
    kcal_per_kg: float = 7700.0
    max_weekly_change_kg: float = 1.5
    training_day_ratio: float = 1.10
    rest_day_ratio: float = 0.925


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def bmr_mifflin(sex: str, age: int, height_cm: float, weight_kg: float) -> float:
    if sex == "male":
        return 10 * weight_kg + 6.25 * height_cm - 5 * age + 5
    return 10 * weight_kg + 6.25 * height_cm - 5 * age - 161


def body_weight_kg(profile: UserProfile) -> float:
    weight = profile.weight_kg if profile.weight_kg is not None else DEFAULT_WEIGHT_KG
    return max(weight, MIN_WEIGHT_KG)


def activity_multiplier(daily_activity: str, exercise_frequency: str) -> float:
    base = DAILY_ACTIVITY_MULTIPLIERS.get(daily_activity, DAILY_ACTIVITY_MULTIPLIERS["moderate"])
    adj = EXERCISE_FREQUENCY_ADJUSTMENTS.get(exercise_frequency, EXERCISE_FREQUENCY_ADJUSTMENTS["three_to_four"])
    return base + adj


def estimate_tdee(profile: UserProfile) -> float:
    sex = profile.sex or "male"
    height_cm = max(profile.height_cm if profile.height_cm is not None else DEFAULT_HEIGHT_CM, MIN_HEIGHT_CM)
    age = max(profile.age_years if profile.age_years is not None else DEFAULT_AGE, MIN_AGE)
    bmr = bmr_mifflin(sex, age, height_cm, body_weight_kg(profile))
    tdee = bmr * activity_multiplier(profile.daily_activity, profile.exercise_frequency)
    return max(MIN_TDEE, tdee)


def daily_calorie_delta(weekly_change_kg: float, kcal_per_kg: float = 7700.0) -> float:
    return weekly_change_kg * kcal_per_kg / 7.0


def target_kcal_from_goal(
    tdee: float,
    objective: Objective,
    weekly_change_kg: float,
    params: PlanningParams = PlanningParams(),
) -> float:
    rate = clamp(weekly_change_kg, 0.0, params.max_weekly_change_kg)
    delta = daily_calorie_delta(rate, params.kcal_per_kg)
    if objective == "lose":
        return tdee - delta
    if objective == "gain":
        return tdee + delta
    return tdee


def protein_grams(weight_kg: float, intake: ProteinIntake) -> float:
    return PROTEIN_G_PER_KG.get(intake, PROTEIN_G_PER_KG["moderate"]) * weight_kg


def daily_calories(
    *,
    target_kcal: float,
    minimum_kcal: float,
    distribution: CalorieDistribution,
    training_type: TrainingType,
    training_days: Iterable[int] | None = None,
    params: PlanningParams = PlanningParams(),
) -> List[float]:
    """Calories for Monday..Sunday."""
    if distribution != "varied" or training_type == "none_or_relaxed_activity":
        return [max(target_kcal, minimum_kcal)] * 7

    days = DEFAULT_TRAINING_DAYS if training_days is None else frozenset(training_days)
    high = target_kcal * params.training_day_ratio
    low = target_kcal * params.rest_day_ratio
    return [max(high if weekday in days else low, minimum_kcal) for weekday in range(7)]


def distribute_macros(
    *,
    calories: float,
    protein_g: float,
    preferred_diet: PreferredDiet,
) -> DayTarget:
    kcal = int(round(calories))
    # protein alone may not exceed the day's energy
    protein = min(int(round(protein_g)), kcal // 4)
    remaining = kcal - protein * KCAL_PER_G_PROTEIN

    if preferred_diet in CARB_ENERGY_FRACTION:
        fat_kcal = remaining - CARB_ENERGY_FRACTION[preferred_diet] * kcal
    else:
        fat_kcal = FAT_ENERGY_FRACTION.get(preferred_diet, FAT_ENERGY_FRACTION["balanced"]) * kcal
    fat_kcal = clamp(fat_kcal, 0.0, remaining)
    fat = min(int(round(fat_kcal / KCAL_PER_G_FAT)), int(remaining // KCAL_PER_G_FAT))

    carb_kcal = max(remaining - fat * KCAL_PER_G_FAT, 0.0)
    carb = int(round(carb_kcal / KCAL_PER_G_CARB))
    return DayTarget(calories=kcal, protein_g=protein, carb_g=carb, fat_g=fat)


def training_days_from_dates(dates: Sequence[date]) -> frozenset[int]:
    """Weekday indices (Monday = 0) of scheduled workout dates."""
    return frozenset(d.weekday() for d in dates)


def suggest_protein_intake(difficulty: Difficulty | None) -> ProteinIntake:
    if difficulty is None:
        return "moderate"
    return PROTEIN_INTAKE_BY_DIFFICULTY.get(difficulty, "moderate")  # type: ignore[return-value]


def kg_to_unit(value_kg: float, unit: str) -> float:
    if unit == "pounds":
        return value_kg * KG_TO_LB
    return value_kg
