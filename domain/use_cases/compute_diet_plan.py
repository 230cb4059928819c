from __future__ import annotations

from typing import Iterable

from core.config import Settings, settings
from domain.calculations import (
    CALORIE_FLOOR_KCAL,
    PlanningParams,
    body_weight_kg,
    clamp,
    daily_calories,
    distribute_macros,
    estimate_tdee,
    protein_grams,
    target_kcal_from_goal,
)
from domain.entities import DietPlan, DietPlanBuilder, UserProfile, WeightGoal


def planning_params(cfg: Settings = settings) -> PlanningParams:
    return PlanningParams(
        kcal_per_kg=cfg.kcal_per_kg,
        max_weekly_change_kg=cfg.max_weekly_change_kg,
        training_day_ratio=cfg.training_day_calorie_ratio,
        rest_day_ratio=cfg.rest_day_calorie_ratio,
    )


def compute_diet_plan(
    profile: UserProfile,
    goal: WeightGoal | None,
    builder: DietPlanBuilder,
    training_days: Iterable[int] | None = None,
    params: PlanningParams | None = None,
) -> DietPlan:
    """Build a 7-day calorie and macro plan.

    Pure and deterministic. Targets below the calorie floor are raised to the
    floor without error; ``DietPlan.floor_applied`` records that it happened.
    ``training_days`` holds weekday indices (Monday = 0) and only matters for
    the ``varied`` distribution.
    """
    if params is None:
        params = planning_params()

    calorie_floor = builder.calorie_floor or "standard"
    training_type = builder.training_type or "cardio_and_weightlifting"
    distribution = builder.calorie_distribution or "even"
    protein_intake = builder.protein_intake or "moderate"
    objective = goal.objective if goal is not None else "maintain"
    weekly_change_kg = 0.0
    if goal is not None and objective != "maintain":
        weekly_change_kg = clamp(goal.weekly_change_kg, 0.0, params.max_weekly_change_kg)

    # 1) TDEE and the clamped daily target
    tdee = estimate_tdee(profile)
    minimum_kcal = CALORIE_FLOOR_KCAL[calorie_floor]
    unclamped = target_kcal_from_goal(tdee, objective, weekly_change_kg, params)
    target_kcal = max(unclamped, minimum_kcal)

    # 2) Calories per weekday
    per_day = daily_calories(
        target_kcal=target_kcal,
        minimum_kcal=minimum_kcal,
        distribution=distribution,
        training_type=training_type,
        training_days=training_days,
        params=params,
    )
    # rest days can drop under the floor even when the target does not
    raw_days = daily_calories(
        target_kcal=target_kcal,
        minimum_kcal=0.0,
        distribution=distribution,
        training_type=training_type,
        training_days=training_days,
        params=params,
    )
    floor_applied = unclamped < minimum_kcal or any(kcal < minimum_kcal for kcal in raw_days)

    # 3) Macro split
    protein_g = protein_grams(body_weight_kg(profile), protein_intake)
    days = tuple(
        distribute_macros(calories=kcal, protein_g=protein_g, preferred_diet=builder.preferred_diet)
        for kcal in per_day
    )

    return DietPlan(
        user_id=profile.user_id,
        tdee_estimate=int(round(tdee)),
        calorie_target=int(round(target_kcal)),
        floor_applied=floor_applied,
        objective=objective,
        weekly_change_kg=weekly_change_kg,
        preferred_diet=builder.preferred_diet,
        calorie_floor=calorie_floor,
        training_type=training_type,
        calorie_distribution=distribution,
        protein_intake=protein_intake,
        days=days,
    )
