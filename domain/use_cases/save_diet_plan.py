from __future__ import annotations

import uuid
from datetime import date as Date, datetime, timezone
from typing import Iterable

import structlog

from domain.entities import DayTarget, DietPlan, DietPlanBuilder, SavedDietPlan, UserProfile, WeightGoal
from domain.errors import NotFoundError, StorageUnavailableError
from domain.use_cases.compute_diet_plan import compute_diet_plan


log = structlog.get_logger(__name__)


class DietPlanRepo:
    async def save_diet_plan(self, saved: SavedDietPlan) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    async def get_current_diet_plan(self, user_id: str | None) -> SavedDietPlan | None:  # pragma: no cover - interface
        raise NotImplementedError


async def create_and_save_diet_plan(
    repo: DietPlanRepo,
    profile: UserProfile,
    goal: WeightGoal | None,
    builder: DietPlanBuilder,
    training_days: Iterable[int] | None = None,
    *,
    now: datetime | None = None,
) -> SavedDietPlan:
    plan = compute_diet_plan(profile, goal, builder, training_days)
    if plan.floor_applied:
        log.info(
            "diet_plan_floor_applied",
            user_id=plan.user_id,
            tdee=plan.tdee_estimate,
            floor=plan.calorie_floor,
            calorie_target=plan.calorie_target,
        )

    saved = SavedDietPlan(
        plan_id=str(uuid.uuid4()),
        created_at=now or datetime.now(timezone.utc),
        plan=plan,
    )
    try:
        await repo.save_diet_plan(saved)
    except OSError as e:
        log.warning("diet_plan_save_failed", user_id=plan.user_id, error=str(e))
        raise StorageUnavailableError("Unable to save your diet plan") from e
    log.info("diet_plan_saved", user_id=plan.user_id, plan_id=saved.plan_id, calorie_target=plan.calorie_target)
    return saved


def get_daily_target(plan: DietPlan, on_date: Date) -> DayTarget:
    return plan.days[on_date.weekday()]


async def get_current_daily_target(repo: DietPlanRepo, user_id: str | None, on_date: Date) -> DayTarget:
    saved = await repo.get_current_diet_plan(user_id)
    if saved is None:
        raise NotFoundError("No diet plan saved for this user")
    return get_daily_target(saved.plan, on_date)
