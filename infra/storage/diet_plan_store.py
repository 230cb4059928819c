from __future__ import annotations

from domain.entities import SavedDietPlan
from domain.use_cases.save_diet_plan import DietPlanRepo


LOCAL_USER = "__local__"


class InMemoryDietPlanStore(DietPlanRepo):
    """Keeps the latest plan per user. Plans without a user id share one slot."""

    def __init__(self) -> None:
        self._plans: dict[str, SavedDietPlan] = {}

    async def save_diet_plan(self, saved: SavedDietPlan) -> None:
        self._plans[saved.plan.user_id or LOCAL_USER] = saved

    async def get_current_diet_plan(self, user_id: str | None) -> SavedDietPlan | None:
        return self._plans.get(user_id or LOCAL_USER)
