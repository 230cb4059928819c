from __future__ import annotations

from dataclasses import asdict, replace
from datetime import date

import structlog
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from core.logging import configure_logging
from domain.calculations import clamp, daily_calorie_delta, kg_to_unit, suggest_protein_intake, training_days_from_dates
from domain.entities import DietPlanBuilder, UserProfile, WeightGoal, age_on
from domain.errors import DomainError, InvalidInputError, NotFoundError
from domain.use_cases.compute_diet_plan import compute_diet_plan
from domain.use_cases.save_diet_plan import (
    DietPlanRepo,
    create_and_save_diet_plan,
    get_current_daily_target,
)
from infra.storage.diet_plan_store import InMemoryDietPlanStore
from .schemas import (
    APIResponse,
    DayTargetSchema,
    DietPlanRequest,
    DietPlanSchema,
    GoalInputSchema,
    GoalSummaryRequest,
    GoalSummarySchema,
    ProfileInputSchema,
    SavedDietPlanSchema,
)


def _profile(payload: ProfileInputSchema, today: date) -> UserProfile:
    age = payload.age_years
    if age is None and payload.birth_date is not None:
        age = age_on(payload.birth_date, today)
    return UserProfile(
        user_id=payload.user_id,
        sex=payload.sex,
        age_years=age,
        height_cm=payload.height_cm,
        weight_kg=payload.weight_kg,
        daily_activity=payload.daily_activity,
        exercise_frequency=payload.exercise_frequency,
        weight_unit=payload.weight_unit,
    )


def _goal(payload: GoalInputSchema | None, user_id: str | None = None) -> WeightGoal | None:
    if payload is None:
        return None
    return WeightGoal(user_id=user_id, **payload.model_dump())


def _training_days(payload: DietPlanRequest) -> frozenset[int] | None:
    if payload.training_days is not None and payload.workout_dates is not None:
        raise InvalidInputError("Pass either training_days or workout_dates, not both")
    if payload.workout_dates is not None:
        return training_days_from_dates(payload.workout_dates)
    if payload.training_days is not None:
        return frozenset(payload.training_days)
    return None


def _builder(payload: DietPlanRequest) -> DietPlanBuilder:
    fields = payload.builder.model_dump()
    if fields["protein_intake"] is None and payload.training_difficulty is not None:
        fields["protein_intake"] = suggest_protein_intake(payload.training_difficulty)
    return DietPlanBuilder(**fields)


def get_store(request: Request) -> DietPlanRepo:
    return request.app.state.diet_plans


def create_app(store: DietPlanRepo | None = None) -> FastAPI:
    configure_logging(settings.log_level, json=settings.app_env != "development")
    app = FastAPI(title="DialedIn Diet Planning API", version="0.1.0")
    app.state.diet_plans = store or InMemoryDietPlanStore()
    log = structlog.get_logger("api")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/diet-plan/compute", response_model=APIResponse)
    def compute(payload: DietPlanRequest) -> APIResponse:
        try:
            training_days = _training_days(payload)
        except DomainError as e:
            raise HTTPException(status_code=e.http_status, detail=e.code)
        profile = _profile(payload.profile, date.today())
        plan = compute_diet_plan(
            profile,
            _goal(payload.goal, profile.user_id),
            _builder(payload),
            training_days,
        )
        return APIResponse(ok=True, data=DietPlanSchema.model_validate(asdict(plan)).model_dump(mode="json"))

    @app.post("/api/diet-plan", response_model=APIResponse)
    async def create_plan(
        user_id: str,
        payload: DietPlanRequest,
        store: DietPlanRepo = Depends(get_store),
    ) -> APIResponse:
        profile = _profile(payload.profile.model_copy(update={"user_id": user_id}), date.today())
        try:
            saved = await create_and_save_diet_plan(
                store,
                profile,
                _goal(payload.goal, user_id),
                _builder(payload),
                _training_days(payload),
            )
        except DomainError as e:
            log.warning("diet_plan_create_failed", user_id=user_id, code=e.code)
            raise HTTPException(status_code=e.http_status, detail=e.code)
        return APIResponse(ok=True, data=SavedDietPlanSchema.model_validate(asdict(saved)).model_dump(mode="json"))

    @app.get("/api/diet-plan/current", response_model=APIResponse)
    async def current_plan(user_id: str, store: DietPlanRepo = Depends(get_store)) -> APIResponse:
        saved = await store.get_current_diet_plan(user_id)
        if saved is None:
            raise HTTPException(status_code=404, detail=NotFoundError.code)
        return APIResponse(ok=True, data=SavedDietPlanSchema.model_validate(asdict(saved)).model_dump(mode="json"))

    @app.get("/api/diet-plan/target", response_model=APIResponse)
    async def daily_target(
        user_id: str,
        on: date | None = None,
        store: DietPlanRepo = Depends(get_store),
    ) -> APIResponse:
        try:
            target = await get_current_daily_target(store, user_id, on or date.today())
        except DomainError as e:
            raise HTTPException(status_code=e.http_status, detail=e.code)
        return APIResponse(ok=True, data=DayTargetSchema.model_validate(asdict(target)).model_dump())

    @app.post("/api/goals/summary", response_model=APIResponse)
    def goal_summary(payload: GoalSummaryRequest) -> APIResponse:
        goal = WeightGoal(**payload.goal.model_dump())
        # same rate bound the plan uses
        rate = 0.0 if goal.is_maintaining else clamp(goal.weekly_change_kg, 0.0, settings.max_weekly_change_kg)
        goal = replace(goal, weekly_change_kg=rate)
        delta = 0.0 if goal.is_maintaining else daily_calorie_delta(goal.weekly_change_kg, settings.kcal_per_kg)
        if goal.is_losing:
            delta = -delta
        progress = None
        if payload.current_weight_kg is not None:
            progress = round(goal.calculate_progress(payload.current_weight_kg), 3)
        summary = GoalSummarySchema(
            objective=goal.objective,
            total_weight_change_kg=round(goal.total_weight_change, 2),
            estimated_weeks=goal.estimated_weeks,
            estimated_months=goal.estimated_months,
            rate_category=goal.rate_category,
            daily_calorie_delta=int(round(delta)),
            weekly_change=round(kg_to_unit(goal.weekly_change_kg, payload.weight_unit), 2),
            weight_unit=payload.weight_unit,
            progress=progress,
        )
        return APIResponse(ok=True, data=summary.model_dump())

    return app


app = create_app()
