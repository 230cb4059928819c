import pytest

from domain.calculations import PlanningParams, estimate_tdee
from domain.entities import DietPlanBuilder, UserProfile, WeightGoal
from domain.use_cases.compute_diet_plan import compute_diet_plan, planning_params


PROFILE = UserProfile(user_id="u1", sex="male", age_years=30, height_cm=180, weight_kg=80)
SMALL_PROFILE = UserProfile(
    sex="female",
    age_years=60,
    height_cm=150,
    weight_kg=45,
    daily_activity="sedentary",
    exercise_frequency="never",
)
PARAMS = PlanningParams()


def _goal(objective, rate):
    return WeightGoal(objective=objective, starting_weight_kg=80, target_weight_kg=72, weekly_change_kg=rate)


@pytest.mark.parametrize("objective,rate", [("lose", 0.5), ("gain", 0.25), ("maintain", 0.0)])
def test_plan_has_seven_days_with_matching_macros(objective, rate):
    plan = compute_diet_plan(PROFILE, _goal(objective, rate), DietPlanBuilder(), params=PARAMS)
    assert len(plan.days) == 7
    for day in plan.days:
        assert abs(day.macro_kcal - day.calories) <= 5


def test_maintain_target_equals_tdee():
    plan = compute_diet_plan(PROFILE, _goal("maintain", 0.5), DietPlanBuilder(), params=PARAMS)
    assert plan.tdee_estimate == 2848
    assert plan.calorie_target == plan.tdee_estimate
    assert plan.weekly_change_kg == 0.0
    assert all(day.calories == plan.tdee_estimate for day in plan.days)


def test_missing_goal_means_maintain():
    plan = compute_diet_plan(PROFILE, None, DietPlanBuilder(), params=PARAMS)
    assert plan.objective == "maintain"
    assert plan.calorie_target == plan.tdee_estimate


def test_lose_subtracts_daily_deficit():
    plan = compute_diet_plan(PROFILE, _goal("lose", 0.5), DietPlanBuilder(), params=PARAMS)
    assert plan.calorie_target == round(estimate_tdee(PROFILE) - 550)
    assert plan.calorie_target == 2298
    assert not plan.floor_applied


def test_gain_adds_daily_surplus():
    plan = compute_diet_plan(PROFILE, _goal("gain", 0.5), DietPlanBuilder(), params=PARAMS)
    assert plan.calorie_target == 2848 + 550


def test_slower_loss_never_lowers_target():
    rates = [1.5, 1.0, 0.75, 0.5, 0.25, 0.0]
    targets = [
        compute_diet_plan(PROFILE, _goal("lose", r), DietPlanBuilder(), params=PARAMS).calorie_target
        for r in rates
    ]
    assert targets == sorted(targets)
    assert targets[0] == 1200


def test_target_below_floor_is_raised_silently():
    plan = compute_diet_plan(SMALL_PROFILE, _goal("lose", 1.0), DietPlanBuilder(), params=PARAMS)
    assert plan.floor_applied
    assert plan.calorie_floor == "standard"
    assert plan.calorie_target == 1200
    assert all(day.calories == 1200 for day in plan.days)


def test_low_floor_allows_800():
    builder = DietPlanBuilder(calorie_floor="low")
    plan = compute_diet_plan(SMALL_PROFILE, _goal("lose", 1.5), builder, params=PARAMS)
    assert plan.calorie_target == 800
    for day in plan.days:
        assert abs(day.macro_kcal - day.calories) <= 5


def test_rest_days_raised_to_floor_are_flagged():
    builder = DietPlanBuilder(calorie_distribution="varied", training_type="weightlifting")
    plan = compute_diet_plan(PROFILE, _goal("lose", 1.45), builder, params=PARAMS)
    assert plan.calorie_target == 1253
    assert plan.floor_applied
    assert [d.calories for d in plan.days] == [1378, 1200, 1378, 1200, 1378, 1200, 1200]

    even = compute_diet_plan(PROFILE, _goal("lose", 1.45), DietPlanBuilder(), params=PARAMS)
    assert not even.floor_applied


def test_rate_above_bound_is_clamped():
    fast = compute_diet_plan(PROFILE, _goal("lose", 4.0), DietPlanBuilder(), params=PARAMS)
    capped = compute_diet_plan(PROFILE, _goal("lose", 1.5), DietPlanBuilder(), params=PARAMS)
    assert fast.calorie_target == capped.calorie_target
    assert fast.weekly_change_kg == 1.5


def test_unset_policies_resolve_to_defaults():
    plan = compute_diet_plan(PROFILE, None, DietPlanBuilder(), params=PARAMS)
    assert plan.calorie_floor == "standard"
    assert plan.training_type == "cardio_and_weightlifting"
    assert plan.calorie_distribution == "even"
    assert plan.protein_intake == "moderate"
    assert plan.days[0].protein_g == 160


def test_varied_distribution_follows_training_days():
    builder = DietPlanBuilder(calorie_distribution="varied", training_type="weightlifting")
    plan = compute_diet_plan(PROFILE, None, builder, training_days={1, 3}, params=PARAMS)
    high = round(2848 * 1.10)
    low = round(2848 * 0.925)
    assert [d.calories for d in plan.days] == [low, high, low, high, low, low, low]
    # protein is the same every day
    assert len({d.protein_g for d in plan.days}) == 1


def test_varied_distribution_without_training_is_even():
    builder = DietPlanBuilder(calorie_distribution="varied", training_type="none_or_relaxed_activity")
    plan = compute_diet_plan(PROFILE, None, builder, training_days={1, 3}, params=PARAMS)
    assert len({d.calories for d in plan.days}) == 1


def test_identical_inputs_give_identical_plans():
    builder = DietPlanBuilder(preferred_diet="low_carb", calorie_distribution="varied", protein_intake="high")
    first = compute_diet_plan(PROFILE, _goal("lose", 0.75), builder, params=PARAMS)
    second = compute_diet_plan(PROFILE, _goal("lose", 0.75), builder, params=PARAMS)
    assert first == second


def test_planning_params_from_settings():
    params = planning_params()
    assert params.kcal_per_kg == 7700.0
    assert params.max_weekly_change_kg == 1.5
    assert params.training_day_ratio == pytest.approx(1.10)
    assert params.rest_day_ratio == pytest.approx(0.925)
