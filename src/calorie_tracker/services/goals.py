"""Daily goal evaluation."""

from dataclasses import dataclass

from calorie_tracker.domain.profiles import UserProfile
from calorie_tracker.domain.summaries import DailyAggregate, GoalEvaluation


@dataclass(frozen=True)
class GoalDefaults:
    """Fallbacks for profiles that are missing or incomplete."""

    calorie_goal: float = 2000.0
    weight_kg: float = 70.0
    protein_g_per_kg: float = 1.2


def evaluate_goals(
    aggregate: DailyAggregate,
    profile: UserProfile | None,
    defaults: GoalDefaults | None = None,
) -> GoalEvaluation:
    """Decide whether a day's totals hit the calorie and protein goals.

    The calorie goal is a ceiling (at or under hits it) and the protein
    target is a floor (at or over hits it). Both flags are independent.
    """
    defaults = defaults or GoalDefaults()
    calorie_goal = defaults.calorie_goal
    weight_kg = defaults.weight_kg
    if profile is not None:
        if profile.calorie_goal is not None:
            calorie_goal = profile.calorie_goal
        if profile.weight_kg is not None:
            weight_kg = profile.weight_kg
    protein_target_g = weight_kg * defaults.protein_g_per_kg
    return GoalEvaluation(
        calorie_goal=calorie_goal,
        protein_target_g=protein_target_g,
        hit_calorie_goal=aggregate.total_calories <= calorie_goal,
        hit_protein_goal=aggregate.total_protein_g >= protein_target_g,
    )
