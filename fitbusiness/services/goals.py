"""Goal editing. Goals live inside their employee, so every change here
returns an updated employee copy for the caller to persist with
``DataStore.update_employee``."""

from __future__ import annotations

from datetime import date

from fitbusiness.models.employee import Employee, Goal, GoalDraft
from fitbusiness.services.builders import new_goal_id
from fitbusiness.store import RecordNotFoundError


class GoalValidationError(Exception):
    """Raised when a goal draft is not acceptable."""


def _clean_description(draft: GoalDraft) -> str:
    description = draft.description.strip()
    if not description:
        raise GoalValidationError("Goal description is required")
    return description


def add_goal(employee: Employee, draft: GoalDraft, today: date | None = None) -> Employee:
    goal = Goal(
        goal_id=new_goal_id(),
        description=_clean_description(draft),
        target_date=draft.target_date or today or date.today(),
        status=draft.status,
    )
    return employee.model_copy(update={"goals": [*employee.goals, goal]})


def edit_goal(employee: Employee, goal_id: str, draft: GoalDraft) -> Employee:
    description = _clean_description(draft)
    if not any(g.goal_id == goal_id for g in employee.goals):
        raise RecordNotFoundError("goal", goal_id)
    goals = [
        g.model_copy(update={
            "description": description,
            "target_date": draft.target_date or g.target_date,
            "status": draft.status,
        }) if g.goal_id == goal_id else g
        for g in employee.goals
    ]
    return employee.model_copy(update={"goals": goals})


def remove_goal(employee: Employee, goal_id: str) -> Employee:
    goals = [g for g in employee.goals if g.goal_id != goal_id]
    if len(goals) == len(employee.goals):
        raise RecordNotFoundError("goal", goal_id)
    return employee.model_copy(update={"goals": goals})
