import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date
from typing import List, Optional
from goal_tracker.database import get_db
from goal_tracker.models.goal import Goal
from goal_tracker.models.user import User
from goal_tracker.schemas.goal import (
    GoalCreate, GoalUpdate, GoalResponse, strip_unrelated_frequency_fields
)
from goal_tracker.schemas.log import GoalLogResponse
from goal_tracker.schemas.progress import ProgressResponse, StreakPoint, SuccessPoint, RatingPoint, GoalStats
from goal_tracker.services import store
from goal_tracker.services.analytics import compute_streaks, compute_successes, rating_series, summarize
from goal_tracker.services.dates import parse_calendar_date
from goal_tracker.services.planning import fill_targets
from goal_tracker.services.progress import evaluate, is_degenerate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/goals", tags=["goals"])

RECURRENCE_FIELDS = ("frequency_type", "specific_days", "days_per_period", "period_unit", "repeat_every_n_days")

def resolve_date(value: Optional[str]) -> date:
    """Reference date from a query value; today when absent."""
    if value is None:
        return date.today()
    try:
        return parse_calendar_date(value)
    except (ValueError, OverflowError):
        raise HTTPException(400, f"Invalid date: {value!r}")

async def get_goal_or_404(db: AsyncSession, goal_id: int) -> Goal:
    goal = await store.get_goal(db, goal_id)
    if not goal:
        raise HTTPException(404, "Goal not found")
    return goal

async def load_history(db: AsyncSession, goal_id: int):
    goal = GoalResponse.model_validate(await get_goal_or_404(db, goal_id))
    logs = [GoalLogResponse.model_validate(log) for log in await store.get_goal_logs(db, goal_id)]
    return goal, logs

def check_degenerate(goal: GoalResponse) -> None:
    if is_degenerate(goal):
        logger.warning(
            "Goal %s (%s) is missing its recurrence settings; it will never come due",
            goal.id, goal.frequency_type,
        )


@router.get("", response_model=List[GoalResponse])
async def list_goals(
    user_id: Optional[int] = Query(None, alias="userId"),
    db: AsyncSession = Depends(get_db),
):
    return await store.list_goals(db, user_id)

@router.post("", response_model=GoalResponse, status_code=201)
async def create_goal(goal_in: GoalCreate, db: AsyncSession = Depends(get_db)):
    if not await db.get(User, goal_in.user_id):
        raise HTTPException(404, "User not found")

    fields = strip_unrelated_frequency_fields(goal_in.model_dump())
    goal = Goal(**fill_targets(fields, date.today()))
    db.add(goal)
    await db.commit()
    await db.refresh(goal)
    logger.info("Created goal %s for user %s", goal.id, goal.user_id)
    return goal

@router.get("/{goal_id}", response_model=GoalResponse)
async def get_goal(goal_id: int, db: AsyncSession = Depends(get_db)):
    return await get_goal_or_404(db, goal_id)

@router.put("/{goal_id}", response_model=GoalResponse)
async def update_goal(goal_id: int, goal_in: GoalUpdate, db: AsyncSession = Depends(get_db)):
    goal = await get_goal_or_404(db, goal_id)

    changes = goal_in.model_dump(exclude_unset=True)
    fields = GoalResponse.model_validate(goal).model_dump(exclude={"id", "user_id", "created_at"})
    # a newly supplied target replaces the derived one on the other side
    if "target_date" in changes and "target_successes" not in changes:
        fields["target_successes"] = None
    if "target_successes" in changes and "target_date" not in changes:
        fields["target_date"] = None
    # a new recurrence invalidates a count derived from the old one
    recurrence_changed = any(name in changes for name in RECURRENCE_FIELDS)
    targets_given = {"target_date", "target_successes"} & changes.keys()
    if recurrence_changed and not targets_given and fields["target_date"] is not None:
        fields["target_successes"] = None
    fields.update(changes)
    fields = fill_targets(strip_unrelated_frequency_fields(fields), date.today())

    for name, value in fields.items():
        setattr(goal, name, value)
    db.add(goal)
    await db.commit()
    await db.refresh(goal)
    return goal

@router.delete("/{goal_id}", status_code=204)
async def delete_goal(goal_id: int, db: AsyncSession = Depends(get_db)):
    goal = await get_goal_or_404(db, goal_id)
    await store.delete_goal(db, goal)
    logger.info("Deleted goal %s", goal_id)
    return Response(status_code=204)


@router.get("/{goal_id}/progress", response_model=ProgressResponse)
async def get_goal_progress(
    goal_id: int,
    date_param: Optional[str] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
):
    reference_date = resolve_date(date_param)
    goal, logs = await load_history(db, goal_id)
    check_degenerate(goal)
    return evaluate(goal, logs, reference_date)

@router.get("/{goal_id}/streaks", response_model=List[StreakPoint])
async def get_goal_streaks(goal_id: int, db: AsyncSession = Depends(get_db)):
    _, logs = await load_history(db, goal_id)
    return compute_streaks(logs)

@router.get("/{goal_id}/successes", response_model=List[SuccessPoint])
async def get_goal_successes(goal_id: int, db: AsyncSession = Depends(get_db)):
    goal, logs = await load_history(db, goal_id)
    check_degenerate(goal)
    return compute_successes(goal, logs)

@router.get("/{goal_id}/ratings", response_model=List[RatingPoint])
async def get_goal_ratings(goal_id: int, db: AsyncSession = Depends(get_db)):
    goal, logs = await load_history(db, goal_id)
    return rating_series(goal, logs)

@router.get("/{goal_id}/stats", response_model=GoalStats)
async def get_goal_stats(goal_id: int, db: AsyncSession = Depends(get_db)):
    goal, logs = await load_history(db, goal_id)
    return summarize(goal, logs)
