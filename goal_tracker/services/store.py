from datetime import date
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from goal_tracker.models.goal import Goal, GoalLog
from goal_tracker.schemas.log import GoalLogCreate

async def get_goal(db: AsyncSession, goal_id: int) -> Optional[Goal]:
    result = await db.execute(select(Goal).where(Goal.id == goal_id))
    return result.scalar_one_or_none()

async def list_goals(db: AsyncSession, user_id: Optional[int] = None) -> List[Goal]:
    query = select(Goal).order_by(Goal.id)
    if user_id is not None:
        query = query.where(Goal.user_id == user_id)
    result = await db.execute(query)
    return list(result.scalars().all())

async def delete_goal(db: AsyncSession, goal: Goal) -> None:
    await db.execute(delete(GoalLog).where(GoalLog.goal_id == goal.id))
    await db.delete(goal)
    await db.commit()

async def get_goal_logs(db: AsyncSession, goal_id: int) -> List[GoalLog]:
    """Every log for the goal, unfiltered by date."""
    result = await db.execute(
        select(GoalLog)
        .where(GoalLog.goal_id == goal_id)
        .order_by(GoalLog.date)
    )
    return list(result.scalars().all())

async def get_user_logs(
    db: AsyncSession, user_id: int, start: date, end: Optional[date] = None
) -> List[GoalLog]:
    end = end or start
    result = await db.execute(
        select(GoalLog)
        .where(GoalLog.user_id == user_id)
        .where(GoalLog.date >= start)
        .where(GoalLog.date <= end)
        .order_by(GoalLog.date, GoalLog.goal_id)
    )
    return list(result.scalars().all())

async def list_logs(db: AsyncSession) -> List[GoalLog]:
    result = await db.execute(select(GoalLog).order_by(GoalLog.date, GoalLog.id))
    return list(result.scalars().all())

async def upsert_log(db: AsyncSession, log_in: GoalLogCreate) -> GoalLog:
    """Write the log for (goal, user, date), replacing any earlier one."""
    result = await db.execute(
        select(GoalLog)
        .where(GoalLog.goal_id == log_in.goal_id)
        .where(GoalLog.user_id == log_in.user_id)
        .where(GoalLog.date == log_in.date)
    )
    log = result.scalar_one_or_none()
    if log is None:
        log = GoalLog(goal_id=log_in.goal_id, user_id=log_in.user_id, date=log_in.date)

    log.status = log_in.status
    log.rating = log_in.rating
    db.add(log)
    await db.commit()
    await db.refresh(log)
    return log
