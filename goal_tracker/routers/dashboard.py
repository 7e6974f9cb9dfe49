from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from goal_tracker.database import get_db
from goal_tracker.models.user import User
from goal_tracker.schemas.goal import GoalResponse
from goal_tracker.schemas.log import GoalLogResponse
from goal_tracker.schemas.progress import DashboardEntry, DashboardResponse
from goal_tracker.services import store
from goal_tracker.services.progress import evaluate
from goal_tracker.routers.goal import resolve_date, check_degenerate

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    user_id: int = Query(..., alias="userId"),
    date_param: Optional[str] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
):
    day = resolve_date(date_param)
    if not await db.get(User, user_id):
        raise HTTPException(404, "User not found")

    entries = []
    for goal_row in await store.list_goals(db, user_id):
        goal = GoalResponse.model_validate(goal_row)
        logs = [GoalLogResponse.model_validate(log) for log in await store.get_goal_logs(db, goal.id)]
        check_degenerate(goal)

        todays = next((log for log in logs if log.date == day), None)
        entries.append(
            DashboardEntry(
                goal=goal,
                status=todays.status if todays else "not_logged",
                rating=todays.rating if todays else None,
                progress=evaluate(goal, logs, day),
            )
        )

    return DashboardResponse(date=day, goals=entries)
