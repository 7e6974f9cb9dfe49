import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from calendar import monthrange
from datetime import date
from typing import Dict, List, Optional
from goal_tracker.database import get_db
from goal_tracker.schemas.log import GoalLogCreate, GoalLogResponse
from goal_tracker.services import store
from goal_tracker.routers.goal import get_goal_or_404, resolve_date

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/logs", tags=["logs"])

@router.get("", response_model=List[GoalLogResponse])
async def list_logs(
    goal_id: Optional[int] = Query(None, alias="goalId"),
    user_id: Optional[int] = Query(None, alias="userId"),
    date_param: Optional[str] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
):
    if goal_id is not None:
        return await store.get_goal_logs(db, goal_id)
    if user_id is not None and date_param is not None:
        return await store.get_user_logs(db, user_id, resolve_date(date_param))
    return await store.list_logs(db)

@router.get("/month", response_model=Dict[str, List[GoalLogResponse]])
async def get_month_logs(
    user_id: int = Query(..., alias="userId"),
    year: int = Query(...),
    month: int = Query(...),
    db: AsyncSession = Depends(get_db),
):
    # Validate month/year
    if not (1 <= month <= 12):
        raise HTTPException(400, "Invalid month")
    if year < 1900 or year > 2100:
        raise HTTPException(400, "Invalid year")

    num_days = monthrange(year, month)[1]
    logs = await store.get_user_logs(db, user_id, date(year, month, 1), date(year, month, num_days))

    # Build a map: date -> logs
    by_date: Dict[str, List[GoalLogResponse]] = {}
    for log in logs:
        by_date.setdefault(log.date.isoformat(), []).append(GoalLogResponse.model_validate(log))
    return by_date

@router.post("", response_model=GoalLogResponse, status_code=201)
async def upsert_log(log_in: GoalLogCreate, db: AsyncSession = Depends(get_db)):
    goal = await get_goal_or_404(db, log_in.goal_id)
    if goal.user_id != log_in.user_id:
        raise HTTPException(400, "Goal does not belong to this user")

    log = await store.upsert_log(db, log_in)
    logger.info("Logged goal %s on %s as %s", log.goal_id, log.date, log.status)
    return log
