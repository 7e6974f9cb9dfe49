from pydantic import BaseModel, Field
from datetime import date
from typing import Annotated, List, Literal, Optional, Union

from goal_tracker.schemas.goal import CAMEL_CONFIG, GoalResponse, PeriodUnit
from goal_tracker.schemas.log import LogStatus

class DayStatus(BaseModel):
    date: date
    weekday_name: str
    is_achieved: bool
    is_required: bool  # period-wide flag, identical for all seven days

    model_config = CAMEL_CONFIG

class DailyProgress(BaseModel):
    type: Literal["daily"] = "daily"
    date: date
    is_achieved: bool

    model_config = CAMEL_CONFIG

class SpecificDaysProgress(BaseModel):
    type: Literal["specific_days"] = "specific_days"
    date: date
    weekday: str
    is_required: bool
    is_achieved: bool

    model_config = CAMEL_CONFIG

class PeriodProgress(BaseModel):
    type: Literal["period"] = "period"
    date: date
    period_unit: Optional[PeriodUnit] = None
    achieved_count: int
    required_count: int
    period_start: date
    period_end: date
    is_satisfied: bool
    daily_status: Optional[List[DayStatus]] = None  # week only

    model_config = CAMEL_CONFIG

class RepeatingProgress(BaseModel):
    type: Literal["repeating"] = "repeating"
    date: date
    repeat_every_n_days: int
    days_since_last_achievement: int
    last_achieved_date: Optional[date] = None
    is_required: bool

    model_config = CAMEL_CONFIG

ProgressResponse = Union[DailyProgress, SpecificDaysProgress, PeriodProgress, RepeatingProgress]

Progress = Annotated[
    Union[DailyProgress, SpecificDaysProgress, PeriodProgress, RepeatingProgress],
    Field(discriminator="type"),
]

class StreakPoint(BaseModel):
    date: date
    streak_length: int

    model_config = CAMEL_CONFIG

class SuccessPoint(BaseModel):
    date: date
    success: Literal[0, 1]

    model_config = CAMEL_CONFIG

class RatingPoint(BaseModel):
    date: date
    rating: int
    floor: str
    ceiling: str

    model_config = CAMEL_CONFIG

class GoalStats(BaseModel):
    current_streak: int
    longest_streak: int
    total_achieved: int
    total_failed: int
    success_count: int
    average_rating: Optional[float] = None

    model_config = CAMEL_CONFIG

class DashboardEntry(BaseModel):
    goal: GoalResponse
    status: LogStatus  # not_logged when no log exists for the date
    rating: Optional[int] = None
    progress: Progress

    model_config = CAMEL_CONFIG

class DashboardResponse(BaseModel):
    date: date
    goals: List[DashboardEntry]

    model_config = CAMEL_CONFIG
