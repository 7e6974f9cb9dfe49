from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import date
from typing import Literal, Optional

from goal_tracker.schemas.goal import CAMEL_CONFIG
from goal_tracker.services.dates import ensure_week_in_calendar

LogStatus = Literal["achieved", "failed", "not_logged"]

class GoalLogCreate(BaseModel):
    goal_id: int
    user_id: int
    date: date
    status: LogStatus
    rating: Optional[int] = Field(None, ge=1, le=10)

    model_config = CAMEL_CONFIG

    @field_validator("date")
    @classmethod
    def check_date_range(cls, value):
        return ensure_week_in_calendar(value)

    @model_validator(mode="after")
    def drop_rating_unless_achieved(self):
        # rating places the outcome between floor and ceiling; meaningless otherwise
        if self.status != "achieved":
            self.rating = None
        return self

class GoalLogResponse(BaseModel):
    id: int
    goal_id: int
    user_id: int
    date: date
    status: LogStatus
    rating: Optional[int] = None

    model_config = CAMEL_CONFIG
