from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import date, datetime
from typing import Annotated, List, Literal, Optional, Union

from goal_tracker.services.dates import WEEKDAYS

FrequencyType = Literal["daily", "specific_days", "days_per_period", "repeating_n_days"]
PeriodUnit = Literal["week", "month", "year"]

CAMEL_CONFIG = {
    "from_attributes": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}


# Recurrence rules. Each variant carries only its own payload; missing values
# default to zero/empty so stored rows with gaps still evaluate.

class DailyFrequency(BaseModel):
    frequency_type: Literal["daily"] = "daily"

class SpecificDaysFrequency(BaseModel):
    frequency_type: Literal["specific_days"] = "specific_days"
    specific_days: List[str] = []

class DaysPerPeriodFrequency(BaseModel):
    frequency_type: Literal["days_per_period"] = "days_per_period"
    days_per_period: int = 0
    period_unit: Optional[PeriodUnit] = None

class RepeatingFrequency(BaseModel):
    frequency_type: Literal["repeating_n_days"] = "repeating_n_days"
    repeat_every_n_days: int = 0

Frequency = Annotated[
    Union[DailyFrequency, SpecificDaysFrequency, DaysPerPeriodFrequency, RepeatingFrequency],
    Field(discriminator="frequency_type"),
]


def frequency_from_fields(
    frequency_type: str,
    specific_days: Optional[List[str]] = None,
    days_per_period: Optional[int] = None,
    period_unit: Optional[str] = None,
    repeat_every_n_days: Optional[int] = None,
):
    """Build the recurrence variant from the flat stored fields."""
    if frequency_type == "daily":
        return DailyFrequency()
    if frequency_type == "specific_days":
        return SpecificDaysFrequency(specific_days=[d.lower() for d in specific_days or []])
    if frequency_type == "days_per_period":
        return DaysPerPeriodFrequency(
            days_per_period=days_per_period or 0,
            period_unit=period_unit if period_unit in ("week", "month", "year") else None,
        )
    if frequency_type == "repeating_n_days":
        return RepeatingFrequency(repeat_every_n_days=repeat_every_n_days or 0)
    raise ValueError(f"Unknown frequency type: {frequency_type!r}")


def _normalize_weekdays(value):
    if value is None:
        return value
    days = []
    for day in value:
        name = str(day).strip().lower()
        if name not in WEEKDAYS:
            raise ValueError(f"Unknown weekday: {day!r}")
        if name not in days:
            days.append(name)
    return days


class GoalBase(BaseModel):
    category: str = ""
    title: str = Field(..., min_length=1, max_length=200)
    floor: str = ""
    ceiling: str = ""
    unit: str = ""
    start_date: date
    frequency_type: FrequencyType
    specific_days: Optional[List[str]] = None
    days_per_period: Optional[int] = Field(None, ge=1)
    period_unit: Optional[PeriodUnit] = None
    repeat_every_n_days: Optional[int] = Field(None, ge=1)
    target_date: Optional[date] = None
    target_successes: Optional[int] = Field(None, ge=0)

    model_config = CAMEL_CONFIG

    @field_validator("specific_days")
    @classmethod
    def check_weekdays(cls, value):
        return _normalize_weekdays(value)

class GoalCreate(GoalBase):
    user_id: int

class GoalUpdate(BaseModel):
    category: Optional[str] = None
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    floor: Optional[str] = None
    ceiling: Optional[str] = None
    unit: Optional[str] = None
    start_date: Optional[date] = None
    frequency_type: Optional[FrequencyType] = None
    specific_days: Optional[List[str]] = None
    days_per_period: Optional[int] = Field(None, ge=1)
    period_unit: Optional[PeriodUnit] = None
    repeat_every_n_days: Optional[int] = Field(None, ge=1)
    target_date: Optional[date] = None
    target_successes: Optional[int] = Field(None, ge=0)

    model_config = CAMEL_CONFIG

    @field_validator("specific_days")
    @classmethod
    def check_weekdays(cls, value):
        return _normalize_weekdays(value)

class GoalResponse(BaseModel):
    id: int
    user_id: int
    category: str
    title: str
    floor: str
    ceiling: str
    unit: str
    start_date: date
    frequency_type: FrequencyType
    specific_days: Optional[List[str]] = None
    days_per_period: Optional[int] = None
    period_unit: Optional[PeriodUnit] = None
    repeat_every_n_days: Optional[int] = None
    target_date: Optional[date] = None
    target_successes: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = CAMEL_CONFIG

    @property
    def frequency(self):
        return frequency_from_fields(
            self.frequency_type,
            self.specific_days,
            self.days_per_period,
            self.period_unit,
            self.repeat_every_n_days,
        )


FREQUENCY_FIELDS = {
    "daily": (),
    "specific_days": ("specific_days",),
    "days_per_period": ("days_per_period", "period_unit"),
    "repeating_n_days": ("repeat_every_n_days",),
}

def strip_unrelated_frequency_fields(fields: dict) -> dict:
    """Null out recurrence fields that do not belong to the goal's frequency type."""
    result = dict(fields)
    keep = FREQUENCY_FIELDS[result["frequency_type"]]
    for names in FREQUENCY_FIELDS.values():
        for name in names:
            if name not in keep:
                result[name] = None
    return result
