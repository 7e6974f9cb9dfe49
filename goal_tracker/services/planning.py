"""Target planning: derive targetSuccesses from targetDate and vice versa."""
import math
from datetime import date, timedelta
from typing import Optional

from goal_tracker.schemas.goal import (
    frequency_from_fields, DailyFrequency, SpecificDaysFrequency, DaysPerPeriodFrequency, RepeatingFrequency,
)
from goal_tracker.services.dates import days_between

# approximate period lengths used for planning only
PERIOD_DAYS = {"week": 7, "month": 30, "year": 365}


def target_successes_for(frequency, target_date: date, today: date) -> int:
    days = max(days_between(today, target_date), 0)

    if isinstance(frequency, DailyFrequency):
        return days
    if isinstance(frequency, SpecificDaysFrequency):
        return math.floor(days * len(frequency.specific_days) / 7)
    if isinstance(frequency, DaysPerPeriodFrequency):
        period = PERIOD_DAYS.get(frequency.period_unit)
        if period is None:
            return 0
        return math.ceil(days / period) * frequency.days_per_period
    if isinstance(frequency, RepeatingFrequency):
        return math.ceil(days / max(frequency.repeat_every_n_days, 1))
    raise TypeError(f"Unsupported frequency: {type(frequency).__name__}")

def target_date_for(frequency, target_successes: int, today: date) -> Optional[date]:
    if isinstance(frequency, DailyFrequency):
        days = target_successes
    elif isinstance(frequency, SpecificDaysFrequency):
        if not frequency.specific_days:
            return None
        days = math.ceil(target_successes * 7 / len(frequency.specific_days))
    elif isinstance(frequency, DaysPerPeriodFrequency):
        period = PERIOD_DAYS.get(frequency.period_unit)
        if period is None:
            return None
        days = math.ceil(target_successes / max(frequency.days_per_period, 1)) * period
    elif isinstance(frequency, RepeatingFrequency):
        days = target_successes * max(frequency.repeat_every_n_days, 1)
    else:
        raise TypeError(f"Unsupported frequency: {type(frequency).__name__}")
    return today + timedelta(days=days)

def fill_targets(fields: dict, today: date) -> dict:
    """
    Complete a goal's planning pair when exactly one side is given.

    `fields` holds the flat goal columns (frequency_type, specific_days, ...,
    target_date, target_successes). Returns a new dict; nothing is derived
    when both or neither target is set.
    """
    result = dict(fields)
    has_date = result.get("target_date") is not None
    has_successes = result.get("target_successes") is not None
    if has_date == has_successes:
        return result

    frequency = frequency_from_fields(
        result["frequency_type"],
        result.get("specific_days"),
        result.get("days_per_period"),
        result.get("period_unit"),
        result.get("repeat_every_n_days"),
    )
    if has_date:
        result["target_successes"] = target_successes_for(frequency, result["target_date"], today)
    else:
        result["target_date"] = target_date_for(frequency, result["target_successes"], today)
    return result
