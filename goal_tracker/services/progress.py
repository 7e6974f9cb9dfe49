"""
Goal progress evaluation.

Pure functions of (goal, log history, reference date). Nothing here touches
the database or reads the clock; callers fetch the goal and its logs and pass
the date being reported on.
"""
from datetime import date
from typing import Dict, Iterable, List, Optional

from goal_tracker.schemas.goal import (
    DailyFrequency, SpecificDaysFrequency, DaysPerPeriodFrequency, RepeatingFrequency,
    GoalResponse,
)
from goal_tracker.schemas.log import GoalLogResponse
from goal_tracker.schemas.progress import (
    DayStatus, DailyProgress, SpecificDaysProgress, PeriodProgress, RepeatingProgress,
)
from goal_tracker.services.dates import weekday_name, period_bounds, iter_days, days_between


def goal_logs(goal: GoalResponse, logs: Iterable[GoalLogResponse]) -> List[GoalLogResponse]:
    """Logs belonging to `goal`, ascending by date."""
    return sorted((log for log in logs if log.goal_id == goal.id), key=lambda log: log.date)

def logs_by_date(logs: Iterable[GoalLogResponse]) -> Dict[date, GoalLogResponse]:
    return {log.date: log for log in logs}

def is_degenerate(goal: GoalResponse) -> bool:
    """True when the recurrence payload is missing, so the goal can never come due."""
    frequency = goal.frequency
    if isinstance(frequency, SpecificDaysFrequency):
        return not frequency.specific_days
    if isinstance(frequency, DaysPerPeriodFrequency):
        return frequency.period_unit is None or frequency.days_per_period <= 0
    if isinstance(frequency, RepeatingFrequency):
        return frequency.repeat_every_n_days <= 0
    return False


def evaluate_daily(logs: List[GoalLogResponse], reference_date: date) -> DailyProgress:
    log = logs_by_date(logs).get(reference_date)
    return DailyProgress(
        date=reference_date,
        is_achieved=log is not None and log.status == "achieved",
    )

def evaluate_specific_days(
    frequency: SpecificDaysFrequency, logs: List[GoalLogResponse], reference_date: date
) -> SpecificDaysProgress:
    weekday = weekday_name(reference_date)
    log = logs_by_date(logs).get(reference_date)
    return SpecificDaysProgress(
        date=reference_date,
        weekday=weekday,
        is_required=weekday in frequency.specific_days,
        is_achieved=log is not None and log.status == "achieved",
    )

def evaluate_period(
    frequency: DaysPerPeriodFrequency, logs: List[GoalLogResponse], reference_date: date
) -> PeriodProgress:
    required = frequency.days_per_period
    bounds = period_bounds(reference_date, frequency.period_unit)
    if bounds is None:
        # no unit to window by: empty period at the reference date
        return PeriodProgress(
            date=reference_date,
            period_unit=None,
            achieved_count=0,
            required_count=required,
            period_start=reference_date,
            period_end=reference_date,
            is_satisfied=False,
        )

    start, end = bounds
    achieved_dates = {
        log.date for log in logs
        if log.status == "achieved" and start <= log.date <= end
    }
    achieved = len(achieved_dates)

    daily_status = None
    if frequency.period_unit == "week":
        still_required = achieved < required
        daily_status = [
            DayStatus(
                date=day,
                weekday_name=weekday_name(day),
                is_achieved=day in achieved_dates,
                is_required=still_required,
            )
            for day in iter_days(start, end)
        ]

    return PeriodProgress(
        date=reference_date,
        period_unit=frequency.period_unit,
        achieved_count=achieved,
        required_count=required,
        period_start=start,
        period_end=end,
        is_satisfied=required > 0 and achieved >= required,
        daily_status=daily_status,
    )

def last_achieved_date(logs: Iterable[GoalLogResponse]) -> Optional[date]:
    achieved = [log.date for log in logs if log.status == "achieved"]
    return max(achieved) if achieved else None

def evaluate_repeating(
    frequency: RepeatingFrequency, logs: List[GoalLogResponse], reference_date: date
) -> RepeatingProgress:
    interval = frequency.repeat_every_n_days
    # achievements logged after the reference date are not yet known as of it
    last = last_achieved_date(log for log in logs if log.date <= reference_date)
    if last is None:
        days_since = interval  # due immediately
    else:
        days_since = days_between(last, reference_date)
    return RepeatingProgress(
        date=reference_date,
        repeat_every_n_days=interval,
        days_since_last_achievement=days_since,
        last_achieved_date=last,
        is_required=interval > 0 and days_since >= interval,
    )


def evaluate(goal: GoalResponse, logs: Iterable[GoalLogResponse], reference_date: date):
    """Progress verdict for `goal` as of `reference_date`."""
    frequency = goal.frequency
    history = goal_logs(goal, logs)

    if isinstance(frequency, DailyFrequency):
        return evaluate_daily(history, reference_date)
    if isinstance(frequency, SpecificDaysFrequency):
        return evaluate_specific_days(frequency, history, reference_date)
    if isinstance(frequency, DaysPerPeriodFrequency):
        return evaluate_period(frequency, history, reference_date)
    if isinstance(frequency, RepeatingFrequency):
        return evaluate_repeating(frequency, history, reference_date)
    raise TypeError(f"Unsupported frequency: {type(frequency).__name__}")
