"""
Streaks, success events and chart series derived from a goal's log history.

Series are sparse over calendar time: one streak point per log, not per day.
A day without a log neither breaks nor continues a streak on its own; only
the distance to the previous log does.
"""
from typing import Iterable, List

from goal_tracker.schemas.goal import (
    DailyFrequency, SpecificDaysFrequency, DaysPerPeriodFrequency, RepeatingFrequency,
    GoalResponse,
)
from goal_tracker.schemas.log import GoalLogResponse
from goal_tracker.schemas.progress import StreakPoint, SuccessPoint, RatingPoint, GoalStats
from goal_tracker.services.dates import weekday_name, week_start, days_between
from goal_tracker.services.progress import goal_logs


def _chronological(logs: Iterable[GoalLogResponse]) -> List[GoalLogResponse]:
    return sorted(logs, key=lambda log: log.date)

def compute_streaks(logs: Iterable[GoalLogResponse]) -> List[StreakPoint]:
    points = []
    current = 0
    previous = None
    for log in _chronological(logs):
        if log.status != "achieved":
            current = 0
        elif (
            previous is not None
            and previous.status == "achieved"
            and days_between(previous.date, log.date) == 1
        ):
            current += 1
        else:
            current = 1
        points.append(StreakPoint(date=log.date, streak_length=current))
        previous = log
    return points


def _daily_successes(logs):
    return [
        SuccessPoint(date=log.date, success=1 if log.status == "achieved" else 0)
        for log in logs
    ]

def _specific_day_successes(frequency: SpecificDaysFrequency, logs):
    return [
        SuccessPoint(date=log.date, success=1 if log.status == "achieved" else 0)
        for log in logs
        if weekday_name(log.date) in frequency.specific_days
    ]

def _weekly_successes(frequency: DaysPerPeriodFrequency, logs):
    # achieved logs grouped by Sunday week start, in chronological order
    weeks = {}
    for log in logs:
        if log.status == "achieved":
            weeks.setdefault(week_start(log.date), []).append(log)

    return [
        SuccessPoint(date=achieved[-1].date, success=1)
        for achieved in weeks.values()
        if len(achieved) >= frequency.days_per_period
    ]

def _repeating_successes(frequency: RepeatingFrequency, logs):
    if not logs:
        return []
    points = []
    last_success = logs[0].date
    for log in logs:
        if log.status != "achieved":
            continue
        if days_between(last_success, log.date) >= frequency.repeat_every_n_days:
            points.append(SuccessPoint(date=log.date, success=1))
            last_success = log.date
    return points

def compute_successes(goal: GoalResponse, logs: Iterable[GoalLogResponse]) -> List[SuccessPoint]:
    frequency = goal.frequency
    history = goal_logs(goal, logs)

    if isinstance(frequency, DailyFrequency):
        return _daily_successes(history)
    if isinstance(frequency, SpecificDaysFrequency):
        return _specific_day_successes(frequency, history)
    if isinstance(frequency, DaysPerPeriodFrequency):
        # month/year success windows are not tracked
        if frequency.period_unit != "week":
            return []
        return _weekly_successes(frequency, history)
    if isinstance(frequency, RepeatingFrequency):
        return _repeating_successes(frequency, history)
    raise TypeError(f"Unsupported frequency: {type(frequency).__name__}")


def rating_series(goal: GoalResponse, logs: Iterable[GoalLogResponse]) -> List[RatingPoint]:
    """Achieved ratings against the goal's floor and ceiling, for charting."""
    return [
        RatingPoint(date=log.date, rating=log.rating, floor=goal.floor, ceiling=goal.ceiling)
        for log in goal_logs(goal, logs)
        if log.status == "achieved" and log.rating is not None
    ]

def summarize(goal: GoalResponse, logs: Iterable[GoalLogResponse]) -> GoalStats:
    history = goal_logs(goal, logs)
    streaks = compute_streaks(history)
    successes = compute_successes(goal, history)
    ratings = [log.rating for log in history if log.status == "achieved" and log.rating is not None]

    return GoalStats(
        current_streak=streaks[-1].streak_length if streaks else 0,
        longest_streak=max((point.streak_length for point in streaks), default=0),
        total_achieved=sum(1 for log in history if log.status == "achieved"),
        total_failed=sum(1 for log in history if log.status == "failed"),
        success_count=sum(point.success for point in successes),
        average_rating=round(sum(ratings) / len(ratings), 2) if ratings else None,
    )
