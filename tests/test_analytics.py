from datetime import date, timedelta

from factories import make_goal, make_logs
from goal_tracker.services.analytics import (
    compute_streaks, compute_successes, rating_series, summarize,
)


def streak_values(logs):
    return [point.streak_length for point in compute_streaks(logs)]

def success_pairs(goal, logs):
    return [(point.date, point.success) for point in compute_successes(goal, logs)]


class TestStreaks:
    def test_broken_by_failure(self):
        logs = make_logs(
            (date(2024, 1, 1), "achieved"),
            (date(2024, 1, 2), "failed"),
            (date(2024, 1, 3), "achieved"),
        )
        assert streak_values(logs) == [1, 0, 1]

    def test_consecutive_run_counts_up(self):
        start = date(2024, 3, 1)
        logs = make_logs(*[(start + timedelta(days=i), "achieved") for i in range(6)])
        assert streak_values(logs) == [1, 2, 3, 4, 5, 6]

    def test_gap_restarts_streak(self):
        logs = make_logs(
            (date(2024, 1, 1), "achieved"),
            (date(2024, 1, 2), "achieved"),
            (date(2024, 1, 5), "achieved"),
        )
        assert streak_values(logs) == [1, 2, 1]

    def test_not_logged_is_zero(self):
        logs = make_logs((date(2024, 1, 1), "achieved"), (date(2024, 1, 2), "not_logged"))
        assert streak_values(logs) == [1, 0]

    def test_unsorted_input_is_ordered(self):
        logs = make_logs(
            (date(2024, 1, 3), "achieved"),
            (date(2024, 1, 1), "achieved"),
            (date(2024, 1, 2), "achieved"),
        )
        points = compute_streaks(logs)
        assert [point.date for point in points] == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]
        assert [point.streak_length for point in points] == [1, 2, 3]

    def test_empty(self):
        assert compute_streaks([]) == []


class TestSuccesses:
    def test_daily_one_point_per_log(self):
        goal = make_goal("daily")
        logs = make_logs((date(2024, 1, 1), "achieved"), (date(2024, 1, 2), "failed"))
        assert success_pairs(goal, logs) == [(date(2024, 1, 1), 1), (date(2024, 1, 2), 0)]

    def test_specific_days_skip_unscheduled(self):
        goal = make_goal("specific_days", specific_days=["monday", "wednesday"])
        logs = make_logs(
            (date(2024, 1, 8), "achieved"),   # monday
            (date(2024, 1, 9), "achieved"),   # tuesday
            (date(2024, 1, 10), "failed"),    # wednesday
        )
        assert success_pairs(goal, logs) == [(date(2024, 1, 8), 1), (date(2024, 1, 10), 0)]

    def test_weekly_success_dated_at_last_achievement(self):
        goal = make_goal("days_per_period", days_per_period=2, period_unit="week")
        logs = make_logs(
            (date(2024, 1, 7), "achieved"),
            (date(2024, 1, 9), "achieved"),
            (date(2024, 1, 11), "failed"),
            (date(2024, 1, 15), "achieved"),   # next week, only one
            (date(2024, 1, 22), "achieved"),
            (date(2024, 1, 27), "achieved"),
        )
        assert success_pairs(goal, logs) == [(date(2024, 1, 9), 1), (date(2024, 1, 27), 1)]

    def test_weekly_windows_start_on_sunday_of_first_log(self):
        goal = make_goal("days_per_period", days_per_period=2, period_unit="week")
        # Saturday and the following Sunday fall in different weeks
        logs = make_logs((date(2024, 1, 13), "achieved"), (date(2024, 1, 14), "achieved"))
        assert success_pairs(goal, logs) == []

    def test_month_and_year_periods_not_tracked(self):
        logs = make_logs((date(2024, 1, 1), "achieved"))
        for unit in ("month", "year"):
            goal = make_goal("days_per_period", days_per_period=1, period_unit=unit)
            assert compute_successes(goal, logs) == []

    def test_repeating_interval(self):
        goal = make_goal("repeating_n_days", repeat_every_n_days=3)
        logs = make_logs(
            (date(2024, 1, 1), "achieved"),
            (date(2024, 1, 2), "achieved"),
            (date(2024, 1, 4), "achieved"),
            (date(2024, 1, 5), "failed"),
            (date(2024, 1, 6), "achieved"),
            (date(2024, 1, 7), "achieved"),
        )
        # first log only seeds the baseline
        assert success_pairs(goal, logs) == [(date(2024, 1, 4), 1), (date(2024, 1, 7), 1)]

    def test_empty_history(self):
        for goal in (
            make_goal("daily"),
            make_goal("days_per_period", days_per_period=1, period_unit="week"),
            make_goal("repeating_n_days", repeat_every_n_days=2),
        ):
            assert compute_successes(goal, []) == []


def test_rating_series_only_rated_achievements():
    goal = make_goal("daily", floor="10 pages", ceiling="40 pages")
    logs = make_logs(
        (date(2024, 1, 2), "achieved", 6),
        (date(2024, 1, 1), "achieved", 3),
        (date(2024, 1, 3), "failed"),
        (date(2024, 1, 4), "achieved"),
    )
    series = rating_series(goal, logs)
    assert [(point.date, point.rating) for point in series] == [
        (date(2024, 1, 1), 3), (date(2024, 1, 2), 6),
    ]
    assert series[0].floor == "10 pages"
    assert series[0].ceiling == "40 pages"


def test_summarize():
    goal = make_goal("daily")
    logs = make_logs(
        (date(2024, 1, 1), "achieved", 4),
        (date(2024, 1, 2), "achieved", 8),
        (date(2024, 1, 3), "achieved", 9),
        (date(2024, 1, 4), "failed"),
        (date(2024, 1, 5), "achieved"),
    )
    stats = summarize(goal, logs)
    assert stats.current_streak == 1
    assert stats.longest_streak == 3
    assert stats.total_achieved == 4
    assert stats.total_failed == 1
    assert stats.success_count == 4
    assert stats.average_rating == 7.0


def test_summarize_without_logs():
    stats = summarize(make_goal("daily"), [])
    assert stats.current_streak == 0
    assert stats.longest_streak == 0
    assert stats.average_rating is None


def test_weekly_successes_over_multi_year_history():
    goal = make_goal("days_per_period", days_per_period=3, period_unit="week")
    start = date(2000, 1, 2)  # sunday
    weeks = 52 * 4
    entries = []
    for offset in range(weeks * 7):
        day = start + timedelta(days=offset)
        week = offset // 7
        # odd weeks only reach two achievements
        status = "achieved" if week % 2 == 0 or day.weekday() in (0, 1) else "failed"
        entries.append((day, status))

    points = compute_successes(goal, make_logs(*entries))

    assert len(points) == weeks // 2
    assert points[0].date == date(2000, 1, 8)
    assert all(point.date.weekday() == 5 for point in points)
    assert points[-1].date == start + timedelta(days=(weeks - 2) * 7 + 6)


def test_successes_ignore_other_goals_logs():
    goal = make_goal("daily", id=1)
    logs = make_logs((date(2024, 1, 1), "achieved")) + make_logs((date(2024, 1, 2), "achieved"), goal_id=2)
    assert success_pairs(goal, logs) == [(date(2024, 1, 1), 1)]
    assert summarize(goal, logs).total_achieved == 1
    assert rating_series(goal, make_logs((date(2024, 1, 3), "achieved", 5), goal_id=2)) == []
