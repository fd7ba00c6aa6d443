"""Task and focus-session analytics.

Every function here is a pure function of its arguments. ``now`` is always
passed in so results are reproducible.
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta
from typing import Any

from pomotrack.models.session import SessionRecord
from pomotrack.models.task import Task

TOP_TASKS_LIMIT = 5
UPCOMING_DAYS = 7
AVERAGE_WINDOW_DAYS = 30


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves away from zero for positive values (2.5 -> 3)."""
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def _local_date(moment: datetime, now: datetime) -> date:
    """Calendar date of ``moment`` in the timezone of ``now``."""
    if moment.tzinfo is not None and now.tzinfo is not None:
        moment = moment.astimezone(now.tzinfo)
    return moment.date()


def completion_rate(tasks: Sequence[Task]) -> int:
    """Percentage of completed tasks, 0 when there are none."""
    if not tasks:
        return 0
    completed = sum(1 for t in tasks if t.completed)
    return int(round_half_up(completed / len(tasks) * 100))


def accuracy_from_ratio(ratio: float) -> int:
    """Map an actual/estimated ratio to a 0-100 accuracy score.

    Close estimates (within 20%) score near 100. Misses up to 2x lose points
    gently and never drop below 50. Anything further off falls steeply but
    bottoms out at 10.
    """
    if ratio <= 0:
        return 0

    deviation = abs(ratio - 1)
    if 0.8 <= ratio <= 1.2:
        accuracy = 100 - deviation * 100
    elif 0.5 <= ratio <= 2.0:
        accuracy = max(50, 80 - deviation * 50)
    else:
        accuracy = max(10, 50 - deviation * 20)

    return int(round_half_up(min(100, max(0, accuracy))))


def estimation_accuracy(tasks: Iterable[Task]) -> int:
    """Accuracy of time estimates over tasks with both estimate and actual."""
    measured = [
        t
        for t in tasks
        if t.estimated_time and t.estimated_time > 0
        and t.actual_time and t.actual_time > 0
    ]
    if not measured:
        return 0

    total_estimated = sum(t.estimated_time for t in measured)
    total_actual = sum(t.actual_time for t in measured)
    if total_estimated == 0:
        return 0

    return accuracy_from_ratio(total_actual / total_estimated)


def most_time_consuming(
    tasks: Iterable[Task], limit: int = TOP_TASKS_LIMIT
) -> list[Task]:
    """Tasks with tracked time, longest first. Ties keep list order."""
    tracked = [t for t in tasks if t.actual_time and t.actual_time > 0]
    # sorted() is stable, so equal times keep their original order
    return sorted(tracked, key=lambda t: t.actual_time, reverse=True)[:limit]


def deadline_buckets(tasks: Iterable[Task], today: date) -> dict[str, list[Task]]:
    """
    Partition incomplete tasks with a deadline by due date.

    Returns:
        Dict with ``overdue``, ``due_today`` and ``upcoming`` (due within the
        next 7 days, today excluded) task lists
    """
    buckets: dict[str, list[Task]] = {"overdue": [], "due_today": [], "upcoming": []}
    horizon = today + timedelta(days=UPCOMING_DAYS)

    for task in tasks:
        if task.completed or task.deadline is None:
            continue
        if task.deadline < today:
            buckets["overdue"].append(task)
        elif task.deadline == today:
            buckets["due_today"].append(task)
        elif task.deadline <= horizon:
            buckets["upcoming"].append(task)

    return buckets


def completion_streak(tasks: Iterable[Task], now: datetime) -> int:
    """
    Consecutive days, counting back from today, with a completed task.

    Days are attributed by ``created_at`` since tasks carry no completion
    timestamp.
    """
    days = {_local_date(t.created_at, now) for t in tasks if t.completed}

    streak = 0
    day = now.date()
    while day in days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def most_productive_day(tasks: Iterable[Task], now: datetime) -> str | None:
    """Weekday name with the most tasks created, or None without tasks."""
    counts: dict[str, int] = {}
    for task in tasks:
        weekday = _local_date(task.created_at, now).strftime("%A")
        counts[weekday] = counts.get(weekday, 0) + 1

    if not counts:
        return None
    # max() keeps the first of equal counts, i.e. the first weekday seen
    return max(counts.items(), key=lambda item: item[1])[0]


def time_summary(tasks: Sequence[Task]) -> dict[str, Any]:
    """Totals and averages of estimated and tracked minutes."""
    tracked = [t.actual_time for t in tasks if t.actual_time and t.actual_time > 0]
    return {
        "total_estimated_minutes": sum(t.estimated_time or 0 for t in tasks),
        "total_actual_minutes": sum(t.actual_time or 0 for t in tasks),
        "tasks_with_actual_time": len(tracked),
        "average_task_minutes": (
            int(round_half_up(sum(tracked) / len(tracked))) if tracked else 0
        ),
        "estimation_accuracy": estimation_accuracy(tasks),
    }


def today_session_stats(
    records: Iterable[SessionRecord], now: datetime
) -> dict[str, int]:
    """Work sessions finished today and the minutes they covered."""
    today = now.date()
    work_today = [
        r
        for r in records
        if r.session_type == "work" and _local_date(r.start_time, now) == today
    ]
    return {
        "work_sessions": len(work_today),
        "total_minutes": sum(r.duration for r in work_today),
    }


def focus_minutes_by_task(records: Iterable[SessionRecord]) -> dict[str, int]:
    """Configured work minutes per recorded task title."""
    minutes: dict[str, int] = defaultdict(int)
    for record in records:
        if record.session_type == "work":
            minutes[record.task_title] += record.duration
    return dict(minutes)


def compute_statistics(
    tasks: Sequence[Task],
    records: Sequence[SessionRecord],
    now: datetime,
) -> dict[str, Any]:
    """
    Compute the full statistics report.

    Args:
        tasks: All tasks in list order
        records: Completed sessions in order of completion
        now: Reference time for date-relative metrics

    Returns:
        Dict with task counts, deadline buckets, time tracking, productivity
        and session metrics
    """
    today = now.date()
    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)
    buckets = deadline_buckets(tasks, today)
    week_ago = today - timedelta(days=7)

    productivity = None
    if tasks:
        productivity = {
            "average_tasks_per_day": round_half_up(total / AVERAGE_WINDOW_DAYS, 1),
            "completion_streak": completion_streak(tasks, now),
            "most_productive_day": most_productive_day(tasks, now),
        }

    return {
        "generated_at": now.isoformat(),
        "total_tasks": total,
        "completed_tasks": completed,
        "pending_tasks": total - completed,
        "completion_rate": completion_rate(tasks),
        "overdue_tasks": len(buckets["overdue"]),
        "due_today_tasks": len(buckets["due_today"]),
        "upcoming_tasks": len(buckets["upcoming"]),
        "priority": {
            level: sum(1 for t in tasks if t.priority == level)
            for level in ("high", "medium", "low")
        },
        "created_this_week": sum(
            1 for t in tasks if _local_date(t.created_at, now) >= week_ago
        ),
        "time": time_summary(tasks),
        "most_time_consuming": [
            {"id": t.id, "title": t.title, "actual_time": t.actual_time}
            for t in most_time_consuming(tasks)
        ],
        "productivity": productivity,
        "sessions": {
            "total_sessions": len(records),
            "today": today_session_stats(records, now),
            "focus_minutes_by_task": focus_minutes_by_task(records),
        },
    }
