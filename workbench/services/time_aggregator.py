"""
time_aggregator.py — Planned vs. actual time statistics
Pure reductions over task collections: per-day completion, per-project
hour share, and report rollups. Nothing here touches the database or
mutates its input; empty input yields zero-valued statistics.
"""

from collections.abc import Iterable
from datetime import date, timedelta

from workbench.config import MAX_REPORT_DAYS, UNASSIGNED_PROJECT_COLOR, UNASSIGNED_PROJECT_NAME
from workbench.errors import ValidationError
from workbench.schemas import DailyStats, HoursBasis, ProjectTimeStats, ReportSummary
from workbench.services.status_machine import is_completed


def _ratio(part: float, whole: float) -> float:
    return part / whole if whole > 0 else 0.0


def _hours(value) -> float:
    return float(value or 0.0)


def resolve_basis(value) -> HoursBasis:
    if isinstance(value, HoursBasis):
        return value
    try:
        return HoursBasis(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown hours basis {value!r}; use planned, actual or effective")


def task_hours(task, basis: HoursBasis = HoursBasis.PLANNED) -> float:
    """Hours a task contributes under the chosen basis."""
    if basis is HoursBasis.ACTUAL:
        return _hours(task.actual_hours)
    if basis is HoursBasis.EFFECTIVE:
        if is_completed(task) and _hours(task.actual_hours) > 0:
            return _hours(task.actual_hours)
    return _hours(task.hours)


def date_range(start: date, end: date, max_days: int = MAX_REPORT_DAYS) -> list[date]:
    """Every calendar day from start to end inclusive."""
    if start is None or end is None:
        raise ValidationError("Both start and end dates are required")
    if start > end:
        raise ValidationError(f"Start date {start} is after end date {end}")
    days = (end - start).days + 1
    if max_days and days > max_days:
        raise ValidationError(f"Range of {days} days exceeds the {max_days}-day limit")
    return [start + timedelta(days=i) for i in range(days)]


def daily_stats(tasks: Iterable, day: date) -> DailyStats:
    total = completed = 0
    for t in tasks:
        if t.date != day:
            continue
        total += 1
        if is_completed(t):
            completed += 1
    return DailyStats(
        date=day,
        total_count=total,
        completed_count=completed,
        completion_rate=_ratio(completed, total),
    )


def daily_series(tasks: Iterable, days: list[date]) -> list[DailyStats]:
    """One entry per day, days without tasks included, chronological."""
    by_day: dict[date, list] = {d: [] for d in days}
    for t in tasks:
        if t.date in by_day:
            by_day[t.date].append(t)
    return [daily_stats(by_day[d], d) for d in sorted(by_day)]


def project_time_stats(tasks: Iterable, projects: Iterable = (),
                       basis: HoursBasis = HoursBasis.PLANNED) -> list[ProjectTimeStats]:
    """Hours per project and share of the grand total.

    Unassigned tasks are grouped under project_id None. Sorted by hours
    descending, then project id ascending (unassigned counts as 0).
    """
    known = {p.id: p for p in projects}
    groups: dict = {}
    for t in tasks:
        g = groups.setdefault(t.project_id, {"hours": 0.0, "count": 0})
        g["hours"] += task_hours(t, basis)
        g["count"] += 1

    grand_total = sum(g["hours"] for g in groups.values())

    stats = []
    for pid, g in groups.items():
        project = known.get(pid)
        stats.append(ProjectTimeStats(
            project_id=pid,
            project_name=project.name if project is not None else UNASSIGNED_PROJECT_NAME,
            color=project.color if project is not None else UNASSIGNED_PROJECT_COLOR,
            total_hours=round(g["hours"], 2),
            task_count=g["count"],
            percentage=_ratio(g["hours"], grand_total) * 100,
        ))

    stats.sort(key=lambda s: (-s.total_hours, s.project_id or 0))
    return stats


def report_summary(tasks: Iterable) -> ReportSummary:
    total = completed = 0
    total_hours = completed_hours = 0.0
    for t in tasks:
        total += 1
        total_hours += _hours(t.hours)
        if is_completed(t):
            completed += 1
            completed_hours += _hours(t.actual_hours)
    return ReportSummary(
        total_tasks=total,
        completed_tasks=completed,
        total_hours=round(total_hours, 2),
        completed_hours=round(completed_hours, 2),
        average_rate=_ratio(completed, total),
    )
