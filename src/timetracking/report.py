from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .models import Statistics
from .utils import format_hhmm, whole_minutes


@dataclass(frozen=True)
class DayReport:
    day: date
    projects: list[tuple[str, int]]  # name, minutes
    total_minutes: int


@dataclass(frozen=True)
class Report:
    title: str
    days: list[DayReport]
    width: int


def build_report(stats: Statistics, title: str = "=== REPORT ===") -> Report:
    days: list[DayReport] = []
    for day in sorted(stats.date_projects):
        projects = [
            (name, whole_minutes(duration))
            for name, duration in sorted(stats.date_projects[day].items())
        ]
        days.append(DayReport(day=day, projects=projects, total_minutes=sum(m for _, m in projects)))
    return Report(title=title, days=days, width=stats.max_project_len)


def render_report_text(rep: Report) -> str:
    lines: list[str] = [rep.title]
    w = rep.width
    for d in rep.days:
        lines.append(d.day.strftime("%Y-%m-%d"))
        for name, minutes in d.projects:
            lines.append(f"  {name:<{w}} | {format_hhmm(minutes)}")
        lines.append(f"  {'SUM':->{w}} | {format_hhmm(d.total_minutes)}")
        lines.append("-" * (w + 10))
    return "\n".join(lines)
