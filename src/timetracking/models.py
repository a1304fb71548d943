from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional


@dataclass(frozen=True)
class RawRow:
    submitted: str
    project: str
    start: str
    end: Optional[str]
    notes: str
    line: int = 0


@dataclass(frozen=True)
class ResolvedRecord:
    project: str
    start: datetime
    end: Optional[datetime]
    notes: str
    deferred: bool
    submitted: str

    @property
    def duration(self) -> timedelta:
        if self.end is None:
            raise ValueError(f"record for {self.project!r} has no end time")
        return self.end - self.start


@dataclass
class Statistics:
    date_projects: dict[date, dict[str, timedelta]] = field(default_factory=dict)
    max_project_len: int = 0
