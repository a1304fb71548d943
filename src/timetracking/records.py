from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from .models import RawRow, ResolvedRecord

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"
TIME_FORMAT = "%H:%M"


class RecordError(ValueError):
    """A timesheet row whose times cannot be resolved."""


def parse_instant(value: str, default_date: Optional[date]) -> datetime:
    """Parse a full timestamp, or a bare time of day placed on `default_date`."""
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError:
        pass

    try:
        t = datetime.strptime(value, TIME_FORMAT).time()
    except ValueError:
        raise RecordError(
            f"[{value}] cannot be parsed with format [{TIMESTAMP_FORMAT}] or [{TIME_FORMAT}]"
        ) from None

    if default_date is None:
        raise RecordError(f"[{value}] is a bare time and there is no earlier date to place it on")
    return datetime.combine(default_date, t)


def parse_record(row: RawRow, previous_start: Optional[datetime]) -> ResolvedRecord:
    prev_date = previous_start.date() if previous_start is not None else None
    try:
        start = parse_instant(row.start, prev_date)
    except RecordError as e:
        raise RecordError(f"start time {e}") from None

    end = None
    if row.end:
        try:
            end = parse_instant(row.end, start.date())
        except RecordError as e:
            raise RecordError(f"end time {e}") from None

    return ResolvedRecord(
        project=row.project,
        start=start,
        end=end,
        notes=row.notes,
        deferred=end is None,
        submitted=row.submitted,
    )
