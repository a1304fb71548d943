from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, TextIO, Union

from .models import RawRow, ResolvedRecord, Statistics
from .records import RecordError, parse_record

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("project", "start")

# Rows marked with any of these (case-insensitive) are left out of the report.
# "n"/"no"/"false" exclude just like the affirmative values.
DEFAULT_SUBMITTED_TOKENS = ("y", "yes", "true", "n", "no", "false")


@dataclass(frozen=True)
class Open:
    """Previous record is waiting for an end time."""
    record: ResolvedRecord


@dataclass(frozen=True)
class Closed:
    """Previous record is complete, or there is none yet."""
    record: Optional[ResolvedRecord] = None


Slot = Union[Open, Closed]


def read_rows(fileobj: TextIO, *, log: Optional[logging.Logger] = None) -> Iterator[RawRow]:
    """Yield timesheet rows from a CSV stream.

    Lines starting with `#` are comments. The header row names the columns
    (submitted, project, start, end, notes) in any order. Rows with the
    wrong number of fields, or missing a project or start cell, are logged
    and skipped.
    """
    log = log or logger
    lineno = 0

    def data_lines() -> Iterator[str]:
        nonlocal lineno
        for lineno, line in enumerate(fileobj, start=1):
            if line.startswith("#"):
                continue
            yield line

    reader = csv.reader(data_lines())
    header: Optional[list[str]] = None

    while True:
        try:
            cells = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            log.error(f"line {lineno}: malformed CSV row skipped: {e}")
            continue

        if not cells or not any(c.strip() for c in cells):
            continue

        if header is None:
            header = [c.strip().lower() for c in cells]
            missing = [c for c in REQUIRED_COLUMNS if c not in header]
            if missing:
                log.error(f"line {lineno}: header is missing column(s) {', '.join(missing)}; no rows read")
                return
            continue

        if len(cells) != len(header):
            log.error(f"line {lineno}: expected {len(header)} fields, found {len(cells)}; row skipped: {cells!r}")
            continue

        values = dict(zip(header, (c.strip() for c in cells)))
        if not values.get("project") or not values.get("start"):
            log.error(f"line {lineno}: row has no project or start value, skipped: {cells!r}")
            continue

        yield RawRow(
            submitted=values.get("submitted", ""),
            project=values["project"],
            start=values["start"],
            end=values.get("end") or None,
            notes=values.get("notes", ""),
            line=lineno,
        )


def is_pending(record: ResolvedRecord, tokens: Iterable[str] = DEFAULT_SUBMITTED_TOKENS) -> bool:
    """True if the submitted column marks the record as still to be reported."""
    return record.submitted.strip().lower() not in tokens


def aggregate(
    rows: Iterable[RawRow],
    ignore_submitted: bool = False,
    *,
    log: Optional[logging.Logger] = None,
    now: Optional[Callable[[], datetime]] = None,
    submitted_tokens: Optional[Iterable[str]] = None,
) -> Statistics:
    """Sum elapsed time per day and project over timesheet rows.

    A row without an end time is closed by the start of the next usable row;
    if it is the last one it is closed at `now()`. Rows whose times cannot be
    parsed are logged and skipped without disturbing that lookback.
    """
    log = log or logger
    now = now or datetime.now
    if submitted_tokens is None:
        submitted_tokens = DEFAULT_SUBMITTED_TOKENS
    tokens = frozenset(t.lower() for t in submitted_tokens)
    stats = Statistics()

    def count(record: ResolvedRecord) -> None:
        if not ignore_submitted and not is_pending(record, tokens):
            log.debug(f"skipping submitted record {record.project} [{record.submitted}] {record.start:%Y-%m-%d %H:%M}")
            return
        _accumulate(stats, record, log)

    slot: Slot = Closed()
    for row in rows:
        previous_start = slot.record.start if slot.record is not None else None
        try:
            current = parse_record(row, previous_start)
        except RecordError as e:
            log.error(f"line {row.line}: {e}; row skipped")
            continue
        log.debug(f"{current}")

        if isinstance(slot, Open):
            count(replace(slot.record, end=current.start))
        if not current.deferred:
            count(current)

        slot = Open(current) if current.deferred else Closed(current)

    if isinstance(slot, Open):
        end = now()
        log.warning(
            f"last record for {slot.record.project} starting {slot.record.start:%Y-%m-%d %H:%M} "
            f"has no end time; using the current time {end:%Y-%m-%d %H:%M}"
        )
        count(replace(slot.record, end=end))

    return stats


def _accumulate(stats: Statistics, record: ResolvedRecord, log: logging.Logger) -> None:
    delta = record.duration
    if delta.total_seconds() < 0:
        log.error(
            f"{record.project}: end {record.end:%Y-%m-%d %H:%M} is before start "
            f"{record.start:%Y-%m-%d %H:%M} ({int(delta.total_seconds() / 60)} minutes); record discarded"
        )
        return

    projects = stats.date_projects.setdefault(record.start.date(), {})
    if record.project in projects:
        projects[record.project] += delta
    else:
        projects[record.project] = delta
    # only records that reach the report widen the project column
    stats.max_project_len = max(stats.max_project_len, len(record.project))


def aggregate_file(path: Union[str, Path], ignore_submitted: bool = False, **kwargs) -> Statistics:
    """Aggregate a timesheet CSV file. Raises OSError if it cannot be read."""
    with open(path, newline="", encoding="utf-8-sig") as f:
        return aggregate(read_rows(f, log=kwargs.get("log")), ignore_submitted, **kwargs)
