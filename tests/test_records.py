from datetime import date, datetime

import pytest

from timetracking.models import RawRow
from timetracking.records import RecordError, parse_instant, parse_record


def row(start, end=None, project="ProjA", submitted=""):
    return RawRow(submitted=submitted, project=project, start=start, end=end, notes="")


def test_parse_full_timestamp():
    assert parse_instant("2021-05-01 09:15", None) == datetime(2021, 5, 1, 9, 15)


def test_parse_bare_time_uses_default_date():
    assert parse_instant("14:30", date(2021, 5, 1)) == datetime(2021, 5, 1, 14, 30)


def test_bare_time_without_date_fails():
    with pytest.raises(RecordError):
        parse_instant("14:30", None)


@pytest.mark.parametrize("value", ["", "yesterday", "2021-05-01", "2021/05/01 09:00", "25:00"])
def test_unparseable(value):
    with pytest.raises(RecordError):
        parse_instant(value, date(2021, 5, 1))


def test_bare_start_takes_previous_date():
    rec = parse_record(row("14:30", "15:00"), datetime(2021, 5, 1, 9, 0))
    assert rec.start == datetime(2021, 5, 1, 14, 30)
    assert rec.end == datetime(2021, 5, 1, 15, 0)
    assert not rec.deferred


def test_bare_end_takes_current_start_date():
    rec = parse_record(row("2021-05-02 09:00", "11:00"), datetime(2021, 5, 1, 9, 0))
    assert rec.end == datetime(2021, 5, 2, 11, 0)


def test_missing_end_is_deferred():
    rec = parse_record(row("2021-05-01 09:00"), None)
    assert rec.deferred
    assert rec.end is None


def test_submitted_carried_verbatim():
    rec = parse_record(row("2021-05-01 09:00", submitted=" YES "), None)
    assert rec.submitted == " YES "


def test_bad_end_fails():
    with pytest.raises(RecordError, match="end time"):
        parse_record(row("2021-05-01 09:00", "soon"), None)


def test_bad_start_fails():
    with pytest.raises(RecordError, match="start time"):
        parse_record(row("9am", "2021-05-01 10:00"), None)
