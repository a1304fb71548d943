from datetime import date, timedelta

from timetracking.models import Statistics
from timetracking.report import build_report, render_report_text


def stats():
    return Statistics(
        date_projects={
            date(2021, 5, 2): {"Website": timedelta(minutes=45)},
            date(2021, 5, 1): {
                "ProjB": timedelta(minutes=90, seconds=30),
                "ProjA": timedelta(minutes=90),
            },
        },
        max_project_len=7,
    )


def test_build_report_orders_days_and_projects():
    rep = build_report(stats())
    assert [d.day for d in rep.days] == [date(2021, 5, 1), date(2021, 5, 2)]
    assert rep.days[0].projects == [("ProjA", 90), ("ProjB", 90)]
    assert rep.days[0].total_minutes == 180
    assert rep.width == 7


def test_render_report_text():
    text = render_report_text(build_report(stats()))
    assert text.splitlines() == [
        "=== REPORT ===",
        "2021-05-01",
        "  ProjA   | 01:30",
        "  ProjB   | 01:30",
        "  ----SUM | 03:00",
        "-----------------",
        "2021-05-02",
        "  Website | 00:45",
        "  ----SUM | 00:45",
        "-----------------",
    ]


def test_render_empty():
    assert render_report_text(build_report(Statistics())) == "=== REPORT ==="
