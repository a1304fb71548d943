"""Generate per-day, per-project time reports from timesheet CSV files."""

__version__ = "0.4.0"
