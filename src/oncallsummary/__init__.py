"""On-call summary: per-engineer coverage totals from PagerDuty schedules."""

__version__ = "0.1.0"
