# -*- coding: utf-8 -*-
"""Period-bounded analytics over module content."""

from .engine import PERIOD_DAYS, build_journal_report, build_module_report, build_wellness_report, summarize, zero_report

__all__ = [
    "PERIOD_DAYS",
    "build_journal_report",
    "build_module_report",
    "build_wellness_report",
    "summarize",
    "zero_report",
]
