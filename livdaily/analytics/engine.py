# -*- coding: utf-8 -*-
"""Analytics Engine — period-bounded summaries over a caller's module content.

Pipeline per request:
  1. select the owner's items created inside the window (7 or 30 days back);
  2. read each item's payload through its module payload model;
  3. reduce: totals, a mean per numeric key over the items that supplied it, and
     a frequency histogram per categorical key;
  4. pick recommendations from fixed threshold tables.

`MODULE_STATS` drives steps 2-4, so a module's report shape is data, not code.
Averages are rounded to one decimal place, counts and totals are integers, and
an empty window yields the all-zero report with the module's no-activity text.
"""

from __future__ import annotations

import logging
import operator
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..content.models import Module
from ..content.payloads import JournalPayload, parse_payload, payload_number
from ..content.storage import format_timestamp, list_items
from ..journal.storage import list_entries

logger = logging.getLogger(__name__)

PERIOD_DAYS: Dict[str, int] = {"week": 7, "month": 30}

WELLNESS = "wellness"

_OPS: Dict[str, Callable[[float, float], bool]] = {"<": operator.lt, ">": operator.gt}


@dataclass(frozen=True)
class NumericField:
    field: str
    total_key: Optional[str] = None
    average_key: Optional[str] = None


@dataclass(frozen=True)
class Breakdown:
    field: str
    key: str
    # "payload" reads the payload model, "item" reads the item's own column.
    source: str = "payload"


@dataclass(frozen=True)
class Rule:
    metric: str
    op: str
    threshold: float
    messages: Tuple[str, ...]

    def matches(self, metrics: Mapping[str, float]) -> bool:
        value = metrics.get(self.metric)
        if value is None:
            return False
        return _OPS[self.op](value, self.threshold)


@dataclass(frozen=True)
class ModuleStats:
    count_key: str
    numeric: Tuple[NumericField, ...]
    breakdowns: Tuple[Breakdown, ...]
    rules: Tuple[Rule, ...]
    fallback: Tuple[str, ...]
    no_activity: str
    # "first": the first matching rule wins; "all": every matching rule contributes.
    rule_mode: str = "first"
    # Published as a single `recommendation` string or a `recommendations` list.
    as_list: bool = False


def _duration(total_key: str = "totalDuration") -> NumericField:
    return NumericField("duration", total_key, "averageDuration")


def _per_week(module: str, sessions: int = 3) -> Rule:
    return Rule(
        "perWeek",
        "<",
        sessions,
        (f"Try to fit in at least {sessions} {module} sessions a week to build a steady habit.",),
    )


def _session_stats(module: str) -> ModuleStats:
    return ModuleStats(
        count_key="totalSessions",
        numeric=(_duration(),),
        breakdowns=(Breakdown("category", "categoryBreakdown", source="item"), Breakdown("mood", "moodDistribution")),
        rules=(_per_week(module),),
        fallback=(f"Great consistency with your {module} practice. Keep it going!",),
        no_activity=f"No {module} sessions yet this period. Start with a short session to build momentum.",
    )


MODULE_STATS: Dict[Module, ModuleStats] = {
    Module.movement: ModuleStats(
        count_key="totalSessions",
        numeric=(_duration(), NumericField("calories", "totalCalories", "averageCalories")),
        breakdowns=(Breakdown("activity_type", "activityBreakdown"), Breakdown("intensity", "intensityDistribution")),
        rules=(
            Rule("averageDuration", "<", 20, ("Try extending your sessions toward 20-30 minutes.",)),
            _per_week("movement"),
        ),
        fallback=("Great work staying active! Mix up activity types and intensities to keep progressing.",),
        no_activity="No movement logged this period. Try a short walk or stretch to get started.",
    ),
    Module.sleep: ModuleStats(
        count_key="totalNights",
        numeric=(_duration("totalHours"), NumericField("quality", average_key="averageQuality")),
        breakdowns=(Breakdown("pattern", "sleepPatterns"), Breakdown("wake_up_reason", "wakeUpReasons")),
        rules=(
            Rule(
                "averageQuality",
                "<",
                5,
                ("Try our wind-down flow 30 minutes before bed", "Consider using sleep sounds for better rest"),
            ),
            Rule(
                "averageDuration",
                "<",
                6,
                ("Aim for 7-9 hours of sleep per night", "Try our extended meditation sessions"),
            ),
        ),
        fallback=("Great job maintaining good sleep habits!", "Consider exploring advanced sleep coaching"),
        no_activity="No sleep logged this period. Log your nights to get personalized insights.",
        rule_mode="all",
        as_list=True,
    ),
    Module.nutrition: ModuleStats(
        count_key="totalEntries",
        numeric=(
            NumericField("calories", "totalCalories", "averageCalories"),
            NumericField("protein", "totalProtein", "averageProtein"),
            NumericField("carbs", "totalCarbs"),
            NumericField("fat", "totalFat"),
        ),
        breakdowns=(Breakdown("meal_type", "mealBreakdown"), Breakdown("category", "foodCategories")),
        rules=(
            Rule("averageProtein", "<", 20, ("Add a protein source to more of your meals.",)),
            Rule("averageCalories", "<", 300, ("Your logged meals look light. Make sure you eat enough to fuel your day.",)),
            Rule("averageCalories", ">", 900, ("Your meals run heavy. Try adding lighter, vegetable-forward options.",)),
        ),
        fallback=("Nice balance! Keep logging meals to track your nutrition trends.",),
        no_activity="No meals logged this period. Log a meal to start tracking your nutrition.",
    ),
    Module.grounding: ModuleStats(
        count_key="totalSessions",
        numeric=(_duration(),),
        breakdowns=(Breakdown("technique", "techniqueBreakdown"), Breakdown("stress_level", "stressLevelDistribution")),
        rules=(_per_week("grounding"),),
        fallback=("You're building a solid grounding practice. Reach for it whenever stress builds.",),
        no_activity="No grounding sessions this period. Try the 5-4-3-2-1 exercise next time stress builds.",
    ),
    Module.mindfulness: ModuleStats(
        count_key="totalSessions",
        numeric=(_duration(), NumericField("focus_score", average_key="averageFocusScore")),
        breakdowns=(Breakdown("focus_type", "focusTypeBreakdown"),),
        rules=(
            Rule("averageFocusScore", "<", 5, ("Try shorter guided sessions to build focus gradually.",)),
            Rule("averageDuration", "<", 10, ("Try extending your sessions to 10 minutes or more.",)),
            _per_week("mindfulness"),
        ),
        fallback=("Your mindfulness practice is strong. Keep showing up!",),
        no_activity="No mindfulness sessions this period. A 5-minute guided meditation is a great start.",
    ),
    Module.breathwork: ModuleStats(
        count_key="totalSessions",
        numeric=(_duration(),),
        breakdowns=(Breakdown("pattern", "patternBreakdown"), Breakdown("technique", "techniqueBreakdown")),
        rules=(
            Rule("averageDuration", "<", 5, ("Try a few more rounds per session; aim for at least 5 minutes.",)),
            _per_week("breathwork"),
        ),
        fallback=("Great breathwork rhythm! Try a new pattern to keep it fresh.",),
        no_activity="No breathwork sessions this period. Try box breathing for two minutes today.",
    ),
    Module.focus: _session_stats("focus"),
    Module.calm: _session_stats("calm"),
    Module.motivation: _session_stats("motivation"),
}

_JOURNAL_RULES: Tuple[Rule, ...] = (
    Rule("perWeek", "<", 3, ("Try journaling a few times a week to build the habit.",)),
    Rule("averageWordsPerEntry", "<", 50, ("Try writing a little more in each entry to dig deeper.",)),
)
_JOURNAL_FALLBACK = "Wonderful reflection practice! Keep writing regularly."
_JOURNAL_NO_ACTIVITY = "No journal entries this period. Write a few lines about your day to get started."
_TOP_TAGS = 5


def period_days(period: str) -> int:
    try:
        return PERIOD_DAYS[period]
    except KeyError:
        raise ValueError(f"unknown period: {period!r}") from None


def window_start(period: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return format_timestamp(now - timedelta(days=period_days(period)))


def _average(total: float, count: int) -> float:
    return round(total / count, 1) if count else 0.0


def _histogram(values: Iterable[Optional[str]]) -> Dict[str, int]:
    return dict(Counter(v for v in values if v))


def _recommend(stats: ModuleStats, metrics: Mapping[str, float]) -> List[str]:
    messages: List[str] = []
    for rule in stats.rules:
        if rule.matches(metrics):
            messages.extend(rule.messages)
            if stats.rule_mode == "first":
                break
    return messages or list(stats.fallback)


def _publish_recommendation(stats: ModuleStats, messages: Sequence[str]) -> Dict[str, Any]:
    if stats.as_list:
        return {"recommendations": list(messages)}
    return {"recommendation": messages[0]}


def build_module_report(module: Module, items: Sequence[Mapping[str, Any]], *, period: str) -> Dict[str, Any]:
    """Reduce one module's items (content rows, newest first) into its report."""
    module = Module(module)
    if module is Module.journal:
        return build_journal_report(items, [], period=period)
    stats = MODULE_STATS[module]
    payloads = [parse_payload(module, item.get("payload")) for item in items]

    report: Dict[str, Any] = {"period": period, stats.count_key: len(items)}
    metrics: Dict[str, float] = {}
    for numeric in stats.numeric:
        values = [v for v in (p.present(numeric.field) for p in payloads) if v is not None]
        total = sum(values)
        if numeric.total_key:
            report[numeric.total_key] = int(round(total))
        if numeric.average_key:
            report[numeric.average_key] = _average(total, len(values))
            if values:
                metrics[numeric.average_key] = report[numeric.average_key]

    for breakdown in stats.breakdowns:
        if breakdown.source == "item":
            report[breakdown.key] = _histogram(item.get(breakdown.field) for item in items)
        else:
            report[breakdown.key] = _histogram(p.present(breakdown.field) for p in payloads)

    if not items:
        report.update(_publish_recommendation(stats, [stats.no_activity]))
        return report

    metrics["perWeek"] = len(items) * 7 / period_days(period)
    report.update(_publish_recommendation(stats, _recommend(stats, metrics)))
    return report


def _word_count(text: Optional[str]) -> Optional[int]:
    if not text or not text.strip():
        return None
    return len(text.split())


def build_journal_report(
    items: Sequence[Mapping[str, Any]],
    entries: Sequence[Mapping[str, Any]],
    *,
    period: str,
) -> Dict[str, Any]:
    """Journal stats over journal entries plus journal-module content items."""
    moods: List[Optional[str]] = []
    tags: List[str] = []
    words: List[int] = []

    for entry in entries:
        parsed = JournalPayload.model_validate({"mood": entry.get("mood"), "tags": entry.get("tags")})
        moods.append(parsed.mood)
        tags.extend(parsed.tags or [])
        count = _word_count(entry.get("content"))
        if count is not None:
            words.append(count)
    for item in items:
        parsed = parse_payload(Module.journal, item.get("payload"))
        moods.append(parsed.present("mood"))
        tags.extend(parsed.present("tags") or [])
        count = _word_count(item.get("content"))
        if count is not None:
            words.append(count)

    total = len(entries) + len(items)
    mood_counts = Counter(m for m in moods if m)
    report: Dict[str, Any] = {
        "period": period,
        "totalEntries": total,
        "totalWords": sum(words),
        "averageWordsPerEntry": _average(sum(words), len(words)),
        "moodDistribution": dict(mood_counts),
        "mostFrequentMood": mood_counts.most_common(1)[0][0] if mood_counts else None,
        "topTags": [{"tag": tag, "count": n} for tag, n in Counter(tags).most_common(_TOP_TAGS)],
    }
    if not total:
        report["recommendation"] = _JOURNAL_NO_ACTIVITY
        return report

    metrics = {"perWeek": total * 7 / period_days(period)}
    if words:
        metrics["averageWordsPerEntry"] = report["averageWordsPerEntry"]
    matched = next((r.messages[0] for r in _JOURNAL_RULES if r.matches(metrics)), _JOURNAL_FALLBACK)
    report["recommendation"] = matched
    return report


def wellness_recommendation(activities: int, modules_used: int, period: str) -> str:
    per_day = activities / period_days(period)
    if activities == 0:
        return "Start your wellness journey by exploring different modules to find what works best for you."
    if per_day < 1:
        return "Try to engage with at least one wellness activity daily for better results."
    if modules_used < 3:
        return (
            f"You've been focusing on {modules_used} module(s). "
            "Explore other modules to balance your wellness routine."
        )
    if per_day >= 2:
        return "Great commitment! You're maintaining a strong wellness routine. Keep deepening your practice."
    return "You're on a solid wellness journey. Keep up the consistent practice!"


def build_wellness_report(
    items: Sequence[Mapping[str, Any]],
    entries: Sequence[Mapping[str, Any]],
    *,
    period: str,
) -> Dict[str, Any]:
    """Cross-module rollup. Journal entries count as activities but not as a module."""
    module_breakdown = _histogram(item.get("module") for item in items)
    # Any module may log a duration; unusable values read as absent.
    durations = [d for d in (payload_number(item.get("payload"), "duration") for item in items) if d is not None]
    activities = len(items) + len(entries)
    active_modules = len(module_breakdown)
    return {
        "period": period,
        "totalActivities": activities,
        "journalEntries": len(entries),
        "contentSessions": len(items),
        "totalDuration": int(round(sum(durations))),
        "moduleBreakdown": module_breakdown,
        "activeModules": active_modules,
        "completionScore": min(100, active_modules * 15 + len(items) * 2),
        "recommendation": wellness_recommendation(activities, active_modules, period),
    }


def zero_report(scope: str, period: str) -> Dict[str, Any]:
    """The report for an empty window; also the degraded read result."""
    if scope == WELLNESS:
        return build_wellness_report([], [], period=period)
    return build_module_report(Module(scope), [], period=period)


def summarize(owner_id: str, scope: str, period: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Select the owner's items in the window and build the report for `scope`.

    `scope` is a module name or "wellness" for all modules.
    """
    since = window_start(period, now)
    if scope == WELLNESS:
        items = list_items(owner_id=owner_id, since=since)
        entries = list_entries(owner_id=owner_id, since=since)
        report = build_wellness_report(items, entries, period=period)
    else:
        module = Module(scope)
        items = list_items(owner_id=owner_id, module=module.value, since=since)
        if module is Module.journal:
            entries = list_entries(owner_id=owner_id, since=since)
            report = build_journal_report(items, entries, period=period)
        else:
            report = build_module_report(module, items, period=period)
    logger.info("%s stats calculated for %s (period=%s, items=%d)", scope, owner_id, period, len(items))
    return report
