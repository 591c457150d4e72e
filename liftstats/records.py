"""
Lift Progress Analytics — Record Breakers

Replays the full chronological set stream through per-exercise sliding
windows and reports the best/worst "breakthrough" sets that landed inside a
period (this week, this month).

Windows are keyed on event time: pruning uses the date of the set being
processed, never the wall clock, so replaying years of backfilled history
gives the same answer as processing it live.
"""
import logging
import operator
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, NamedTuple

import pandas as pd

from liftstats.config import WINDOW_DAYS, TOP_RECORDS
from liftstats.volume import to_timestamp

logger = logging.getLogger(__name__)


class HistoryOrderError(ValueError):
    """The set stream was not sorted by date ascending."""


class RecordCategory(str, Enum):
    PB = "PB"
    BEST_1Y = "BEST_1Y"
    BEST_3M = "BEST_3M"
    BEST_1M = "BEST_1M"


class WorstCategory(str, Enum):
    PW = "PW"
    WORST_1Y = "WORST_1Y"
    WORST_3M = "WORST_3M"
    WORST_1M = "WORST_1M"


# ═══════════════════════════════════════════════════════════════════════
# 1. SLIDING WINDOWS
# ═══════════════════════════════════════════════════════════════════════

class SlidingWindow:
    """
    Extreme (max or min) set volume over the trailing `days` days.

    Entries are (date, volume) pairs pushed in date order. The deque stays
    monotonic: an entry that a later entry matches or beats can never be the
    extreme again, so push() drops it. The front is therefore always the
    window's extreme, and prune() only ever has to look at the front.
    """

    def __init__(self, days: int, keep: str = "max"):
        self.days = days
        self._span = pd.Timedelta(days=days)
        self._dominates = operator.ge if keep == "max" else operator.le
        self._entries: deque = deque()

    def prune(self, now: pd.Timestamp) -> None:
        threshold = now - self._span
        while self._entries and self._entries[0][0] < threshold:
            self._entries.popleft()

    def push(self, date: pd.Timestamp, volume: float) -> None:
        while self._entries and self._dominates(volume, self._entries[-1][1]):
            self._entries.pop()
        self._entries.append((date, volume))

    def extreme(self) -> float:
        """Current max/min volume, 0 for an empty window."""
        return self._entries[0][1] if self._entries else 0

    def __len__(self) -> int:
        return len(self._entries)


class Baseline(NamedTuple):
    """Extremes of an exercise's history *before* the current set."""
    best_ever: float
    worst_ever: float
    best: dict   # window days → max volume
    worst: dict  # window days → min volume


@dataclass
class ExerciseRecordState:
    best_ever: dict | None = None
    worst_ever: dict | None = None
    best_windows: dict = field(
        default_factory=lambda: {d: SlidingWindow(d, "max") for d in WINDOW_DAYS}
    )
    worst_windows: dict = field(
        default_factory=lambda: {d: SlidingWindow(d, "min") for d in WINDOW_DAYS}
    )

    def _windows(self):
        return [*self.best_windows.values(), *self.worst_windows.values()]

    def prune(self, now: pd.Timestamp) -> None:
        for window in self._windows():
            window.prune(now)

    def baseline(self) -> Baseline:
        return Baseline(
            best_ever=self.best_ever["volume"] if self.best_ever else 0,
            worst_ever=self.worst_ever["volume"] if self.worst_ever else 0,
            best={d: w.extreme() for d, w in self.best_windows.items()},
            worst={d: w.extreme() for d, w in self.worst_windows.items()},
        )

    def record(self, date: pd.Timestamp, entry: dict) -> None:
        """Fold a set into the state, whether or not it fell in the period."""
        volume = entry["volume"]
        snapshot = {"date": date, "volume": volume, "reps": entry["reps"], "weight": entry["weight"]}
        if self.best_ever is None or volume > self.best_ever["volume"]:
            self.best_ever = snapshot
        if self.worst_ever is None or volume < self.worst_ever["volume"]:
            self.worst_ever = snapshot
        for window in self._windows():
            window.push(date, volume)


# ═══════════════════════════════════════════════════════════════════════
# 2. CLASSIFICATION — ordered rules, first match wins
# ═══════════════════════════════════════════════════════════════════════

class Rule(NamedTuple):
    category: Enum
    reference: Callable[[Baseline], float]
    requires_baseline: bool


BEST_RULES = (
    Rule(RecordCategory.PB, lambda b: b.best_ever, True),
    Rule(RecordCategory.BEST_1Y, lambda b: b.best[365], True),
    Rule(RecordCategory.BEST_3M, lambda b: b.best[90], True),
    # No 30-day history yet: any set is a 1-month best.
    Rule(RecordCategory.BEST_1M, lambda b: b.best[30], False),
)

WORST_RULES = (
    Rule(WorstCategory.PW, lambda b: b.worst_ever, True),
    Rule(WorstCategory.WORST_1Y, lambda b: b.worst[365], True),
    Rule(WorstCategory.WORST_3M, lambda b: b.worst[90], True),
    Rule(WorstCategory.WORST_1M, lambda b: b.worst[30], True),
)


def classify(volume: float, baseline: Baseline, rules: tuple, beats: Callable) -> Enum | None:
    for rule in rules:
        reference = rule.reference(baseline)
        if rule.requires_baseline and reference <= 0:
            continue
        if beats(volume, reference):
            return rule.category
    return None


def classify_best(volume: float, baseline: Baseline) -> RecordCategory | None:
    return classify(volume, baseline, BEST_RULES, operator.gt)


def classify_worst(volume: float, baseline: Baseline) -> WorstCategory | None:
    return classify(volume, baseline, WORST_RULES, operator.lt)


# ═══════════════════════════════════════════════════════════════════════
# 3. DETECTION
# ═══════════════════════════════════════════════════════════════════════

def _event(entry: dict, date: pd.Timestamp, category: Enum) -> dict:
    return {
        "exercise_id": entry["exercise_id"],
        "exercise_name": entry["exercise_name"],
        "category": category,
        "date": date,
        "reps": entry["reps"],
        "weight": entry["weight"],
        "volume": entry["volume"],
    }


def _rank(events: list[dict], category_type: type[Enum], limit: int) -> list[dict]:
    """Category priority first (PB/PW on top), newest first within a category."""
    priority = {c: i for i, c in enumerate(category_type)}
    newest_first = sorted(events, key=lambda e: e["date"], reverse=True)
    ranked = sorted(newest_first, key=lambda e: priority[e["category"]])
    return [
        {**e, "category": e["category"].value, "date": e["date"].isoformat()}
        for e in ranked[:limit]
    ]


def detect_record_breakers(
    sets: list[dict],
    period_start,
    period_end,
    limit: int = TOP_RECORDS,
) -> dict:
    """
    Best/worst breakthrough sets inside [period_start, period_end).

    `sets` must be the ascending stream produced by volume.extract_sets, all
    exercises interleaved. History before the period is replayed too: it is
    what the windows compare against. Each in-period set yields at most one
    best and one worst event.

    Raises HistoryOrderError if a set is dated before its predecessor.

    Returns {"best": [...], "worst": [...]}, each truncated to `limit`.
    """
    start = to_timestamp(period_start)
    end = to_timestamp(period_end)
    states: dict[str, ExerciseRecordState] = {}
    best, worst = [], []
    previous_date = None

    for entry in sets:
        date = to_timestamp(entry["date"])
        if previous_date is not None and date < previous_date:
            raise HistoryOrderError(
                f"Set for {entry['exercise_id']} dated {date.isoformat()} "
                f"follows {previous_date.isoformat()}; sort the stream first"
            )
        previous_date = date

        state = states.get(entry["exercise_id"])
        if state is None:
            logger.debug("New record state for exercise %s", entry["exercise_id"])
            state = states[entry["exercise_id"]] = ExerciseRecordState()

        state.prune(date)
        baseline = state.baseline()

        if start <= date < end:
            category = classify_best(entry["volume"], baseline)
            if category is not None:
                best.append(_event(entry, date, category))
            category = classify_worst(entry["volume"], baseline)
            if category is not None:
                worst.append(_event(entry, date, category))

        state.record(date, entry)

    return {
        "best": _rank(best, RecordCategory, limit),
        "worst": _rank(worst, WorstCategory, limit),
    }
