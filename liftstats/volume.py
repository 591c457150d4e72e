"""
Lift Progress Analytics — Volume Model

What counts as a logged set and how volume is derived from it. Every other
analytics module goes through here, so the validity rule lives in one place:
a set is valid iff reps > 0 and weight > 0. Invalid sets are unlogged or
incomplete entries, not errors, and are silently left out of every total.
"""
import logging
from numbers import Real

import pandas as pd

from liftstats.config import (
    PRIMARY_FACTOR,
    SECONDARY_FACTOR,
    RECOVERY_THRESHOLDS,
    OVERREACHED,
    OVERWORKED_SETS,
)

logger = logging.getLogger(__name__)


def to_timestamp(value) -> pd.Timestamp:
    """Naive pandas Timestamp for any date-like input (tz-aware → UTC)."""
    ts = pd.Timestamp(value)
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts


def week_start(reference_date) -> pd.Timestamp:
    """Monday 00:00 of the week containing reference_date."""
    day = to_timestamp(reference_date).normalize()
    return day - pd.Timedelta(days=day.weekday())


# ═══════════════════════════════════════════════════════════════════════
# 1. SETS & VOLUME
# ═══════════════════════════════════════════════════════════════════════

def _is_positive(value) -> bool:
    # bool is a Real subclass; True must not count as one rep
    return isinstance(value, Real) and not isinstance(value, bool) and value > 0


def is_valid_set(s: dict | None) -> bool:
    if not s:
        return False
    return _is_positive(s.get("reps")) and _is_positive(s.get("weight"))


def set_volume(s: dict) -> float:
    """Volume of one set: weight × reps. Callers filter invalid sets first."""
    return s["weight"] * s["reps"]


def exercise_volume(sets: list[dict] | None) -> float:
    return sum(set_volume(s) for s in sets or [] if is_valid_set(s))


def session_volume(session: dict) -> float:
    """Total valid volume across every exercise entry of a session."""
    return sum(exercise_volume(ex.get("sets")) for ex in session.get("exercises") or [])


def bodyweight_set_volume(bodyweight: float, reps: int) -> float:
    """Bodyweight movements (pull-ups, dips): bodyweight × reps."""
    return bodyweight * reps


def time_based_volume(bodyweight: float, seconds: float) -> float:
    """Isometric holds (planks, hangs): bodyweight × seconds under tension."""
    return bodyweight * seconds


def format_set_display(reps: int, weight: float) -> str:
    shown = int(weight) if float(weight).is_integer() else f"{weight:.1f}"
    return f"{reps} x {shown} kg"


# ═══════════════════════════════════════════════════════════════════════
# 2. SET EXTRACTION — shared by the summarizer, comparator and detector
# ═══════════════════════════════════════════════════════════════════════

def resolve_exercise(entry: dict) -> dict | None:
    """
    Exercise metadata of a session entry, or None when the persistence layer
    could not resolve it (missing id or name). Unresolved entries are dropped.
    """
    meta = entry.get("exercise")
    if not meta or not meta.get("id") or not meta.get("name"):
        return None
    return meta


def extract_sets(sessions: list[dict]) -> list[dict]:
    """
    Flatten sessions into one chronologically ascending stream of valid sets.

    Each entry: {exercise_id, exercise_name, date, weight, reps, volume}.
    The sort is stable, so sets sharing a timestamp keep their logged order.
    """
    result = []
    for session in sessions:
        date = to_timestamp(session["date"])
        for entry in session.get("exercises") or []:
            meta = resolve_exercise(entry)
            if meta is None:
                logger.debug("Skipping unresolved exercise in session %s", session.get("id"))
                continue
            for s in entry.get("sets") or []:
                if not is_valid_set(s):
                    continue
                result.append({
                    "exercise_id": str(meta["id"]),
                    "exercise_name": meta["name"],
                    "date": date,
                    "weight": s["weight"],
                    "reps": s["reps"],
                    "volume": set_volume(s),
                })
    return sorted(result, key=lambda x: x["date"])


# ═══════════════════════════════════════════════════════════════════════
# 3. MUSCLE VOLUME & RECOVERY
# ═══════════════════════════════════════════════════════════════════════

def muscle_contributions(meta: dict) -> list[tuple[str, float]]:
    """(muscle, factor) pairs: primary muscles count fully, secondary half."""
    return (
        [(m, PRIMARY_FACTOR) for m in meta.get("primary_muscles") or []]
        + [(m, SECONDARY_FACTOR) for m in meta.get("secondary_muscles") or []]
    )


def muscle_volumes(entries: list[dict]) -> dict[str, float]:
    """Apportion each exercise entry's valid volume to the muscles it trains."""
    totals: dict[str, float] = {}
    for entry in entries:
        meta = resolve_exercise(entry)
        if meta is None:
            continue
        vol = exercise_volume(entry.get("sets"))
        for muscle, factor in muscle_contributions(meta):
            totals[muscle] = totals.get(muscle, 0) + vol * factor
    return totals


def muscle_sets(entries: list[dict]) -> dict[str, float]:
    """Fractional set count per muscle (a secondary muscle gets half a set)."""
    totals: dict[str, float] = {}
    for entry in entries:
        meta = resolve_exercise(entry)
        if meta is None:
            continue
        n_sets = sum(1 for s in entry.get("sets") or [] if is_valid_set(s))
        for muscle, factor in muscle_contributions(meta):
            totals[muscle] = totals.get(muscle, 0) + n_sets * factor
    return totals


def recovery_status(weekly_set_count: float) -> str:
    for limit, inclusive, status in RECOVERY_THRESHOLDS:
        if weekly_set_count < limit or (inclusive and weekly_set_count == limit):
            return status
    return OVERREACHED


def is_overworked(weekly_set_count: float) -> bool:
    return weekly_set_count > OVERWORKED_SETS


def weekly_muscle_report(sessions: list[dict], reference_date=None) -> list[dict]:
    """
    Per-muscle sets, volume and recovery status for the Monday-start week
    containing reference_date (default: today). Sorted by sets, descending.
    """
    start = week_start(reference_date if reference_date is not None else pd.Timestamp.now())
    end = start + pd.Timedelta(days=7)

    entries = [
        entry
        for session in sessions
        if start <= to_timestamp(session["date"]) < end
        for entry in session.get("exercises") or []
    ]
    sets = muscle_sets(entries)
    volumes = muscle_volumes(entries)

    rows = [
        {
            "muscle": muscle,
            "sets": n_sets,
            "volume": volumes.get(muscle, 0),
            "status": recovery_status(n_sets),
        }
        for muscle, n_sets in sets.items()
        if n_sets > 0
    ]
    return sorted(rows, key=lambda r: (-r["sets"], r["muscle"]))
