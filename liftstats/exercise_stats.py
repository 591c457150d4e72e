"""
Lift Progress Analytics — Exercise Summaries

All-time per-exercise stats: personal best, set/session counts, last time
performed. Everything is a pure fold over the session list, so input order
does not matter and repeated calls return identical output.
"""
import pandas as pd

from liftstats.volume import is_valid_set, resolve_exercise, set_volume, to_timestamp


# ═══════════════════════════════════════════════════════════════════════
# 1. BEST-SET ORDERING
# ═══════════════════════════════════════════════════════════════════════

def build_best_record(s: dict, date: pd.Timestamp) -> dict:
    return {
        "weight": s["weight"],
        "reps": s["reps"],
        "volume": set_volume(s),
        "date": date,
    }


def is_better_record(candidate: dict, current: dict | None) -> bool:
    """
    Heavier weight wins; on equal weight, more volume; on equal volume, the
    more recent set. A missing current record is always beaten.
    """
    if current is None:
        return True
    if candidate["weight"] != current["weight"]:
        return candidate["weight"] > current["weight"]
    if candidate["volume"] != current["volume"]:
        return candidate["volume"] > current["volume"]
    return to_timestamp(candidate["date"]) > to_timestamp(current["date"])


def _public_record(record: dict | None) -> dict | None:
    if record is None:
        return None
    return {**record, "date": record["date"].isoformat()}


# ═══════════════════════════════════════════════════════════════════════
# 2. SUMMARIES
# ═══════════════════════════════════════════════════════════════════════

def summarize_exercises(sessions: list[dict]) -> list[dict]:
    """
    One summary per exercise encountered across the whole history.

    total_sets counts valid sets only; total_sessions counts distinct session
    ids that contributed at least one valid set. An exercise that only ever
    had invalid sets still gets a summary, with zero counts and no best.
    No sort order is imposed: see sort_by_recency.
    """
    summaries: dict[str, dict] = {}

    for session in sessions:
        session_id = session.get("id")
        exercises = session.get("exercises")
        if not session_id or not exercises:
            continue
        session_date = to_timestamp(session["date"])

        for entry in exercises:
            meta = resolve_exercise(entry)
            if meta is None:
                continue
            exercise_id = str(meta["id"])
            summary = summaries.get(exercise_id)
            if summary is None:
                summary = {
                    "exercise_id": exercise_id,
                    "name": meta["name"],
                    "equipment": meta.get("equipment"),
                    "primary_muscles": list(meta.get("primary_muscles") or []),
                    "secondary_muscles": list(meta.get("secondary_muscles") or []),
                    "last_performed_at": None,
                    "total_sets": 0,
                    "session_ids": set(),
                    "personal_best": None,
                }
                summaries[exercise_id] = summary

            valid = [s for s in entry.get("sets") or [] if is_valid_set(s)]
            for s in valid:
                candidate = build_best_record(s, session_date)
                if is_better_record(candidate, summary["personal_best"]):
                    summary["personal_best"] = candidate

            if valid:
                summary["total_sets"] += len(valid)
                summary["session_ids"].add(str(session_id))
                last = summary["last_performed_at"]
                if last is None or session_date > last:
                    summary["last_performed_at"] = session_date

    return [
        {
            "exercise_id": s["exercise_id"],
            "name": s["name"],
            "equipment": s["equipment"],
            "primary_muscles": s["primary_muscles"],
            "secondary_muscles": s["secondary_muscles"],
            "last_performed_at": s["last_performed_at"].isoformat() if s["last_performed_at"] is not None else None,
            "total_sessions": len(s["session_ids"]),
            "total_sets": s["total_sets"],
            "personal_best": _public_record(s["personal_best"]),
        }
        for s in summaries.values()
    ]


def search_summaries(summaries: list[dict], query: str | None) -> list[dict]:
    """Case-insensitive match on exercise name or any trained muscle."""
    q = (query or "").strip().lower()
    if not q:
        return list(summaries)
    return [
        s for s in summaries
        if q in s["name"].lower()
        or any(q in m.lower() for m in s["primary_muscles"])
        or any(q in m.lower() for m in s["secondary_muscles"])
    ]


def sort_by_recency(summaries: list[dict]) -> list[dict]:
    """Most recently performed first; never-performed last; ties by name."""
    by_name = sorted(summaries, key=lambda s: s["name"])
    return sorted(
        by_name,
        key=lambda s: to_timestamp(s["last_performed_at"]).value if s["last_performed_at"] else 0,
        reverse=True,
    )


# ═══════════════════════════════════════════════════════════════════════
# 3. SINGLE-EXERCISE DETAIL
# ═══════════════════════════════════════════════════════════════════════

DETAIL_WINDOWS = {"best_1m": 30, "best_3m": 90, "best_1y": 365}


def exercise_detail(sessions: list[dict], exercise_id: str, reference_date=None) -> dict:
    """
    Detail view for one exercise: all-time best, best of the last
    1/3/12 months relative to reference_date (default: now), and the peak
    single-set volume per calendar day for charting.
    """
    now = to_timestamp(reference_date) if reference_date is not None else pd.Timestamp.now()
    cutoffs = {key: now - pd.Timedelta(days=days) for key, days in DETAIL_WINDOWS.items()}
    bests = {"personal_best": None, **{key: None for key in DETAIL_WINDOWS}}

    session_ids = set()
    total_sets = 0
    last_performed = None
    peaks = []

    for session in sessions:
        session_id = session.get("id")
        if not session_id:
            continue
        session_date = to_timestamp(session["date"])

        for entry in session.get("exercises") or []:
            meta = resolve_exercise(entry)
            if meta is None or str(meta["id"]) != str(exercise_id):
                continue
            valid = [s for s in entry.get("sets") or [] if is_valid_set(s)]
            if not valid:
                continue

            for s in valid:
                record = build_best_record(s, session_date)
                if is_better_record(record, bests["personal_best"]):
                    bests["personal_best"] = record
                for key, cutoff in cutoffs.items():
                    if session_date >= cutoff and is_better_record(record, bests[key]):
                        bests[key] = record
                peaks.append({"date": session_date.normalize(), "volume": record["volume"]})

            total_sets += len(valid)
            session_ids.add(str(session_id))
            if last_performed is None or session_date > last_performed:
                last_performed = session_date

    volume_by_date = []
    if peaks:
        by_day = pd.DataFrame(peaks).groupby("date")["volume"].max().sort_index()
        volume_by_date = [
            {"date": day.strftime("%Y-%m-%d"), "peak_volume": vol}
            for day, vol in zip(by_day.index, by_day.tolist())
        ]

    return {
        "exercise_id": str(exercise_id),
        **{key: _public_record(record) for key, record in bests.items()},
        "volume_by_date": volume_by_date,
        "total_sessions": len(session_ids),
        "total_sets": total_sets,
        "last_performed_at": last_performed.isoformat() if last_performed is not None else None,
    }
