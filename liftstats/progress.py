"""
Lift Progress Analytics — Period Comparison

Current period vs the one right before it, weekly (Monday-start weeks) or
monthly (calendar months): total volume, percent change, and day-aligned
series for the comparison chart with an optional bodyweight overlay.
"""
import numpy as np
import pandas as pd

from liftstats.config import PERIODS
from liftstats.records import detect_record_breakers
from liftstats.volume import extract_sets, session_volume, to_timestamp, week_start


def _reference(reference_date) -> pd.Timestamp:
    return to_timestamp(reference_date) if reference_date is not None else pd.Timestamp.now()


def period_date_range(period: str, reference_date=None) -> dict:
    """
    Bounds of the period containing reference_date and of the one before it.
    All ranges are half-open: [start, end).
    """
    ref = _reference(reference_date)
    if period == "weekly":
        start = week_start(ref)
        end = start + pd.Timedelta(days=7)
        comparison_start = start - pd.Timedelta(days=7)
    elif period == "monthly":
        start = ref.normalize().replace(day=1)
        end = start + pd.offsets.MonthBegin(1)
        comparison_start = start - pd.offsets.MonthBegin(1)
    else:
        raise ValueError(f"Invalid period {period!r}; expected one of {PERIODS}")
    return {
        "start": start,
        "end": end,
        "comparison_start": comparison_start,
        "comparison_end": start,
    }


# ═══════════════════════════════════════════════════════════════════════
# 1. TOTALS & PERCENT CHANGE
# ═══════════════════════════════════════════════════════════════════════

def percent_change(current: float, previous: float) -> float:
    if previous <= 0 and current <= 0:
        return 0
    if previous <= 0:
        return 100
    change = (current - previous) / previous * 100
    return float(change) if np.isfinite(change) else 0


def summary_item(current_volume: float, previous_volume: float) -> dict:
    return {
        "current_volume": current_volume,
        "previous_volume": previous_volume,
        "percent_change": percent_change(current_volume, previous_volume),
    }


def _session_frame(sessions: list[dict]) -> pd.DataFrame:
    rows = [
        {"date": to_timestamp(s["date"]), "value": session_volume(s)}
        for s in sessions
    ]
    return pd.DataFrame(rows, columns=["date", "value"])


def _weighin_frame(weighins: list[dict]) -> pd.DataFrame:
    rows = [
        {"date": to_timestamp(w["date"]), "value": w["weight"]}
        for w in weighins
        if w.get("weight") is not None
    ]
    return pd.DataFrame(rows, columns=["date", "value"])


def _total(frame: pd.DataFrame, start: pd.Timestamp, end: pd.Timestamp) -> float:
    if frame.empty:
        return 0.0
    mask = (frame["date"] >= start) & (frame["date"] < end)
    return float(frame.loc[mask, "value"].sum())


def period_summary(period: str, sessions: list[dict], reference_date=None) -> dict:
    bounds = period_date_range(period, reference_date)
    frame = _session_frame(sessions)
    return summary_item(
        _total(frame, bounds["start"], bounds["end"]),
        _total(frame, bounds["comparison_start"], bounds["comparison_end"]),
    )


def weekly_summary(sessions: list[dict], reference_date=None) -> dict:
    return period_summary("weekly", sessions, reference_date)


def monthly_summary(sessions: list[dict], reference_date=None) -> dict:
    return period_summary("monthly", sessions, reference_date)


def progress_overview(sessions: list[dict], reference_date=None) -> dict:
    ref = _reference(reference_date)
    return {
        "weekly": weekly_summary(sessions, ref),
        "monthly": monthly_summary(sessions, ref),
    }


# ═══════════════════════════════════════════════════════════════════════
# 2. DAY-ALIGNED COMPARISON SERIES
# ═══════════════════════════════════════════════════════════════════════

def _daily_buckets(
    frame: pd.DataFrame,
    start: pd.Timestamp,
    end: pd.Timestamp,
    n_days: int,
    how: str = "sum",
) -> list:
    """Aggregate values into one bucket per calendar day since `start`."""
    if frame.empty:
        return [0] * n_days
    in_range = frame[(frame["date"] >= start) & (frame["date"] < end)]
    day_index = (in_range["date"].dt.normalize() - start).dt.days
    buckets = in_range["value"].groupby(day_index).agg(how)
    return buckets.reindex(range(n_days), fill_value=0).tolist()


def comparison_series(
    period: str,
    sessions: list[dict],
    weighins: list[dict] | None = None,
    reference_date=None,
) -> dict:
    """
    Volume per day of the current and previous period on one shared axis
    (Day 1 = Monday / the 1st), plus the current period's average bodyweight
    per day (0 where nothing was logged).

    Monthly axes span the longer of the two months, so the shorter month
    simply ends in empty buckets.
    """
    bounds = period_date_range(period, reference_date)
    start, end = bounds["start"], bounds["end"]
    prev_start, prev_end = bounds["comparison_start"], bounds["comparison_end"]
    n_days = max((end - start).days, (prev_end - prev_start).days)

    sessions_df = _session_frame(sessions)
    weighins_df = _weighin_frame(weighins or [])

    return {
        "labels": [f"Day {i + 1}" for i in range(n_days)],
        "current_series": _daily_buckets(sessions_df, start, end, n_days),
        "previous_series": _daily_buckets(sessions_df, prev_start, prev_end, n_days),
        "weight_series": _daily_buckets(weighins_df, start, end, n_days, how="mean"),
    }


def weekly_comparison(sessions: list[dict], weighins: list[dict] | None = None, reference_date=None) -> dict:
    return comparison_series("weekly", sessions, weighins, reference_date)


def monthly_comparison(sessions: list[dict], weighins: list[dict] | None = None, reference_date=None) -> dict:
    return comparison_series("monthly", sessions, weighins, reference_date)


# ═══════════════════════════════════════════════════════════════════════
# 3. FULL PROGRESS VIEW
# ═══════════════════════════════════════════════════════════════════════

def progress_detail(
    period: str,
    sessions: list[dict],
    weighins: list[dict] | None = None,
    reference_date=None,
) -> dict:
    """
    Everything the progress page shows for one period: totals and percent
    change, the comparison chart data (weight_series is None when no
    bodyweight was logged) and the period's top record-breaking sets.
    """
    ref = _reference(reference_date)
    bounds = period_date_range(period, ref)

    comparison = comparison_series(period, sessions, weighins, ref)
    if not any(v > 0 for v in comparison["weight_series"]):
        comparison["weight_series"] = None

    records = detect_record_breakers(extract_sets(sessions), bounds["start"], bounds["end"])

    return {
        "period": period,
        **period_summary(period, sessions, ref),
        "comparison": comparison,
        "best_records": records["best"],
        "worst_records": records["worst"],
    }
