"""
Lift Progress Analytics — Bodyweight log

Weigh-ins come from a plain CSV export (date, weight). Rows without a
parsable date or a positive weight are dropped.
"""
import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)


def weighins_from_frame(df: pd.DataFrame) -> list[dict]:
    """Normalize a date/weight DataFrame into [{date, weight}], oldest first."""
    if df.empty or not {"date", "weight"} <= set(df.columns):
        return []
    clean = pd.DataFrame({
        "date": pd.to_datetime(df["date"], errors="coerce"),
        "weight": pd.to_numeric(df["weight"], errors="coerce"),
    })
    clean = clean.dropna()
    clean = clean[clean["weight"] > 0].sort_values("date", kind="stable")
    dropped = len(df) - len(clean)
    if dropped:
        logger.debug("Dropped %d unusable weigh-in rows", dropped)
    return [
        {"date": d, "weight": w}
        for d, w in zip(clean["date"], clean["weight"].tolist())
    ]


def load_weighins(path: str | Path) -> list[dict]:
    """Read weigh-ins from CSV. A missing file means no weigh-ins."""
    path = Path(path)
    if not path.exists():
        logger.info("No weigh-in file at %s", path)
        return []
    return weighins_from_frame(pd.read_csv(path))
