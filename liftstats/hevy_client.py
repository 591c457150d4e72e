"""
Lift Progress Analytics — Hevy API Client

Fetches the workout log and turns it into the session records the analytics
engine consumes, with exercise metadata already resolved.
"""
import logging
import time

import requests

from liftstats.config import HEVY_API_KEY, get_exercise_meta

logger = logging.getLogger(__name__)

BASE_URL = "https://api.hevyapp.com/v1"
HEADERS = {"accept": "application/json", "api-key": HEVY_API_KEY}

# Rate limiting: Hevy API has undocumented limits
RATE_LIMIT_DELAY = 0.35  # seconds between requests
MAX_RETRIES = 3
RETRY_BACKOFF = 2  # exponential backoff multiplier

WORKING_SET_TYPES = ("normal", "failure", "dropset", None)


def _get(endpoint: str, params: dict = None) -> dict:
    """GET request to Hevy API with retry and rate limiting."""
    time.sleep(RATE_LIMIT_DELAY)
    for attempt in range(1, MAX_RETRIES + 1):
        try:
            r = requests.get(
                f"{BASE_URL}{endpoint}", headers=HEADERS,
                params=params or {}, timeout=15,
            )
            if r.status_code == 429:
                wait = RETRY_BACKOFF ** attempt
                logger.warning("Hevy rate limit, retrying in %ss (attempt %d/%d)", wait, attempt, MAX_RETRIES)
                time.sleep(wait)
                continue
            r.raise_for_status()
            return r.json()
        except requests.exceptions.Timeout:
            if attempt < MAX_RETRIES:
                logger.warning("Hevy timeout, retrying (attempt %d/%d)", attempt, MAX_RETRIES)
                time.sleep(RETRY_BACKOFF ** attempt)
            else:
                raise
        except requests.exceptions.HTTPError:
            if attempt < MAX_RETRIES and r.status_code >= 500:
                logger.warning("Hevy %s, retrying (attempt %d/%d)", r.status_code, attempt, MAX_RETRIES)
                time.sleep(RETRY_BACKOFF ** attempt)
            else:
                raise
    raise requests.exceptions.RetryError(f"Hevy API failed after {MAX_RETRIES} attempts")


def _fetch_paginated(endpoint: str, key: str) -> list[dict]:
    items = []
    page = 1
    while True:
        data = _get(endpoint, {"page": page, "pageSize": 10})
        batch = data.get(key, [])
        if not batch:
            break
        items.extend(batch)
        if page >= data.get("page_count", 1):
            break
        page += 1
    return items


def fetch_all_workouts() -> list[dict]:
    """Fetch all workouts from Hevy, paginated."""
    return _fetch_paginated("/workouts", "workouts")


def fetch_exercise_templates() -> dict:
    """
    Exercise templates keyed by id, reshaped into engine metadata.

    Hevy reports one primary muscle group and a list of secondary ones.
    """
    templates = {}
    for t in _fetch_paginated("/exercise_templates", "exercise_templates"):
        primary = t.get("primary_muscle_group")
        templates[t["id"]] = {
            "id": t["id"],
            "name": t.get("title", ""),
            "equipment": t.get("equipment"),
            "primary_muscles": [primary] if primary else [],
            "secondary_muscles": list(t.get("secondary_muscle_groups") or []),
        }
    return templates


def _resolve(ex: dict, templates: dict) -> dict | None:
    tid = ex.get("exercise_template_id", "")
    template = templates.get(tid)
    if template is None:
        return get_exercise_meta(tid, ex.get("title", ""))
    return {**template, "name": ex.get("title") or template["name"]}


def workouts_to_sessions(workouts: list[dict], templates: dict | None = None) -> list[dict]:
    """
    Convert raw Hevy workouts into engine session records:
    {id, date, title, exercises: [{exercise, sets: [{reps, weight}]}]}.

    Warm-up sets are left out; if an exercise has nothing but warm-ups, all of
    its sets are kept. Weights are taken in kg. Exercises without a template
    id resolve to None and are skipped downstream.
    """
    templates = templates or {}
    sessions = []
    for w in workouts:
        exercises = []
        for ex in w.get("exercises", []):
            sets = ex.get("sets", [])
            working = [s for s in sets if s.get("type") in WORKING_SET_TYPES]
            if not working:
                working = sets
            exercises.append({
                "exercise": _resolve(ex, templates),
                "sets": [
                    {"reps": s.get("reps") or 0, "weight": s.get("weight_kg") or 0}
                    for s in working
                ],
            })
        sessions.append({
            "id": w["id"],
            "date": w["start_time"],
            "title": w.get("title", ""),
            "exercises": exercises,
        })
    return sorted(sessions, key=lambda s: s["date"])
