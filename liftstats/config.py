"""
Lift Progress Analytics — Configuration

ALL exercise matching uses the Hevy exercise_template_id.
Names are only used for display, never for lookup.

Muscle lists below are the fallback catalog; templates fetched from the Hevy
API take precedence when available (see hevy_client.fetch_exercise_templates).
"""
import os

# ── API Keys / sources ───────────────────────────────────────────────
HEVY_API_KEY = os.environ.get("HEVY_API_KEY", "")
WEIGHINS_CSV = os.environ.get("WEIGHINS_CSV", "data/weighins.csv")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# ── Volume model ─────────────────────────────────────────────────────
PRIMARY_FACTOR = 1.0
SECONDARY_FACTOR = 0.5

# Weekly set count → recovery status. Checked top-down:
# (limit, inclusive, status); anything past the last limit is overreached.
RECOVERY_THRESHOLDS = (
    (5, False, "low"),
    (10, False, "moderate"),
    (20, True, "optimal"),
    (25, True, "high"),
)
OVERREACHED = "overreached"
OVERWORKED_SETS = 20

# ── Record breakers ──────────────────────────────────────────────────
WINDOW_DAYS = (30, 90, 365)
TOP_RECORDS = 5

PERIODS = ("weekly", "monthly")


# ═════════════════════════════════════════════════════════════════════
# EXERCISE DATABASE — keyed by exercise_template_id
#
# Fallback metadata for the exercises we train most. Hevy templates
# override these; unknown templates resolve with empty muscle lists.
# ═════════════════════════════════════════════════════════════════════

EXERCISE_DB = {
    # ── Posterior chain ─────────────────────────────────────────────
    "C6272009": {
        "name": "Deadlift (Barbell)",
        "equipment": "barbell",
        "primary_muscles": ["lower_back", "glutes", "hamstrings"],
        "secondary_muscles": ["traps", "forearms", "quadriceps"],
    },
    "2B4B7310": {
        "name": "Romanian Deadlift (Barbell)",
        "equipment": "barbell",
        "primary_muscles": ["hamstrings"],
        "secondary_muscles": ["glutes", "lower_back"],
    },
    "B8127AD1": {
        "name": "Lying Leg Curl (Machine)",
        "equipment": "machine",
        "primary_muscles": ["hamstrings"],
        "secondary_muscles": [],
    },
    "F8A0FCCA": {
        "name": "Kettlebell Swing",
        "equipment": "kettlebell",
        "primary_muscles": ["glutes"],
        "secondary_muscles": ["hamstrings", "lower_back"],
    },

    # ── Legs ────────────────────────────────────────────────────────
    "5046D0A9": {
        "name": "Front Squat",
        "equipment": "barbell",
        "primary_muscles": ["quadriceps"],
        "secondary_muscles": ["glutes", "abdominals"],
    },
    "B537D09F": {
        "name": "Lunge (Dumbbell)",
        "equipment": "dumbbell",
        "primary_muscles": ["quadriceps"],
        "secondary_muscles": ["glutes", "hamstrings"],
    },
    "E05C2C38": {
        "name": "Standing Calf Raise (Machine)",
        "equipment": "machine",
        "primary_muscles": ["calves"],
        "secondary_muscles": [],
    },

    # ── Push ────────────────────────────────────────────────────────
    "073032BB": {
        "name": "Standing Military Press (Barbell)",
        "equipment": "barbell",
        "primary_muscles": ["shoulders"],
        "secondary_muscles": ["triceps"],
    },
    "50DFDFAB": {
        "name": "Incline Bench Press (Barbell)",
        "equipment": "barbell",
        "primary_muscles": ["chest"],
        "secondary_muscles": ["shoulders", "triceps"],
    },
    "E644F828": {
        "name": "Bench Press - Wide Grip (Barbell)",
        "equipment": "barbell",
        "primary_muscles": ["chest"],
        "secondary_muscles": ["shoulders", "triceps"],
    },
    "35B51B87": {
        "name": "Bench Press - Close Grip (Barbell)",
        "equipment": "barbell",
        "primary_muscles": ["triceps"],
        "secondary_muscles": ["chest", "shoulders"],
    },
    "12017185": {
        "name": "Chest Fly (Dumbbell)",
        "equipment": "dumbbell",
        "primary_muscles": ["chest"],
        "secondary_muscles": [],
    },
    "875F585F": {
        "name": "Skullcrusher (Barbell)",
        "equipment": "barbell",
        "primary_muscles": ["triceps"],
        "secondary_muscles": [],
    },

    # ── Pull ────────────────────────────────────────────────────────
    "018ADC12": {
        "name": "Pendlay Row (Barbell)",
        "equipment": "barbell",
        "primary_muscles": ["upper_back", "lats"],
        "secondary_muscles": ["biceps", "lower_back"],
    },
    "F1E57334": {
        "name": "Dumbbell Row",
        "equipment": "dumbbell",
        "primary_muscles": ["lats"],
        "secondary_muscles": ["biceps", "upper_back"],
    },
    "1B2B1E7C": {
        "name": "Pull Up",
        "equipment": "bodyweight",
        "primary_muscles": ["lats"],
        "secondary_muscles": ["biceps", "upper_back"],
    },
    "0B841777": {
        "name": "Shrug (Barbell)",
        "equipment": "barbell",
        "primary_muscles": ["traps"],
        "secondary_muscles": ["forearms"],
    },
    "234897AB": {
        "name": "Rope Cable Curl",
        "equipment": "cable",
        "primary_muscles": ["biceps"],
        "secondary_muscles": ["forearms"],
    },
}


# ═════════════════════════════════════════════════════════════════════
# HELPER FUNCTIONS — derive lookups from EXERCISE_DB
# ═════════════════════════════════════════════════════════════════════

def get_exercise_meta(template_id: str, display_name: str = "") -> dict | None:
    """
    Resolved exercise record for a template_id, in the shape the analytics
    engine consumes: {id, name, equipment, primary_muscles, secondary_muscles}.

    The display name from the workout wins over the catalog label. Returns
    None when there is neither a template_id nor any name to show.
    """
    if not template_id:
        return None
    entry = EXERCISE_DB.get(template_id, {})
    name = display_name or entry.get("name", "")
    if not name:
        return None
    return {
        "id": template_id,
        "name": name,
        "equipment": entry.get("equipment"),
        "primary_muscles": list(entry.get("primary_muscles", [])),
        "secondary_muscles": list(entry.get("secondary_muscles", [])),
    }


MUSCLE_COLORS = {
    "upper_back": "#3b82f6",
    "lats": "#2563eb",
    "traps": "#8b5cf6",
    "lower_back": "#6366f1",
    "chest": "#ef4444",
    "shoulders": "#f97316",
    "quadriceps": "#22c55e",
    "glutes": "#16a34a",
    "hamstrings": "#15803d",
    "calves": "#4ade80",
    "triceps": "#f59e0b",
    "biceps": "#d946ef",
    "forearms": "#78716c",
    "abdominals": "#64748b",
}

RECOVERY_COLORS = {
    "low": "#64748b",
    "moderate": "#3b82f6",
    "optimal": "#22c55e",
    "high": "#f59e0b",
    "overreached": "#ef4444",
}
