"""
Tests for the volume model, exercise summaries, period comparison and the
data-source adapters.
Run: pytest tests/ -v
"""
import pandas as pd
import pytest


BENCH = {
    "id": "E644F828", "name": "Bench Press", "equipment": "barbell",
    "primary_muscles": ["chest"], "secondary_muscles": ["shoulders", "triceps"],
}
CLOSE_GRIP = {
    "id": "35B51B87", "name": "Close Grip Bench", "equipment": "barbell",
    "primary_muscles": ["triceps"], "secondary_muscles": ["chest"],
}
SQUAT = {
    "id": "5046D0A9", "name": "Front Squat", "equipment": "barbell",
    "primary_muscles": ["quadriceps"], "secondary_muscles": ["glutes"],
}


def _session(sid: str, date: str, *entries) -> dict:
    """Helper: _session("s1", "2026-03-02", (BENCH, [(100, 5), (100, 5)]), ...)."""
    return {
        "id": sid,
        "date": date,
        "exercises": [
            {"exercise": meta, "sets": [{"weight": w, "reps": r} for w, r in sets]}
            for meta, sets in entries
        ],
    }


# ═══════════════════════════════════════════════════════════════════════
# VOLUME MODEL
# ═══════════════════════════════════════════════════════════════════════

class TestSetValidity:
    """A set counts only with reps > 0 and weight > 0."""

    def test_valid_set(self):
        from liftstats.volume import is_valid_set
        assert is_valid_set({"reps": 5, "weight": 100}) is True
        assert is_valid_set({"reps": 1, "weight": 0.5}) is True

    def test_zero_or_negative_rejected(self):
        from liftstats.volume import is_valid_set
        assert is_valid_set({"reps": 0, "weight": 100}) is False
        assert is_valid_set({"reps": 5, "weight": 0}) is False
        assert is_valid_set({"reps": -3, "weight": 100}) is False
        assert is_valid_set({"reps": 5, "weight": -20}) is False

    def test_missing_or_non_numeric_rejected(self):
        from liftstats.volume import is_valid_set
        assert is_valid_set(None) is False
        assert is_valid_set({}) is False
        assert is_valid_set({"reps": None, "weight": 100}) is False
        assert is_valid_set({"reps": "5", "weight": 100}) is False
        assert is_valid_set({"reps": True, "weight": 100}) is False
        assert is_valid_set({"reps": 5, "weight": float("nan")}) is False


class TestVolume:

    def test_set_volume(self):
        from liftstats.volume import set_volume
        assert set_volume({"reps": 5, "weight": 100}) == 500

    def test_exercise_volume_skips_invalid(self):
        from liftstats.volume import exercise_volume
        sets = [{"reps": 5, "weight": 100}, {"reps": 0, "weight": 100}, {"reps": 5, "weight": 0}]
        assert exercise_volume(sets) == 500
        assert exercise_volume([]) == 0
        assert exercise_volume(None) == 0

    def test_session_volume(self):
        from liftstats.volume import session_volume
        s = _session("s1", "2026-03-02", (BENCH, [(100, 5), (0, 5)]), (SQUAT, [(80, 10)]))
        assert session_volume(s) == 1300

    def test_alternative_volume_formulas(self):
        from liftstats.volume import bodyweight_set_volume, time_based_volume
        assert bodyweight_set_volume(80, 10) == 800
        assert time_based_volume(80, 60) == 4800

    def test_format_set_display(self):
        from liftstats.volume import format_set_display
        assert format_set_display(5, 100) == "5 x 100 kg"
        assert format_set_display(5, 100.0) == "5 x 100 kg"
        assert format_set_display(8, 102.5) == "8 x 102.5 kg"


class TestExtractSets:
    """Shared set-extraction step feeding the record detector."""

    def test_sorted_ascending_regardless_of_input_order(self):
        from liftstats.volume import extract_sets
        sessions = [
            _session("s2", "2026-03-04", (BENCH, [(110, 5)])),
            _session("s1", "2026-03-02", (BENCH, [(100, 5)])),
        ]
        result = extract_sets(sessions)
        assert [r["weight"] for r in result] == [100, 110]
        assert result[0]["date"] == pd.Timestamp("2026-03-02")
        assert result[0]["volume"] == 500
        assert result[0]["exercise_id"] == "E644F828"
        assert result[0]["exercise_name"] == "Bench Press"

    def test_invalid_sets_and_unresolved_exercises_dropped(self):
        from liftstats.volume import extract_sets
        sessions = [{
            "id": "s1",
            "date": "2026-03-02",
            "exercises": [
                {"exercise": BENCH, "sets": [{"reps": 0, "weight": 100}, {"reps": 5, "weight": 100}]},
                {"exercise": None, "sets": [{"reps": 5, "weight": 100}]},
                {"exercise": {"id": "x", "name": ""}, "sets": [{"reps": 5, "weight": 100}]},
                {"exercise": {"name": "No id"}, "sets": [{"reps": 5, "weight": 100}]},
            ],
        }]
        result = extract_sets(sessions)
        assert len(result) == 1
        assert result[0]["exercise_name"] == "Bench Press"

    def test_tz_aware_dates_normalized(self):
        from liftstats.volume import extract_sets
        result = extract_sets([_session("s1", "2026-03-02T10:00:00+02:00", (BENCH, [(100, 5)]))])
        assert result[0]["date"] == pd.Timestamp("2026-03-02 08:00:00")


class TestMuscleVolume:
    """Primary muscles count fully, secondary muscles at half."""

    def test_contributions(self):
        from liftstats.volume import muscle_contributions
        assert muscle_contributions(BENCH) == [("chest", 1.0), ("shoulders", 0.5), ("triceps", 0.5)]

    def test_volume_summed_across_exercises(self):
        from liftstats.volume import muscle_volumes
        entries = _session(
            "s1", "2026-03-02",
            (BENCH, [(100, 10)]),        # 1000
            (CLOSE_GRIP, [(80, 5)]),     # 400
        )["exercises"]
        result = muscle_volumes(entries)
        assert result["chest"] == 1000 + 200
        assert result["triceps"] == 500 + 400
        assert result["shoulders"] == 500

    def test_set_counts_fractional_and_valid_only(self):
        from liftstats.volume import muscle_sets
        entries = _session("s1", "2026-03-02", (BENCH, [(100, 5), (100, 5), (100, 5), (100, 0)]))["exercises"]
        result = muscle_sets(entries)
        assert result["chest"] == 3
        assert result["triceps"] == 1.5


class TestRecoveryStatus:
    """Fixed weekly set-count thresholds."""

    @pytest.mark.parametrize("sets,status", [
        (0, "low"), (4.5, "low"),
        (5, "moderate"), (9.5, "moderate"),
        (10, "optimal"), (20, "optimal"),
        (20.5, "high"), (25, "high"),
        (25.5, "overreached"), (40, "overreached"),
    ])
    def test_thresholds(self, sets, status):
        from liftstats.volume import recovery_status
        assert recovery_status(sets) == status

    def test_overworked(self):
        from liftstats.volume import is_overworked
        assert is_overworked(20) is False
        assert is_overworked(21) is True


class TestWeeklyMuscleReport:

    def test_only_reference_week_counted(self):
        from liftstats.volume import weekly_muscle_report
        sessions = [
            _session("s1", "2026-03-10", (BENCH, [(100, 5)] * 4)),
            _session("s0", "2026-03-02", (BENCH, [(100, 5)] * 10)),  # previous week
        ]
        report = weekly_muscle_report(sessions, "2026-03-11")
        assert [r["muscle"] for r in report] == ["chest", "shoulders", "triceps"]
        chest = report[0]
        assert chest["sets"] == 4
        assert chest["volume"] == 2000
        assert chest["status"] == "low"
        assert report[1]["sets"] == 2

    def test_empty_week(self):
        from liftstats.volume import weekly_muscle_report
        assert weekly_muscle_report([], "2026-03-11") == []


# ═══════════════════════════════════════════════════════════════════════
# EXERCISE SUMMARIES
# ═══════════════════════════════════════════════════════════════════════

class TestSummarizeExercises:

    def test_personal_best_scenario(self):
        from liftstats.exercise_stats import summarize_exercises
        sessions = [
            _session("s1", "2026-03-02", (BENCH, [(100, 5)])),
            _session("s2", "2026-03-04", (BENCH, [(120, 5)])),
        ]
        [summary] = summarize_exercises(sessions)
        assert summary["personal_best"] == {
            "weight": 120, "reps": 5, "volume": 600, "date": "2026-03-04T00:00:00",
        }
        assert summary["total_sets"] == 2
        assert summary["total_sessions"] == 2
        assert summary["last_performed_at"] == "2026-03-04T00:00:00"
        assert summary["exercise_id"] == "E644F828"
        assert summary["primary_muscles"] == ["chest"]
        assert summary["equipment"] == "barbell"

    def test_tie_break_later_date_wins(self):
        from liftstats.exercise_stats import summarize_exercises
        later_first = [
            _session("s2", "2026-03-09", (BENCH, [(100, 5)])),
            _session("s1", "2026-03-02", (BENCH, [(100, 5)])),
        ]
        [summary] = summarize_exercises(later_first)
        assert summary["personal_best"]["date"] == "2026-03-09T00:00:00"
        [summary] = summarize_exercises(list(reversed(later_first)))
        assert summary["personal_best"]["date"] == "2026-03-09T00:00:00"

    def test_weight_beats_volume(self):
        from liftstats.exercise_stats import summarize_exercises
        [summary] = summarize_exercises([
            _session("s1", "2026-03-02", (BENCH, [(100, 10), (120, 3)])),
        ])
        assert summary["personal_best"]["weight"] == 120
        assert summary["personal_best"]["volume"] == 360

    def test_equal_weight_higher_volume_wins(self):
        from liftstats.exercise_stats import summarize_exercises
        [summary] = summarize_exercises([
            _session("s1", "2026-03-02", (BENCH, [(100, 8)])),
            _session("s2", "2026-03-09", (BENCH, [(100, 5)])),
        ])
        assert summary["personal_best"]["reps"] == 8

    def test_invalid_sets_never_counted(self):
        from liftstats.exercise_stats import summarize_exercises
        [summary] = summarize_exercises([
            _session("s1", "2026-03-02", (BENCH, [(0, 5), (100, 0)])),
        ])
        assert summary["total_sets"] == 0
        assert summary["total_sessions"] == 0
        assert summary["personal_best"] is None
        assert summary["last_performed_at"] is None

    def test_last_performed_ignores_sessions_without_valid_sets(self):
        from liftstats.exercise_stats import summarize_exercises
        [summary] = summarize_exercises([
            _session("s1", "2026-03-02", (BENCH, [(100, 5)])),
            _session("s2", "2026-03-09", (BENCH, [(0, 0)])),
        ])
        assert summary["last_performed_at"] == "2026-03-02T00:00:00"
        assert summary["total_sessions"] == 1

    def test_unresolved_exercise_and_idless_session_skipped(self):
        from liftstats.exercise_stats import summarize_exercises
        sessions = [
            {"id": "s1", "date": "2026-03-02",
             "exercises": [{"exercise": None, "sets": [{"reps": 5, "weight": 100}]}]},
            {"id": None, "date": "2026-03-03",
             "exercises": [{"exercise": BENCH, "sets": [{"reps": 5, "weight": 100}]}]},
        ]
        assert summarize_exercises(sessions) == []

    def test_sessions_counted_once_per_exercise(self):
        from liftstats.exercise_stats import summarize_exercises
        result = summarize_exercises([
            _session("s1", "2026-03-02", (BENCH, [(100, 5)]), (BENCH, [(90, 8)]), (SQUAT, [(80, 5)])),
        ])
        by_id = {s["exercise_id"]: s for s in result}
        assert by_id["E644F828"]["total_sessions"] == 1
        assert by_id["E644F828"]["total_sets"] == 2
        assert by_id["5046D0A9"]["total_sets"] == 1

    def test_idempotent(self):
        from liftstats.exercise_stats import summarize_exercises
        sessions = [
            _session("s1", "2026-03-02", (BENCH, [(100, 5)]), (SQUAT, [(80, 5)])),
            _session("s2", "2026-03-04", (BENCH, [(105, 5)])),
        ]
        assert summarize_exercises(sessions) == summarize_exercises(sessions)


class TestSearchAndSort:

    def _summaries(self):
        from liftstats.exercise_stats import summarize_exercises
        return summarize_exercises([
            _session("s1", "2026-03-02", (SQUAT, [(80, 5)])),
            _session("s2", "2026-03-09", (BENCH, [(100, 5)])),
            _session("s3", "2026-03-09", (CLOSE_GRIP, [(0, 5)])),
        ])

    def test_search_by_name_and_muscle(self):
        from liftstats.exercise_stats import search_summaries
        summaries = self._summaries()
        assert [s["name"] for s in search_summaries(summaries, "SQUAT")] == ["Front Squat"]
        assert {s["name"] for s in search_summaries(summaries, "tricep")} == {"Bench Press", "Close Grip Bench"}
        assert len(search_summaries(summaries, "  ")) == 3

    def test_sort_by_recency(self):
        from liftstats.exercise_stats import sort_by_recency
        result = sort_by_recency(self._summaries())
        assert [s["name"] for s in result] == ["Bench Press", "Front Squat", "Close Grip Bench"]


class TestExerciseDetail:

    def test_windowed_bests(self):
        from liftstats.exercise_stats import exercise_detail
        sessions = [
            _session("s1", "2025-01-10", (BENCH, [(140, 3)])),
            _session("s2", "2025-12-30", (BENCH, [(130, 5), (100, 5)])),
            _session("s3", "2026-03-10", (BENCH, [(110, 8)]), (SQUAT, [(200, 5)])),
        ]
        stats = exercise_detail(sessions, "E644F828", reference_date="2026-03-20")
        assert stats["personal_best"]["weight"] == 140
        assert stats["best_1y"]["weight"] == 130
        assert stats["best_3m"]["weight"] == 130
        assert stats["best_1m"]["weight"] == 110
        assert stats["total_sets"] == 4
        assert stats["total_sessions"] == 3
        assert stats["last_performed_at"] == "2026-03-10T00:00:00"
        assert stats["volume_by_date"] == [
            {"date": "2025-01-10", "peak_volume": 420},
            {"date": "2025-12-30", "peak_volume": 650},
            {"date": "2026-03-10", "peak_volume": 880},
        ]

    def test_unknown_exercise(self):
        from liftstats.exercise_stats import exercise_detail
        stats = exercise_detail([_session("s1", "2026-03-02", (BENCH, [(100, 5)]))], "nope", "2026-03-20")
        assert stats["personal_best"] is None
        assert stats["best_1m"] is None
        assert stats["volume_by_date"] == []
        assert stats["total_sets"] == 0


# ═══════════════════════════════════════════════════════════════════════
# PERIOD COMPARISON
# ═══════════════════════════════════════════════════════════════════════

class TestPercentChange:

    def test_both_zero_is_zero_not_nan(self):
        from liftstats.progress import percent_change
        assert percent_change(0, 0) == 0

    def test_from_nothing_is_hundred(self):
        from liftstats.progress import percent_change
        assert percent_change(500, 0) == 100

    def test_regular(self):
        from liftstats.progress import percent_change
        assert percent_change(1500, 800) == 87.5
        assert percent_change(50, 100) == -50

    def test_non_positive_both(self):
        from liftstats.progress import percent_change
        assert percent_change(-5, 0) == 0

    def test_non_finite_replaced(self):
        from liftstats.progress import percent_change
        assert percent_change(float("inf"), 100) == 0


class TestPeriodDateRange:

    def test_weekly_starts_monday(self):
        from liftstats.progress import period_date_range
        rng = period_date_range("weekly", "2026-03-15 18:30")  # Sunday
        assert rng["start"] == pd.Timestamp("2026-03-09")
        assert rng["end"] == pd.Timestamp("2026-03-16")
        assert rng["comparison_start"] == pd.Timestamp("2026-03-02")
        assert rng["comparison_end"] == pd.Timestamp("2026-03-09")

    def test_monthly_crosses_year(self):
        from liftstats.progress import period_date_range
        rng = period_date_range("monthly", "2026-01-15")
        assert rng["start"] == pd.Timestamp("2026-01-01")
        assert rng["end"] == pd.Timestamp("2026-02-01")
        assert rng["comparison_start"] == pd.Timestamp("2025-12-01")

    def test_invalid_period(self):
        from liftstats.progress import period_date_range
        with pytest.raises(ValueError):
            period_date_range("yearly", "2026-03-11")


class TestWeeklyComparison:
    """Current week: Mon 1000 + Wed 500. Previous week: Tue 800."""

    def _sessions(self):
        return [
            _session("a", "2026-03-09T18:00:00", (BENCH, [(100, 10)])),
            _session("b", "2026-03-11T07:30:00", (SQUAT, [(50, 10)])),
            _session("c", "2026-03-03T12:00:00", (BENCH, [(80, 10)])),
            _session("d", "2026-02-20", (BENCH, [(500, 10)])),  # outside both weeks
        ]

    def test_summary(self):
        from liftstats.progress import weekly_summary
        result = weekly_summary(self._sessions(), "2026-03-11")
        assert result == {"current_volume": 1500, "previous_volume": 800, "percent_change": 87.5}

    def test_series(self):
        from liftstats.progress import weekly_comparison
        result = weekly_comparison(self._sessions(), [], "2026-03-11")
        assert result["labels"] == [f"Day {i}" for i in range(1, 8)]
        assert result["current_series"] == [1000, 0, 500, 0, 0, 0, 0]
        assert result["previous_series"] == [0, 800, 0, 0, 0, 0, 0]
        assert result["weight_series"] == [0] * 7

    def test_same_day_sessions_summed(self):
        from liftstats.progress import weekly_comparison
        sessions = self._sessions() + [_session("e", "2026-03-09T20:00:00", (SQUAT, [(60, 5)]))]
        result = weekly_comparison(sessions, [], "2026-03-11")
        assert result["current_series"][0] == 1300

    def test_weight_series_averages_same_day(self):
        from liftstats.progress import weekly_comparison
        weighins = [
            {"date": "2026-03-09T07:00:00", "weight": 80.0},
            {"date": "2026-03-09T21:00:00", "weight": 81.0},
            {"date": "2026-03-12", "weight": 79.5},
            {"date": "2026-03-04", "weight": 90.0},  # previous week, not charted
        ]
        result = weekly_comparison(self._sessions(), weighins, "2026-03-11")
        assert result["weight_series"] == [80.5, 0, 0, 79.5, 0, 0, 0]

    def test_invalid_sets_do_not_count(self):
        from liftstats.progress import weekly_summary
        sessions = [_session("a", "2026-03-09", (BENCH, [(100, 0), (0, 10)]))]
        assert weekly_summary(sessions, "2026-03-11") == {
            "current_volume": 0, "previous_volume": 0, "percent_change": 0,
        }


class TestMonthlyComparison:

    def test_axis_spans_longer_month(self):
        from liftstats.progress import monthly_comparison
        sessions = [
            _session("a", "2026-03-31", (BENCH, [(100, 5)])),
            _session("b", "2026-02-28", (BENCH, [(100, 4)])),
            _session("c", "2026-03-01", (BENCH, [(100, 3)])),
        ]
        result = monthly_comparison(sessions, [], "2026-03-15")
        assert len(result["labels"]) == 31
        assert result["current_series"][30] == 500
        assert result["current_series"][0] == 300
        assert result["previous_series"][27] == 400
        assert sum(result["previous_series"]) == 400

    def test_shorter_current_month_uses_previous_length(self):
        from liftstats.progress import monthly_comparison
        result = monthly_comparison([], [], "2026-02-10")
        assert len(result["labels"]) == 31
        assert result["current_series"] == [0] * 31

    def test_monthly_summary(self):
        from liftstats.progress import monthly_summary
        sessions = [
            _session("a", "2026-03-05", (BENCH, [(100, 10)])),
            _session("b", "2026-02-05", (BENCH, [(100, 8)])),
        ]
        result = monthly_summary(sessions, "2026-03-20")
        assert result["current_volume"] == 1000
        assert result["previous_volume"] == 800
        assert result["percent_change"] == 25


class TestProgressDetail:

    def test_assembles_response(self):
        from liftstats.progress import progress_detail
        sessions = [
            _session("a", "2026-03-02", (BENCH, [(100, 5)])),
            _session("b", "2026-03-10", (BENCH, [(100, 6)])),
        ]
        result = progress_detail("weekly", sessions, [], "2026-03-11")
        assert result["period"] == "weekly"
        assert result["current_volume"] == 600
        assert result["previous_volume"] == 500
        assert result["percent_change"] == 20
        assert result["comparison"]["weight_series"] is None
        assert [r["category"] for r in result["best_records"]] == ["PB"]
        assert result["worst_records"] == []

    def test_weight_series_kept_when_logged(self):
        from liftstats.progress import progress_detail
        result = progress_detail("weekly", [], [{"date": "2026-03-10", "weight": 82.0}], "2026-03-11")
        assert result["comparison"]["weight_series"][1] == 82.0

    def test_overview(self):
        from liftstats.progress import progress_overview
        result = progress_overview([_session("a", "2026-03-10", (BENCH, [(100, 5)]))], "2026-03-11")
        assert set(result) == {"weekly", "monthly"}
        assert result["weekly"]["percent_change"] == 100
        assert result["monthly"]["current_volume"] == 500


# ═══════════════════════════════════════════════════════════════════════
# DATA SOURCES
# ═══════════════════════════════════════════════════════════════════════

def _hevy_workout(wid: str, start: str, exercises: list[dict]) -> dict:
    return {"id": wid, "title": "Push", "start_time": start, "end_time": start, "exercises": exercises}


class TestWorkoutsToSessions:

    def test_resolves_catalog_and_drops_warmups(self):
        from liftstats.hevy_client import workouts_to_sessions
        workouts = [_hevy_workout("w1", "2026-03-10T08:00:00Z", [{
            "title": "Press de Banca",
            "exercise_template_id": "E644F828",
            "sets": [
                {"type": "warmup", "weight_kg": 60, "reps": 8},
                {"type": "normal", "weight_kg": 100, "reps": 5},
                {"type": "failure", "weight_kg": None, "reps": 12},
            ],
        }])]
        [session] = workouts_to_sessions(workouts)
        assert session["id"] == "w1"
        [entry] = session["exercises"]
        assert entry["exercise"]["id"] == "E644F828"
        assert entry["exercise"]["name"] == "Press de Banca"
        assert entry["exercise"]["primary_muscles"] == ["chest"]
        assert entry["sets"] == [{"reps": 5, "weight": 100}, {"reps": 12, "weight": 0}]

    def test_only_warmups_kept(self):
        from liftstats.hevy_client import workouts_to_sessions
        workouts = [_hevy_workout("w1", "2026-03-10T08:00:00Z", [{
            "title": "Curl", "exercise_template_id": "234897AB",
            "sets": [{"type": "warmup", "weight_kg": 10, "reps": 10}],
        }])]
        [session] = workouts_to_sessions(workouts)
        assert session["exercises"][0]["sets"] == [{"reps": 10, "weight": 10}]

    def test_templates_override_catalog(self):
        from liftstats.hevy_client import workouts_to_sessions
        templates = {"ABC": {"id": "ABC", "name": "Landmine Press", "equipment": "barbell",
                             "primary_muscles": ["shoulders"], "secondary_muscles": ["chest"]}}
        workouts = [_hevy_workout("w1", "2026-03-10T08:00:00Z", [
            {"title": "", "exercise_template_id": "ABC", "sets": [{"weight_kg": 40, "reps": 8}]},
            {"title": "Mystery", "exercise_template_id": "", "sets": [{"weight_kg": 40, "reps": 8}]},
        ])]
        [session] = workouts_to_sessions(workouts, templates)
        assert session["exercises"][0]["exercise"]["name"] == "Landmine Press"
        assert session["exercises"][1]["exercise"] is None

    def test_sorted_and_feeds_engine(self):
        from liftstats.hevy_client import workouts_to_sessions
        from liftstats.exercise_stats import summarize_exercises
        workouts = [
            _hevy_workout("w2", "2026-03-12T08:00:00Z", [
                {"title": "Bench", "exercise_template_id": "E644F828", "sets": [{"weight_kg": 105, "reps": 5}]}]),
            _hevy_workout("w1", "2026-03-10T08:00:00Z", [
                {"title": "Bench", "exercise_template_id": "E644F828", "sets": [{"weight_kg": 100, "reps": 5}]}]),
        ]
        sessions = workouts_to_sessions(workouts)
        assert [s["id"] for s in sessions] == ["w1", "w2"]
        [summary] = summarize_exercises(sessions)
        assert summary["personal_best"]["weight"] == 105
        assert summary["personal_best"]["date"] == "2026-03-12T08:00:00"


class TestHevyRetry:

    def test_retries_after_rate_limit(self, monkeypatch):
        from liftstats import hevy_client

        class FakeResponse:
            def __init__(self, status, payload=None):
                self.status_code = status
                self._payload = payload or {}

            def raise_for_status(self):
                pass

            def json(self):
                return self._payload

        responses = [FakeResponse(429), FakeResponse(200, {"workouts": []})]
        monkeypatch.setattr(hevy_client.time, "sleep", lambda s: None)
        monkeypatch.setattr(hevy_client.requests, "get", lambda *a, **kw: responses.pop(0))
        assert hevy_client._get("/workouts") == {"workouts": []}
        assert responses == []


class TestWeighins:

    def test_from_frame_drops_unusable_rows(self):
        from liftstats.weighins import weighins_from_frame
        df = pd.DataFrame({
            "date": ["2026-03-10", "not a date", "2026-03-09", "2026-03-11"],
            "weight": [81.2, 80.0, "80.5", 0],
        })
        result = weighins_from_frame(df)
        assert [w["weight"] for w in result] == [80.5, 81.2]
        assert result[0]["date"] == pd.Timestamp("2026-03-09")

    def test_missing_columns(self):
        from liftstats.weighins import weighins_from_frame
        assert weighins_from_frame(pd.DataFrame({"day": [1]})) == []

    def test_load_csv(self, tmp_path):
        from liftstats.weighins import load_weighins
        path = tmp_path / "weighins.csv"
        path.write_text("date,weight\n2026-03-10,81.0\n2026-03-09,80.0\n")
        assert [w["weight"] for w in load_weighins(path)] == [80.0, 81.0]
        assert load_weighins(tmp_path / "missing.csv") == []
