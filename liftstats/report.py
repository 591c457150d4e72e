"""
Lift Progress Analytics — Progress Report
Run manually or from a cron job: python -m liftstats.report weekly
"""
import argparse
import logging
import sys
from datetime import datetime

from liftstats.config import LOG_LEVEL, PERIODS, WEIGHINS_CSV
from liftstats.exercise_stats import sort_by_recency, summarize_exercises
from liftstats.hevy_client import fetch_all_workouts, fetch_exercise_templates, workouts_to_sessions
from liftstats.progress import progress_detail, progress_overview
from liftstats.volume import format_set_display
from liftstats.weighins import load_weighins

logger = logging.getLogger(__name__)

CATEGORY_LABELS = {
    "PB": "🏆 PB", "BEST_1Y": "🥇 1Y", "BEST_3M": "🥈 3M", "BEST_1M": "🥉 1M",
    "PW": "💀 PW", "WORST_1Y": "📉 1Y", "WORST_3M": "📉 3M", "WORST_1M": "📉 1M",
}


def load_sessions() -> list[dict]:
    """Fetch the Hevy log and resolve it into engine session records."""
    try:
        templates = fetch_exercise_templates()
    except Exception as e:
        # Templates only enrich muscle metadata; the catalog in config still applies.
        logger.warning("Could not fetch exercise templates: %s", e)
        templates = {}
    return workouts_to_sessions(fetch_all_workouts(), templates)


def print_records(title: str, records: list[dict]) -> None:
    print(f"\n{title}")
    if not records:
        print("   —")
        return
    for r in records:
        label = CATEGORY_LABELS.get(r["category"], r["category"])
        print(f"   {label:<6} {r['exercise_name']}: {format_set_display(r['reps'], r['weight'])} "
              f"({r['volume']:,.0f} kg) — {r['date'][:10]}")


def run_report(period: str, reference_date=None, weighins_path: str = WEIGHINS_CSV) -> dict:
    print(f"📊 Progress Report — {period}")
    print(f"   {datetime.now().isoformat()}")

    print("\n📥 Fetching workouts from Hevy...")
    sessions = load_sessions()
    print(f"   Found {len(sessions)} workouts")
    weighins = load_weighins(weighins_path)
    print(f"   Found {len(weighins)} weigh-ins")

    detail = progress_detail(period, sessions, weighins, reference_date)
    overview = progress_overview(sessions, reference_date)

    print(f"\n{'='*50}")
    print(f"📈 Volume: {detail['current_volume']:,.0f} kg vs {detail['previous_volume']:,.0f} kg "
          f"({detail['percent_change']:+.1f}%)")
    other = "monthly" if period == "weekly" else "weekly"
    print(f"   {other.capitalize()}: {overview[other]['current_volume']:,.0f} kg "
          f"({overview[other]['percent_change']:+.1f}%)")

    print_records("🔥 Record breakers:", detail["best_records"])
    print_records("🧊 Off days:", detail["worst_records"])

    summaries = sort_by_recency(summarize_exercises(sessions))
    with_best = [s for s in summaries if s["personal_best"]]
    if with_best:
        print("\n🏆 Personal bests (most recent exercises):")
        for s in with_best[:5]:
            pb = s["personal_best"]
            print(f"   {s['name']}: {format_set_display(pb['reps'], pb['weight'])} "
                  f"— {s['total_sets']} sets in {s['total_sessions']} sessions")
    return detail


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print a training progress report.")
    parser.add_argument("period", choices=PERIODS)
    parser.add_argument("--date", help="reference date (YYYY-MM-DD), default today")
    parser.add_argument("--weighins", default=WEIGHINS_CSV, help="weigh-in CSV (date,weight)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    try:
        run_report(args.period, args.date, args.weighins)
    except Exception as e:
        print(f"\n❌ Report FAILED: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
