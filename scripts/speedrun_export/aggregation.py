"""Aggregation functions — turn one game's runs into per-player stats.

All functions take a list of RunData and return aggregated data.
No I/O, no side effects.
"""

from collections import defaultdict
from datetime import datetime, timezone

from speedrun_export.models import PlayerStats


def submission_order_key(run):
    """Sort key: ascending by submission string, undated runs first."""
    return (run.submitted is not None, run.submitted or "")


def parse_submitted(value, now):
    """Parse an API submission timestamp. A missing value means `now`.

    Raises ValueError for strings that are not ISO-8601 dates.
    """
    if value is None:
        return now
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def time_improvements(runs):
    """Positive time deltas between consecutive submissions within each category.

    A run slower than or equal to the previous one contributes nothing.
    """
    by_category = defaultdict(list)
    for run in runs:
        by_category[run.category_id].append(run)

    improvements = []
    for cat_runs in by_category.values():
        ordered = sorted(cat_runs, key=submission_order_key)
        for prev, cur in zip(ordered, ordered[1:]):
            delta = prev.time_seconds - cur.time_seconds
            if delta > 0:
                improvements.append(delta)
    return improvements


def days_between_first_and_last(ordered_runs, now):
    """Whole days from first to last submission. 0 on fewer than two runs or bad dates."""
    if len(ordered_runs) < 2:
        return 0
    try:
        first = parse_submitted(ordered_runs[0].submitted, now)
        last = parse_submitted(ordered_runs[-1].submitted, now)
    except ValueError:
        return 0
    return max((last - first).days, 0)


def calculate_player_statistics(runs, now=None):
    """Compute PlayerStats for every player appearing in `runs`.

    Stats only see the runs passed in, so `unique_games` counts distinct
    run ids within this set rather than distinct games.
    """
    now = now or datetime.now(timezone.utc)

    by_player = defaultdict(list)
    for run in runs:
        by_player[run.player_id].append(run)

    stats = {}
    for player_id, player_runs in by_player.items():
        ordered = sorted(player_runs, key=submission_order_key)
        improvements = time_improvements(ordered)

        stats[player_id] = PlayerStats(
            total_runs=len(ordered),
            unique_games=len({r.id for r in ordered}),
            unique_categories=len({r.category_id for r in ordered}),
            avg_time_improvement=sum(improvements) / len(improvements) if improvements else 0.0,
            days_active=days_between_first_and_last(ordered, now),
        )

    return stats
