"""End-of-run summary of the collected records."""

from collections import Counter


def build_summary(records, cached_players=0):
    """Build a summary dict from all assembled records."""
    if not records:
        return {
            "total_runs": 0,
            "games_with_runs": 0,
            "cached_players": cached_players,
        }

    runs_per_game = Counter()
    game_names = {}
    players = set()
    for r in records:
        runs_per_game[r.game_id] += 1
        game_names.setdefault(r.game_id, r.game_name)
        players.add(r.player_id)

    return {
        "total_runs": len(records),
        "games_with_runs": len(runs_per_game),
        "runs_per_game": [
            {"game_id": gid, "name": game_names[gid], "runs": n}
            for gid, n in runs_per_game.most_common()
        ],
        "unique_players": len(players),
        "cached_players": cached_players,
        "world_records": sum(r.is_wr for r in records),
        "with_video": sum(r.has_video for r in records),
    }


def format_summary(summary, output_path):
    """Render the summary as console lines."""
    lines = [
        "=== COMPLETE ===",
        f"Total runs collected: {summary['total_runs']}",
    ]

    if summary["total_runs"]:
        lines.append(f"Games with runs: {summary['games_with_runs']}")
        lines.append(f"Unique players: {summary['unique_players']} "
                     f"({summary['cached_players']} names cached)")
        lines.append(f"World record rows: {summary['world_records']}")
        lines.append(f"Runs with video: {summary['with_video']}")
        for game in summary["runs_per_game"]:
            lines.append(f"  {game['name']} ({game['game_id']}): {game['runs']} runs")

    lines.append(f"Exported to: {output_path}")
    return "\n".join(lines)
