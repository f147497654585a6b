"""Pipeline orchestration — per-game processing and main entry point."""

import sys
from collections import Counter
from pathlib import Path

from speedrun_export.api_client import ApiClient
from speedrun_export.aggregation import calculate_player_statistics
from speedrun_export.assembly import assemble_records, world_records
from speedrun_export.constants import GAME_DELAY, GAME_IDS, OUTPUT_CSV
from speedrun_export.fetchers import (
    get_all_runs, get_categories, get_game_info, get_leaderboards,
)
from speedrun_export.io_helpers import write_csv
from speedrun_export.pacing import Pacer
from speedrun_export.players import PlayerNameResolver
from speedrun_export.summary import build_summary, format_summary


def process_game(game_id, client, resolver, pacer):
    """Fetch, enrich and assemble every run of one game.

    Raises if the category list cannot be fetched; every other failure
    is absorbed by the fetchers.
    """
    game_info = get_game_info(client, game_id)
    print(f"  Game: {game_info.name}")

    categories = get_categories(client, game_id)
    print(f"  Categories found: {len(categories)}")

    leaderboards = get_leaderboards(client, pacer, game_id, categories)
    print(f"  World records found: {len(world_records(leaderboards))}")

    skip_log = []
    runs = get_all_runs(client, pacer, game_id, skip_log=skip_log)
    print(f"  Runs retrieved: {len(runs)}")
    if skip_log:
        for reason, count in sorted(Counter(skip_log).items(), key=lambda x: -x[1]):
            print(f"    Skipped {count}: {reason}")

    print("  Fetching player names...")
    player_names = resolver.resolve_all(r.player_id for r in runs)

    player_stats = calculate_player_statistics(runs)

    return assemble_records(game_id, game_info, runs, categories, leaderboards,
                            player_names, player_stats)


def collect_all(game_ids, client, resolver, pacer):
    """Process games in order, appending every game's records to one list.

    A game that raises is reported and skipped; the loop always continues.
    """
    records = []
    for i, game_id in enumerate(game_ids, 1):
        print(f"[{i}/{len(game_ids)}] Processing game ID: {game_id}")
        try:
            records.extend(process_game(game_id, client, resolver, pacer))
            pacer.wait(GAME_DELAY)
        except Exception as e:
            print(f"  ERROR: {game_id}: {e}")

        print(f"  Total runs collected so far: {len(records)}")
        print(f"  Unique players cached: {len(resolver)}\n")

    return records


def main(argv=None):
    import argparse
    parser = argparse.ArgumentParser(description="Speedrun leaderboard CSV export")
    parser.add_argument("--output", type=Path, default=OUTPUT_CSV,
                        help=f"CSV file to write (default: {OUTPUT_CSV})")
    parser.add_argument("--game", action="append", dest="games", metavar="GAME_ID",
                        help="Game id to pull; repeat to pull several (default: built-in list)")
    parser.add_argument("--no-pause", action="store_true",
                        help="Exit without waiting for Enter")
    args = parser.parse_args(argv)

    game_ids = args.games or GAME_IDS

    print("Speedrun Data Export")
    print("=" * 50)
    print("Starting speedrun data collection for statistical analysis...")
    print("This may take several minutes due to API rate limiting.\n")

    client = ApiClient()
    pacer = Pacer()
    resolver = PlayerNameResolver(client, pacer)

    records = collect_all(game_ids, client, resolver, pacer)
    print(f"Rate limiting: {pacer.calls} pauses, {pacer.total_waited:.0f}s total")
    print(f"Player lookups: {resolver.remote_lookups} remote\n")

    print("Exporting CSV...")
    try:
        write_csv(records, args.output)
    except OSError as e:
        print(f"  ERROR: could not write {args.output}: {e}")

    print()
    print(format_summary(build_summary(records, len(resolver)), args.output))

    if not args.no_pause and sys.stdin.isatty():
        input("\nPress Enter to exit.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
