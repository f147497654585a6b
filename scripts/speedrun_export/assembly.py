"""Join runs with game, leaderboard and player data into flat output rows.

Pure functions; nothing here touches the network.
"""

from speedrun_export.constants import UNKNOWN_NAME
from speedrun_export.models import PlayerStats, RunRecord


def world_records(leaderboards):
    """{category_id: run_id of leaderboard position 1} for non-empty boards."""
    return {cat_id: board[0].run_id for cat_id, board in leaderboards.items() if board}


def leaderboard_rank(board, run_id):
    """1-based position of run_id in the snapshot, 0 if absent."""
    for i, entry in enumerate(board):
        if entry.run_id == run_id:
            return i + 1
    return 0


def build_run_record(game_id, game_info, run, category_names, leaderboards,
                     player_names, player_stats, wr_by_category=None):
    board = leaderboards.get(run.category_id, [])
    if wr_by_category is None:
        wr_by_category = world_records(leaderboards)
    wr_run_id = wr_by_category.get(run.category_id)
    stats = player_stats.get(run.player_id, PlayerStats())
    comment = run.comment or ""

    return RunRecord(
        run_id=run.id,
        game_id=game_id,
        game_name=game_info.name,
        game_release_year=game_info.release_year,
        category_id=run.category_id,
        category_name=category_names.get(run.category_id, UNKNOWN_NAME),
        time_seconds=run.time_seconds,
        date_submitted=run.submitted,
        player_id=run.player_id,
        player_name=player_names.get(run.player_id, run.player_id),
        is_wr=1 if wr_run_id is not None and wr_run_id == run.id else 0,
        rank=leaderboard_rank(board, run.id),
        total_runners_in_category=len(board),
        video_link=run.video_link,
        has_video=1 if run.video_link else 0,
        platform=run.platform,
        emulated=1 if run.emulated else 0,
        player_total_runs=stats.total_runs,
        player_total_games=stats.unique_games,
        player_total_categories=stats.unique_categories,
        player_avg_time_improvement=stats.avg_time_improvement,
        player_days_active=stats.days_active,
        run_comment_length=len(comment),
        has_comment=1 if comment else 0,
    )


def assemble_records(game_id, game_info, runs, categories, leaderboards,
                     player_names, player_stats):
    """One RunRecord per run, in run order. No dedup."""
    category_names = {c.id: c.name for c in categories}
    wr_by_category = world_records(leaderboards)
    return [
        build_run_record(game_id, game_info, run, category_names, leaderboards,
                         player_names, player_stats, wr_by_category)
        for run in runs
    ]
