"""Catalog fetchers — one function per speedrun.com endpoint.

Each fetcher decides for itself whether a failure is recoverable:
game info and leaderboards fall back to sentinels, categories propagate,
run pagination stops early but keeps what it already has.
"""

from speedrun_export.api_client import FetchError
from speedrun_export.constants import (
    LEADERBOARD_DELAY, LEADERBOARD_TOP, MAX_RUNS_PER_GAME,
    RUNS_PAGE_DELAY, RUNS_PAGE_SIZE,
)
from speedrun_export.decoding import (
    DecodeError, decode_categories, decode_game_info, decode_leaderboard,
    decode_run, envelope_data,
)
from speedrun_export.models import GameInfo


# ─── Games & Categories ─────────────────────────────────────────

def get_game_info(client, game_id):
    """Game name and release year. Returns GameInfo.unknown() on any failure."""
    try:
        return decode_game_info(client.fetch(f"games/{game_id}"))
    except (FetchError, DecodeError):
        return GameInfo.unknown()


def get_categories(client, game_id):
    """All categories for a game. Failures propagate and abort the game."""
    return decode_categories(client.fetch(f"games/{game_id}/categories"))


# ─── Leaderboards ───────────────────────────────────────────────

def get_leaderboard(client, game_id, category_id, top=LEADERBOARD_TOP):
    """Top-N snapshot for one category, best first. Empty list on failure."""
    try:
        payload = client.fetch(
            f"leaderboards/{game_id}/category/{category_id}",
            params={"top": top},
        )
        return decode_leaderboard(payload)
    except (FetchError, DecodeError):
        return []


def get_leaderboards(client, pacer, game_id, categories, delay=LEADERBOARD_DELAY):
    """Leaderboard snapshot per category id, pacing after each request."""
    leaderboards = {}
    for category in categories:
        leaderboards[category.id] = get_leaderboard(client, game_id, category.id)
        pacer.wait(delay)
    return leaderboards


# ─── Runs ───────────────────────────────────────────────────────

def _page_size_reported(payload):
    pagination = payload.get("pagination") if isinstance(payload, dict) else None
    if not isinstance(pagination, dict):
        return None
    return pagination.get("size")


def get_all_runs(client, pacer, game_id, page_size=RUNS_PAGE_SIZE,
                 max_runs=MAX_RUNS_PER_GAME, skip_log=None, delay=RUNS_PAGE_DELAY):
    """Page through /runs for a game, newest submissions first.

    Keeps going while each page comes back full (both the item count and the
    server's pagination.size equal page_size) and fewer than max_runs have
    been collected. A failed page ends pagination; earlier pages are kept.
    """
    runs = []
    offset = 0
    has_more = True

    while has_more and len(runs) < max_runs:
        try:
            payload = client.fetch("runs", params={
                "game": game_id,
                "max": page_size,
                "offset": offset,
                "orderby": "submitted",
                "direction": "desc",
            })
            page = envelope_data(payload)
            if not isinstance(page, list):
                raise DecodeError("runs 'data' is not a list")
        except (FetchError, DecodeError) as e:
            print(f"    Error fetching runs at offset {offset}: {e}")
            pacer.wait(delay)
            break

        for raw_run in page:
            run = decode_run(raw_run, skip_log=skip_log)
            if run is not None:
                runs.append(run)

        has_more = len(page) == page_size and _page_size_reported(payload) == page_size
        offset += page_size
        pacer.wait(delay)

    return runs
