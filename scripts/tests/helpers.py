"""Shared test factories for pipeline tests.

Provides factory functions for raw speedrun.com payloads and decoded
records with sensible defaults and easy overrides, plus a FakeClient that
serves canned payloads instead of hitting the network.
"""

import sys
from pathlib import Path

# Add scripts/ to path so we can import speedrun_export
SCRIPTS_DIR = Path(__file__).resolve().parent.parent
if str(SCRIPTS_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPTS_DIR))

from speedrun_export.api_client import FetchError
from speedrun_export.constants import OUTPUT_CSV
from speedrun_export.models import Category, GameInfo, LeaderboardEntry, RunData

REAL_CSV = OUTPUT_CSV


# ─── Raw API Payload Factories ────────────────────────────────────

def make_raw_run(**overrides):
    """Build a raw /runs entry. Override any top-level field via kwargs.

    The default is a registered player's run with video, comment and a
    bare-string category id.
    """
    run = {
        "id": "run00001",
        "game": "game0001",
        "category": "cat00001",
        "players": [{"rel": "user", "id": "player1x", "uri": "https://example/users/player1x"}],
        "submitted": "2024-01-15T14:30:00Z",
        "times": {"primary": "PT1M30S", "primary_t": 90.0},
        "system": {"platform": "8gej2n93", "emulated": False, "region": None},
        "videos": {"links": [{"uri": "https://youtu.be/abc123"}]},
        "comment": "Good run",
    }
    run.update(overrides)
    return run


def make_runs_page(runs, size=None):
    """Wrap raw runs in the /runs envelope with pagination.size."""
    return {
        "data": runs,
        "pagination": {"offset": 0, "max": 200, "size": len(runs) if size is None else size},
    }


def make_game_payload(name="Celeste", released=2018):
    return {"data": {"id": "game0001", "names": {"international": name}, "released": released}}


def make_categories_payload(*pairs):
    """pairs of (id, name) → /games/{id}/categories envelope."""
    return {"data": [{"id": cid, "name": name, "type": "per-game"} for cid, name in pairs]}


def make_leaderboard_payload(*entries):
    """entries of (run_id, seconds) in rank order → /leaderboards envelope."""
    return {"data": {"runs": [
        {"place": i + 1, "run": {"id": rid, "times": {"primary_t": t}}}
        for i, (rid, t) in enumerate(entries)
    ]}}


def make_user_payload(name):
    return {"data": {"id": "whatever", "names": {"international": name, "japanese": None}}}


# ─── Decoded Record Factories ────────────────────────────────────

def make_run(**overrides):
    """Build a RunData with defaults. Override any field via kwargs."""
    fields = {
        "id": "run00001",
        "category_id": "cat00001",
        "player_id": "player1x",
        "time_seconds": 90.0,
        "submitted": "2024-01-15T14:30:00Z",
        "platform": "8gej2n93",
        "emulated": False,
        "video_link": "https://youtu.be/abc123",
        "comment": "Good run",
    }
    fields.update(overrides)
    return RunData(**fields)


def make_player_runs(player_id, category_id, times, start_day=1):
    """Runs for one player in one category, submitted on consecutive days."""
    return [
        make_run(
            id=f"{player_id}-{category_id}-{i}",
            player_id=player_id,
            category_id=category_id,
            time_seconds=t,
            submitted=f"2024-01-{start_day + i:02d}T12:00:00Z",
        )
        for i, t in enumerate(times)
    ]


def make_board(*run_ids, start=60.0):
    return [LeaderboardEntry(run_id=rid, time=start + i) for i, rid in enumerate(run_ids)]


def make_game_info(name="Celeste", release_year=2018):
    return GameInfo(name=name, release_year=release_year)


def make_category(cid="cat00001", name="Any%"):
    return Category(id=cid, name=name)


# ─── Fake API Client ─────────────────────────────────────────────

class FakeClient:
    """Stands in for ApiClient.

    `routes` maps a path (no leading slash) to either a payload, an
    Exception instance to raise, or a callable taking the params dict.
    Unknown paths raise FetchError. Every call is recorded in `calls`.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def calls_to(self, path):
        return [params for p, params in self.calls if p == path]

    def fetch(self, path, params=None):
        self.calls.append((path, params))
        if path not in self.routes:
            raise FetchError(path, "404 Not Found")
        route = self.routes[path]
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(params or {})
        return route


def paged_runs(pages, fail_at_offset=None):
    """Route for "runs": serves pages[offset // max], optionally failing at one offset."""
    def route(params):
        offset = params["offset"]
        if fail_at_offset is not None and offset == fail_at_offset:
            raise FetchError("runs", "503 Service Unavailable")
        index = offset // params["max"]
        if index >= len(pages):
            return make_runs_page([])
        return pages[index]
    return route


def make_full_pages(n_pages, page_size, last_page_count=None):
    """n_pages full pages of distinct runs, plus an optional short last page."""
    pages = []
    counter = 0
    for _ in range(n_pages):
        runs = []
        for _ in range(page_size):
            runs.append(make_raw_run(id=f"run{counter:06d}"))
            counter += 1
        pages.append(make_runs_page(runs, size=page_size))
    if last_page_count is not None:
        runs = [make_raw_run(id=f"run{counter + i:06d}") for i in range(last_page_count)]
        pages.append(make_runs_page(runs, size=last_page_count))
    return pages
