"""Pipeline constants — paths, API config, game list, pacing, CSV schema."""

import os
from pathlib import Path

# ─── Paths ──────────────────────────────────────────────────────

SCRIPT_DIR = Path(__file__).resolve().parent.parent  # scripts/
PROJECT_DIR = SCRIPT_DIR.parent
OUTPUT_CSV = Path(os.environ.get("SPEEDRUN_OUTPUT_CSV", PROJECT_DIR / "speedrun_data_names.csv"))

# ─── speedrun.com API ───────────────────────────────────────────

API_BASE_URL = os.environ.get("SPEEDRUN_API_BASE", "https://www.speedrun.com/api/v1")
HTTP_TIMEOUT = 100  # seconds
USER_AGENT = "speedrun-export/1.0"

# Games to pull, in processing order. Duplicates are processed twice.
GAME_IDS = [
    "j1npme6p",  # Minecraft: Java Edition
    "3698my8d",  # Roblox: DOORS
    "76rkv4d8",  # Celeste
    "y65r7g81",  # Portal
    "9d3rrxyd",  # Hollow Knight
    "76r55vd8",  # Super Mario Odyssey
    "pd0wq31e",  # Super Mario 64
    "w6jmm26j",  # Cuphead
    "n4d7jzd7",  # Skyrim
    "nd28z0ed",  # Elden Ring
    "369p3p81",  # ULTRAKILL
    "4pd0n31e",  # Portal
    "pd0wx9w1",  # Getting Over It With Bennett Foddy
    "76rqmld8",  # Hollow Knight
    "76rqjqd8",  # The Legend of Zelda: Breath of the Wild
    "3698my8d",  # Roblox: DOORS
    "76r43l18",  # Outlast
    "w6j7vpx6",  # Poppy Playtime: Chapter 1
    "m1zjmz60",  # Resident Evil 2
    "o1y9okr6",  # Hades
    "3dxy5vv6",  # Hades II
    "o6gnpox1",  # Pizza Tower
]

# ─── Pagination & Pacing ────────────────────────────────────────

LEADERBOARD_TOP = 100
RUNS_PAGE_SIZE = 200
MAX_RUNS_PER_GAME = 100_000

# Fixed delays in seconds after remote calls
PLAYER_LOOKUP_DELAY = 0.1
LEADERBOARD_DELAY = 0.5
RUNS_PAGE_DELAY = 0.5
GAME_DELAY = 1.5

# ─── Guest Name Heuristic ───────────────────────────────────────

# Ids with none of these characters and shorter than the limit are
# treated as guest display names, not registered user ids.
GUEST_MARKER_CHARS = "xj"
GUEST_MAX_LENGTH = 8

# ─── Sentinels ──────────────────────────────────────────────────

UNKNOWN_NAME = "Unknown"
UNKNOWN_PLAYER_ID = "unknown"
UNKNOWN_CATEGORY_ID = "unknown"
UNKNOWN_PLATFORM = "Unknown"

# ─── CSV Schema ─────────────────────────────────────────────────

CSV_COLUMNS = [
    "run_id",
    "game_id",
    "game_name",
    "game_release_year",
    "category_id",
    "category_name",
    "time_seconds",
    "date_submitted",
    "player_id",
    "player_name",
    "is_wr",
    "rank",
    "total_runners_in_category",
    "video_link",
    "has_video",
    "platform",
    "emulated",
    "player_total_runs",
    "player_total_games",
    "player_total_categories",
    "player_avg_time_improvement",
    "player_days_active",
    "run_comment_length",
    "has_comment",
]
