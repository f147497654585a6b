"""Typed records passed between pipeline stages.

All records are frozen; stages build new ones instead of mutating.
"""

from dataclasses import astuple, dataclass, fields
from typing import Optional

from speedrun_export.constants import UNKNOWN_NAME, UNKNOWN_PLATFORM


@dataclass(frozen=True)
class GameInfo:
    name: str
    release_year: int = 0

    @classmethod
    def unknown(cls):
        return cls(name=UNKNOWN_NAME, release_year=0)


@dataclass(frozen=True)
class Category:
    id: str
    name: str


@dataclass(frozen=True)
class LeaderboardEntry:
    run_id: str
    time: float


@dataclass(frozen=True)
class RunData:
    id: str
    category_id: str
    player_id: str
    time_seconds: float
    submitted: Optional[str] = None
    platform: str = UNKNOWN_PLATFORM
    emulated: bool = False
    video_link: Optional[str] = None
    comment: Optional[str] = None


@dataclass(frozen=True)
class PlayerStats:
    total_runs: int = 0
    unique_games: int = 0
    unique_categories: int = 0
    avg_time_improvement: float = 0.0
    days_active: int = 0


@dataclass(frozen=True)
class RunRecord:
    """One output row. Field order is the CSV column order."""

    run_id: str
    game_id: str
    game_name: str
    game_release_year: int
    category_id: str
    category_name: str
    time_seconds: float
    date_submitted: Optional[str]
    player_id: str
    player_name: str
    is_wr: int
    rank: int
    total_runners_in_category: int
    video_link: Optional[str]
    has_video: int
    platform: str
    emulated: int
    player_total_runs: int
    player_total_games: int
    player_total_categories: int
    player_avg_time_improvement: float
    player_days_active: int
    run_comment_length: int
    has_comment: int

    @classmethod
    def columns(cls):
        return [f.name for f in fields(cls)]

    def as_row(self):
        return list(astuple(self))
