"""Parsing & decoding — turn raw speedrun.com JSON into typed records.

The API omits or nulls optional fields freely. Every "missing → default"
decision lives here so the fetchers never poke at raw dicts.
"""

from speedrun_export.constants import (
    UNKNOWN_CATEGORY_ID, UNKNOWN_PLATFORM, UNKNOWN_PLAYER_ID,
)
from speedrun_export.models import Category, GameInfo, LeaderboardEntry, RunData


class DecodeError(ValueError):
    """Payload is missing a field the record cannot do without."""


# ─── Field Helpers ──────────────────────────────────────────────

def _as_dict(value):
    return value if isinstance(value, dict) else {}


def _as_list(value):
    return value if isinstance(value, list) else []


def _optional_str(value):
    return value if isinstance(value, str) else None


def _as_float(value):
    """Coerce a JSON number (or numeric string) to float. None if not numeric."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_bool(value):
    if isinstance(value, str):
        return value.lower() == "true"
    return value is True


def envelope_data(payload):
    """Return the `data` member of an API envelope. Raises DecodeError if absent."""
    if not isinstance(payload, dict) or "data" not in payload:
        raise DecodeError("response has no 'data' envelope")
    return payload["data"]


# ─── Games & Categories ─────────────────────────────────────────

def decode_game_info(payload):
    """GET /games/{id} → GameInfo. Release year is 0 when absent or null."""
    data = _as_dict(envelope_data(payload))
    name = _optional_str(_as_dict(data.get("names")).get("international"))
    if name is None:
        raise DecodeError("game has no international name")

    released = data.get("released")
    release_year = int(released) if isinstance(released, int) and not isinstance(released, bool) else 0
    return GameInfo(name=name, release_year=max(release_year, 0))


def decode_categories(payload):
    """GET /games/{id}/categories → [Category] in API order."""
    data = envelope_data(payload)
    if not isinstance(data, list):
        raise DecodeError("categories 'data' is not a list")

    categories = []
    for cat in data:
        cat = _as_dict(cat)
        cat_id = _optional_str(cat.get("id"))
        name = _optional_str(cat.get("name"))
        if cat_id is None or name is None:
            raise DecodeError(f"category entry missing id or name: {cat!r}")
        categories.append(Category(id=cat_id, name=name))
    return categories


def decode_leaderboard(payload):
    """GET /leaderboards/... → [LeaderboardEntry], order preserved (index 0 = WR)."""
    runs = _as_dict(envelope_data(payload)).get("runs")
    if not isinstance(runs, list):
        raise DecodeError("leaderboard has no 'runs' list")

    entries = []
    for place in runs:
        run = _as_dict(_as_dict(place).get("run"))
        run_id = _optional_str(run.get("id"))
        primary_t = _as_float(_as_dict(run.get("times")).get("primary_t"))
        if run_id is None or primary_t is None:
            raise DecodeError(f"leaderboard entry missing run id or time: {place!r}")
        entries.append(LeaderboardEntry(run_id=run_id, time=primary_t))
    return entries


def decode_user_name(payload, fallback):
    """GET /users/{id} → international name, or `fallback` when not present."""
    data = _as_dict(envelope_data(payload))
    name = _optional_str(_as_dict(data.get("names")).get("international"))
    return name if name else fallback


# ─── Runs ───────────────────────────────────────────────────────

def extract_player_id(raw_run):
    """First listed player: registered id preferred, then guest name."""
    for player in _as_list(raw_run.get("players")):
        player = _as_dict(player)
        if isinstance(player.get("id"), str):
            return player["id"]
        if isinstance(player.get("name"), str):
            return player["name"]
        break
    return UNKNOWN_PLAYER_ID


def extract_category_id(raw_run):
    """Category is a bare id string, or an embedded {"data": {...}} object.

    An explicit null yields an empty id; a missing key or an embedded
    object without an id yields "unknown".
    """
    if "category" not in raw_run:
        return UNKNOWN_CATEGORY_ID
    category = raw_run["category"]
    if category is None:
        return ""
    if isinstance(category, str):
        return category
    embedded = _optional_str(_as_dict(_as_dict(category).get("data")).get("id"))
    return embedded if embedded is not None else UNKNOWN_CATEGORY_ID


def extract_video_link(raw_run):
    """First video link URI, if any."""
    for link in _as_list(_as_dict(raw_run.get("videos")).get("links")):
        uri = _optional_str(_as_dict(link).get("uri"))
        if uri is not None:
            return uri
    return None


def decode_run(raw_run, skip_log=None):
    """Parse one entry of GET /runs into RunData. Returns None if unusable.

    A run needs an id and a primary time; everything else has a default.
    If skip_log is a list, the reason for a rejected run is appended to it.
    """
    def _skip(reason):
        if skip_log is not None:
            skip_log.append(reason)
        return None

    if not isinstance(raw_run, dict):
        return _skip("run entry is not an object")

    run_id = _optional_str(raw_run.get("id"))
    if not run_id:
        return _skip("missing run id")

    primary_t = _as_float(_as_dict(raw_run.get("times")).get("primary_t"))
    if primary_t is None:
        return _skip("missing primary time")

    system = _as_dict(raw_run.get("system"))
    platform = _optional_str(system.get("platform")) or UNKNOWN_PLATFORM

    return RunData(
        id=run_id,
        category_id=extract_category_id(raw_run),
        player_id=extract_player_id(raw_run),
        time_seconds=primary_t,
        submitted=_optional_str(raw_run.get("submitted")),
        platform=platform,
        emulated=_as_bool(system.get("emulated")),
        video_link=extract_video_link(raw_run),
        comment=_optional_str(raw_run.get("comment")),
    )
