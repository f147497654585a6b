"""Player id → display name, memoized for the life of the process."""

from types import MappingProxyType

from speedrun_export.api_client import FetchError
from speedrun_export.constants import (
    GUEST_MARKER_CHARS, GUEST_MAX_LENGTH, PLAYER_LOOKUP_DELAY,
)
from speedrun_export.decoding import DecodeError, decode_user_name


class GuestNamePolicy:
    """Decides whether a player id is really a guest's display name.

    Registered speedrun.com ids are 8 characters and usually contain an
    'x' or 'j'. Anything short and free of those characters is taken as a
    guest name and never looked up.
    """

    def __init__(self, marker_chars=GUEST_MARKER_CHARS, max_length=GUEST_MAX_LENGTH):
        self.marker_chars = marker_chars
        self.max_length = max_length

    def is_guest(self, player_id):
        if any(c in player_id for c in self.marker_chars):
            return False
        return len(player_id) < self.max_length


class PlayerNameResolver:
    """Resolve player ids through /users/{id}, caching every answer once."""

    def __init__(self, client, pacer, policy=None, delay=PLAYER_LOOKUP_DELAY):
        self.client = client
        self.pacer = pacer
        self.policy = policy or GuestNamePolicy()
        self.delay = delay
        self.remote_lookups = 0
        self._cache = {}

    def __len__(self):
        return len(self._cache)

    def __contains__(self, player_id):
        return player_id in self._cache

    @property
    def cache(self):
        """Read-only view of the resolved names."""
        return MappingProxyType(self._cache)

    def resolve(self, player_id):
        if player_id in self._cache:
            return self._cache[player_id]

        if self.policy.is_guest(player_id):
            self._cache[player_id] = player_id
            return player_id

        self.remote_lookups += 1
        try:
            payload = self.client.fetch(f"users/{player_id}")
            name = decode_user_name(payload, fallback=player_id)
        except (FetchError, DecodeError):
            self._cache[player_id] = player_id
            return player_id

        self._cache[player_id] = name
        self.pacer.wait(self.delay)
        return name

    def resolve_all(self, player_ids):
        """Resolve each distinct id in first-seen order. Returns {id: name}."""
        unique_ids = list(dict.fromkeys(player_ids))
        resolved = 0
        for pid in unique_ids:
            if pid in self:
                continue
            self.resolve(pid)
            resolved += 1
            if resolved % 10 == 0:
                print(f"    Resolved {resolved}/{len(unique_ids)} player names...")
        return {pid: self._cache[pid] for pid in unique_ids}
