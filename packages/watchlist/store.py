# packages/watchlist/store.py

import json
from typing import Dict, FrozenSet

from packages.market_lib.errors import PersistedStateCorrupt
from packages.market_lib.logging import get_logger
from packages.watchlist.storage import SlotStorage

DEFAULT_SLOT = "cryptoWatchlist"


class WatchlistStore:
    """
    Process-wide set of favorited asset ids.

    Loaded once at startup and written back synchronously on every toggle.
    Ids of assets that dropped out of the catalog are kept as-is.
    """

    def __init__(self, storage: SlotStorage, slot: str = DEFAULT_SLOT, logger=None):
        self.storage = storage
        self.slot = slot
        self.logger = logger or get_logger("watchlist")

        # dict keys double as an insertion-ordered set
        self._ids: Dict[str, None] = {}

    def load(self) -> FrozenSet[str]:
        """Reads the persisted slot. Absent or corrupt state yields an empty watchlist."""
        try:
            raw = self._read()
            if raw is None:
                self._ids = {}
                return self.ids
            self._ids = dict.fromkeys(self._decode(raw))
        except PersistedStateCorrupt as e:
            self.logger.warning(f"{e.message}. Starting with an empty watchlist.")
            self._ids = {}

        self.logger.info(f"Watchlist loaded with {len(self._ids)} asset(s).")
        return self.ids

    def _read(self) -> str | None:
        try:
            return self.storage.read(self.slot)
        except UnicodeDecodeError as e:
            raise PersistedStateCorrupt(self.slot, "not valid UTF-8") from e
        except OSError as e:
            raise PersistedStateCorrupt(self.slot, f"unreadable ({e})") from e

    def _decode(self, raw: str) -> list:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistedStateCorrupt(self.slot, f"invalid JSON ({e.msg})") from e

        if not isinstance(data, list):
            raise PersistedStateCorrupt(
                self.slot, f"expected an array, got {type(data).__name__}"
            )
        if not all(isinstance(item, str) for item in data):
            raise PersistedStateCorrupt(self.slot, "array contains non-string ids")

        return data

    @property
    def ids(self) -> FrozenSet[str]:
        return frozenset(self._ids)

    def contains(self, asset_id: str) -> bool:
        return asset_id in self._ids

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def toggle(self, asset_id: str) -> bool:
        """Flips membership and persists the full set. Returns the new membership."""
        if asset_id in self._ids:
            del self._ids[asset_id]
            is_member = False
        else:
            self._ids[asset_id] = None
            is_member = True

        self._commit()
        return is_member

    def _commit(self) -> None:
        self.storage.write(self.slot, json.dumps(list(self._ids)))
