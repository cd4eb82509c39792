from pathlib import Path
from pydantic_settings import SettingsConfigDict
from .base import EnvConfig, PROJECT_ROOT


class WatchlistConfig(EnvConfig):
    storage_dir: Path = PROJECT_ROOT / "data"

    # Name of the persisted slot (one JSON array of asset ids)
    slot_name: str = "cryptoWatchlist"

    model_config = SettingsConfigDict(
        env_prefix="WATCHLIST_",
        case_sensitive=False,
        extra="ignore",
    )
