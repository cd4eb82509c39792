# packages/watchlist/storage.py

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path


class SlotStorage(ABC):
    """
    Named-slot key/value storage local to this device.
    Values are opaque strings; callers own the encoding.
    """

    @abstractmethod
    def read(self, slot: str) -> str | None:
        """Returns the stored payload, or None if the slot was never written."""
        pass

    @abstractmethod
    def write(self, slot: str, payload: str) -> None:
        pass


class JsonFileSlotStorage(SlotStorage):
    """One `<slot>.json` file per slot inside a single directory."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def _path(self, slot: str) -> Path:
        return self.directory / f"{slot}.json"

    def read(self, slot: str) -> str | None:
        path = self._path(slot)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, slot: str, payload: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self._path(slot)

        # Write-then-rename so a crash never leaves a half-written slot
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{slot}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
