"""Store persistence - load/save the full store snapshot under a storage key."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from pydantic import ValidationError

from ..domain.document import StoreState

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "resume-pro-elite-v7-storage"
STATE_FORMAT_VERSION = 0


class StorageBackend(Protocol):
    """Persistence collaborator the store hands every snapshot to."""

    def load(self) -> Optional[StoreState]: ...

    def save(self, state: StoreState) -> None: ...

    def clear(self) -> None: ...


class JsonFileStorage:
    """JSON file holding ``{storage_key: {"state": ..., "version": 0}}``.

    Other keys in the file are left alone so several stores can share it.
    """

    def __init__(self, path: Union[str, Path], storage_key: str = DEFAULT_STORAGE_KEY):
        self.path = Path(path)
        self.storage_key = storage_key

    def load(self) -> Optional[StoreState]:
        """Return the persisted snapshot, or ``None`` when there is nothing usable."""
        entry = self._read_all().get(self.storage_key)
        if entry is None:
            return None
        if not isinstance(entry, dict) or "state" not in entry:
            logger.warning("Ignoring malformed entry %r in %s", self.storage_key, self.path)
            return None
        try:
            return StoreState.model_validate(entry["state"])
        except ValidationError as exc:
            logger.warning(
                "Ignoring persisted state in %s: %d validation error(s)", self.path, exc.error_count()
            )
            return None

    def save(self, state: StoreState) -> None:
        """Write *state*; failures are logged, never raised."""
        data = self._read_all()
        data[self.storage_key] = {"state": state.model_dump(mode="json"), "version": STATE_FORMAT_VERSION}
        try:
            self._write_all(data)
        except OSError as exc:
            logger.warning("Failed to save store to %s: %s", self.path, exc)

    def clear(self) -> None:
        data = self._read_all()
        if self.storage_key not in data:
            return
        del data[self.storage_key]
        try:
            self._write_all(data)
        except OSError as exc:
            logger.warning("Failed to clear store in %s: %s", self.path, exc)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            # Corrupted file: start fresh
            logger.warning("Could not read %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Expected a JSON object in %s, found %s", self.path, type(data).__name__)
            return {}
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


class MemoryStorage:
    """In-process backend that keeps the last saved snapshot."""

    def __init__(self, state: Optional[StoreState] = None):
        self.state = state
        self.saves = 0

    def load(self) -> Optional[StoreState]:
        return self.state

    def save(self, state: StoreState) -> None:
        self.state = state
        self.saves += 1

    def clear(self) -> None:
        self.state = None
