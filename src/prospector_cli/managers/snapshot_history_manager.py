# src/prospector_cli/managers/snapshot_history_manager.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from consistency.model import Snapshot

logger = logging.getLogger(__name__)

DEFAULT_MAX_SNAPSHOTS = 50


class SnapshotHistoryManager:
    """
    Keeps a bounded, file-backed history of the snapshots taken in a session.
    Oldest snapshots are dropped once the bound is exceeded.
    """

    def __init__(self, path: Union[str, Path], max_snapshots: int = DEFAULT_MAX_SNAPSHOTS):
        self.path = Path(path)
        self.max_snapshots = max(1, int(max_snapshots))
        self._snapshots: List[Dict[str, Any]] = self._load()

    def _load(self) -> List[Dict[str, Any]]:
        """Loads the stored JSON list; an unreadable file starts an empty history."""
        if not self.path.exists():
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read snapshot history {self.path}: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"Snapshot history {self.path} is not a list; starting empty.")
            return []
        return [item for item in data if isinstance(item, Mapping)][-self.max_snapshots:]

    def _save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(self._snapshots, f, indent=2)
        except OSError as e:
            logger.error(f"Could not save snapshot history {self.path}: {e}")

    def add(self, snapshot: Union[Snapshot, Mapping[str, Any]]) -> None:
        """Appends a snapshot (raw mapping or model) and trims to the bound."""
        if isinstance(snapshot, Snapshot):
            record = snapshot.model_dump(by_alias=True, exclude_unset=True)
        else:
            record = dict(snapshot)
        self._snapshots.append(record)

        overflow = len(self._snapshots) - self.max_snapshots
        if overflow > 0:
            del self._snapshots[:overflow]
            logger.debug(f"Dropped {overflow} oldest snapshot(s) from history")
        self._save()

    def get_all(self) -> List[Snapshot]:
        return [Snapshot.coerce(item) for item in self._snapshots]

    def clear(self) -> None:
        self._snapshots = []
        self._save()
        logger.info("Snapshot history cleared.")

    def __len__(self) -> int:
        return len(self._snapshots)
