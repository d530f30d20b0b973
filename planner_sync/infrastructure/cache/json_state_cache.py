"""Local snapshot cache backed by a single JSON file.

Document shape::

    {"clients": [...], "cards": [...], "dailyNotes": [...]}

Entity records use the camelCase keys produced by the normalizer. Reads never
fail: a missing, corrupt or wrongly shaped file yields an empty snapshot, and
malformed records inside a list are skipped.
"""

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from planner_sync.application import normalizer
from planner_sync.application.interfaces import StateCache
from planner_sync.domain.entities import StateSnapshot
from planner_sync.domain.exceptions import CacheError

logger = logging.getLogger(__name__)


class JsonFileStateCache(StateCache):
    """Implements the StateCache port with a JSON file on local disk."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> StateSnapshot:
        try:
            document = json.loads(self._path.read_text("utf-8"))
        except FileNotFoundError:
            logger.debug("No local snapshot at %s — starting empty", self._path)
            return StateSnapshot()
        except (OSError, ValueError):
            logger.warning("Could not read %s — starting with empty collections", self._path)
            return StateSnapshot()
        return snapshot_from_document(document)

    def save(self, snapshot: StateSnapshot) -> None:
        """Write the snapshot via a temporary sibling file and an atomic rename."""
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(snapshot_to_document(snapshot), ensure_ascii=False),
                encoding="utf-8",
            )
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as exc:
            raise CacheError(str(self._path), str(exc)) from exc


def snapshot_to_document(snapshot: StateSnapshot) -> dict[str, Any]:
    return {
        "clients": [normalizer.client_to_cache(c) for c in snapshot.clients],
        "cards": [normalizer.card_to_cache(c) for c in snapshot.cards],
        "dailyNotes": list(snapshot.daily_notes),
    }


def snapshot_from_document(document: Any) -> StateSnapshot:
    if not isinstance(document, Mapping):
        logger.warning("Local snapshot is not an object — ignoring it")
        return StateSnapshot()
    return StateSnapshot(
        clients=tuple(normalizer.client_from_row(r) for r in _records(document, "clients")),
        cards=tuple(normalizer.card_from_row(r) for r in _records(document, "cards")),
        daily_notes=tuple(_sequence(document.get("dailyNotes"))),
    )


def _records(document: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    return [r for r in _sequence(document.get(key)) if isinstance(r, Mapping)]


def _sequence(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []
