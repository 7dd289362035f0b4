"""Best-effort key-value persistence for the resistance measurement table.

Storage failures are logged and swallowed: a broken or missing cache must
never stop the in-memory table from working. Unreadable data is treated as
absent.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Protocol, Sequence

from .config import DEFAULT_CONFIG
from .models import ResistanceMeasurement
from .validation import validate_row_id

logger = logging.getLogger(__name__)


class MeasurementStorage(Protocol):
    def load(self) -> List[ResistanceMeasurement]: ...

    def save(self, rows: Sequence[ResistanceMeasurement]) -> None: ...

    def clear(self) -> None: ...


def _decode_rows(payload: Any) -> List[ResistanceMeasurement]:
    if not isinstance(payload, list):
        raise ValueError("stored measurements are not a list")
    rows = []
    for record in payload:
        if not isinstance(record, dict):
            raise ValueError("stored measurement is not an object")
        error = validate_row_id(record.get("id"))
        if error:
            raise ValueError(error)
        rows.append(ResistanceMeasurement.from_dict(record))
    return rows


def _encode_rows(rows: Sequence[ResistanceMeasurement]) -> List[Dict[str, Any]]:
    return [m.to_dict() for m in rows]


class MemoryStorage:
    """In-process storage keeping serialized JSON text under a single key."""

    def __init__(self, key: str = DEFAULT_CONFIG.storage_key):
        self.key = key
        self._data: Dict[str, str] = {}

    def load(self) -> List[ResistanceMeasurement]:
        text = self._data.get(self.key)
        if text is None:
            return []
        try:
            return _decode_rows(json.loads(text))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Discarding unreadable stored measurements: %s", exc)
            return []

    def save(self, rows: Sequence[ResistanceMeasurement]) -> None:
        try:
            self._data[self.key] = json.dumps(_encode_rows(rows), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            logger.error("Failed to save measurements: %s", exc)

    def clear(self) -> None:
        self._data.pop(self.key, None)


class JsonFileStorage:
    """Storage backed by a JSON object file; only ``key`` is read or written.

    Other keys present in the file are preserved on save and clear.
    """

    def __init__(self, path, key: str = DEFAULT_CONFIG.storage_key):
        self.path = Path(path)
        self.key = key

    def _read_document(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        document = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(document, dict):
            raise ValueError(f"{self.path} does not contain a JSON object")
        return document

    def _write_document(self, document: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self.path)

    def load(self) -> List[ResistanceMeasurement]:
        try:
            document = self._read_document()
            if self.key not in document:
                return []
            rows = _decode_rows(document[self.key])
        except (OSError, KeyError, TypeError, ValueError) as exc:
            logger.warning(
                "Discarding unreadable measurements in %s: %s", self.path, exc
            )
            return []
        logger.info("Loaded %d stored measurements from %s", len(rows), self.path)
        return rows

    def save(self, rows: Sequence[ResistanceMeasurement]) -> None:
        try:
            try:
                document = self._read_document()
            except ValueError:
                document = {}
            document[self.key] = _encode_rows(rows)
            self._write_document(document)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to save measurements to %s: %s", self.path, exc)

    def clear(self) -> None:
        try:
            document = self._read_document()
            if self.key in document:
                del document[self.key]
                self._write_document(document)
        except (OSError, ValueError) as exc:
            logger.error("Failed to clear measurements in %s: %s", self.path, exc)
