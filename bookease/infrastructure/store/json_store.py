from __future__ import annotations

import json
import logging
import threading
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any

from bookease.application.ports.attendee_store import AttendeeStorePort
from bookease.domain.entities.attendee import Attendee

STORE_VERSION = 1
ATTENDEE_FIELDS = frozenset(f.name for f in fields(Attendee))


class JsonAttendeeStore(AttendeeStorePort):
    """
    Attendee registry persisted as one named JSON document:
    {"version": 1, "attendees": [...]}. Writes are atomic (temp file + rename)
    and serialized with a lock; the last writer wins.
    """

    def __init__(self, data_dir: str = "./data", name: str = "attendees-store") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._file_path = self._data_dir / f"{name}.json"
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _load(self) -> list[dict[str, Any]]:
        """Load raw attendee records, empty if the file is missing or unreadable."""
        if not self._file_path.exists():
            return []
        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            self._logger.warning(
                "Attendee store unreadable, starting empty",
                extra={"path": str(self._file_path), "reason": str(e)},
            )
            return []
        if isinstance(data, list):
            # Bare array written before the document carried a version.
            return data
        if not isinstance(data, dict) or not isinstance(data.get("attendees", []), list):
            self._logger.warning(
                "Attendee store has an unexpected shape, starting empty",
                extra={"path": str(self._file_path), "reason": type(data).__name__},
            )
            return []
        return data.get("attendees", [])

    def _save(self, records: list[dict[str, Any]]) -> None:
        temp_path = self._file_path.with_suffix(".json.tmp")
        payload = {"version": STORE_VERSION, "attendees": records}
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise

    def _serialize(self, attendee: Attendee) -> dict[str, Any]:
        return asdict(attendee)

    def _deserialize(self, data: dict[str, Any]) -> Attendee:
        return Attendee(**{k: v for k, v in data.items() if k in ATTENDEE_FIELDS})

    def list_attendees(self) -> list[Attendee]:
        with self._lock:
            return [self._deserialize(r) for r in self._load()]

    def get_attendee(self, attendee_id: str) -> Attendee | None:
        with self._lock:
            for record in self._load():
                if record.get("id") == attendee_id:
                    return self._deserialize(record)
        return None

    def save_attendee(self, attendee: Attendee) -> None:
        with self._lock:
            records = self._load()
            serialized = self._serialize(attendee)
            for i, record in enumerate(records):
                if record.get("id") == attendee.id:
                    records[i] = serialized
                    break
            else:
                records.append(serialized)
            self._save(records)

    def delete_attendee(self, attendee_id: str) -> None:
        with self._lock:
            records = self._load()
            remaining = [r for r in records if r.get("id") != attendee_id]
            if len(remaining) != len(records):
                self._save(remaining)
