"""Snapshot of the dashboard inputs kept in a local key-value store."""

from __future__ import annotations

import json
import math
import sqlite3
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from loguru import logger

from fire_dashboard.constants import STORAGE_KEY
from fire_dashboard.models import DashboardInputs


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SqliteStore:
    """Single-file store; one connection per call."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        conn = self._connect()
        try:
            conn.execute(
                """
                create table if not exists kv_store (
                    key text primary key,
                    value text not null
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def get(self, key: str) -> Optional[str]:
        conn = self._connect()
        try:
            row = conn.execute("select value from kv_store where key = ?", (key,)).fetchone()
            return None if row is None else row["value"]
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = self._connect()
        try:
            conn.execute(
                """
                insert into kv_store (key, value) values (?, ?)
                on conflict(key) do update set value = excluded.value
                """,
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def merge_snapshot(raw: Optional[str], defaults: DashboardInputs) -> DashboardInputs:
    """
    Overlay a stored JSON snapshot on ``defaults``.

    Fields that are missing or not numbers keep their default; a snapshot that
    is not a JSON object is ignored entirely.
    """
    if raw is None:
        return defaults.model_copy()

    try:
        parsed = json.loads(raw)
    except ValueError:
        logger.warning("Ignoring malformed input snapshot")
        return defaults.model_copy()

    if not isinstance(parsed, dict):
        logger.warning(f"Ignoring input snapshot of type {type(parsed).__name__}")
        return defaults.model_copy()

    values = defaults.model_dump()
    for field in DashboardInputs.model_fields:
        value = parsed.get(field)
        if _is_number(value):
            values[field] = value
        elif field in parsed:
            logger.debug(f"Snapshot field '{field}' has unexpected value {value!r}; using default")
    return DashboardInputs.model_validate(values)


class InputSnapshotStore:
    """
    Load-at-startup, save-on-change holder for the dashboard inputs.

    Nothing is written until ``load()`` has run, so the defaults never
    overwrite a stored snapshot before it was read.
    """

    def __init__(
        self,
        store: KeyValueStore,
        defaults: Optional[DashboardInputs] = None,
        key: str = STORAGE_KEY,
    ) -> None:
        self.store = store
        self.key = key
        self.defaults = defaults or DashboardInputs()
        self.inputs = self.defaults.model_copy()
        self.loaded = False

    def load(self) -> DashboardInputs:
        try:
            raw = self.store.get(self.key)
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"Could not read input snapshot '{self.key}': {e}")
            raw = None
        finally:
            self.loaded = True

        self.inputs = merge_snapshot(raw, self.defaults)
        return self.inputs

    def update(self, **changes: Any) -> DashboardInputs:
        values = self.inputs.model_dump()
        values.update(changes)
        self.inputs = DashboardInputs.model_validate(values)
        self.save()
        return self.inputs

    def save(self) -> None:
        if not self.loaded:
            return
        try:
            self.store.set(self.key, self.inputs.model_dump_json())
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"Could not write input snapshot '{self.key}': {e}")
