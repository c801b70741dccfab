"""JSON file backed storage for saved projects."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, List

from pydantic import ValidationError

from .model import SnippetBundle

logger = logging.getLogger("appmaker")


class ProjectStoreError(OSError):
    """The project file could not be read or written."""


class ProjectNotFoundError(KeyError):
    """No stored project carries the requested id."""

    def __init__(self, project_id: str) -> None:
        super().__init__(project_id)
        self.project_id = project_id

    def __str__(self) -> str:
        return f"Unknown project id: {self.project_id}"


class ProjectStore:
    """Ordered collection of bundles mirrored to a single JSON array file.

    Newest saves sit at the front. Names are unique: saving a bundle whose
    name is already present drops the old record first. Every operation reads
    the file, and mutations rewrite it whole, under one lock per store.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def list_all(self) -> List[SnippetBundle]:
        with self._lock:
            return self._read()

    def get_by_id(self, project_id: str) -> SnippetBundle | None:
        with self._lock:
            for bundle in self._read():
                if bundle.id == project_id:
                    return bundle
        return None

    def save(self, bundle: SnippetBundle) -> SnippetBundle:
        with self._lock:
            records = self._load_records()
            remaining = [
                record for record in records if _record_field(record, "name") != bundle.name
            ]
            if len(remaining) != len(records):
                logger.info("Replacing existing project named %r", bundle.name)
            remaining.insert(0, bundle.to_record())
            self._write(remaining)
        logger.info("Saved project %s (%r)", bundle.id, bundle.name)
        return bundle

    def delete_by_id(self, project_id: str) -> SnippetBundle | None:
        """Remove the record with ``project_id`` and return it.

        Returns ``None`` when the removed record was not a valid bundle.
        """
        with self._lock:
            records = self._load_records()
            for index, record in enumerate(records):
                if _record_field(record, "id") == project_id:
                    break
            else:
                raise ProjectNotFoundError(project_id)
            removed = records.pop(index)
            self._write(records)
        logger.info("Deleted project %s", project_id)
        return _parse_record(removed)

    def _read(self) -> List[SnippetBundle]:
        bundles: List[SnippetBundle] = []
        for position, item in enumerate(self._load_records()):
            bundle = _parse_record(item)
            if bundle is None:
                logger.warning("Skipping malformed project record #%d in %s", position, self.path)
                continue
            bundles.append(bundle)
        return bundles

    def _load_records(self) -> List[Any]:
        # entries stay as decoded; rewrites must keep records that fail validation
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise ProjectStoreError(f"Failed to read {self.path}: {exc}") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ProjectStoreError(f"Corrupt project file {self.path}: {exc}") from exc
        if not isinstance(data, list):
            raise ProjectStoreError(f"Project file {self.path} does not hold a JSON array")
        return data

    def _write(self, records: List[Any]) -> None:
        payload = json.dumps(records, indent=2, ensure_ascii=False)
        directory = self.path.parent
        tmp_name: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise ProjectStoreError(f"Failed to write {self.path}: {exc}") from exc


def _record_field(record: Any, key: str) -> Any:
    if isinstance(record, dict):
        return record.get(key)
    return None


def _parse_record(item: Any) -> SnippetBundle | None:
    if not isinstance(item, dict):
        return None
    try:
        return SnippetBundle.model_validate(item)
    except ValidationError:
        return None


__all__ = ["ProjectNotFoundError", "ProjectStore", "ProjectStoreError"]
