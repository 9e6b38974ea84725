"""Approval persistence.

An approval store maps review ids to moderator decisions. Reads return a
point-in-time snapshot; ``upsert`` is an atomic read-modify-write of a single
key (last writer wins). Upserts merge: ``approved`` and ``updatedAt`` are
replaced, ``listingId`` only when one is supplied, other stored fields are
kept.
"""

import json
import logging
import os
import sqlite3
import tempfile
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from diskcache import Cache

from ..core.config import Settings
from ..core.constants import FileConstants
from ..core.errors import ApprovalStoreError
from ..core.models import ApprovalRecord

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond // 1000:03d}Z"


def merge_record(existing: Optional[Dict[str, Any]], approved: bool,
                 listing_id: Optional[str], updated_at: str) -> Dict[str, Any]:
    record = dict(existing or {})
    record["approved"] = approved
    if listing_id is not None:
        record["listingId"] = listing_id
    else:
        record.setdefault("listingId", None)
    record["updatedAt"] = updated_at
    return record


class ApprovalStore(ABC):
    """Read-all / upsert-one contract shared by every backend."""

    def __init__(self, clock: Optional[Callable[[], str]] = None):
        self.clock = clock or utc_now_iso

    @abstractmethod
    def read_all(self) -> Dict[str, ApprovalRecord]:
        """Snapshot of every approval record; an absent store reads as empty."""

    @abstractmethod
    def upsert(self, review_id: str, approved: bool, listing_id: Optional[str] = None) -> ApprovalRecord:
        """Merge a decision into the record for ``review_id`` and return it."""

    def get(self, review_id: str) -> Optional[ApprovalRecord]:
        return self.read_all().get(str(review_id))


class InMemoryApprovalStore(ApprovalStore):
    """Process-local store, mostly for tests."""

    def __init__(self, initial: Optional[Dict[str, Dict[str, Any]]] = None, clock=None):
        super().__init__(clock)
        self._records: Dict[str, Dict[str, Any]] = {k: dict(v) for k, v in (initial or {}).items()}
        self._lock = threading.Lock()

    def read_all(self) -> Dict[str, ApprovalRecord]:
        with self._lock:
            return {k: ApprovalRecord.from_dict(v) for k, v in self._records.items()}

    def upsert(self, review_id: str, approved: bool, listing_id: Optional[str] = None) -> ApprovalRecord:
        key = str(review_id)
        with self._lock:
            record = merge_record(self._records.get(key), approved, listing_id, self.clock())
            self._records[key] = record
        return ApprovalRecord.from_dict(record)


# One lock per file path, shared by every store instance in the process
_FILE_LOCKS: Dict[str, threading.Lock] = {}
_FILE_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _FILE_LOCKS_GUARD:
        return _FILE_LOCKS.setdefault(key, threading.Lock())


class JsonFileApprovalStore(ApprovalStore):
    """Approvals kept in a single JSON object file (``approvals.json``)."""

    def __init__(self, path, clock=None):
        super().__init__(clock)
        self.path = Path(path)
        self._lock = _lock_for(self.path)
        logger.info(f"Initialized JsonFileApprovalStore with path={self.path}")

    def _read_raw(self) -> Dict[str, Dict[str, Any]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                text = f.read()
            data = json.loads(text) if text.strip() else {}
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read approvals from {self.path}: {e}")
            raise ApprovalStoreError(f"Failed to read approvals: {e}") from e
        if not isinstance(data, dict):
            raise ApprovalStoreError(f"Approvals file {self.path} does not contain an object")
        return data

    def _write_raw(self, data: Dict[str, Dict[str, Any]]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=FileConstants.JSON_INDENT)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Failed to write approvals to {self.path}: {e}")
            raise ApprovalStoreError(f"Failed to write approvals: {e}") from e

    def read_all(self) -> Dict[str, ApprovalRecord]:
        with self._lock:
            data = self._read_raw()
        return {k: ApprovalRecord.from_dict(v) for k, v in data.items() if isinstance(v, dict)}

    def upsert(self, review_id: str, approved: bool, listing_id: Optional[str] = None) -> ApprovalRecord:
        key = str(review_id)
        with self._lock:
            data = self._read_raw()
            existing = data.get(key) if isinstance(data.get(key), dict) else None
            data[key] = merge_record(existing, approved, listing_id, self.clock())
            self._write_raw(data)
        logger.info(f"Stored approval for review {key}: approved={approved}")
        return ApprovalRecord.from_dict(data[key])


class DiskCacheApprovalStore(ApprovalStore):
    """Approvals in a diskcache (SQLite-backed) key-value store."""

    def __init__(self, directory, clock=None):
        super().__init__(clock)
        try:
            self.cache = Cache(str(directory))
        except (OSError, sqlite3.Error) as e:
            raise ApprovalStoreError(f"Failed to open approval cache at {directory}: {e}") from e
        logger.info(f"Initialized DiskCacheApprovalStore with directory={directory}")

    def read_all(self) -> Dict[str, ApprovalRecord]:
        try:
            return {str(k): ApprovalRecord.from_dict(self.cache[k]) for k in self.cache.iterkeys()}
        except (OSError, sqlite3.Error) as e:
            raise ApprovalStoreError(f"Failed to read approvals: {e}") from e

    def upsert(self, review_id: str, approved: bool, listing_id: Optional[str] = None) -> ApprovalRecord:
        key = str(review_id)
        try:
            with self.cache.transact():
                record = merge_record(self.cache.get(key), approved, listing_id, self.clock())
                self.cache.set(key, record)
        except (OSError, sqlite3.Error) as e:
            raise ApprovalStoreError(f"Failed to write approval for {key}: {e}") from e
        logger.info(f"Stored approval for review {key}: approved={approved}")
        return ApprovalRecord.from_dict(record)

    def close(self) -> None:
        self.cache.close()


def create_approval_store(config: Settings) -> ApprovalStore:
    """Build the backend named by ``approvals_backend``."""
    backend = (config.approvals_backend or "json").lower()
    if backend == "diskcache":
        return DiskCacheApprovalStore(Path(config.data_dir) / "approvals_cache")
    if backend != "json":
        logger.warning(f"Unknown approvals backend {backend!r}. Using json.")
    return JsonFileApprovalStore(config.approvals_path)
