"""
Assignment Store.

This module acts as the 'Memory' of the system: the authoritative list of
committed assignments. The engine only reads snapshots and appends.

The collection is append-only, so record counts double as version numbers.
Each provider's records carry their own version (their count), so writes
for one provider never invalidate a commit for another;
`append_assignment(..., expected_version=v)` is a compare-and-swap on the
version of the provider the new assignment reserves.
"""

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Union

from pydantic import TypeAdapter, ValidationError

from models import Assignment
from .errors import CorruptStoreError, StaleStoreVersionError, StoreUnavailableError

logger = logging.getLogger(__name__)

_ASSIGNMENT_LIST = TypeAdapter(List[Assignment])


@dataclass(frozen=True)
class StoreSnapshot:
    """
    Assignments as read at a given version: the provider's record count for a
    provider snapshot, the whole collection size otherwise.
    """
    assignments: List[Assignment] = field(default_factory=list)
    version: int = 0


class AssignmentStore(Protocol):
    """Read/write contract the booking engine depends on."""

    def list_assignments(self, provider_id: Optional[str] = None) -> List[Assignment]:
        ...

    def snapshot(self, provider_id: Optional[str] = None) -> StoreSnapshot:
        ...

    def append_assignment(self, assignment: Assignment, expected_version: Optional[int] = None) -> None:
        ...


def _select(assignments: Iterable[Assignment], provider_id: Optional[str]) -> List[Assignment]:
    if provider_id is None:
        return list(assignments)
    return [a for a in assignments if a.reserved_provider_id == provider_id]


def _provider_version(assignments: Iterable[Assignment], provider_id: Optional[str]) -> int:
    return sum(1 for a in assignments if a.reserved_provider_id == provider_id)


class InMemoryAssignmentStore:
    """
    Thread-safe, process-local store.
    Useful for tests and for embedding the engine without persistence.
    """

    def __init__(self, assignments: Optional[Iterable[Assignment]] = None):
        self._assignments: List[Assignment] = list(assignments or [])
        self._lock = threading.Lock()

    @property
    def version(self) -> int:
        with self._lock:
            return len(self._assignments)

    def list_assignments(self, provider_id: Optional[str] = None) -> List[Assignment]:
        return self.snapshot(provider_id).assignments

    def snapshot(self, provider_id: Optional[str] = None) -> StoreSnapshot:
        with self._lock:
            selected = _select(self._assignments, provider_id)
        return StoreSnapshot(assignments=selected, version=len(selected))

    def append_assignment(self, assignment: Assignment, expected_version: Optional[int] = None) -> None:
        with self._lock:
            current = _provider_version(self._assignments, assignment.reserved_provider_id)
            if expected_version is not None and expected_version != current:
                raise StaleStoreVersionError(expected_version, current)
            self._assignments.append(assignment)


class JsonFileAssignmentStore:
    """
    Store backed by a JSON array on disk.

    The file is re-read on every snapshot so each read sees the latest
    committed state, and rewritten atomically on append. Writers are
    serialized within the process; cross-process locking is not provided.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> List[Assignment]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.error(f"Cannot read assignment store {self.path}: {e}")
            raise StoreUnavailableError(f"Cannot read {self.path}") from e

        if not raw.strip():
            return []
        try:
            return _ASSIGNMENT_LIST.validate_python(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Assignment store {self.path} is malformed: {e}")
            raise CorruptStoreError(f"Malformed assignment data in {self.path}") from e

    def _write(self, assignments: List[Assignment]) -> None:
        payload = json.dumps(
            [a.model_dump(mode='json') for a in assignments],
            indent=2
        )
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.path.parent,
                prefix=f".{self.path.name}.", delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error(f"Cannot write assignment store {self.path}: {e}")
            raise StoreUnavailableError(f"Cannot write {self.path}") from e

    @property
    def version(self) -> int:
        return self.snapshot().version

    def list_assignments(self, provider_id: Optional[str] = None) -> List[Assignment]:
        return self.snapshot(provider_id).assignments

    def snapshot(self, provider_id: Optional[str] = None) -> StoreSnapshot:
        with self._lock:
            assignments = self._load()
        selected = _select(assignments, provider_id)
        return StoreSnapshot(assignments=selected, version=len(selected))

    def append_assignment(self, assignment: Assignment, expected_version: Optional[int] = None) -> None:
        with self._lock:
            assignments = self._load()
            current = _provider_version(assignments, assignment.reserved_provider_id)
            if expected_version is not None and expected_version != current:
                raise StaleStoreVersionError(expected_version, current)
            assignments.append(assignment)
            self._write(assignments)
        logger.debug(f"Persisted assignment {assignment.id} to {self.path}")
