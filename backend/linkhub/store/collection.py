"""
Collection store: one named collection of records backed by one JSON file.

Every operation re-reads the file, works on a fresh in-memory list and, for
mutations, rewrites the whole file. All operations on a collection are
serialized through the store's asyncio.Lock, so read-modify-write cycles on
the same file never interleave (no lost updates, no duplicate ids).

Only the store writes its backing file.
"""

import asyncio
import os
import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from linkhub.core.logging_config import get_logger, log_with_context
from linkhub.models.base import StoredRecord
from linkhub.store import codec
from linkhub.store.errors import DecodeError, NotFound, ValidationError

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=StoredRecord)

# Validates a candidate before an id is assigned; raises ValidationError.
CandidateValidator = Callable[[Mapping[str, Any]], None]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def required_fields(*names: str) -> CandidateValidator:
    """
    Build a validator rejecting candidates with missing or blank fields.

    Args:
        *names: Field names (wire names) that must be present and non-empty

    Returns:
        Validator raising ValidationError listing every missing field
    """

    def validate(candidate: Mapping[str, Any]) -> None:
        missing = [name for name in names if _is_blank(candidate.get(name))]
        if missing:
            raise ValidationError(missing)

    return validate


class CollectionStore(Generic[RecordT]):
    """
    Lock-guarded store for one collection of records.

    Attributes:
        name: Collection name used in logs and errors (e.g. "links")
        path: Backing JSON file
        model: Pydantic record class used to decode and default-fill records
        label: Record kind used in error messages (e.g. "Link")
    """

    def __init__(
        self,
        name: str,
        path: Path,
        model: Type[RecordT],
        validator: Optional[CandidateValidator] = None,
        label: Optional[str] = None,
    ):
        self.name = name
        self.label = label or name
        self.path = Path(path)
        self.model = model
        self._validator = validator
        self._lock = asyncio.Lock()
        self._quarantine_pending = False

    # Public operations

    async def list(self) -> List[RecordT]:
        """Return the full collection in insertion order."""
        async with self._lock:
            return await self._load()

    async def get_by_id(self, record_id: int) -> Optional[RecordT]:
        """Return the record with ``record_id``, or None."""
        async with self._lock:
            records = await self._load()
            return self._find(records, record_id)

    async def insert(self, candidate: Mapping[str, Any]) -> RecordT:
        """
        Validate, assign an id, default-fill, append and persist a record.

        Args:
            candidate: Field values keyed by wire name; ``id`` is ignored.
                None and empty-string values fall back to model defaults.

        Returns:
            The stored record including its assigned id

        Raises:
            ValidationError: Required fields missing; nothing is written
        """
        if self._validator is not None:
            self._validator(candidate)

        fields: Dict[str, Any] = {
            key: value
            for key, value in candidate.items()
            if key != "id" and value is not None and value != ""
        }

        async with self._lock:
            records = await self._load()
            next_id = max((record.id for record in records), default=0) + 1

            try:
                record = self.model.model_validate({**fields, "id": next_id})
            except PydanticValidationError as exc:
                bad_fields = [str(err["loc"][0]) for err in exc.errors() if err["loc"]]
                raise ValidationError(bad_fields or ["<record>"], str(exc)) from exc

            records.append(record)
            await self._persist(records)

        log_with_context(logger, "info", "Record inserted", collection=self.name, record_id=record.id)
        return record

    async def delete_by_id(self, record_id: int) -> bool:
        """
        Remove the first record with ``record_id`` and persist.

        Returns:
            True when a record was removed

        Raises:
            NotFound: No such record; the file is left untouched
        """
        async with self._lock:
            records = await self._load()
            for index, record in enumerate(records):
                if record.id == record_id:
                    del records[index]
                    break
            else:
                raise NotFound(self.name, record_id, f"{self.label} not found")

            await self._persist(records)

        log_with_context(logger, "info", "Record deleted", collection=self.name, record_id=record_id)
        return True

    async def mutate(self, record_id: int, fn: Callable[[RecordT], RecordT]) -> RecordT:
        """
        Replace the record with ``fn(record)`` and persist.

        ``fn`` must be pure and must not change the id.

        Raises:
            NotFound: No such record; the file is left untouched
        """
        async with self._lock:
            records = await self._load()
            for index, record in enumerate(records):
                if record.id == record_id:
                    break
            else:
                raise NotFound(self.name, record_id, f"{self.label} not found")

            updated = fn(record)
            if updated.id != record_id:
                raise ValueError(
                    f"mutation of {self.name} record {record_id} changed its id to {updated.id}"
                )
            records[index] = updated
            await self._persist(records)

        return updated

    async def probe(self) -> Tuple[bool, int]:
        """
        Report whether the backing file decodes, and how many records it holds.

        Unlike the other operations, an unreadable file is reported rather
        than treated as empty.
        """
        async with self._lock:
            data = await asyncio.to_thread(self._read_bytes)
        try:
            raw = codec.decode(data)
            records = [self.model.model_validate(item) for item in raw]
        except (DecodeError, PydanticValidationError):
            return False, 0
        return True, len(records)

    # Persistence helpers

    @staticmethod
    def _find(records: List[RecordT], record_id: int) -> Optional[RecordT]:
        for record in records:
            if record.id == record_id:
                return record
        return None

    async def _load(self) -> List[RecordT]:
        data = await asyncio.to_thread(self._read_bytes)
        try:
            raw = codec.decode(data)
            records = [self.model.model_validate(item) for item in raw]
        except (DecodeError, PydanticValidationError) as exc:
            logger.error(
                "Backing file unreadable, treating collection as empty",
                extra={
                    "collection": self.name,
                    "path": str(self.path),
                    "error": str(exc),
                },
            )
            self._quarantine_pending = True
            return []

        self._quarantine_pending = False
        return records

    async def _persist(self, records: List[RecordT]) -> None:
        payload = codec.encode([record.to_stored() for record in records])
        if self._quarantine_pending:
            await asyncio.to_thread(self._quarantine)
            self._quarantine_pending = False
        await asyncio.to_thread(self._write_bytes, payload)

    def _read_bytes(self) -> Optional[bytes]:
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None

    def _write_bytes(self, payload: bytes) -> None:
        """Write to a temp file in the same directory, then os.replace into place."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=str(self.path.parent),
            prefix=f".{self.path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

    def _quarantine(self) -> None:
        """Keep a copy of an unreadable file before it is overwritten."""
        if not self.path.exists():
            return
        ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
        backup = self.path.with_name(f"{self.path.name}.corrupt-{ts}")
        shutil.copy2(self.path, backup)
        logger.warning(
            "Unreadable collection file preserved before rewrite",
            extra={"collection": self.name, "path": str(backup)},
        )
