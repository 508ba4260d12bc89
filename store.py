"""
store.py
MemberStore: the in-memory member collection, mirrored to a key-value slot on every change.
"""

from __future__ import annotations

import dataclasses
import enum
import json
from typing import Protocol

import config
from db import StorageError
from logging_config import get_logger
from models import Member

logger = get_logger("store")

IMMUTABLE_FIELDS = frozenset({"id", "join_date"})
_MEMBER_FIELDS = frozenset(f.name for f in dataclasses.fields(Member))


class Storage(Protocol):
    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def close(self) -> None: ...


class StoreState(str, enum.Enum):
    loading = "loading"
    ready = "ready"
    closed = "closed"


class StoreNotReadyError(RuntimeError):
    pass


class MemberStore:
    """
    Owns the canonical list of members (insertion order = join order).

    The store does not validate: callers run validation.build_member first.
    Storage failures are logged and never raised; the in-memory list stays
    the source of truth until the next successful write.
    """

    def __init__(self, storage: Storage, key: str = config.STORAGE_KEY):
        self.storage = storage
        self.key = key
        self.state = StoreState.loading
        self._members: list[Member] = []

    def __enter__(self) -> MemberStore:
        self.load()
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # --- lifecycle ---

    def load(self) -> None:
        """
        Read the persisted snapshot. Missing or unreadable data leaves an
        empty collection; the store is ready either way.
        """
        self._members = self._read_snapshot()
        self.state = StoreState.ready
        logger.info("Loaded %d member(s)", len(self._members))

    def _read_snapshot(self) -> list[Member]:
        try:
            raw = self.storage.get_item(self.key)
        except StorageError:
            logger.exception("Error loading members: storage read failed")
            return []

        if raw is None:
            logger.info("No saved members under key %r", self.key)
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"expected a list, got {type(data).__name__}")
            return [Member.from_dict(item) for item in data]
        except (ValueError, TypeError, KeyError, AttributeError):
            logger.exception("Error loading members: snapshot under %r is malformed", self.key)
            return []

    def close(self) -> None:
        if self.state is StoreState.closed:
            return
        self.storage.close()
        self.state = StoreState.closed

    def _require_ready(self) -> None:
        if self.state is not StoreState.ready:
            raise StoreNotReadyError(f"Member store is {self.state.value}")

    # --- queries ---

    @property
    def members(self) -> tuple[Member, ...]:
        return tuple(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def get(self, member_id: str) -> Member | None:
        for member in self._members:
            if member.id == member_id:
                return member
        return None

    def list_emails(self) -> set[str]:
        return {m.email.lower() for m in self._members}

    # --- mutations ---

    def add(self, member: Member) -> None:
        self._require_ready()
        self._members = [*self._members, member]
        self.persist()

    def update(self, member_id: str, **changes) -> bool:
        """
        Overwrite the given fields of one member.
        Returns False (and changes nothing) when the id is unknown.
        """
        self._require_ready()
        locked = IMMUTABLE_FIELDS & changes.keys()
        if locked:
            raise ValueError(f"Cannot update immutable field(s): {', '.join(sorted(locked))}")
        unknown = changes.keys() - _MEMBER_FIELDS
        if unknown:
            raise ValueError(f"Unknown member field(s): {', '.join(sorted(unknown))}")

        for i, member in enumerate(self._members):
            if member.id == member_id:
                updated = list(self._members)
                updated[i] = dataclasses.replace(member, **changes)
                self._members = updated
                self.persist()
                return True

        logger.debug("Update skipped: no member with id %s", member_id)
        return False

    def delete(self, member_id: str) -> bool:
        self._require_ready()
        remaining = [m for m in self._members if m.id != member_id]
        if len(remaining) == len(self._members):
            logger.debug("Delete skipped: no member with id %s", member_id)
            return False
        self._members = remaining
        self.persist()
        return True

    def persist(self) -> bool:
        """
        Write the whole collection under the store key.
        Returns False if the write failed (nothing is retried).
        """
        payload = json.dumps([m.to_dict() for m in self._members])
        try:
            self.storage.set_item(self.key, payload)
        except StorageError:
            logger.exception("Error saving members: snapshot under %r is now stale", self.key)
            return False
        return True
