"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest

from db import SqliteStorage, StorageError
from models import EmergencyContact, Member, MemberCandidate
from store import MemberStore


class MemoryStorage:
    """Dict-backed stand-in for SqliteStorage."""

    def __init__(self, initial=None):
        self.items = dict(initial or {})
        self.closed = False

    def get_item(self, key):
        return self.items.get(key)

    def set_item(self, key, value):
        self.items[key] = value

    def remove_item(self, key):
        self.items.pop(key, None)

    def close(self):
        self.closed = True


class FailingStorage(MemoryStorage):
    """Reads and/or writes raise StorageError, like a full or locked database."""

    def __init__(self, initial=None, fail_reads=False, fail_writes=True):
        super().__init__(initial)
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    def get_item(self, key):
        if self.fail_reads:
            raise StorageError("database is locked")
        return super().get_item(key)

    def set_item(self, key, value):
        if self.fail_writes:
            raise StorageError("database or disk is full")
        super().set_item(key, value)


@pytest.fixture
def valid_candidate():
    """The Jane Doe form input; passes every rule."""
    return MemberCandidate(
        first_name="Jane",
        last_name="Doe",
        email="jane@x.com",
        phone="5551234567",
        age="30",
        membership_type="basic",
        emergency_contact=EmergencyContact(name="John Doe", relationship="Spouse", phone="5559876543"),
    )


@pytest.fixture
def make_member():
    """Factory for stored members with sensible defaults."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        fields = dict(
            id=f"member-{n}",
            first_name="Test",
            last_name="Member",
            email=f"member{n}@example.com",
            phone="(555) 000-0000",
            age=25,
            membership_type="basic",
            join_date=datetime(2024, 1, n, 9, 30, tzinfo=timezone.utc),
            emergency_contact=EmergencyContact("Pat Member", "Sibling", "(555) 111-1111"),
            status="active",
        )
        fields.update(overrides)
        return Member(**fields)

    return _make


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def sqlite_storage(tmp_path):
    """A real SQLite slot in a temporary directory."""
    return SqliteStorage(tmp_path / "gym.db")


@pytest.fixture
def store(memory_storage):
    """A loaded store over empty in-memory storage."""
    member_store = MemberStore(memory_storage, key="gym_members")
    member_store.load()
    return member_store
