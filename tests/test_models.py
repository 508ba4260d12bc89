"""Tests for member serialization and the membership catalog."""

from datetime import datetime, timedelta, timezone

import pytest

from models import MEMBERSHIP_TYPES, Member, get_membership_plan, parse_timestamp


def test_catalog_is_fixed():
    assert list(MEMBERSHIP_TYPES) == ["basic", "premium", "vip", "student"]
    assert MEMBERSHIP_TYPES["vip"].label == "VIP Membership"
    assert MEMBERSHIP_TYPES["student"].price == "$19/month"
    with pytest.raises(TypeError):
        MEMBERSHIP_TYPES["gold"] = MEMBERSHIP_TYPES["basic"]


def test_get_membership_plan():
    assert get_membership_plan("premium").description == "Full gym access plus group classes and locker"
    assert get_membership_plan("gold") is None


def test_to_dict_uses_persisted_shape(make_member):
    member = make_member(first_name="Jane", last_name="Doe", email="jane@x.com")
    data = member.to_dict()

    assert data["firstName"] == "Jane"
    assert data["lastName"] == "Doe"
    assert data["membershipType"] == "basic"
    assert data["joinDate"] == "2024-01-01T09:30:00+00:00"
    assert data["emergencyContact"] == {"name": "Pat Member", "relationship": "Sibling", "phone": "(555) 111-1111"}
    assert data["status"] == "active"


def test_from_dict_restores_member(make_member):
    member = make_member()
    assert Member.from_dict(member.to_dict()) == member


def test_from_dict_reads_javascript_timestamps(make_member):
    data = make_member().to_dict()
    data["joinDate"] = "2024-03-05T10:15:30.123Z"
    member = Member.from_dict(data)
    assert member.join_date == datetime(2024, 3, 5, 10, 15, 30, 123000, tzinfo=timezone.utc)


def test_from_dict_defaults_missing_status(make_member):
    data = make_member().to_dict()
    del data["status"]
    assert Member.from_dict(data).status == "active"


@pytest.mark.parametrize("field", ["id", "email", "joinDate", "emergencyContact"])
def test_from_dict_missing_field_raises(make_member, field):
    data = make_member().to_dict()
    del data[field]
    with pytest.raises(KeyError):
        Member.from_dict(data)


def test_from_dict_bad_values_raise(make_member):
    data = make_member().to_dict()
    data["age"] = "thirty"
    with pytest.raises(ValueError):
        Member.from_dict(data)

    data = make_member().to_dict()
    data["joinDate"] = "not a date"
    with pytest.raises(ValueError):
        Member.from_dict(data)


def test_parse_timestamp_keeps_offset():
    parsed = parse_timestamp("2024-01-01T12:00:00+02:00")
    assert parsed.utcoffset() == timedelta(hours=2)


def test_parse_timestamp_rejects_non_strings():
    with pytest.raises(TypeError):
        parse_timestamp(1700000000)


def test_full_name(make_member):
    assert make_member(first_name="Mary-Jane", last_name="O'Brien").full_name == "Mary-Jane O'Brien"


@pytest.mark.parametrize("raw, expected", [
    ("2024-01-15", datetime(2024, 1, 15, tzinfo=timezone.utc)),
    ("2024-01-15T08:00:00", datetime(2024, 1, 15, 8, tzinfo=timezone.utc)),
])
def test_parse_timestamp_without_offset_is_utc(raw, expected):
    parsed = parse_timestamp(raw)
    assert parsed == expected
    assert parsed.tzinfo is not None


def test_offset_less_member_compares_with_new_members(make_member):
    data = make_member().to_dict()
    data["joinDate"] = "2024-01-15"
    legacy = Member.from_dict(data)
    assert legacy.join_date < datetime.now(timezone.utc)
