"""
models.py
Domain types (members, emergency contacts, raw form input) and the membership catalog.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType

MEMBER_STATUSES = ("active", "inactive", "suspended")
DEFAULT_STATUS = "active"


@dataclass(frozen=True)
class MembershipPlan:
    value: str
    label: str
    description: str
    price: str


# Static reference data; the UI only reads it
MEMBERSHIP_TYPES = MappingProxyType({
    "basic": MembershipPlan(
        "basic", "Basic Membership",
        "Access to gym equipment and basic facilities", "$29/month",
    ),
    "premium": MembershipPlan(
        "premium", "Premium Membership",
        "Full gym access plus group classes and locker", "$49/month",
    ),
    "vip": MembershipPlan(
        "vip", "VIP Membership",
        "All premium features plus personal training sessions", "$79/month",
    ),
    "student": MembershipPlan(
        "student", "Student Membership",
        "Discounted membership for students with valid ID", "$19/month",
    ),
})


def get_membership_plan(value: str) -> MembershipPlan | None:
    return MEMBERSHIP_TYPES.get(value)


def new_member_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp. A trailing 'Z' (as written by JavaScript's
    toISOString) and a missing offset are both read as UTC.
    """
    if not isinstance(value, str):
        raise TypeError(f"timestamp must be a string, got {type(value).__name__}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class EmergencyContact:
    name: str
    relationship: str
    phone: str

    def to_dict(self) -> dict:
        return {"name": self.name, "relationship": self.relationship, "phone": self.phone}

    @classmethod
    def from_dict(cls, data: dict) -> EmergencyContact:
        return cls(
            name=str(data["name"]),
            relationship=str(data["relationship"]),
            phone=str(data["phone"]),
        )


@dataclass(frozen=True)
class Member:
    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    age: int
    membership_type: str
    join_date: datetime
    emergency_contact: EmergencyContact
    status: str = DEFAULT_STATUS  # 'active', 'inactive' or 'suspended'

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> dict:
        """
        Persisted shape: camelCase keys, joinDate as an ISO-8601 string.
        """
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "age": self.age,
            "membershipType": self.membership_type,
            "joinDate": self.join_date.isoformat(),
            "emergencyContact": self.emergency_contact.to_dict(),
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Member:
        """
        Rebuild a member from its persisted shape.
        Raises KeyError/TypeError/ValueError on malformed input.
        """
        return cls(
            id=str(data["id"]),
            first_name=str(data["firstName"]),
            last_name=str(data["lastName"]),
            email=str(data["email"]),
            phone=str(data["phone"]),
            age=int(data["age"]),
            membership_type=str(data["membershipType"]),
            join_date=parse_timestamp(data["joinDate"]),
            emergency_contact=EmergencyContact.from_dict(data["emergencyContact"]),
            status=str(data.get("status", DEFAULT_STATUS)),
        )


@dataclass
class MemberCandidate:
    """
    Raw, unvalidated form input. Every field is the string the user typed;
    validation.build_member turns it into a Member.
    """
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    age: str = ""
    membership_type: str = ""
    emergency_contact: EmergencyContact | None = field(default=None)
