"""
validation.py
Field validation for member forms, phone formatting, and the raw-input -> Member conversion.

Every validator returns an error message, or None when the value is fine.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Iterable

from models import (
    DEFAULT_STATUS,
    MEMBERSHIP_TYPES,
    EmergencyContact,
    Member,
    MemberCandidate,
    new_member_id,
    utc_now,
)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
PHONE_MIN_DIGITS = 10
PHONE_MAX_DIGITS = 15
MIN_AGE = 16
MAX_AGE = 80

_NAME_RE = re.compile(r"^[a-zA-Z\s'-]+$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_NON_DIGIT_RE = re.compile(r"[^0-9]")
_INT_RE = re.compile(r"^[+-]?[0-9]+$")


class MemberValidationError(ValueError):
    """Raised by build_member; `errors` maps field name -> message."""

    def __init__(self, errors: dict[str, str]):
        super().__init__(f"Invalid member: {', '.join(sorted(errors))}")
        self.errors = dict(errors)


def _digits(value: str) -> str:
    return _NON_DIGIT_RE.sub("", value)


def validate_name(name: str, label: str) -> str | None:
    name = name.strip()
    if not name:
        return f"{label} is required"
    if len(name) < NAME_MIN_LENGTH:
        return f"{label} must be at least {NAME_MIN_LENGTH} characters long"
    if len(name) > NAME_MAX_LENGTH:
        return f"{label} must be less than {NAME_MAX_LENGTH} characters"
    if not _NAME_RE.match(name):
        return f"{label} can only contain letters, spaces, hyphens, and apostrophes"
    return None


def validate_email(email: str, existing_emails: Iterable[str] = ()) -> str | None:
    email = email.strip()
    if not email:
        return "Email is required"
    if not _EMAIL_RE.match(email):
        return "Please enter a valid email address"
    taken = {e.strip().lower() for e in existing_emails}
    if email.lower() in taken:
        return "This email is already registered"
    return None


def validate_phone(phone: str) -> str | None:
    if not phone.strip():
        return "Phone number is required"
    digits = _digits(phone)
    if len(digits) < PHONE_MIN_DIGITS:
        return f"Phone number must be at least {PHONE_MIN_DIGITS} digits"
    if len(digits) > PHONE_MAX_DIGITS:
        return f"Phone number must be less than {PHONE_MAX_DIGITS} digits"
    return None


def validate_age(age: str) -> str | None:
    age = age.strip()
    if not age:
        return "Age is required"
    if not _INT_RE.match(age):
        return "Age must be a valid number"
    value = int(age)
    if value < MIN_AGE:
        return f"Member must be at least {MIN_AGE} years old"
    if value > MAX_AGE:
        return f"Please contact us directly for members over {MAX_AGE}"
    return None


def validate_membership_type(membership_type: str) -> str | None:
    if not membership_type:
        return "Membership type is required"
    if membership_type not in MEMBERSHIP_TYPES:
        return "Please select a valid membership type"
    return None


def validate_emergency_contact(contact: EmergencyContact) -> dict[str, str]:
    errors: dict[str, str] = {}

    name_error = validate_name(contact.name, "Emergency contact name")
    if name_error:
        errors["emergency_contact_name"] = name_error

    if not contact.relationship.strip():
        errors["emergency_contact_relationship"] = "Relationship is required"

    phone_error = validate_phone(contact.phone)
    if phone_error:
        errors["emergency_contact_phone"] = phone_error

    return errors


def validate_member_form(candidate: MemberCandidate, existing_emails: Iterable[str] = ()) -> dict[str, str]:
    """
    Check every field of a candidate and collect all failures.
    An empty dict means the candidate can be turned into a Member.
    """
    checks = {
        "first_name": validate_name(candidate.first_name, "First name"),
        "last_name": validate_name(candidate.last_name, "Last name"),
        "email": validate_email(candidate.email, existing_emails),
        "phone": validate_phone(candidate.phone),
        "age": validate_age(candidate.age),
        "membership_type": validate_membership_type(candidate.membership_type),
    }
    errors = {field: message for field, message in checks.items() if message}

    if candidate.emergency_contact is not None:
        errors.update(validate_emergency_contact(candidate.emergency_contact))
    else:
        errors["emergency_contact_name"] = "Emergency contact information is required"
        errors["emergency_contact_relationship"] = "Emergency contact relationship is required"
        errors["emergency_contact_phone"] = "Emergency contact phone is required"

    return errors


def format_phone_number(phone: str) -> str:
    """
    Display form for 10-digit numbers: '(555) 123-4567'.
    Anything else is returned unchanged.
    """
    digits = _digits(phone)
    if len(digits) != 10:
        return phone
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"


def build_member(
    candidate: MemberCandidate,
    existing_emails: Iterable[str] = (),
    now: datetime | None = None,
) -> Member:
    """
    Validate a candidate and build the Member to store.

    Raises:
        MemberValidationError: If any field fails; `.errors` has every failure.
    """
    errors = validate_member_form(candidate, existing_emails)
    if errors:
        raise MemberValidationError(errors)

    contact = candidate.emergency_contact
    return Member(
        id=new_member_id(),
        first_name=candidate.first_name.strip(),
        last_name=candidate.last_name.strip(),
        email=candidate.email.strip(),
        phone=format_phone_number(candidate.phone.strip()),
        age=int(candidate.age.strip()),
        membership_type=candidate.membership_type,
        join_date=now or utc_now(),
        emergency_contact=EmergencyContact(
            name=contact.name.strip(),
            relationship=contact.relationship.strip(),
            phone=format_phone_number(contact.phone.strip()),
        ),
        status=DEFAULT_STATUS,
    )
