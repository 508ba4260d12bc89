"""
utils.py
Member list filtering, dashboard numbers, exports.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import pandas as pd

import config
from models import MEMBER_STATUSES, MEMBERSHIP_TYPES, Member, get_membership_plan

EXPORT_COLUMNS = [
    "id", "first_name", "last_name", "email", "phone", "age",
    "membership_type", "membership_label", "join_date", "status",
    "emergency_contact_name", "emergency_contact_relationship", "emergency_contact_phone",
]


def filter_members(members: Iterable[Member], search: str = "", status: str = "") -> list[Member]:
    """
    Case-insensitive match on first name, last name or email, plus an optional exact status.
    """
    term = search.strip().lower()
    result = []
    for m in members:
        if term and not (
            term in m.first_name.lower()
            or term in m.last_name.lower()
            or term in m.email.lower()
        ):
            continue
        if status and m.status != status:
            continue
        result.append(m)
    return result


def member_stats(members: Sequence[Member]) -> dict[str, int]:
    stats = {"total": len(members)}
    for status in MEMBER_STATUSES:
        stats[status] = sum(1 for m in members if m.status == status)
    return stats


def membership_breakdown(members: Sequence[Member]) -> dict[str, int]:
    return {
        value: sum(1 for m in members if m.membership_type == value)
        for value in MEMBERSHIP_TYPES
    }


def recent_members(members: Iterable[Member], limit: int = config.RECENT_MEMBERS_LIMIT) -> list[Member]:
    return sorted(members, key=lambda m: m.join_date, reverse=True)[:limit]


def members_to_dataframe(members: Iterable[Member]) -> pd.DataFrame:
    rows = []
    for m in members:
        plan = get_membership_plan(m.membership_type)
        rows.append({
            "id": m.id,
            "first_name": m.first_name,
            "last_name": m.last_name,
            "email": m.email,
            "phone": m.phone,
            "age": m.age,
            "membership_type": m.membership_type,
            "membership_label": plan.label if plan else m.membership_type,
            "join_date": m.join_date.isoformat(),
            "status": m.status,
            "emergency_contact_name": m.emergency_contact.name,
            "emergency_contact_relationship": m.emergency_contact.relationship,
            "emergency_contact_phone": m.emergency_contact.phone,
        })
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def members_to_csv_bytes(members: Iterable[Member]) -> bytes:
    df = members_to_dataframe(members)
    return df.to_csv(index=False).encode("utf-8")
