"""
app.py
Streamlit Gym Membership Manager (single user, local storage).
Run: streamlit run app.py
"""

from __future__ import annotations

import streamlit as st

import config
import utils
from db import SqliteStorage
from logging_config import setup_logging
from models import MEMBER_STATUSES, MEMBERSHIP_TYPES, EmergencyContact, MemberCandidate
from store import MemberStore
from validation import MemberValidationError, build_member

st.set_page_config(page_title="Gym Membership Manager", layout="wide")

FIELD_LABELS = {
    "first_name": "First name",
    "last_name": "Last name",
    "email": "Email",
    "phone": "Phone",
    "age": "Age",
    "membership_type": "Membership type",
    "emergency_contact_name": "Emergency contact name",
    "emergency_contact_relationship": "Relationship",
    "emergency_contact_phone": "Emergency contact phone",
}


@st.cache_resource
def get_store() -> MemberStore:
    # One store per process; Streamlit keeps it across reruns
    setup_logging(config.LOG_LEVEL)
    store = MemberStore(SqliteStorage(config.DB_FILE), key=config.STORAGE_KEY)
    store.load()
    return store


def plan_label(value: str) -> str:
    if not value:
        return "Select a membership type"
    plan = MEMBERSHIP_TYPES[value]
    return f"{plan.label} ({plan.price})"


# ---------- Pages ----------

def dashboard_page(store: MemberStore):
    st.header("📊 Dashboard")

    members = store.members
    stats = utils.member_stats(members)

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total members", stats["total"])
    c2.metric("Active", stats["active"])
    c3.metric("Inactive", stats["inactive"])
    c4.metric("Suspended", stats["suspended"])

    st.divider()

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Membership distribution")
        for value, count in utils.membership_breakdown(members).items():
            share = count / stats["total"] if stats["total"] else 0.0
            st.write(f"{MEMBERSHIP_TYPES[value].label}: **{count}** ({share:.0%})")
            st.progress(share)

    with col2:
        st.subheader("Recent members")
        recent = utils.recent_members(members)
        if recent:
            for m in recent:
                st.write(f"**{m.full_name}** · {m.join_date:%b %d, %Y} · {m.status}")
        else:
            st.caption("No members yet.")


def members_page(store: MemberStore):
    st.header("👥 Members")

    if not len(store):
        st.info("No members yet. Add your first member to get started.")
        return

    with st.sidebar:
        st.subheader("Search & Filters")
        search = st.text_input("Search (name/email)")
        status_filter = st.selectbox("Status", ["All", *MEMBER_STATUSES])

    members = utils.filter_members(
        store.members,
        search=search,
        status="" if status_filter == "All" else status_filter,
    )
    if not members:
        st.caption("No members found. Try adjusting your search or filter criteria.")
        return

    df = utils.members_to_dataframe(members)
    st.dataframe(df.drop(columns=["id"]), use_container_width=True, hide_index=True)

    st.download_button(
        "Download members.csv",
        data=utils.members_to_csv_bytes(members),
        file_name="members.csv",
        mime="text/csv",
    )

    st.divider()

    options = {f"{m.full_name} ({m.email})": m.id for m in members}
    chosen = st.selectbox("Member", list(options.keys()))
    member = store.get(options[chosen])
    if member is None:
        return

    plan = MEMBERSHIP_TYPES.get(member.membership_type)
    st.write(
        f"{plan.label if plan else member.membership_type} · Age {member.age} · {member.phone} · "
        f"member since {member.join_date:%b %Y}"
    )
    st.caption(
        f"Emergency contact: {member.emergency_contact.name} "
        f"({member.emergency_contact.relationship}) {member.emergency_contact.phone}"
    )

    c1, c2 = st.columns(2)
    with c1:
        new_status = st.selectbox(
            "Status",
            options=list(MEMBER_STATUSES),
            index=MEMBER_STATUSES.index(member.status) if member.status in MEMBER_STATUSES else 0,
            key=f"status_{member.id}",
        )
        if st.button("Update status", disabled=new_status == member.status):
            store.update(member.id, status=new_status)
            st.session_state.flash = "Status updated."
            st.rerun()
    with c2:
        confirm = st.checkbox(f"Confirm delete of {member.full_name}", value=False, key=f"del_{member.id}")
        if st.button("Delete", type="secondary", disabled=not confirm):
            store.delete(member.id)
            st.session_state.flash = "Member deleted."
            st.rerun()


def add_member_page(store: MemberStore):
    st.header("➕ Add Member")

    errors = st.session_state.get("form_errors", {})

    with st.form("member_form", clear_on_submit=False):
        col1, col2 = st.columns(2)
        with col1:
            first_name = st.text_input("First name")
            email = st.text_input("Email")
            age = st.text_input("Age")
        with col2:
            last_name = st.text_input("Last name")
            phone = st.text_input("Phone")
            membership_type = st.selectbox(
                "Membership type", ["", *MEMBERSHIP_TYPES], format_func=plan_label
            )

        st.subheader("Emergency contact")
        c1, c2, c3 = st.columns(3)
        with c1:
            ec_name = st.text_input("Name")
        with c2:
            ec_relationship = st.text_input("Relationship")
        with c3:
            ec_phone = st.text_input("Phone", key="emergency_contact_phone")

        submitted = st.form_submit_button("Add member", type="primary")

    if submitted:
        candidate = MemberCandidate(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            age=age,
            membership_type=membership_type,
            emergency_contact=EmergencyContact(
                name=ec_name,
                relationship=ec_relationship,
                phone=ec_phone,
            ),
        )
        try:
            member = build_member(candidate, store.list_emails())
        except MemberValidationError as e:
            st.session_state.form_errors = e.errors
            st.rerun()
        else:
            store.add(member)
            st.session_state.form_errors = {}
            st.session_state.page = "Members"
            st.session_state.flash = f"{member.full_name} added."
            st.rerun()

    for field, message in errors.items():
        st.error(f"{FIELD_LABELS.get(field, field)}: {message}")


def main_app(store: MemberStore):
    st.sidebar.title("🏋️ Gym Manager")
    st.sidebar.caption(f"{len(store)} member(s)")

    pages = ["Dashboard", "Members", "Add Member"]
    if "page" not in st.session_state:
        st.session_state.page = "Dashboard"
    st.session_state.page = st.sidebar.radio("Navigate", pages, index=pages.index(st.session_state.page))

    # Set by actions that rerun the script
    flash = st.session_state.pop("flash", None)
    if flash:
        st.success(flash)

    if st.session_state.page == "Dashboard":
        dashboard_page(store)
    elif st.session_state.page == "Members":
        members_page(store)
    elif st.session_state.page == "Add Member":
        add_member_page(store)


# --------- App entry ---------

def run():
    with st.spinner("Loading members..."):
        store = get_store()
    main_app(store)


if __name__ == "__main__":
    run()
