"""
Streamlit UI for the user console.

Talks to the user collection endpoint (settings.USERS_API_URL) through
UserController. Each browser session gets its own controller and background
event loop, kept in st.session_state.

Run with: streamlit run ui/app_streamlit.py
"""
import logging
import sys
from pathlib import Path

import streamlit as st

# `streamlit run ui/app_streamlit.py` puts ui/ on sys.path, not the project root
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from config.settings import settings
from core.logging import configure_logging
from models.user import UserForm
from services.user_api import UserApiClient
from services.user_controller import UserController
from ui.session import UserSession

logger = logging.getLogger(__name__)

st.set_page_config(page_title=settings.APP_TITLE, layout="wide")


# ---------------- Session init ----------------

def get_session() -> UserSession:
    """Controller + loop for this browser session, created on first run."""
    if "user_session" not in st.session_state:
        configure_logging()
        session = UserSession(_make_controller)
        st.session_state.user_session = session
        session.runner.run(session.controller.load())
    return st.session_state.user_session


async def _make_controller():
    return UserController(UserApiClient())


user_session = get_session()
controller, runner = user_session.controller, user_session.runner


# ---------------- Callbacks ----------------

def on_search():
    controller.search(st.session_state.search_term)


def on_edit(user_id: int):
    controller.open_edit_form(user_id)


def on_add():
    controller.open_create_form()


def on_request_delete(user_id: int):
    controller.request_delete(user_id)


def on_confirm_delete():
    runner.run(controller.confirm_delete())


def on_cancel_delete():
    controller.cancel_delete()


def on_close_form():
    controller.close_form()


def on_field_change():
    controller.clear_form_error()


# ---------------- Header ----------------

st.title(settings.APP_TITLE)

col1, col2 = st.columns([4, 1])
with col1:
    st.text_input(
        "Search",
        key="search_term",
        placeholder="Search by name...",
        on_change=on_search,
        label_visibility="collapsed",
    )
with col2:
    st.button("+ Add user", on_click=on_add, use_container_width=True)


@st.fragment(run_every="1s")
def banners():
    # re-rendered on a timer so the notice disappears when the NoticeTimer fires
    state = controller.state
    if state.error:
        st.error(state.error)
    if state.success:
        st.success(state.success)


banners()


# ---------------- Delete confirmation ----------------

pending = controller.state.pending_delete_id
if pending is not None:
    with st.container(border=True):
        st.warning(f"Are you sure you want to delete user #{pending}?")
        c1, c2 = st.columns(2)
        with c1:
            st.button("Yes, delete", on_click=on_confirm_delete, type="primary", key="confirm_delete")
        with c2:
            st.button("Cancel", on_click=on_cancel_delete, key="cancel_delete")


# ---------------- User table ----------------

def render_table():
    page = controller.page()
    if not page.items:
        st.info("No users found.")
        return

    header = st.columns([1, 3, 4, 3, 1, 1])
    for col, title in zip(header, ["ID", "Name", "Email", "Phone", "", ""]):
        col.markdown(f"**{title}**")

    for user in page.items:
        row = st.columns([1, 3, 4, 3, 1, 1])
        row[0].write(user.id)
        row[1].write(user.name)
        row[2].write(user.email)
        row[3].write(user.phone)
        row[4].button("Edit", key=f"edit_{user.id}", on_click=on_edit, args=(user.id,))
        row[5].button("Delete", key=f"delete_{user.id}", on_click=on_request_delete, args=(user.id,))

    if page.total_pages > 1:
        prev_col, info_col, next_col = st.columns([1, 2, 1])
        prev_col.button("Previous", on_click=controller.previous_page, disabled=not page.has_previous)
        info_col.markdown(f"Page {page.current_page} / {page.total_pages}")
        next_col.button("Next", on_click=controller.next_page, disabled=not page.has_next)


if controller.state.loading:
    st.info("Loading users...")
else:
    render_table()


# ---------------- Add / edit form ----------------

def render_form():
    state = controller.state
    editing = state.editing_user
    initial = UserForm.from_user(editing)
    # keys carry the edit target so switching targets resets the inputs
    suffix = editing.id if editing is not None else "new"

    with st.container(border=True):
        head, close = st.columns([5, 1])
        head.subheader("Edit user" if editing else "Add new user")
        close.button("✕", on_click=on_close_form, key="close_form")

        if state.form_error:
            st.error(state.form_error)

        name = st.text_input("Name", value=initial.name, key=f"name_{suffix}", on_change=on_field_change)
        email = st.text_input("Email", value=initial.email, key=f"email_{suffix}", on_change=on_field_change)
        phone = st.text_input("Phone", value=initial.phone, key=f"phone_{suffix}", on_change=on_field_change)

        c1, c2 = st.columns(2)
        with c1:
            st.button("Cancel", on_click=on_close_form, key="cancel_form")
        with c2:
            submitted = st.button("Update" if editing else "Create", type="primary", key="submit_form")

    if submitted:
        form = UserForm(name=name, email=email, phone=phone)
        runner.run(controller.submit_form(form))
        st.rerun()


if controller.state.form_open:
    render_form()
