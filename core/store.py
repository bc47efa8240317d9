"""
State store for the user console.

The whole UI state lives in one immutable AppState. The functions below are the
only way it changes: each takes a state and returns a new one. Store holds the
current state and swaps it wholesale on every dispatch, so a reader on another
thread always sees a complete state.
"""
import logging
import threading
from typing import Callable, Optional, Sequence

from models.state import AppState
from models.user import User
from services.user_view import filter_users, total_pages

logger = logging.getLogger(__name__)


# ---------------- Update functions ----------------

def loading_started(state: AppState) -> AppState:
    return state.model_copy(update={"loading": True, "error": ""})


def loading_finished(state: AppState) -> AppState:
    return state.model_copy(update={"loading": False})


def set_users(state: AppState, users: Sequence[User]) -> AppState:
    """Replace the collection; any collection change goes back to page 1."""
    return state.model_copy(update={"users": tuple(users), "current_page": 1})


def set_search(state: AppState, term: str) -> AppState:
    return state.model_copy(update={"search_term": term, "current_page": 1})


def go_to_page(state: AppState, page: int, page_size: int) -> AppState:
    pages = total_pages(len(filter_users(state.users, state.search_term)), page_size)
    if page < 1 or page > max(pages, 1):
        return state
    return state.model_copy(update={"current_page": page})


def clear_messages(state: AppState) -> AppState:
    return state.model_copy(update={"error": "", "success": ""})


def set_error(state: AppState, message: str) -> AppState:
    return state.model_copy(update={"error": message})


def set_success(state: AppState, message: str) -> AppState:
    return state.model_copy(update={"success": message})


def clear_success(state: AppState) -> AppState:
    return state.model_copy(update={"success": ""})


def open_form(state: AppState, user: Optional[User] = None) -> AppState:
    """Open the add form (user=None) or the edit form for user."""
    return state.model_copy(update={"form_open": True, "editing_user": user, "form_error": ""})


def close_form(state: AppState) -> AppState:
    return state.model_copy(update={"form_open": False, "editing_user": None, "form_error": ""})


def set_form_error(state: AppState, message: str) -> AppState:
    return state.model_copy(update={"form_error": message})


def request_delete(state: AppState, user_id: int) -> AppState:
    return state.model_copy(update={"pending_delete_id": user_id})


def cancel_delete(state: AppState) -> AppState:
    return state.model_copy(update={"pending_delete_id": None})


# ---------------- Store ----------------

class Store:
    def __init__(self, initial: Optional[AppState] = None):
        self._state = initial or AppState()
        self._lock = threading.Lock()

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, update: Callable[..., AppState], *args, **kwargs) -> AppState:
        with self._lock:
            new_state = update(self._state, *args, **kwargs)
            self._state = new_state
        logger.debug("dispatch %s", getattr(update, "__name__", update))
        return new_state
