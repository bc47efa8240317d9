"""
Pure functions over the in-memory collection.

Filtering and paging:
- filter_users(users, term): case-insensitive substring match on name.
- total_pages(count, page_size): ceil(count / page_size).
- resolve_page(page, pages): falls back to page 1 once the page is past the end.
- page_slice(items, page, page_size): the [(page-1)*size, page*size) window.
- build_page(state, page_size): the visible slice for the current state.

Reconciliation after a successful mutation (no re-fetch):
- next_user_id, merge_record, append_user, replace_user, remove_user.
"""
import math
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from models.state import AppState, UserPage
from models.user import User


def filter_users(users: Sequence[User], term: str) -> Tuple[User, ...]:
    needle = (term or "").strip().lower()
    if not needle:
        return tuple(users)
    # matching uses the untrimmed lowercased term, like the search box sends it
    needle = term.lower()
    return tuple(u for u in users if needle in (u.name or "").lower())


def total_pages(count: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return math.ceil(count / page_size)


def resolve_page(page: int, pages: int) -> int:
    if pages > 0 and page > pages:
        return 1
    return page


def page_slice(items: Sequence[Any], page: int, page_size: int) -> Tuple[Any, ...]:
    start = (page - 1) * page_size
    return tuple(items[start:start + page_size])


def build_page(state: AppState, page_size: int) -> UserPage:
    filtered = filter_users(state.users, state.search_term)
    pages = total_pages(len(filtered), page_size)
    page = resolve_page(state.current_page, pages)
    return UserPage(
        items=page_slice(filtered, page, page_size),
        current_page=page,
        total_pages=pages,
        total_filtered=len(filtered),
    )


def next_user_id(users: Iterable[User]) -> int:
    ids = [u.id for u in users]
    return max(ids) + 1 if ids else 1


def merge_record(server: Dict[str, Any], overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Server response wins for every field except the ones overridden locally."""
    merged = dict(server)
    merged.update(overrides or {})
    return merged


def append_user(users: Sequence[User], created: Dict[str, Any], trust_server_id: bool = False) -> Tuple[User, ...]:
    """Add the record echoed by POST, assigning its id locally unless the server id is usable."""
    server_id = created.get("id")
    existing = {u.id for u in users}
    if trust_server_id and isinstance(server_id, int) and server_id not in existing:
        new_id = server_id
    else:
        new_id = next_user_id(users)
    return tuple(users) + (User(**merge_record(created, {"id": new_id})),)


def replace_user(users: Sequence[User], user_id: int, updated: Dict[str, Any]) -> Tuple[User, ...]:
    replacement = User(**merge_record({"id": user_id}, updated))
    return tuple(replacement if u.id == user_id else u for u in users)


def remove_user(users: Sequence[User], user_id: int) -> Tuple[User, ...]:
    return tuple(u for u in users if u.id != user_id)
