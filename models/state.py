# models/state.py
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from models.user import User


class AppState(BaseModel):
    """Whole UI state. Never mutated; every change yields a new instance."""

    model_config = ConfigDict(frozen=True)

    users: Tuple[User, ...] = ()
    search_term: str = ""
    current_page: int = 1
    loading: bool = True
    error: str = ""
    success: str = ""
    form_open: bool = False
    editing_user: Optional[User] = None
    form_error: str = ""
    pending_delete_id: Optional[int] = None


class UserPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: Tuple[User, ...] = ()
    current_page: int = 1
    total_pages: int = 0
    total_filtered: int = 0

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages
