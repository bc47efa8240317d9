"""
List-filter-paginate-sync controller for the user console.

Owns the Store, the REST client and the notice timer for one UI session.

Flow for every mutation:
- clear the banners
- call the collection endpoint
- only on success patch the in-memory collection (no re-fetch) and show a notice
- on failure show "<operation>: <message>"; create/update re-raise so the form
  stays open, delete does not

Overlapping calls are not sequenced: each applies its patch to whatever the
collection is when its response arrives.
"""
import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

from config.settings import settings
from core import store as actions
from core.errors import (
    CREATE_FAILED,
    DELETE_FAILED,
    LOAD_FAILED,
    UPDATE_FAILED,
    UserApiError,
    describe_failure,
)
from core.notices import NoticeTimer
from core.store import Store
from models.state import AppState, UserPage
from models.user import User, UserForm
from services.user_api import UserApiClient
from services.user_view import append_user, build_page, merge_record, remove_user, replace_user

logger = logging.getLogger(__name__)

CREATED_MESSAGE = "User created successfully!"
UPDATED_MESSAGE = "User updated successfully!"
DELETED_MESSAGE = "User deleted successfully!"

Confirm = Callable[[int], Union[bool, Awaitable[bool]]]


class UserController:
    def __init__(
        self,
        api: UserApiClient,
        store: Optional[Store] = None,
        page_size: Optional[int] = None,
        notice_timeout: Optional[float] = None,
        trust_server_ids: Optional[bool] = None,
    ):
        self.api = api
        self.store = store or Store()
        self.page_size = page_size or settings.PAGE_SIZE
        self.trust_server_ids = settings.TRUST_SERVER_IDS if trust_server_ids is None else trust_server_ids
        self.notices = NoticeTimer(settings.NOTICE_TIMEOUT_SEC if notice_timeout is None else notice_timeout)

    @property
    def state(self) -> AppState:
        return self.store.state

    def page(self) -> UserPage:
        return build_page(self.state, self.page_size)

    async def aclose(self):
        self.notices.close()
        await self.api.aclose()

    # ---------------- notices ----------------

    def _start_mutation(self):
        self.notices.cancel()
        self.store.dispatch(actions.clear_messages)

    def _notify(self, message: str):
        self.store.dispatch(actions.set_success, message)
        self.notices.schedule(lambda: self.store.dispatch(actions.clear_success))

    # ---------------- collection sync ----------------

    async def load(self):
        self.store.dispatch(actions.loading_started)
        try:
            users = await self.api.list_users()
            self.store.dispatch(actions.set_users, users)
            logger.info("Loaded %d users", len(users))
        except UserApiError as e:
            logger.error("Error fetching users: %s", e)
            self.store.dispatch(actions.set_error, describe_failure(LOAD_FAILED, e))
        finally:
            self.store.dispatch(actions.loading_finished)

    def _malformed(self, prefix: str, operation: str, exc: Exception) -> UserApiError:
        error = UserApiError(operation, f"Malformed user record: {exc}")
        self.store.dispatch(actions.set_error, describe_failure(prefix, error))
        return error

    async def create(self, form: UserForm) -> User:
        self._start_mutation()
        try:
            created = await self.api.create_user(form)
        except UserApiError as e:
            self.store.dispatch(actions.set_error, describe_failure(CREATE_FAILED, e))
            raise
        try:
            users = append_user(self.state.users, created, trust_server_id=self.trust_server_ids)
        except ValueError as e:
            raise self._malformed(CREATE_FAILED, "create", e) from e
        self.store.dispatch(actions.set_users, users)
        self._notify(CREATED_MESSAGE)
        logger.info("Created user id=%s (server id=%s)", users[-1].id, created.get("id"))
        return users[-1]

    async def update(self, user_id: int, form: UserForm, target: Optional[User] = None) -> User:
        """PUT the edited record. target defaults to the record in memory, or a bare id."""
        if target is None:
            target = self._lookup(user_id) or User(id=user_id)
        self._start_mutation()
        try:
            echoed = await self.api.update_user(target, form)
        except UserApiError as e:
            self.store.dispatch(actions.set_error, describe_failure(UPDATE_FAILED, e))
            raise
        try:
            updated = User(**merge_record({"id": user_id}, merge_record(echoed, {"phone": form.phone})))
        except ValueError as e:
            raise self._malformed(UPDATE_FAILED, "update", e) from e
        # deleted while the PUT was in flight: nothing left to patch
        if self._lookup(user_id) is not None:
            self.store.dispatch(actions.set_users, replace_user(self.state.users, user_id, updated.model_dump()))
        else:
            logger.info("User id=%s gone before its update arrived", user_id)
        self._notify(UPDATED_MESSAGE)
        logger.info("Updated user id=%s", user_id)
        return updated

    async def delete(self, user_id: int, confirm: Confirm) -> bool:
        """Delete after confirm(user_id) approves. Returns True when the user was removed."""
        approved = confirm(user_id)
        if inspect.isawaitable(approved):
            approved = await approved
        if not approved:
            logger.debug("Delete of user id=%s not confirmed", user_id)
            return False

        self._start_mutation()
        try:
            await self.api.delete_user(user_id)
        except UserApiError as e:
            logger.error("Error deleting user id=%s: %s", user_id, e)
            self.store.dispatch(actions.set_error, describe_failure(DELETE_FAILED, e))
            return False
        self.store.dispatch(actions.set_users, remove_user(self.state.users, user_id))
        self._notify(DELETED_MESSAGE)
        logger.info("Deleted user id=%s", user_id)
        return True

    def _lookup(self, user_id: int) -> Optional[User]:
        return next((u for u in self.state.users if u.id == user_id), None)

    # ---------------- delete confirmation ----------------

    def request_delete(self, user_id: int):
        self.store.dispatch(actions.request_delete, user_id)

    def cancel_delete(self):
        self.store.dispatch(actions.cancel_delete)

    async def confirm_delete(self) -> bool:
        pending = self.state.pending_delete_id
        if pending is None:
            return False
        self.store.dispatch(actions.cancel_delete)
        return await self.delete(pending, confirm=lambda _user_id: True)

    # ---------------- search & paging ----------------

    def search(self, term: str):
        self.store.dispatch(actions.set_search, term)

    def go_to_page(self, page: int):
        self.store.dispatch(actions.go_to_page, page, self.page_size)

    def next_page(self):
        self.go_to_page(self.page().current_page + 1)

    def previous_page(self):
        self.go_to_page(self.page().current_page - 1)

    # ---------------- form ----------------

    def open_create_form(self):
        self.store.dispatch(actions.open_form, None)

    def open_edit_form(self, user_id: int):
        user = self._lookup(user_id)
        if user is None:
            logger.warning("Edit requested for unknown user id=%s", user_id)
            return
        self.store.dispatch(actions.open_form, user)

    def close_form(self):
        self.store.dispatch(actions.close_form)

    def clear_form_error(self):
        if self.state.form_error:
            self.store.dispatch(actions.set_form_error, "")

    async def submit_form(self, form: UserForm) -> bool:
        """Validate and save the open form. Returns True when the form was closed."""
        self.store.dispatch(actions.set_form_error, "")
        problem = form.validate_required()
        if problem:
            self.store.dispatch(actions.set_form_error, problem)
            return False

        editing = self.state.editing_user
        try:
            if editing is not None:
                await self.update(editing.id, form, target=editing)
            else:
                await self.create(form)
        except UserApiError as e:
            self.store.dispatch(actions.set_form_error, str(e) or "Something went wrong while saving")
            return False
        self.store.dispatch(actions.close_form)
        return True
