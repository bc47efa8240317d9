"""
REST client for the user collection endpoint.

Speaks to a JSONPlaceholder-style resource:
    GET    {base}        -> list of user objects
    POST   {base}        -> created object (echo)
    PUT    {base}/{id}   -> updated object (echo)
    DELETE {base}/{id}

Every failure (non-2xx status or transport error) is raised as UserApiError.
No retries.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from config.settings import settings
from core.errors import UserApiError
from core.logging import request_logging_hooks
from models.user import User, UserForm

logger = logging.getLogger(__name__)

DEFAULT_WEBSITE = "example.com"


def make_username(name: str) -> str:
    """'Ann Lee' -> 'annlee'"""
    return "".join(name.lower().split())


def create_payload(form: UserForm) -> Dict[str, Any]:
    return {
        "name": form.name,
        "email": form.email,
        "phone": form.phone,
        "username": make_username(form.name),
        "website": DEFAULT_WEBSITE,
    }


def update_payload(user: User, form: UserForm) -> Dict[str, Any]:
    """Full replacement body: the edited record with the form fields on top."""
    body = user.model_dump()
    body.update({"name": form.name, "email": form.email, "phone": form.phone})
    return body


class UserApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.USERS_API_URL).rstrip("/")
        self._client = httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT,
            transport=transport,
            follow_redirects=True,
            headers={"Content-Type": "application/json"},
            event_hooks=request_logging_hooks(),
        )

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    def _item_url(self, user_id: int) -> str:
        return f"{self.base_url}/{user_id}"

    async def _request(self, operation: str, method: str, url: str, json: Any = None) -> httpx.Response:
        try:
            resp = await self._client.request(method, url, json=json)
        except httpx.RequestError as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise UserApiError(operation, str(e) or e.__class__.__name__) from e
        if not resp.is_success:
            logger.warning("%s %s returned status %s", method, url, resp.status_code)
            raise UserApiError(operation, f"HTTP error! status: {resp.status_code}", resp.status_code)
        return resp

    @staticmethod
    def _json(operation: str, resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise UserApiError(operation, f"Invalid JSON in response: {e}", resp.status_code) from e

    async def list_users(self) -> List[User]:
        resp = await self._request("list", "GET", self.base_url)
        data = self._json("list", resp)
        if not isinstance(data, list):
            raise UserApiError("list", "Expected a list of users", resp.status_code)
        try:
            return [User(**item) for item in data]
        except (TypeError, ValueError) as e:
            raise UserApiError("list", f"Malformed user record: {e}", resp.status_code) from e

    @classmethod
    def _record(cls, operation: str, resp: httpx.Response) -> Dict[str, Any]:
        data = cls._json(operation, resp)
        if not isinstance(data, dict):
            raise UserApiError(operation, "Expected a user object", resp.status_code)
        return data

    async def create_user(self, form: UserForm) -> Dict[str, Any]:
        resp = await self._request("create", "POST", self.base_url, json=create_payload(form))
        return self._record("create", resp)

    async def update_user(self, user: User, form: UserForm) -> Dict[str, Any]:
        resp = await self._request("update", "PUT", self._item_url(user.id), json=update_payload(user, form))
        return self._record("update", resp)

    async def delete_user(self, user_id: int) -> None:
        await self._request("delete", "DELETE", self._item_url(user_id))
