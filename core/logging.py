"""
Logging setup and outgoing request logging.

- configure_logging(): one-time basicConfig using settings.LOG_LEVEL.
- request_logging_hooks(): httpx event hooks that tag every call to the
  collection endpoint with an X-Request-ID (UUID4) and log method, url,
  status, latency and request-id.
"""
import logging
import time
import uuid

import httpx

from config.settings import settings

logger = logging.getLogger("users.http")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None):
    logging.basicConfig(level=level or settings.LOG_LEVEL, format=LOG_FORMAT)


async def _on_request(request: httpx.Request):
    request_id = str(uuid.uuid4())
    request.headers["X-Request-ID"] = request_id
    request.extensions["started_at"] = time.monotonic()


async def _on_response(response: httpx.Response):
    request = response.request
    started = request.extensions.get("started_at")
    latency = (time.monotonic() - started) * 1000.0 if started else 0.0
    logger.info(
        "[request] id=%s method=%s url=%s status=%s latency_ms=%.2f",
        request.headers.get("X-Request-ID"),
        request.method,
        request.url,
        response.status_code,
        latency,
    )


def request_logging_hooks() -> dict:
    """Event hooks for httpx.AsyncClient(event_hooks=...)."""
    return {"request": [_on_request], "response": [_on_response]}
