"""
Cancellable timer for transient notices.

A NoticeTimer holds at most one pending callback on the running asyncio loop.
Scheduling again replaces the pending one, so an older notice can never clear a
newer one. close() cancels whatever is pending and refuses later schedules;
the owner calls it when its session ends.
"""
import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class NoticeTimer:
    def __init__(self, delay: float):
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None
        self._closed = False

    def schedule(self, callback: Callable[[], None], delay: Optional[float] = None):
        """Run callback after delay seconds; must be called from inside the loop."""
        if self._closed:
            logger.debug("NoticeTimer closed; schedule ignored")
            return
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay if delay is None else delay, self._fire, callback)

    def _fire(self, callback: Callable[[], None]):
        self._handle = None
        callback()

    def cancel(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def close(self):
        self.cancel()
        self._closed = True
