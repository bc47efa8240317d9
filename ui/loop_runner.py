"""
Background asyncio loop for a Streamlit session.

Streamlit reruns the script on its own thread for every interaction, so the
controller's coroutines and its notice timer live on one long-lived loop in a
daemon thread. Script reruns hand coroutines over with run().
"""
import asyncio
import logging
import threading
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

SHUTDOWN_TIMEOUT = 5.0


class LoopRunner:
    def __init__(self, name: str = "users-loop"):
        self.loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    def _run(self):
        asyncio.set_event_loop(self.loop)
        self.loop.run_forever()

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self.loop.is_closed()

    def run(self, coro: Awaitable[Any], timeout: Optional[float] = None) -> Any:
        """Run coro on the background loop and wait for its result."""
        future = asyncio.run_coroutine_threadsafe(coro, self.loop)
        return future.result(timeout)

    def stop(self):
        if not self.running:
            return
        self.loop.call_soon_threadsafe(self.loop.stop)
        if threading.current_thread() is self._thread:
            # the loop exits once this callback returns; a thread cannot join itself
            return
        self._thread.join(timeout=SHUTDOWN_TIMEOUT)
        self.loop.close()
        logger.debug("LoopRunner %s stopped", self._thread.name)


def shutdown(runner: LoopRunner, aclose: Callable[[], Awaitable[Any]]):
    """Run aclose() on the runner's loop, then stop the loop. No-op once stopped."""
    if not runner.running:
        return
    try:
        runner.run(aclose(), timeout=SHUTDOWN_TIMEOUT)
    finally:
        runner.stop()
