"""
Per-browser-session resources for the Streamlit UI.

A UserSession owns the background loop and the controller built on it. It lives
in st.session_state; when Streamlit drops the session state the UserSession is
garbage collected and its finalizer closes the controller (notice timer and
HTTP client) and stops the loop. weakref.finalize also runs at interpreter exit.
"""
import weakref
from typing import Awaitable, Callable

from services.user_controller import UserController
from ui.loop_runner import LoopRunner, shutdown


class UserSession:
    def __init__(self, factory: Callable[[], Awaitable[UserController]]):
        self.runner = LoopRunner()
        # the HTTP client must be created on the loop that will use it
        self.controller = self.runner.run(factory())
        # the callback must not reference self, or the session would never be collected
        self._finalizer = weakref.finalize(self, shutdown, self.runner, self.controller.aclose)
