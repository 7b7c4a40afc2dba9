"""Textual integration for snapstate. Opt-in — requires textual.

Observers created here rebuild only while the app's widget tree can be
queried: not while the app is stopped, and not inside pause(). NoMatches
raised by widget queries during a rebuild is swallowed; anything else
propagates. Rebuilds triggered off the app's thread go through
app.call_from_thread.
"""

import logging
import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

from snapstate.observer import Observer

logger = logging.getLogger(__name__)

# Module-owned pause state, keyed by id(app) so several apps can coexist in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend guarded rebuilds, e.g. while widgets are being replaced."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


class AppObserver(Observer):
    """Observer whose rebuilds are guarded by the app's lifecycle."""

    def __init__(self, app, build, *, name=None) -> None:
        super().__init__(build, name=name)
        self.app = app
        self._main = threading.get_ident()

    def _on_change(self) -> None:
        if not is_safe(self.app):
            logger.debug("%s: rebuild skipped, app not safe", self.name)
            return
        if threading.get_ident() != self._main:
            self.app.call_from_thread(self._safe_run)
        else:
            self._safe_run()

    def _safe_run(self) -> None:
        try:
            self.run()
        except NoMatches:
            logger.debug("%s: widget missing during rebuild", self.name)


def observe(app, build, *, name=None) -> AppObserver:
    """Create an app-guarded observer and build it once.

    The initial build swallows NoMatches like any rebuild, but it runs even
    when the app is not safe: the build is what subscribes the observer, so
    skipping it would leave the observer deaf to every later change.
    """
    observer = AppObserver(app, build, name=name)
    observer._safe_run()
    return observer
