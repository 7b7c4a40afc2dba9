"""Observers — the explicit identity behind subscribing access.

An Observer wraps a build function. watch() subscribes the observer it is
given to a container; when that container notifies, the observer rebuilds
by calling its build function again. The build function is expected to call
watch() again for everything it depends on.

An observer holds at most one subscription per container. Re-watching a
container during a rebuild keeps the existing subscription, so the observer
stays subscribed without the subscriber list growing on every rebuild.

dispose() removes every subscription. A disposed observer never rebuilds,
even if it was already in the snapshot of a notification pass in progress.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

from snapstate.observable import Subscription

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Observer(Generic[T]):
    """A rebuildable consumer of container state."""

    def __init__(self, build: Callable[[Observer[T]], T], *, name: str | None = None) -> None:
        self._build = build
        self._subscriptions: dict[object, Subscription] = {}
        self._disposed = False
        self.name = name or getattr(build, "__name__", "observer")
        self.output: T | None = None
        self.rebuild_count = 0

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def watching(self) -> list[type]:
        """Kinds of the containers this observer is subscribed to."""
        return [type(container) for container in self._subscriptions]

    def run(self) -> T | None:
        """Call the build function and keep its result in .output."""
        if self._disposed:
            return None
        self.rebuild_count += 1
        self.output = self._build(self)
        return self.output

    def _subscribe(self, container) -> None:
        """Subscribe to container unless already subscribed. Used by watch()."""
        if self._disposed:
            return
        current = self._subscriptions.get(container)
        if current is not None and current.active:
            return
        self._subscriptions[container] = container.listeners.subscribe(self._on_change)
        logger.debug("%s: watching %r", self.name, container)

    def _on_change(self) -> None:
        self.run()

    def dispose(self) -> None:
        """Remove every subscription. Idempotent."""
        if self._disposed:
            return
        self._disposed = True
        for sub in self._subscriptions.values():
            sub.dispose()
        self._subscriptions.clear()
        logger.debug("%s: disposed", self.name)

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"Observer({self.name}, {state})"


def observe(build: Callable[[Observer[T]], T], *, name: str | None = None) -> Observer[T]:
    """Create an Observer and build it once.

    Usage:
        scope = app_scope()

        def counter_label(obs):
            return f"Count: {watch(scope, CounterModel, obs)}"

        label = observe(counter_label)
        label.output  # "Count: 0"

        read(scope, CounterModel).increment()
        label.output  # "Count: 1"

        label.dispose()
    """
    observer = Observer(build, name=name)
    observer.run()
    return observer
