"""Change notification — the subscriber list every container embeds.

A ChangeNotifier owns an ordered list of zero-argument callbacks. Containers
hold one (composition, not inheritance) and call notify_all() after each
mutation. Subscribers re-read state through the container; nothing is passed
to them.

notify_all() iterates over a snapshot taken when the pass starts. A
subscription removed during the pass is skipped for the rest of that pass.
"""

from __future__ import annotations

import itertools
import logging
from typing import Callable

logger = logging.getLogger(__name__)

Callback = Callable[[], None]

# Subscription IDs — only used for repr and debugging.
_id_counter = itertools.count(1)


class Subscription:
    """Handle for one registered callback. dispose() is idempotent."""

    __slots__ = ("_id", "_notifier", "_callback", "_active")

    def __init__(self, notifier: ChangeNotifier | None, callback: Callback) -> None:
        self._id = next(_id_counter)
        self._notifier = notifier
        self._callback = callback
        self._active = notifier is not None

    @property
    def active(self) -> bool:
        return self._active

    @property
    def callback(self) -> Callback:
        return self._callback

    def dispose(self) -> None:
        """Remove this subscription. Safe to call more than once."""
        if self._notifier is not None:
            self._notifier.unsubscribe(self)

    def __repr__(self) -> str:
        state = "active" if self._active else "disposed"
        name = getattr(self._callback, "__name__", repr(self._callback))
        return f"Subscription(#{self._id}, {name}, {state})"


class ChangeNotifier:
    """Ordered subscriber list with synchronous notify-all."""

    __slots__ = ("_subscriptions", "_disposed", "_owner")

    def __init__(self, owner: object = None) -> None:
        self._subscriptions: list[Subscription] = []
        self._disposed = False
        self._owner = owner

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def __len__(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, callback: Callback) -> Subscription:
        """Register callback. Returns a handle for removal.

        The same callback registered twice is called twice per pass.
        Subscribing to a disposed notifier returns an inactive handle.
        """
        if self._disposed:
            logger.debug("subscribe on disposed notifier for %r ignored", self._owner)
            return Subscription(None, callback)
        sub = Subscription(self, callback)
        self._subscriptions.append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription. No-op if already removed or not ours."""
        if subscription._notifier is not self or not subscription._active:
            return
        subscription._active = False
        self._subscriptions.remove(subscription)

    def notify_all(self) -> None:
        """Call every current subscriber once, in registration order.

        A subscriber that raises does not stop the pass. The first exception
        is re-raised to the caller of the mutation after every subscriber in
        the snapshot has run; any later ones are logged.
        """
        error: Exception | None = None
        # Snapshot — callbacks may subscribe or unsubscribe while we iterate.
        for sub in list(self._subscriptions):
            if not sub._active:
                continue
            try:
                sub._callback()
            except Exception as exc:
                if error is None:
                    error = exc
                else:
                    logger.exception("subscriber %r of %r failed", sub, self._owner)
        if error is not None:
            raise error

    def dispose(self) -> None:
        """Drop every subscriber. Later notifications are no-ops."""
        for sub in self._subscriptions:
            sub._active = False
        self._subscriptions.clear()
        self._disposed = True

    def __repr__(self) -> str:
        return f"ChangeNotifier({self._owner!r}, subscribers={len(self._subscriptions)})"
