"""watch() and read() — the two ways to reach a container.

watch() is subscribing access: it returns the container's current state and
ties the observer to future changes. read() is one-shot access: it returns
the container itself so an event handler can call a mutation, and creates
no subscription.

Usage:
    def header(obs):
        return f"Logged in as: {watch(scope, UserModel, obs)}"

    view = observe(header)
    read(scope, UserModel).set_admin()   # view rebuilds, output updated
"""

from __future__ import annotations

from typing import TypeVar

from snapstate.models import Container
from snapstate.observer import Observer
from snapstate.scope import Scope

C = TypeVar("C")
S = TypeVar("S")


def watch(scope: Scope, kind: type[Container[S]], observer: Observer) -> S:
    """Subscribe observer to the kind's container and return its state."""
    container = scope.lookup(kind)
    observer._subscribe(container)
    return container.get_state()


def read(scope: Scope, kind: type[C]) -> C:
    """Return the kind's container without subscribing to it."""
    return scope.lookup(kind)
