"""Scope — the composition root mapping container kinds to instances.

A Scope holds exactly one instance per kind (the container's class) for its
whole lifetime. Scopes can nest: lookup() walks from the scope it was called
on out to the nearest enclosing scope that registered the kind.

Wiring mistakes raise ConfigurationError at construction or lookup time.
Nothing in the library catches it — a miswired app should fail to start.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Mapping, TypeVar

from snapstate.models import Container, CounterModel, ThemeModel, TodoListModel, UserModel

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Kinds app_scope() provides, in registration order.
APP_KINDS: tuple[type, ...] = (CounterModel, UserModel, ThemeModel, TodoListModel)


class ConfigurationError(LookupError):
    """A scope was wired incorrectly (duplicate, missing, or mistyped kind)."""


class Scope:
    """Type-keyed registry of singleton containers."""

    def __init__(
        self,
        containers: Iterable[object] = (),
        *,
        parent: Scope | None = None,
        name: str | None = None,
    ) -> None:
        self._instances: dict[type, Container] = {}
        self._parent = parent
        self._disposed = False
        self.name = name or "scope"
        for instance in containers:
            self.register(type(instance), instance)

    @property
    def parent(self) -> Scope | None:
        return self._parent

    @property
    def disposed(self) -> bool:
        return self._disposed

    def register(self, kind: type[T], instance: T) -> None:
        """Register the single instance for kind. Duplicates are fatal."""
        if self._disposed:
            raise ConfigurationError(f"{self.name}: cannot register {kind.__name__} on a disposed scope")
        if kind in self._instances:
            raise ConfigurationError(f"{self.name}: {kind.__name__} is already registered")
        if not isinstance(instance, kind):
            raise ConfigurationError(
                f"{self.name}: {instance!r} is not an instance of {kind.__name__}"
            )
        if not isinstance(instance, Container):
            raise ConfigurationError(
                f"{self.name}: {kind.__name__} has no listeners/get_state(); not a container"
            )
        self._instances[kind] = instance
        logger.debug("%s: registered %s", self.name, kind.__name__)

    def lookup(self, kind: type[T]) -> T:
        """Return the instance for kind from this scope or the nearest parent."""
        scope: Scope | None = self
        while scope is not None:
            if scope._disposed:
                raise ConfigurationError(f"{scope.name}: lookup of {kind.__name__} on a disposed scope")
            instance = scope._instances.get(kind)
            if instance is not None:
                return instance  # type: ignore[return-value]
            scope = scope._parent
        raise ConfigurationError(f"{self.name}: no {kind.__name__} registered in this scope or its parents")

    def __contains__(self, kind: object) -> bool:
        scope: Scope | None = self
        while scope is not None:
            if kind in scope._instances:
                return True
            scope = scope._parent
        return False

    def kinds(self) -> Iterator[type]:
        """Kinds registered directly on this scope, in registration order."""
        return iter(list(self._instances))

    def dispose(self) -> None:
        """Tear down: every container drops its subscribers. Idempotent."""
        if self._disposed:
            return
        for instance in self._instances.values():
            instance.listeners.dispose()
        logger.info("%s: disposed %d containers", self.name, len(self._instances))
        self._disposed = True

    def __enter__(self) -> Scope:
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()

    def __repr__(self) -> str:
        kinds = ", ".join(k.__name__ for k in self._instances)
        state = "disposed" if self._disposed else "active"
        return f"Scope({self.name!r}, [{kinds}], {state})"


def app_scope(initial: Mapping[type, Mapping[str, object]] | None = None, *, name: str = "app") -> Scope:
    """Build the application scope with one of each container.

    initial maps a kind to keyword arguments for its constructor:

        scope = app_scope({CounterModel: {"count": 3}})
        scope.lookup(CounterModel).count  # 3
    """
    initial = dict(initial or {})
    unknown = [kind for kind in initial if kind not in APP_KINDS]
    if unknown:
        names = ", ".join(getattr(k, "__name__", repr(k)) for k in unknown)
        raise ConfigurationError(f"{name}: initial state given for unknown kinds: {names}")
    containers = []
    for kind in APP_KINDS:
        try:
            containers.append(kind(**initial.get(kind, {})))
        except TypeError as exc:
            raise ConfigurationError(f"{name}: bad initial state for {kind.__name__}: {exc}") from exc
    scope = Scope(containers, name=name)
    logger.info("%s: created with %d containers", name, len(APP_KINDS))
    return scope
