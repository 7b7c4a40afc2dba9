"""Concrete state containers.

Each container owns its state and embeds a ChangeNotifier as `listeners`.
Mutations update state first, then notify. Guarded inputs (blank task text,
out-of-range index) are silent no-ops and do not notify.

State is only reachable through read-only properties and get_state(), which
return immutable snapshots.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol, TypeVar, runtime_checkable

from snapstate.observable import ChangeNotifier

logger = logging.getLogger(__name__)

S = TypeVar("S", covariant=True)


@runtime_checkable
class Container(Protocol[S]):
    """What the scope and accessor need from a container."""

    listeners: ChangeNotifier

    def get_state(self) -> S: ...


class CounterModel:
    """Signed, unbounded integer counter."""

    __slots__ = ("_count", "listeners")

    def __init__(self, count: int = 0) -> None:
        self._count = count
        self.listeners = ChangeNotifier(self)

    @property
    def count(self) -> int:
        return self._count

    def get_state(self) -> int:
        return self._count

    def increment(self) -> None:
        self._count += 1
        self.listeners.notify_all()

    def decrement(self) -> None:
        self._count -= 1
        self.listeners.notify_all()

    def reset(self) -> None:
        self._count = 0
        self.listeners.notify_all()

    def __repr__(self) -> str:
        return f"CounterModel(count={self._count})"


class UserModel:
    """The signed-in user's display name. Any string is accepted."""

    __slots__ = ("_username", "listeners")

    DEFAULT_NAME = "Guest"
    ADMIN_NAME = "Admin"

    def __init__(self, username: str = DEFAULT_NAME) -> None:
        self._username = username
        self.listeners = ChangeNotifier(self)

    @property
    def username(self) -> str:
        return self._username

    def get_state(self) -> str:
        return self._username

    def set_admin(self) -> None:
        self._username = self.ADMIN_NAME
        self.listeners.notify_all()

    def change_name(self, new_name: str) -> None:
        self._username = new_name
        self.listeners.notify_all()

    def __repr__(self) -> str:
        return f"UserModel(username={self._username!r})"


class ThemeModel:
    __slots__ = ("_is_dark", "listeners")

    def __init__(self, is_dark: bool = False) -> None:
        self._is_dark = is_dark
        self.listeners = ChangeNotifier(self)

    @property
    def is_dark(self) -> bool:
        return self._is_dark

    def get_state(self) -> bool:
        return self._is_dark

    def toggle(self) -> None:
        self._is_dark = not self._is_dark
        self.listeners.notify_all()

    def __repr__(self) -> str:
        return f"ThemeModel(is_dark={self._is_dark})"


class TodoListModel:
    """Ordered list of task strings.

    add_task() keeps the text as given (no stripping) but ignores text that
    is blank once stripped. remove_task() ignores indexes outside [0, len);
    negative indexes are never counted from the end.
    """

    __slots__ = ("_tasks", "listeners")

    def __init__(self, tasks: Iterable[str] = ()) -> None:
        self._tasks: list[str] = [t for t in tasks if t.strip()]
        self.listeners = ChangeNotifier(self)

    @property
    def tasks(self) -> tuple[str, ...]:
        return tuple(self._tasks)

    def get_state(self) -> tuple[str, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def add_task(self, text: str) -> None:
        if not text.strip():
            logger.debug("add_task ignored blank text %r", text)
            return
        self._tasks.append(text)
        self.listeners.notify_all()

    def remove_task(self, index: int) -> None:
        if index < 0 or index >= len(self._tasks):
            logger.debug("remove_task ignored index %d (length %d)", index, len(self._tasks))
            return
        del self._tasks[index]
        self.listeners.notify_all()

    def __repr__(self) -> str:
        return f"TodoListModel({self._tasks!r})"
