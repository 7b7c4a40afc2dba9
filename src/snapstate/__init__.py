"""snapstate: observable state containers with scoped, type-keyed access."""

from importlib.metadata import version as _version

__version__ = _version("snapstate")

from snapstate.observable import ChangeNotifier, Subscription
from snapstate.models import Container, CounterModel, UserModel, ThemeModel, TodoListModel
from snapstate.scope import Scope, ConfigurationError, app_scope
from snapstate.observer import Observer, observe
from snapstate.access import watch, read
# textual NOT auto-imported — opt-in only

__all__ = [
    "ChangeNotifier",
    "Subscription",
    "Container",
    "CounterModel",
    "UserModel",
    "ThemeModel",
    "TodoListModel",
    "Scope",
    "ConfigurationError",
    "app_scope",
    "Observer",
    "observe",
    "watch",
    "read",
]
