"""Action registry: the named actions the environment can apply."""

from dataclasses import dataclass
from typing import Callable


@dataclass
class Action:
    """One entry in the action vocabulary."""
    name: str
    description: str
    fn: Callable = None     # bound by the environment


class ActionRegistry:
    """Ordered registry of actions."""

    def __init__(self):
        self._actions: dict[str, Action] = {}

    def register(self, action: Action):
        self._actions[action.name] = action

    def get(self, name: str) -> Action | None:
        return self._actions.get(name)

    def names(self) -> list[str]:
        return list(self._actions)

    def __contains__(self, name: str) -> bool:
        return name in self._actions

    def __len__(self) -> int:
        return len(self._actions)

    def invoke(self, name: str, **kwargs):
        """Run a registered action. Raises KeyError for unknown names."""
        action = self._actions[name]
        if action.fn is None:
            raise RuntimeError(f"action '{name}' has no bound function")
        return action.fn(**kwargs)
