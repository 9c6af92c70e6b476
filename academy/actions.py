"""Lesson action base class and registry.

Each curriculum module has exactly one LessonAction, registered under the
module id. An action:
- Renders the reference snippet shown to the learner (``code_template``)
- Runs the live demonstration against a backend (``execute``)
- Reports progress only through the ``log`` callback it is handed
- Does NOT pick the backend or touch session state (that is the runner's job)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from string import Template
from typing import TYPE_CHECKING, Any, Callable, Dict, Type

from academy.models import LogKind

if TYPE_CHECKING:
    from academy.backends import Backend

ENDPOINT_PLACEHOLDER = "YOUR_RPC_URL"
ADDRESS_PLACEHOLDER = "ADDRESS"

# log(message, kind)
LessonLogger = Callable[[str, LogKind], None]


class LessonAction(ABC):
    """Base class for all lesson demonstrations."""

    module_id: str = "base"

    # string.Template text; may reference $endpoint and $address
    template: str = ""

    def code_template(self, endpoint: str = "", address: str = "") -> str:
        """Render the reference snippet, substituting placeholders for empty inputs."""
        return Template(self.template).substitute(
            endpoint=endpoint or ENDPOINT_PLACEHOLDER,
            address=address or ADDRESS_PLACEHOLDER,
        )

    @abstractmethod
    async def execute(
        self,
        backend: Backend,
        endpoint: str,
        log: LessonLogger,
        address: str,
    ) -> Any:
        """Run the demonstration and return its result (may be None)."""
        ...


# Action registry: module id -> class
_ACTION_REGISTRY: Dict[str, Type[LessonAction]] = {}


def register_action(module_id: str):
    """Decorator to register a lesson action class by module id."""
    def decorator(cls: Type[LessonAction]):
        _ACTION_REGISTRY[module_id] = cls
        cls.module_id = module_id
        return cls
    return decorator


def get_action(module_id: str) -> LessonAction:
    """Instantiate the registered action for a module id."""
    cls = _ACTION_REGISTRY.get(module_id)
    if not cls:
        available = list(_ACTION_REGISTRY.keys())
        raise KeyError(f"Unknown lesson action: '{module_id}'. Available: {available}")
    return cls()


def list_actions() -> list[str]:
    """List all registered module ids."""
    return list(_ACTION_REGISTRY.keys())
