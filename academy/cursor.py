"""Navigation Cursor: the learner's position in the curriculum."""

from __future__ import annotations

from typing import Optional

from academy.matcher import PracticeBuffer
from academy.models import Module
from academy.registry import ModuleRegistry


class NavigationCursor:
    """Index into the registry, kept within ``0 <= index < count``.

    Every real move resets the practice buffer. Moves past either end are
    no-ops and return False.
    """

    def __init__(
        self,
        registry: ModuleRegistry,
        practice: Optional[PracticeBuffer] = None,
        index: int = 0,
    ):
        if not 0 <= index < registry.count():
            raise IndexError(f"Cursor index {index} out of range 0..{registry.count() - 1}")
        self.registry = registry
        self.practice = practice
        self._index = index

    @property
    def index(self) -> int:
        return self._index

    @property
    def at_start(self) -> bool:
        return self._index == 0

    @property
    def at_end(self) -> bool:
        return self._index == self.registry.count() - 1

    def current(self) -> Module:
        return self.registry.get(self._index)

    def advance(self) -> bool:
        if self.at_end:
            return False
        self._move_to(self._index + 1)
        return True

    def retreat(self) -> bool:
        if self.at_start:
            return False
        self._move_to(self._index - 1)
        return True

    def select(self, module_id: str) -> bool:
        """Jump to a module by id. Returns False (and stays put) for unknown ids."""
        module = self.registry.find_by_id(module_id)
        if module is None:
            return False
        if module.order != self._index:
            self._move_to(module.order)
        return True

    def _move_to(self, index: int) -> None:
        self._index = index
        if self.practice is not None:
            self.practice.reset()
