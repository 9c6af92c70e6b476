"""Module Registry: the ordered, immutable list of lessons."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from academy.curriculum import Curriculum
from academy.models import Module


class ModuleRegistry:
    """Lookup by position or id over a fixed module sequence."""

    def __init__(self, modules: Sequence[Module], name: str = "", version: str = ""):
        self._modules: List[Module] = list(modules)
        self._by_id = {m.id: m for m in self._modules}
        self.name = name
        self.version = version

    def get(self, index: int) -> Module:
        """Module at ``index``. Raises IndexError outside ``0..count()-1``."""
        if not 0 <= index < len(self._modules):
            raise IndexError(f"Module index {index} out of range 0..{len(self._modules) - 1}")
        return self._modules[index]

    def count(self) -> int:
        return len(self._modules)

    def find_by_id(self, module_id: str) -> Optional[Module]:
        return self._by_id.get(module_id)

    def __len__(self) -> int:
        return len(self._modules)

    def __iter__(self) -> Iterator[Module]:
        return iter(self._modules)


def load_registry(path: Optional[str | Path] = None) -> ModuleRegistry:
    """Register every lesson action and load the bundled (or given) curriculum."""
    import lessons  # noqa: F401  (registers actions)

    curriculum = Curriculum.from_file(path or lessons.CURRICULUM_PATH)
    return ModuleRegistry(curriculum.modules, curriculum.name, curriculum.version)
