"""Curriculum loader: reads the JSON lesson definitions into Module objects.

The curriculum file owns the text of every lesson (title, explanation, tip)
and its position in the sequence. The code side of a lesson, its reference
snippet and live demonstration, is the LessonAction registered under the
same id.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from academy.actions import get_action, list_actions
from academy.errors import CurriculumError
from academy.models import Module


@dataclass
class Curriculum:
    """Parsed curriculum file."""
    name: str
    description: str
    version: str
    modules: List[Module]

    @classmethod
    def from_file(cls, path: str | Path) -> Curriculum:
        """Load a curriculum from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise CurriculumError(f"Curriculum file not found: {path}")

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise CurriculumError(f"Invalid JSON in {path}: {e}")

        if not isinstance(raw, dict):
            raise CurriculumError(f"Curriculum must be a JSON object, got {type(raw)}")

        return cls._parse(raw)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> Curriculum:
        """Load a curriculum from a dictionary (useful for testing)."""
        return cls._parse(raw)

    @classmethod
    def _parse(cls, raw: Dict[str, Any]) -> Curriculum:
        name = raw.get("name")
        if not name:
            raise CurriculumError("Curriculum must have a 'name' field")

        raw_modules = raw.get("modules", [])
        if not raw_modules:
            raise CurriculumError("Curriculum must define at least one module")

        registered = set(list_actions())
        modules = []
        seen_ids = set()
        for entry in raw_modules:
            if not isinstance(entry, dict):
                raise CurriculumError(f"Each module must be a mapping, got {type(entry)}")

            module_id = entry.get("id")
            if not module_id:
                raise CurriculumError(f"Module must have an 'id' field: {entry}")
            if module_id in seen_ids:
                raise CurriculumError(f"Duplicate module id '{module_id}'")
            seen_ids.add(module_id)

            if module_id not in registered:
                raise CurriculumError(
                    f"Module '{module_id}' has no registered lesson action. "
                    f"Available: {sorted(registered)}"
                )

            order = entry.get("order")
            if not isinstance(order, int) or isinstance(order, bool):
                raise CurriculumError(f"Module '{module_id}' must have an integer 'order'")

            modules.append(Module(
                id=module_id,
                order=order,
                title=entry.get("title", module_id),
                short_description=entry.get("short_description", ""),
                explanation=entry.get("explanation", ""),
                tip=entry.get("tip", ""),
                action=get_action(module_id),
            ))

        modules.sort(key=lambda m: m.order)
        orders = [m.order for m in modules]
        if orders != list(range(len(modules))):
            raise CurriculumError(
                f"Module orders must be exactly 0..{len(modules) - 1}, got {orders}"
            )

        return cls(
            name=name,
            description=raw.get("description", ""),
            version=raw.get("version", "1.0"),
            modules=modules,
        )
