"""Immutable advisor registry with identifier normalization."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Iterable, Iterator

from advisory_board.personas import PERSONAS, PersonaRecord

_SEPARATORS = re.compile(r"[\s_\-]+")


class AdvisorNotFound(LookupError):
    """Raised when an advisor identifier matches no registered persona."""

    def __init__(self, supplied_id: str):
        self.supplied_id = supplied_id
        super().__init__(f"Unknown advisor: {supplied_id}")


def normalize_advisor_id(raw: object) -> str:
    """Fold case and unify separators: 'Tim Cook', 'tim-cook' -> 'tim_cook'."""
    text = raw if isinstance(raw, str) else str(raw)
    return _SEPARATORS.sub("_", text.strip().casefold()).strip("_")


def display_advisor_id(raw: object) -> str:
    text = raw if isinstance(raw, str) else str(raw)
    return " ".join(part for part in _SEPARATORS.split(text) if part).upper()


class PersonaRegistry:
    def __init__(self, personas: Iterable[PersonaRecord]):
        ordered = tuple(personas)
        by_id: dict[str, PersonaRecord] = {}
        for persona in ordered:
            if normalize_advisor_id(persona.id) != persona.id:
                raise ValueError(f"Persona id is not canonical: {persona.id!r}")
            if persona.id in by_id:
                raise ValueError(f"Duplicate persona id: {persona.id!r}")
            by_id[persona.id] = persona

        self._ordered = ordered
        self._by_id = MappingProxyType(by_id)

    def normalize(self, raw_id: object) -> str:
        return normalize_advisor_id(raw_id)

    def get(self, advisor_id: object) -> PersonaRecord | None:
        return self._by_id.get(normalize_advisor_id(advisor_id))

    def lookup(self, advisor_id: object) -> PersonaRecord:
        persona = self.get(advisor_id)
        if persona is None:
            raise AdvisorNotFound(str(advisor_id))
        return persona

    def list_all(self) -> tuple[PersonaRecord, ...]:
        return self._ordered

    def ids(self) -> tuple[str, ...]:
        return tuple(persona.id for persona in self._ordered)

    def __contains__(self, advisor_id: object) -> bool:
        return self.get(advisor_id) is not None

    def __iter__(self) -> Iterator[PersonaRecord]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)


def default_registry() -> PersonaRegistry:
    return PersonaRegistry(PERSONAS)
