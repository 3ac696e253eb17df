"""
entity_resolver.py
==================
Fuzzy resolution of names mentioned in model output back to entity ids.

Models refer to suspects and clues by name ("Dr. Thompson", "the glass
cutter"), never by id. Each mapper builds one EntityResolver per analysis call
from the known entities and asks it to resolve a mention or to find every
entity named inside a block of free text.

Matching is case-insensitive. A mention resolves to an entity when the names
are equal, or when either one contains the other. Candidates are tried in
insertion order, so the first suspect listed wins a tie.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from models import Clue, Suspect


@dataclass(frozen=True)
class Candidate:
    entity_id: str
    name: str

    @property
    def key(self) -> str:
        return self.name.strip().lower()


@dataclass(frozen=True)
class Mention:
    """An entity name found inside free text, with its first position."""

    entity_id: str
    name: str
    start: int
    end: int


def names_match(mention: str, name: str) -> bool:
    """
    Bidirectional, case-insensitive substring match.

    Blank strings never match (the empty string is a substring of everything).

    Examples:
        >>> names_match("Thompson", "Dr. Harold Thompson")
        True
        >>> names_match("Dr. Harold Thompson, the curator", "Dr. Harold Thompson")
        True
        >>> names_match("", "James Miller")
        False
    """
    a = mention.strip().lower()
    b = name.strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


def find_mentions(text: str, candidates: Sequence[Candidate]) -> List[Mention]:
    """Every candidate whose name occurs in ``text``, in candidate order."""
    haystack = text.lower()
    found: List[Mention] = []
    for candidate in candidates:
        if not candidate.key:
            continue
        index = haystack.find(candidate.key)
        if index != -1:
            found.append(
                Mention(candidate.entity_id, candidate.name, index, index + len(candidate.key))
            )
    return found


class EntityResolver:
    """
    Name → id lookup table built once per analysis call.

    The table is injective: when two entities share a name, the first one
    listed keeps it and the duplicate is ignored.
    """

    def __init__(self, entities: Iterable[Tuple[str, str]]) -> None:
        self._by_name: Dict[str, Candidate] = {}
        self._ids: Dict[str, Candidate] = {}
        for entity_id, name in entities:
            candidate = Candidate(entity_id, name)
            if not candidate.key or candidate.key in self._by_name:
                continue
            self._by_name[candidate.key] = candidate
            self._ids[entity_id] = candidate

    @classmethod
    def for_suspects(cls, suspects: Iterable[Suspect]) -> "EntityResolver":
        return cls((s.id, s.name) for s in suspects)

    @classmethod
    def for_clues(cls, clues: Iterable[Clue]) -> "EntityResolver":
        return cls((c.id, c.title) for c in clues)

    @property
    def candidates(self) -> List[Candidate]:
        return list(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)

    def resolve(self, mention: Optional[str]) -> Optional[str]:
        """
        Resolve a single mention to an entity id.

        Tries, in order: an exact id, an exact name, then the bidirectional
        substring match. Returns None when nothing matches.
        """
        if not mention or not mention.strip():
            return None
        if mention in self._ids:
            return mention

        key = mention.strip().lower()
        exact = self._by_name.get(key)
        if exact is not None:
            return exact.entity_id

        for candidate in self._by_name.values():
            if names_match(key, candidate.key):
                return candidate.entity_id
        return None

    def mentions_in(self, text: Optional[str]) -> List[Mention]:
        if not text:
            return []
        return find_mentions(text, self.candidates)

    def name_of(self, entity_id: str) -> Optional[str]:
        candidate = self._ids.get(entity_id)
        return candidate.name if candidate else None
