"""
models.py
=========
Shared data models for the Detective Case Engine.

Contains:
  - Case / Clue / Suspect      : the narrative entities.
  - InterviewTurn              : one question/answer exchange with a stable id.
  - Interview / InterviewQuestion : legacy interview records (AppState.interviews).
  - GameState / AppState       : player progress and the aggregate root.
  - ClueAnalysis / SuspectAnalysis / CaseSolution : LLM-derived records.
  - GeneratedCase / GenerationParams : case generation input and output.
  - ChatMessage                : one role/content message sent to the model.

Every record is a frozen Pydantic model. Collections are tuples, so a record
handed out by the store cannot be mutated behind the reducer's back. Records
serialise with camelCase aliases (``caseId``, ``dateTime``, ``isLLMGenerated``)
so the persisted blob keeps the original AppState shape; Python code uses the
snake_case attribute names.
"""

from __future__ import annotations

import uuid
from typing import Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


Difficulty   = Literal["easy", "medium", "hard"]
ClueType     = Literal["physical", "testimonial", "digital"]
Relevance    = Literal["critical", "important", "minor"]
Language     = Literal["en", "th"]
MessageRole  = Literal["system", "user", "assistant"]

DIFFICULTIES: Tuple[str, ...] = ("easy", "medium", "hard")
CLUE_TYPES:   Tuple[str, ...] = ("physical", "testimonial", "digital")
RELEVANCES:   Tuple[str, ...] = ("critical", "important", "minor")


def new_id() -> str:
    """Fresh opaque identifier for a generated entity or interview turn."""
    return str(uuid.uuid4())


class Record(BaseModel):
    """Base for every domain record: immutable, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


# ---------------------------------------------------------------------------
# Narrative entities
# ---------------------------------------------------------------------------

class Case(Record):
    id:               str
    title:            str
    description:      str = ""
    summary:          str = ""
    difficulty:       Difficulty = "medium"
    solved:           bool = False
    location:         str = ""
    date_time:        str = ""
    image_url:        Optional[str] = None
    is_llm_generated: bool = Field(default=False, alias="isLLMGenerated")


class Clue(Record):
    id:          str
    case_id:     str
    title:       str
    description: str = ""
    location:    str = ""
    type:        ClueType = "physical"
    image_url:   Optional[str] = None
    discovered:  bool = False
    examined:    bool = False
    relevance:   Relevance = "important"


class Suspect(Record):
    id:          str
    case_id:     str
    name:        str
    description: str = ""
    background:  str = ""
    motive:      str = ""
    alibi:       str = ""
    image_url:   Optional[str] = None
    is_guilty:   bool = False
    interviewed: bool = False


# ---------------------------------------------------------------------------
# Interviews
# ---------------------------------------------------------------------------

class InterviewTurn(Record):
    """
    One exchange in a suspect conversation.

    A turn is created with ``pending=True`` and an empty answer before the model
    is called, then resolved by ``id`` once the answer arrives. Resolving by id
    rather than by position keeps the conversation ordered even when answers
    come back out of submission order.
    """

    id:        str = Field(default_factory=new_id)
    question:  str
    answer:    str = ""
    is_custom: bool = False
    pending:   bool = False


class InterviewQuestion(Record):
    id:       str
    question: str
    answer:   str = ""
    asked:    bool = False


class Interview(Record):
    id:         str
    suspect_id: str
    case_id:    str
    questions:  Tuple[InterviewQuestion, ...] = ()
    completed:  bool = False


# ---------------------------------------------------------------------------
# LLM-derived records
# ---------------------------------------------------------------------------

class SuspectConnection(Record):
    suspect_id:      str
    connection_type: str = "related"
    description:     str = ""


class ClueAnalysis(Record):
    summary:     str
    connections: Tuple[SuspectConnection, ...] = ()
    next_steps:  Tuple[str, ...] = ()


class ClueConnection(Record):
    clue_id:         str
    connection_type: str = "related"
    description:     str = ""


class SuspectAnalysis(Record):
    suspect_id:          str
    trustworthiness:     int = Field(default=50, ge=0, le=100)
    inconsistencies:     Tuple[str, ...] = ()
    connections:         Tuple[ClueConnection, ...] = ()
    suggested_questions: Tuple[str, ...] = ()


class CaseSolution(Record):
    solved:       bool
    culprit_id:   str
    reasoning:    str = ""
    evidence_ids: Tuple[str, ...] = ()
    narrative:    str = ""


# ---------------------------------------------------------------------------
# Case generation
# ---------------------------------------------------------------------------

class GenerationParams(Record):
    difficulty: Difficulty = "medium"
    theme:      Optional[str] = None
    location:   Optional[str] = None
    era:        Optional[str] = None
    language:   Language = "en"


class GeneratedCase(Record):
    """Transient bundle produced by the case generator, folded in atomically."""

    case:     Case
    clues:    Tuple[Clue, ...] = ()
    suspects: Tuple[Suspect, ...] = ()
    solution: str = ""

    @property
    def guilty_suspect(self) -> Optional[Suspect]:
        return next((s for s in self.suspects if s.is_guilty), None)


# ---------------------------------------------------------------------------
# Game state
# ---------------------------------------------------------------------------

class GameState(Record):
    """
    Player progress for the whole session.

    Attributes:
        active_case:          Case currently being investigated, if any.
        discovered_clues:     Clue ids in discovery order.
        examined_clues:       Clue ids in examination order.
        interviewed_suspects: Suspect ids in interview order.
        cases_solved:         Case ids in solve order.
        game_progress:        Derived score of the active case, 0–100.
        clue_analyses:        Cached analysis per clue id.
        suspect_interviews:   Conversation per suspect id.
        suspect_analyses:     Cached analysis per suspect id.
    """

    active_case:          Optional[str] = None
    discovered_clues:     Tuple[str, ...] = ()
    examined_clues:       Tuple[str, ...] = ()
    interviewed_suspects: Tuple[str, ...] = ()
    cases_solved:         Tuple[str, ...] = ()
    game_progress:        int = Field(default=0, ge=0, le=100)
    clue_analyses:        Dict[str, ClueAnalysis] = Field(default_factory=dict)
    suspect_interviews:   Dict[str, Tuple[InterviewTurn, ...]] = Field(default_factory=dict)
    suspect_analyses:     Dict[str, SuspectAnalysis] = Field(default_factory=dict)


class AppState(Record):
    """Aggregate root: the unit of persistence and of content replacement."""

    cases:      Tuple[Case, ...] = ()
    clues:      Tuple[Clue, ...] = ()
    suspects:   Tuple[Suspect, ...] = ()
    interviews: Tuple[Interview, ...] = ()
    game_state: GameState = Field(default_factory=GameState)

    def find_case(self, case_id: str) -> Optional[Case]:
        return next((c for c in self.cases if c.id == case_id), None)

    def find_clue(self, clue_id: str) -> Optional[Clue]:
        return next((c for c in self.clues if c.id == clue_id), None)

    def find_suspect(self, suspect_id: str) -> Optional[Suspect]:
        return next((s for s in self.suspects if s.id == suspect_id), None)

    def clues_for(self, case_id: str) -> Tuple[Clue, ...]:
        return tuple(c for c in self.clues if c.case_id == case_id)

    def suspects_for(self, case_id: str) -> Tuple[Suspect, ...]:
        return tuple(s for s in self.suspects if s.case_id == case_id)


# ---------------------------------------------------------------------------
# Completion messages
# ---------------------------------------------------------------------------

class ChatMessage(Record):
    role:    MessageRole
    content: str

    def as_payload(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}
