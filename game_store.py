"""
game_store.py
=============
Game State Store: actions, the pure reducer, and a small observable holder.

    state' = game_reducer(state, action)

The reducer never mutates its input. Every branch returns a new AppState
built with ``model_copy(update=...)``; unchanged sub-records are shared
between the old and new state, which is safe because every record is frozen.

Tracking lists are append-only and deduplicated: discovering a clue twice
records its id once.

Interview turns are addressed by their stable id. A turn is started as a
pending placeholder before the model is called, then resolved or discarded
by id, so overlapping requests can never overwrite each other's answers.

GameStore holds the current state, applies dispatched actions and notifies
subscribers with ``(state, action)`` after every dispatch.

The logger name for this module is ``detective.game_store``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from case_data import initial_state
from config import PROGRESS_CONFIG
from models import (
    AppState,
    Case,
    Clue,
    ClueAnalysis,
    GameState,
    GeneratedCase,
    Interview,
    InterviewTurn,
    Suspect,
    SuspectAnalysis,
)
from scoring import calculate_progress

logger = logging.getLogger("detective.game_store")


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

class ActionType(str, Enum):
    ADD_CASE               = "ADD_CASE"
    ADD_CLUES              = "ADD_CLUES"
    ADD_SUSPECTS           = "ADD_SUSPECTS"
    ADD_GENERATED_CASE     = "ADD_GENERATED_CASE"
    ADD_INTERVIEW          = "ADD_INTERVIEW"
    SET_ACTIVE_CASE        = "SET_ACTIVE_CASE"
    DISCOVER_CLUE          = "DISCOVER_CLUE"
    EXAMINE_CLUE           = "EXAMINE_CLUE"
    INTERVIEW_SUSPECT      = "INTERVIEW_SUSPECT"
    SOLVE_CASE             = "SOLVE_CASE"
    RESET                  = "RESET"
    LOAD                   = "LOAD"
    SAVE_CLUE_ANALYSIS     = "SAVE_CLUE_ANALYSIS"
    SAVE_SUSPECT_ANALYSIS  = "SAVE_SUSPECT_ANALYSIS"
    SAVE_SUSPECT_INTERVIEW = "SAVE_SUSPECT_INTERVIEW"
    START_INTERVIEW_TURN   = "START_INTERVIEW_TURN"
    RESOLVE_INTERVIEW_TURN = "RESOLVE_INTERVIEW_TURN"
    DISCARD_INTERVIEW_TURN = "DISCARD_INTERVIEW_TURN"


@dataclass(frozen=True)
class Action:
    type:    ActionType
    payload: Any = None


def add_case(case: Case) -> Action:
    return Action(ActionType.ADD_CASE, case)


def add_clues(clues: Sequence[Clue]) -> Action:
    return Action(ActionType.ADD_CLUES, tuple(clues))


def add_suspects(suspects: Sequence[Suspect]) -> Action:
    return Action(ActionType.ADD_SUSPECTS, tuple(suspects))


def add_generated_case(generated: GeneratedCase) -> Action:
    return Action(ActionType.ADD_GENERATED_CASE, generated)


def add_interview(interview: Interview) -> Action:
    return Action(ActionType.ADD_INTERVIEW, interview)


def set_active_case(case_id: str) -> Action:
    return Action(ActionType.SET_ACTIVE_CASE, case_id)


def discover_clue(clue_id: str) -> Action:
    return Action(ActionType.DISCOVER_CLUE, clue_id)


def examine_clue(clue_id: str) -> Action:
    return Action(ActionType.EXAMINE_CLUE, clue_id)


def interview_suspect(suspect_id: str) -> Action:
    return Action(ActionType.INTERVIEW_SUSPECT, suspect_id)


def solve_case(case_id: str) -> Action:
    return Action(ActionType.SOLVE_CASE, case_id)


def reset() -> Action:
    return Action(ActionType.RESET)


def load(state: AppState) -> Action:
    return Action(ActionType.LOAD, state)


def save_clue_analysis(clue_id: str, analysis: ClueAnalysis) -> Action:
    return Action(ActionType.SAVE_CLUE_ANALYSIS, {"clue_id": clue_id, "analysis": analysis})


def save_suspect_analysis(analysis: SuspectAnalysis) -> Action:
    return Action(ActionType.SAVE_SUSPECT_ANALYSIS, analysis)


def save_suspect_interview(suspect_id: str, conversation: Sequence[InterviewTurn]) -> Action:
    return Action(
        ActionType.SAVE_SUSPECT_INTERVIEW,
        {"suspect_id": suspect_id, "conversation": tuple(conversation)},
    )


def start_interview_turn(suspect_id: str, turn: InterviewTurn) -> Action:
    return Action(ActionType.START_INTERVIEW_TURN, {"suspect_id": suspect_id, "turn": turn})


def resolve_interview_turn(suspect_id: str, turn_id: str, answer: str) -> Action:
    return Action(
        ActionType.RESOLVE_INTERVIEW_TURN,
        {"suspect_id": suspect_id, "turn_id": turn_id, "answer": answer},
    )


def discard_interview_turn(suspect_id: str, turn_id: str) -> Action:
    return Action(ActionType.DISCARD_INTERVIEW_TURN, {"suspect_id": suspect_id, "turn_id": turn_id})


# ---------------------------------------------------------------------------
# Reducer helpers
# ---------------------------------------------------------------------------

def _append_unique(ids: Tuple[str, ...], new_id: str) -> Tuple[str, ...]:
    return ids if new_id in ids else ids + (new_id,)


def _with_progress(state: AppState, game_state: GameState) -> GameState:
    """Recompute progress for the active case; a solved case stays at 100."""
    active = state.find_case(game_state.active_case) if game_state.active_case else None
    if active is not None and active.solved:
        progress = PROGRESS_CONFIG.solved_progress
    else:
        progress = calculate_progress(game_state, state.cases, state.clues, state.suspects)
    return game_state.model_copy(update={"game_progress": progress})


def _flag_clue(clues: Tuple[Clue, ...], clue_id: str, flag: str) -> Tuple[Clue, ...]:
    return tuple(c.model_copy(update={flag: True}) if c.id == clue_id else c for c in clues)


def _set_turns(state: AppState, suspect_id: str, turns: Tuple[InterviewTurn, ...]) -> AppState:
    interviews = dict(state.game_state.suspect_interviews)
    interviews[suspect_id] = turns
    return state.model_copy(
        update={"game_state": state.game_state.model_copy(update={"suspect_interviews": interviews})}
    )


def _turns(state: AppState, suspect_id: str) -> Tuple[InterviewTurn, ...]:
    return state.game_state.suspect_interviews.get(suspect_id, ())


# ---------------------------------------------------------------------------
# Reducer branches
# ---------------------------------------------------------------------------

def _add_case(state: AppState, case: Case) -> AppState:
    return state.model_copy(update={"cases": state.cases + (case,)})


def _add_clues(state: AppState, clues: Tuple[Clue, ...]) -> AppState:
    return state.model_copy(update={"clues": state.clues + tuple(clues)})


def _add_suspects(state: AppState, suspects: Tuple[Suspect, ...]) -> AppState:
    return state.model_copy(update={"suspects": state.suspects + tuple(suspects)})


def _add_generated_case(state: AppState, generated: GeneratedCase) -> AppState:
    return state.model_copy(
        update={
            "cases": state.cases + (generated.case,),
            "clues": state.clues + generated.clues,
            "suspects": state.suspects + generated.suspects,
        }
    )


def _add_interview(state: AppState, interview: Interview) -> AppState:
    return state.model_copy(update={"interviews": state.interviews + (interview,)})


def _set_active_case(state: AppState, case_id: str) -> AppState:
    game_state = state.game_state.model_copy(update={"active_case": case_id})
    return state.model_copy(update={"game_state": _with_progress(state, game_state)})


def _discover_clue(state: AppState, clue_id: str) -> AppState:
    updated = state.model_copy(update={"clues": _flag_clue(state.clues, clue_id, "discovered")})
    game_state = state.game_state.model_copy(
        update={"discovered_clues": _append_unique(state.game_state.discovered_clues, clue_id)}
    )
    return updated.model_copy(update={"game_state": _with_progress(updated, game_state)})


def _examine_clue(state: AppState, clue_id: str) -> AppState:
    updated = state.model_copy(update={"clues": _flag_clue(state.clues, clue_id, "examined")})
    game_state = state.game_state.model_copy(
        update={"examined_clues": _append_unique(state.game_state.examined_clues, clue_id)}
    )
    return updated.model_copy(update={"game_state": _with_progress(updated, game_state)})


def _interview_suspect(state: AppState, suspect_id: str) -> AppState:
    suspects = tuple(
        s.model_copy(update={"interviewed": True}) if s.id == suspect_id else s
        for s in state.suspects
    )
    updated = state.model_copy(update={"suspects": suspects})
    game_state = state.game_state.model_copy(
        update={"interviewed_suspects": _append_unique(state.game_state.interviewed_suspects, suspect_id)}
    )
    return updated.model_copy(update={"game_state": _with_progress(updated, game_state)})


def _solve_case(state: AppState, case_id: str) -> AppState:
    cases = tuple(c.model_copy(update={"solved": True}) if c.id == case_id else c for c in state.cases)
    game_state = state.game_state.model_copy(
        update={
            "cases_solved": _append_unique(state.game_state.cases_solved, case_id),
            "game_progress": PROGRESS_CONFIG.solved_progress,
        }
    )
    return state.model_copy(update={"cases": cases, "game_state": game_state})


def _reset(state: AppState, _payload: Any) -> AppState:
    return initial_state()


def _load(state: AppState, loaded: AppState) -> AppState:
    return loaded


def _save_clue_analysis(state: AppState, payload: Dict[str, Any]) -> AppState:
    analyses = dict(state.game_state.clue_analyses)
    analyses[payload["clue_id"]] = payload["analysis"]
    return state.model_copy(
        update={"game_state": state.game_state.model_copy(update={"clue_analyses": analyses})}
    )


def _save_suspect_analysis(state: AppState, analysis: SuspectAnalysis) -> AppState:
    analyses = dict(state.game_state.suspect_analyses)
    analyses[analysis.suspect_id] = analysis
    return state.model_copy(
        update={"game_state": state.game_state.model_copy(update={"suspect_analyses": analyses})}
    )


def _save_suspect_interview(state: AppState, payload: Dict[str, Any]) -> AppState:
    return _set_turns(state, payload["suspect_id"], tuple(payload["conversation"]))


def _start_interview_turn(state: AppState, payload: Dict[str, Any]) -> AppState:
    suspect_id = payload["suspect_id"]
    turn = payload["turn"].model_copy(update={"pending": True, "answer": ""})
    return _set_turns(state, suspect_id, _turns(state, suspect_id) + (turn,))


def _resolve_interview_turn(state: AppState, payload: Dict[str, Any]) -> AppState:
    suspect_id = payload["suspect_id"]
    turn_id = payload["turn_id"]
    turns = _turns(state, suspect_id)
    if not any(t.id == turn_id for t in turns):
        logger.warning("Resolve for unknown interview turn %s of suspect %s ignored", turn_id, suspect_id)
        return state
    resolved = tuple(
        t.model_copy(update={"answer": payload["answer"], "pending": False}) if t.id == turn_id else t
        for t in turns
    )
    return _set_turns(state, suspect_id, resolved)


def _discard_interview_turn(state: AppState, payload: Dict[str, Any]) -> AppState:
    suspect_id = payload["suspect_id"]
    turns = _turns(state, suspect_id)
    kept = tuple(t for t in turns if t.id != payload["turn_id"])
    if len(kept) == len(turns):
        return state
    return _set_turns(state, suspect_id, kept)


_HANDLERS: Dict[ActionType, Callable[[AppState, Any], AppState]] = {
    ActionType.ADD_CASE:               _add_case,
    ActionType.ADD_CLUES:              _add_clues,
    ActionType.ADD_SUSPECTS:           _add_suspects,
    ActionType.ADD_GENERATED_CASE:     _add_generated_case,
    ActionType.ADD_INTERVIEW:          _add_interview,
    ActionType.SET_ACTIVE_CASE:        _set_active_case,
    ActionType.DISCOVER_CLUE:          _discover_clue,
    ActionType.EXAMINE_CLUE:           _examine_clue,
    ActionType.INTERVIEW_SUSPECT:      _interview_suspect,
    ActionType.SOLVE_CASE:             _solve_case,
    ActionType.RESET:                  _reset,
    ActionType.LOAD:                   _load,
    ActionType.SAVE_CLUE_ANALYSIS:     _save_clue_analysis,
    ActionType.SAVE_SUSPECT_ANALYSIS:  _save_suspect_analysis,
    ActionType.SAVE_SUSPECT_INTERVIEW: _save_suspect_interview,
    ActionType.START_INTERVIEW_TURN:   _start_interview_turn,
    ActionType.RESOLVE_INTERVIEW_TURN: _resolve_interview_turn,
    ActionType.DISCARD_INTERVIEW_TURN: _discard_interview_turn,
}


def game_reducer(state: AppState, action: Action) -> AppState:
    """Pure transition function: never mutates ``state``."""
    handler = _HANDLERS.get(action.type)
    if handler is None:
        logger.warning("Unknown action type %r ignored", action.type)
        return state
    return handler(state, action.payload)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

Listener = Callable[[AppState, Action], None]


class GameStore:
    """
    Holds the current AppState and notifies subscribers after each dispatch.

    Usage:
        store = GameStore()
        unsubscribe = store.subscribe(lambda state, action: print(action.type))
        store.dispatch(discover_clue("clue-001-1"))
        unsubscribe()
    """

    def __init__(self, state: Optional[AppState] = None) -> None:
        self._state = state if state is not None else initial_state()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, action: Action) -> AppState:
        self._state = game_reducer(self._state, action)
        logger.debug(
            "Dispatched %s, progress=%d",
            action.type.value,
            self._state.game_state.game_progress,
        )
        for listener in list(self._listeners):
            listener(self._state, action)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
