# tests/test_scoring.py
from __future__ import annotations

import pytest

from models import Case, GameState
from scoring import calculate_progress, round_half_up


def _progress(state, **game_state):
    return calculate_progress(GameState(**game_state), state.cases, state.clues, state.suspects)


def test_no_active_case_is_zero(seed_state):
    assert _progress(seed_state) == 0


def test_unknown_active_case_is_zero(seed_state):
    assert _progress(seed_state, active_case="case-404", discovered_clues=("clue-001-1",)) == 0


def test_mixed_progress_on_case_001(seed_state):
    progress = _progress(
        seed_state,
        active_case="case-001",
        discovered_clues=("clue-001-1",),
        examined_clues=("clue-001-1",),
        interviewed_suspects=("suspect-001-1", "suspect-001-2"),
    )
    assert progress == 43


def test_counts_are_scoped_to_the_active_case(seed_state):
    progress = _progress(
        seed_state,
        active_case="case-001",
        discovered_clues=("clue-002-1", "clue-002-2", "clue-003-1"),
        interviewed_suspects=("suspect-002-1",),
    )
    assert progress == 0


def test_everything_done_is_capped_at_99(seed_state):
    clues = [c.id for c in seed_state.clues_for("case-001")]
    suspects = [s.id for s in seed_state.suspects_for("case-001")]
    progress = _progress(
        seed_state,
        active_case="case-001",
        discovered_clues=tuple(clues),
        examined_clues=tuple(clues),
        interviewed_suspects=tuple(suspects),
    )
    assert progress == 99


def test_case_without_clues_or_suspects_contributes_zero():
    cases = [Case(id="empty", title="Empty")]
    assert calculate_progress(GameState(active_case="empty"), cases, [], []) == 0


def test_half_rounds_up():
    assert round(2.5) == 2
    assert round_half_up(2.5) == 3
    assert round_half_up(22.5) == 23
    assert round_half_up(0.5) == 1
    assert round_half_up(42.49) == 42


@pytest.mark.parametrize("steps", [1, 2, 3])
def test_progress_grows_with_each_discovery(seed_state, steps):
    clues = tuple(c.id for c in seed_state.clues_for("case-001"))
    before = _progress(seed_state, active_case="case-001", discovered_clues=clues[: steps - 1])
    after = _progress(seed_state, active_case="case-001", discovered_clues=clues[:steps])
    assert after > before
