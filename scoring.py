"""
scoring.py
==========
Deterministic, side-effect-free progress calculation.

Extracted from the reducer so it can be unit-tested independently and
adjusted by changing ProgressConfig values in config.py without touching
any store or engine code.
"""

from __future__ import annotations

import math
from typing import Sequence

from config import PROGRESS_CONFIG
from models import Case, Clue, GameState, Suspect


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def calculate_progress(
    game_state: GameState,
    cases:      Sequence[Case],
    clues:      Sequence[Clue],
    suspects:   Sequence[Suspect],
) -> int:
    """
    Completion score of the active case in the range [0, 99].

    Weighted components, each counted over the active case only:
        discovered clues   / clues of the case    × discovery_weight   (default: 0.30)
        examined clues     / clues of the case    × examination_weight (default: 0.40)
        interviewed suspects / suspects of the case × interview_weight (default: 0.30)

    A component whose denominator is zero contributes 0. The weighted sum is
    scaled to 100, rounded half-up and capped at in_progress_cap (default: 99);
    only the solve transition sets 100.

    Args:
        game_state: Tracking lists and the active case id.
        cases:      All known cases.
        clues:      All known clues.
        suspects:   All known suspects.

    Returns:
        Integer progress; 0 when there is no active case or it is unknown.

    Examples:
        case-001 (3 clues, 3 suspects), 1 discovered, 1 examined, 2 interviewed:
            (1/3 × 0.3 + 1/3 × 0.4 + 2/3 × 0.3) × 100 = 43.33 → 43
    """
    cfg = PROGRESS_CONFIG

    case_id = game_state.active_case
    if not case_id or not any(c.id == case_id for c in cases):
        return 0

    case_clues    = [c.id for c in clues if c.case_id == case_id]
    case_suspects = [s.id for s in suspects if s.case_id == case_id]

    discovered  = set(game_state.discovered_clues)
    examined    = set(game_state.examined_clues)
    interviewed = set(game_state.interviewed_suspects)

    total = 0.0
    if case_clues:
        total += sum(1 for cid in case_clues if cid in discovered) / len(case_clues) * cfg.discovery_weight
        total += sum(1 for cid in case_clues if cid in examined) / len(case_clues) * cfg.examination_weight
    if case_suspects:
        total += sum(1 for sid in case_suspects if sid in interviewed) / len(case_suspects) * cfg.interview_weight

    return min(round_half_up(total * 100), cfg.in_progress_cap)
