"""
case_solver.py
==============
Case Solver: adjudicates the player's accusation.

The verdict needs two independent signals to agree:
  1. the model says the solution is correct (``solved`` / ``correct`` /
     ``isCorrect`` / ``is_correct``), and
  2. the accused id equals the stored guilty suspect's id.

So a model that hallucinates "correct" for the wrong suspect cannot solve
the case, and neither can a right guess the model rejects.

Input is validated before any model call. When the reply cannot be parsed,
the verdict falls back to the ground-truth check alone with a templated
narrative. A parsed reply without a narrative keeps its verdict and only
borrows the template text.

The logger name for this module is ``detective.case_solver``.
"""

from __future__ import annotations

import logging
from typing import Dict, Sequence

from completion import CompletionClient
from config import COMPLETION_CONFIG, MODEL_CONFIG
from errors import CaseValidationError, ExtractionError
from extraction import any_affirmative, as_text, extract_json, first_present
from models import Case, CaseSolution, Clue, Suspect
from prompts import build_solution_messages

logger = logging.getLogger("detective.case_solver")


VERDICT_KEYS   = ("solved", "correct", "isCorrect", "is_correct")
NARRATIVE_KEYS = ("narrative", "explanation", "description", "feedback")

FALLBACK_NARRATIVES: Dict[str, Dict[bool, str]] = {
    "en": {
        True: (
            "Your analysis is correct! You have identified the true culprit and provided "
            "reasonable logic. The evidence you selected supports your conclusion well. "
            "You have successfully solved this case!"
        ),
        False: (
            "Your analysis has interesting points, but isn't entirely correct. The suspect "
            "you've chosen is not the actual culprit. Try reviewing the evidence again and "
            "reconsider the other suspects."
        ),
    },
    "th": {
        True: (
            "การวิเคราะห์ของคุณถูกต้อง! คุณได้ระบุผู้กระทำผิดที่แท้จริงและมีเหตุผลที่สมเหตุสมผล "
            "หลักฐานที่คุณเลือกสนับสนุนข้อสรุปของคุณได้ดี คุณได้แก้คดีนี้สำเร็จแล้ว!"
        ),
        False: (
            "การวิเคราะห์ของคุณมีจุดที่น่าสนใจ แต่ยังไม่ถูกต้องทั้งหมด "
            "ผู้ต้องสงสัยที่คุณเลือกไม่ใช่ผู้กระทำผิดที่แท้จริง "
            "ลองตรวจสอบหลักฐานและพิจารณาผู้ต้องสงสัยคนอื่นๆ อีกครั้ง"
        ),
    },
}


def fallback_narrative(correct: bool, language: str = "en") -> str:
    return FALLBACK_NARRATIVES.get(language, FALLBACK_NARRATIVES["en"])[correct]


class CaseSolver:
    """Adjudicates solve attempts with the preview model."""

    def __init__(self, client: CompletionClient) -> None:
        self.client = client

    def evaluate(
        self,
        case: Case,
        suspects: Sequence[Suspect],
        clues: Sequence[Clue],
        accused_id: str,
        evidence_ids: Sequence[str],
        reasoning: str,
        language: str = "en",
    ) -> CaseSolution:
        """
        Judge an accusation.

        Args:
            case:         The case being solved.
            suspects:     All suspects of the case.
            clues:        Clues available to the player.
            accused_id:   Id of the suspect the player accuses.
            evidence_ids: Ids of the clues the player cites.
            reasoning:    The player's explanation, echoed into the result.
            language:     "en" or "th".

        Returns:
            CaseSolution whose ``solved`` is true only when the model agrees
            and the accused is the stored guilty suspect.

        Raises:
            CaseValidationError: unknown accused id, no guilty suspect in the
                case, or no cited evidence among ``clues``. Raised before
                any model call.
        """
        accused = next((s for s in suspects if s.id == accused_id), None)
        if accused is None:
            raise CaseValidationError(f"Accused suspect not found: {accused_id}")

        guilty = next((s for s in suspects if s.is_guilty), None)
        if guilty is None:
            raise CaseValidationError(f"No guilty suspect found in case {case.id}")

        wanted = set(evidence_ids)
        evidence = [c for c in clues if c.id in wanted]
        if not evidence:
            raise CaseValidationError("No evidence selected")

        correct = accused.id == guilty.id
        logger.info(
            "Adjudicating case %s: accused=%s, evidence=%d, correct_suspect=%s",
            case.id,
            accused.id,
            len(evidence),
            correct,
        )

        raw = self.client.complete(
            build_solution_messages(case, suspects, clues, accused, guilty, evidence, reasoning, language),
            model=MODEL_CONFIG.preview_model,
            temperature=COMPLETION_CONFIG.temperature,
            max_tokens=COMPLETION_CONFIG.solution_max_tokens,
        )

        try:
            data = extract_json(raw)
        except ExtractionError:
            logger.warning("Solution verdict was not JSON; using templated narrative")
            return self._solution(correct, accused_id, reasoning, evidence_ids, fallback_narrative(correct, language))

        model_verdict = any_affirmative(data, VERDICT_KEYS)
        solved = correct and model_verdict
        narrative = as_text(first_present(data, NARRATIVE_KEYS))
        if not narrative:
            logger.warning("Solution verdict had no narrative; using templated narrative")
            narrative = fallback_narrative(solved, language)

        logger.info("Verdict for case %s: model=%s, solved=%s", case.id, model_verdict, solved)
        return self._solution(solved, accused_id, reasoning, evidence_ids, narrative)

    @staticmethod
    def _solution(
        solved: bool,
        accused_id: str,
        reasoning: str,
        evidence_ids: Sequence[str],
        narrative: str,
    ) -> CaseSolution:
        return CaseSolution(
            solved=solved,
            culprit_id=accused_id,
            reasoning=reasoning,
            evidence_ids=tuple(evidence_ids),
            narrative=narrative,
        )
