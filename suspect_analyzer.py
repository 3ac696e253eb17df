"""
suspect_analyzer.py
===================
Suspect Analyzer and Interviewer.

  SuspectAnalyzer.analyze(...)                    → SuspectAnalysis
  SuspectAnalyzer.process_interview_question(...) → str (in-character answer)

Analysis follows the same two-path shape as the clue analyzer: a JSON path
that resolves clue titles through the EntityResolver, and a text fallback
that scrapes trustworthiness, inconsistencies, mentioned clues and question
lines from prose. Trustworthiness is always an integer in [0, 100]; anything
non-numeric becomes 50.

Interviews are plain role-play. The model is told privately whether the
suspect is guilty and is forbidden from confirming or denying it. The
answer text is returned as-is apart from surrounding whitespace.

The logger name for this module is ``detective.suspect_analyzer``.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Sequence, Tuple

from clue_analyzer import split_bullets
from completion import CompletionClient
from config import COMPLETION_CONFIG, MODEL_CONFIG
from entity_resolver import EntityResolver
from errors import ExtractionError
from extraction import (
    Payload,
    as_dict_list,
    as_text,
    as_text_list,
    coerce_score,
    extract_json,
    first_present,
)
from models import Case, Clue, ClueConnection, InterviewTurn, Suspect, SuspectAnalysis
from prompts import InterviewRecord, build_interview_messages, build_suspect_analysis_messages

logger = logging.getLogger("detective.suspect_analyzer")


DEFAULT_QUESTIONS: Dict[str, Tuple[str, ...]] = {
    "en": (
        "Can you provide more details about your alibi?",
        "Where were you at the time of the incident?",
        "Do you know any of the other suspects?",
    ),
    "th": (
        "คุณช่วยอธิบายรายละเอียดเพิ่มเติมเกี่ยวกับข้ออ้างที่อยู่ของคุณได้ไหม?",
        "คุณอยู่ที่ไหนในช่วงเวลาที่เกิดเหตุ?",
        "คุณรู้จักผู้ต้องสงสัยคนอื่นๆ หรือไม่?",
    ),
}

CLUE_NAME_KEYS        = ("clue", "clueTitle", "clue_title", "title", "clueId", "clue_id")
CONNECTION_TYPE_KEYS  = ("connectionType", "connection_type", "type")
QUESTIONS_PATHS       = ("suggestedQuestions", "suggested_questions", "questions")
INCONSISTENCIES_PATHS = ("inconsistencies",)

_TRUSTWORTHINESS   = re.compile(r"trustworthiness[^\d\n]{0,20}(\d+)", re.IGNORECASE)
_INCONSISTENCIES   = re.compile(
    r"inconsistenc(?:y|ies)[:\s]+([\s\S]*?)(?=\n\n|connections|$)", re.IGNORECASE
)
_QUESTIONS_SECTION = re.compile(r"questions[:\s]+([\s\S]*?)(?=\n\n|$)", re.IGNORECASE)


def _default_questions(language: str) -> Tuple[str, ...]:
    return DEFAULT_QUESTIONS.get(language, DEFAULT_QUESTIONS["en"])


def connection_text(title: str, language: str = "en") -> str:
    if language == "th":
        return f"ผู้ต้องสงสัยอาจเกี่ยวข้องกับ{title}"
    return f"The suspect may be connected to the {title}"


# ---------------------------------------------------------------------------
# JSON path
# ---------------------------------------------------------------------------

def map_suspect_analysis(
    data: Payload,
    clues: Sequence[Clue],
    suspect_id: str,
    language: str = "en",
) -> SuspectAnalysis:
    resolver = EntityResolver.for_clues(clues)

    connections: List[ClueConnection] = []
    for item in as_dict_list(data.get("connections")):
        mention = as_text(first_present(item, CLUE_NAME_KEYS))
        clue_id = resolver.resolve(mention)
        if clue_id is None:
            logger.debug("Dropping connection to unknown clue %r", mention)
            continue
        connections.append(
            ClueConnection(
                clue_id=clue_id,
                connection_type=as_text(first_present(item, CONNECTION_TYPE_KEYS), "related"),
                description=as_text(item.get("description")),
            )
        )

    questions = as_text_list(first_present(data, QUESTIONS_PATHS))
    return SuspectAnalysis(
        suspect_id=suspect_id,
        trustworthiness=coerce_score(data.get("trustworthiness")),
        inconsistencies=tuple(as_text_list(first_present(data, INCONSISTENCIES_PATHS))),
        connections=tuple(connections),
        suggested_questions=tuple(questions) or _default_questions(language),
    )


# ---------------------------------------------------------------------------
# Text fallback
# ---------------------------------------------------------------------------

def extract_suspect_analysis_from_text(
    text: str,
    clues: Sequence[Clue],
    suspect_id: str,
    language: str = "en",
) -> SuspectAnalysis:
    match = _TRUSTWORTHINESS.search(text)
    trustworthiness = coerce_score(match.group(1) if match else None)

    inconsistencies: List[str] = []
    match = _INCONSISTENCIES.search(text)
    if match:
        inconsistencies = split_bullets(match.group(1))

    resolver = EntityResolver.for_clues(clues)
    connections = tuple(
        ClueConnection(
            clue_id=mention.entity_id,
            connection_type="mentioned",
            description=connection_text(mention.name, language),
        )
        for mention in resolver.mentions_in(text)
    )

    questions: List[str] = []
    match = _QUESTIONS_SECTION.search(text)
    if match:
        questions = [line for line in split_bullets(match.group(1)) if "?" in line]

    return SuspectAnalysis(
        suspect_id=suspect_id,
        trustworthiness=trustworthiness,
        inconsistencies=tuple(inconsistencies),
        connections=connections,
        suggested_questions=tuple(questions) or _default_questions(language),
    )


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------

class SuspectAnalyzer:
    """Profiles suspects and voices them in interviews."""

    def __init__(self, client: CompletionClient) -> None:
        self.client = client

    def analyze(
        self,
        suspect: Suspect,
        clues: Sequence[Clue],
        case: Case,
        interview: InterviewRecord = None,
        language: str = "en",
    ) -> SuspectAnalysis:
        """
        Assess one suspect against the discovered clues.

        Args:
            suspect:   The suspect to profile.
            clues:     Clues the player has discovered (resolution targets).
            case:      The case the suspect belongs to.
            interview: Prior conversation, either a tuple of InterviewTurn or
                       a legacy Interview record. Optional.
            language:  "en" or "th".
        """
        logger.info("Analyzing suspect %s (%r), language=%s", suspect.id, suspect.name, language)
        raw = self.client.complete(
            build_suspect_analysis_messages(suspect, clues, case, interview, language),
            model=MODEL_CONFIG.default_model,
            temperature=COMPLETION_CONFIG.temperature,
            max_tokens=COMPLETION_CONFIG.analysis_max_tokens,
        )

        try:
            analysis = map_suspect_analysis(extract_json(raw), clues, suspect.id, language)
        except ExtractionError:
            logger.warning("Suspect analysis was not JSON; scraping text for suspect %s", suspect.id)
            analysis = extract_suspect_analysis_from_text(raw, clues, suspect.id, language)

        logger.info(
            "Suspect %s analysed: trustworthiness=%d, connections=%d",
            suspect.id,
            analysis.trustworthiness,
            len(analysis.connections),
        )
        return analysis

    def process_interview_question(
        self,
        question: str,
        suspect: Suspect,
        clues: Sequence[Clue],
        case: Case,
        previous_questions: Sequence[InterviewTurn] = (),
        language: str = "en",
    ) -> str:
        logger.info(
            "Interviewing %s (prior exchanges: %d): %r",
            suspect.name,
            sum(1 for t in previous_questions if not t.pending),
            question[:80],
        )
        answer = self.client.complete(
            build_interview_messages(question, suspect, clues, case, previous_questions, language),
            model=MODEL_CONFIG.default_model,
            temperature=COMPLETION_CONFIG.temperature,
            max_tokens=COMPLETION_CONFIG.interview_max_tokens,
        )
        return answer.strip()
