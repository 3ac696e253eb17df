"""
clue_analyzer.py
================
Clue Analyzer: asks the model what a clue means and maps the answer onto a
ClueAnalysis.

Two mapping paths:

  JSON path      The response held a JSON object. Connections name suspects
                 (``suspect`` / ``suspectName`` / ``name``); each name goes
                 through the EntityResolver and unresolvable names are dropped.
                 When ``connections`` is a prose string rather than a list,
                 the string is scanned for suspect names instead.

  Text fallback  No JSON could be recovered. The summary, suspect mentions and
                 next steps are scraped from the prose with section regexes.

Transport and format failures from the client are not absorbed here.

The logger name for this module is ``detective.clue_analyzer``.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Sequence

from completion import CompletionClient
from config import COMPLETION_CONFIG, GAME_CONFIG, MODEL_CONFIG
from entity_resolver import EntityResolver
from errors import ExtractionError
from extraction import Payload, as_dict_list, as_text, as_text_list, extract_json, first_present
from models import Case, Clue, ClueAnalysis, Suspect, SuspectConnection
from prompts import build_clue_analysis_messages

logger = logging.getLogger("detective.clue_analyzer")


DEFAULT_NEXT_STEP: Dict[str, str] = {
    "en": "Continue investigating",
    "th": "สืบสวนต่อไป",
}
NO_SUMMARY: Dict[str, str] = {
    "en": "No summary available",
    "th": "ไม่มีสรุป",
}
ANALYSIS_UNAVAILABLE: Dict[str, str] = {
    "en": "Analysis unavailable",
    "th": "ไม่สามารถวิเคราะห์ได้",
}

SUSPECT_NAME_KEYS     = ("suspect", "suspectName", "suspect_name", "name")
CONNECTION_TYPE_KEYS  = ("connectionType", "connection_type", "type")
NEXT_STEPS_PATHS      = ("nextSteps", "next_steps")

_SUMMARY_LINE     = re.compile(r"summary[:\s]+(.*?)(?:\n|$)", re.IGNORECASE)
_SIGNIFICANCE_LINE = re.compile(r"significance[:\s]+(.*?)(?:\n|$)", re.IGNORECASE)
_FIRST_SECTION    = re.compile(r"1\.([\s\S]*?)(?:2\.|$)")
_NEXT_STEPS       = re.compile(r"(?:3\.|next steps?)[:\s]+([\s\S]*?)(?:\n\n|$)", re.IGNORECASE)
_BULLET           = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


def _text(language: str, table: Dict[str, str]) -> str:
    return table.get(language, table["en"])


def split_bullets(block: str) -> List[str]:
    """One entry per non-blank line, with bullet or numbering markers removed."""
    items = []
    for line in block.splitlines():
        item = _BULLET.sub("", line).strip()
        if item:
            items.append(item)
    return items


# ---------------------------------------------------------------------------
# JSON path
# ---------------------------------------------------------------------------

def map_clue_analysis(data: Payload, suspects: Sequence[Suspect], language: str = "en") -> ClueAnalysis:
    resolver = EntityResolver.for_suspects(suspects)
    connections: List[SuspectConnection] = []

    raw_connections = data.get("connections")
    for item in as_dict_list(raw_connections):
        name = as_text(first_present(item, SUSPECT_NAME_KEYS))
        suspect_id = resolver.resolve(name)
        if suspect_id is None:
            logger.debug("Dropping connection to unknown suspect %r", name)
            continue
        connections.append(
            SuspectConnection(
                suspect_id=suspect_id,
                connection_type=as_text(first_present(item, CONNECTION_TYPE_KEYS), "related"),
                description=as_text(item.get("description")),
            )
        )

    if not connections and isinstance(raw_connections, str):
        connections = [
            SuspectConnection(
                suspect_id=mention.entity_id,
                connection_type="mentioned",
                description=raw_connections.strip(),
            )
            for mention in resolver.mentions_in(raw_connections)
        ]

    next_steps = as_text_list(first_present(data, NEXT_STEPS_PATHS))
    return ClueAnalysis(
        summary=as_text(data.get("summary"), _text(language, NO_SUMMARY)),
        connections=tuple(connections),
        next_steps=tuple(next_steps) or (_text(language, DEFAULT_NEXT_STEP),),
    )


# ---------------------------------------------------------------------------
# Text fallback
# ---------------------------------------------------------------------------

def _scrape_summary(text: str) -> Optional[str]:
    for pattern in (_SUMMARY_LINE, _SIGNIFICANCE_LINE, _FIRST_SECTION):
        match = pattern.search(text)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


def extract_clue_analysis_from_text(
    text: str,
    suspects: Sequence[Suspect],
    language: str = "en",
) -> ClueAnalysis:
    """
    Best-effort analysis from free text.

    Each suspect named in the text becomes a "mentioned" connection whose
    description is the surrounding excerpt (50 characters before the name,
    100 after).
    """
    resolver = EntityResolver.for_suspects(suspects)
    before = GAME_CONFIG.mention_context_before
    after = GAME_CONFIG.mention_context_after

    connections = tuple(
        SuspectConnection(
            suspect_id=mention.entity_id,
            connection_type="mentioned",
            description=text[max(0, mention.start - before):mention.end + after],
        )
        for mention in resolver.mentions_in(text)
    )

    next_steps: List[str] = []
    match = _NEXT_STEPS.search(text)
    if match:
        next_steps = split_bullets(match.group(1))

    return ClueAnalysis(
        summary=_scrape_summary(text) or _text(language, ANALYSIS_UNAVAILABLE),
        connections=connections,
        next_steps=tuple(next_steps) or (_text(language, DEFAULT_NEXT_STEP),),
    )


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------

class ClueAnalyzer:
    """Analyses one clue against the suspects of its case."""

    def __init__(self, client: CompletionClient) -> None:
        self.client = client

    def analyze(
        self,
        clue: Clue,
        suspects: Sequence[Suspect],
        case: Case,
        discovered_clues: Sequence[Clue] = (),
        language: str = "en",
    ) -> ClueAnalysis:
        logger.info("Analyzing clue %s (%r), language=%s", clue.id, clue.title, language)
        raw = self.client.complete(
            build_clue_analysis_messages(clue, suspects, case, discovered_clues, language),
            model=MODEL_CONFIG.default_model,
            temperature=COMPLETION_CONFIG.temperature,
            max_tokens=COMPLETION_CONFIG.analysis_max_tokens,
        )

        try:
            analysis = map_clue_analysis(extract_json(raw), suspects, language)
        except ExtractionError:
            logger.warning("Clue analysis was not JSON; scraping text for clue %s", clue.id)
            analysis = extract_clue_analysis_from_text(raw, suspects, language)

        logger.info(
            "Clue %s analysed: %d connections, %d next steps",
            clue.id,
            len(analysis.connections),
            len(analysis.next_steps),
        )
        return analysis
