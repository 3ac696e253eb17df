"""
case_generator.py
=================
Case Generator: turns one completion into a fully-typed GeneratedCase.

Flow:
    GenerationParams -> prompts -> CompletionClient -> extract_json -> map

Models disagree about JSON shape (``case`` vs ``case_details``, ``clues`` vs
``evidence``, ``relevance`` vs ``significance``), so every field is read through
an ordered list of accessor paths and normalised onto the closed vocabularies
of the domain model.

Exactly one suspect comes out guilty. The guilty suspect is chosen by the
first rule that matches:
    1. a culprit name in the solution block, resolved against suspect names
    2. a suspect the payload itself flags as guilty
    3. the first suspect named in the solution reasoning
    4. the first suspect
Every other suspect is forced to not guilty.

Outside production a failed generation falls back to a built-in sample case,
mapped through the same code, so the game stays playable without a model.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, List, Optional

from case_data import FALLBACK_CASE_PAYLOAD
from completion import CompletionClient
from config import COMPLETION_CONFIG, GAME_CONFIG, MODEL_CONFIG, runtime_config
from entity_resolver import EntityResolver
from errors import CompletionError, ExtractionError
from extraction import (
    Payload,
    as_dict_list,
    as_text,
    extract_json,
    first_present,
    is_affirmative,
)
from models import (
    CLUE_TYPES,
    DIFFICULTIES,
    RELEVANCES,
    Case,
    Clue,
    GeneratedCase,
    GenerationParams,
    Suspect,
    new_id,
)
from prompts import build_case_generation_messages

logger = logging.getLogger("detective.case_generator")


class NoSuspectsError(ExtractionError):
    """The payload parsed but described nobody who could be guilty."""


# ---------------------------------------------------------------------------
# Accessor paths, first match wins
# ---------------------------------------------------------------------------

TITLE_PATHS       = ("case.title", "case_details.title", "title")
DESCRIPTION_PATHS = ("case.description", "case_details.synopsis", "description")
SUMMARY_PATHS     = ("case.summary", "case_details.synopsis", "summary")
LOCATION_PATHS    = ("case.location", "case_details.location", "location")
DATE_TIME_PATHS   = ("case.dateTime", "case.date_time", "dateTime")
DIFFICULTY_PATHS  = ("case.difficulty", "case_details.difficulty", "difficulty")
CLUE_LIST_PATHS   = ("clues", "evidence")
SUSPECT_LIST_PATHS = ("suspects", "characters")

CLUE_TITLE_PATHS    = ("title", "item", "name")
CLUE_LOCATION_PATHS = ("location", "position_found")
RELEVANCE_PATHS     = ("relevance", "significance")

CULPRIT_PATHS = (
    "solution.culprit",
    "solution.culprit_name",
    "solution.culpritName",
    "solution.guilty_suspect",
    "solution.guiltySuspect",
    "culprit",
)
SOLUTION_TEXT_PATHS = ("solution.reasoning", "solution.explanation", "solution")
GUILTY_FLAG_KEYS    = ("isGuilty", "is_guilty", "guilty")

_RELEVANCE_ALIASES = {
    "high": "critical",
    "medium": "important",
    "low": "minor",
}


def normalize_clue_type(value: Any) -> str:
    text = as_text(value).lower()
    return text if text in CLUE_TYPES else "physical"


def normalize_relevance(value: Any) -> str:
    text = as_text(value).lower()
    text = _RELEVANCE_ALIASES.get(text, text)
    return text if text in RELEVANCES else "important"


def normalize_difficulty(value: Any, requested: Optional[str] = None) -> str:
    for candidate in (as_text(value).lower(), requested):
        if candidate in DIFFICULTIES:
            return candidate
    return "medium"


def _date_time(data: Payload) -> str:
    explicit = as_text(first_present(data, DATE_TIME_PATHS[:2]))
    if explicit:
        return explicit

    date = as_text(first_present(data, ("case_details.date",)))
    time = as_text(first_present(data, ("case_details.time",)))
    if date:
        return f"{date} {time}".strip()

    top_level = as_text(first_present(data, DATE_TIME_PATHS[2:]))
    return top_level or datetime.now().isoformat(timespec="seconds")


def _solution_text(data: Payload) -> str:
    value = first_present(data, SOLUTION_TEXT_PATHS)
    return as_text(value)


def _payload_flags_guilty(item: Payload) -> bool:
    return any(is_affirmative(item.get(key)) for key in GUILTY_FLAG_KEYS)


# ---------------------------------------------------------------------------
# Guilty resolution
# ---------------------------------------------------------------------------

def resolve_guilty_index(
    data: Payload,
    suspect_payloads: List[Payload],
    names: List[str],
    solution_text: str,
) -> int:
    """
    Index of the one suspect who will be marked guilty.

    Args:
        data:             The whole payload (for the solution block).
        suspect_payloads: Raw suspect items, aligned with ``names``.
        names:            Mapped suspect names.
        solution_text:    The solution reasoning, scanned for names last.
    """
    resolver = EntityResolver((str(i), name) for i, name in enumerate(names))

    culprit = as_text(first_present(data, CULPRIT_PATHS))
    if culprit:
        resolved = resolver.resolve(culprit)
        if resolved is not None:
            logger.debug("Guilty suspect from culprit field: %r", culprit)
            return int(resolved)
        logger.debug("Culprit %r does not match any suspect name", culprit)

    for index, item in enumerate(suspect_payloads):
        if _payload_flags_guilty(item):
            logger.debug("Guilty suspect from payload flag: index=%d", index)
            return index

    mentions = resolver.mentions_in(solution_text)
    if mentions:
        logger.debug("Guilty suspect from solution text: %r", mentions[0].name)
        return int(mentions[0].entity_id)

    logger.warning("No guilt signal in generated case; defaulting to the first suspect")
    return 0


# ---------------------------------------------------------------------------
# Payload -> GeneratedCase
# ---------------------------------------------------------------------------

def map_generated_case(data: Payload, params: GenerationParams) -> GeneratedCase:
    """
    Map an extracted payload onto a GeneratedCase.

    Raises:
        NoSuspectsError: when the payload lists no suspects.
    """
    suspect_payloads = as_dict_list(first_present(data, SUSPECT_LIST_PATHS, []))
    if not suspect_payloads:
        raise NoSuspectsError("Generated case has no suspects")

    case_id = new_id()
    image_url = GAME_CONFIG.generated_image_url

    case = Case(
        id=case_id,
        title=as_text(first_present(data, TITLE_PATHS), "Untitled Case"),
        description=as_text(first_present(data, DESCRIPTION_PATHS)),
        summary=as_text(first_present(data, SUMMARY_PATHS)),
        location=as_text(first_present(data, LOCATION_PATHS)),
        date_time=_date_time(data),
        difficulty=normalize_difficulty(first_present(data, DIFFICULTY_PATHS), params.difficulty),
        image_url=image_url,
        is_llm_generated=True,
    )

    clues = tuple(
        Clue(
            id=new_id(),
            case_id=case_id,
            title=as_text(first_present(item, CLUE_TITLE_PATHS), "Untitled Clue"),
            description=as_text(item.get("description")),
            location=as_text(first_present(item, CLUE_LOCATION_PATHS)),
            type=normalize_clue_type(item.get("type")),
            relevance=normalize_relevance(first_present(item, RELEVANCE_PATHS)),
            image_url=image_url,
        )
        for item in as_dict_list(first_present(data, CLUE_LIST_PATHS, []))
    )

    names = [as_text(item.get("name"), "Unknown Suspect") for item in suspect_payloads]
    solution = _solution_text(data)
    guilty_index = resolve_guilty_index(data, suspect_payloads, names, solution)

    suspects = tuple(
        Suspect(
            id=new_id(),
            case_id=case_id,
            name=name,
            description=as_text(item.get("description")),
            background=as_text(item.get("background")),
            motive=as_text(item.get("motive")),
            alibi=as_text(item.get("alibi")),
            image_url=image_url,
            is_guilty=index == guilty_index,
        )
        for index, (item, name) in enumerate(zip(suspect_payloads, names))
    )

    return GeneratedCase(case=case, clues=clues, suspects=suspects, solution=solution)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

class CaseGenerator:
    """
    Generates a new case with the preview model.

    Args:
        client:         Completion client.
        allow_fallback: Serve the sample case when generation fails. Defaults
                        to True everywhere except production.
    """

    def __init__(self, client: CompletionClient, allow_fallback: Optional[bool] = None) -> None:
        self.client = client
        if allow_fallback is None:
            allow_fallback = not runtime_config().is_production
        self.allow_fallback = allow_fallback

    def generate(self, params: Optional[GenerationParams] = None) -> GeneratedCase:
        params = params or GenerationParams()
        logger.info(
            "Generating case: difficulty=%s, theme=%r, location=%r, era=%r, language=%s",
            params.difficulty,
            params.theme,
            params.location,
            params.era,
            params.language,
        )

        try:
            raw = self.client.complete(
                build_case_generation_messages(params),
                model=MODEL_CONFIG.preview_model,
                temperature=COMPLETION_CONFIG.temperature,
                max_tokens=COMPLETION_CONFIG.generation_max_tokens,
            )
            generated = map_generated_case(extract_json(raw), params)
        except (CompletionError, ExtractionError) as exc:
            if not self.allow_fallback:
                logger.error("Case generation failed: %s", exc)
                raise
            logger.warning("Case generation failed (%s); serving the sample case", exc)
            return self.fallback_case(params)

        logger.info(
            "Generated case %r: %d clues, %d suspects",
            generated.case.title,
            len(generated.clues),
            len(generated.suspects),
        )
        return generated

    @staticmethod
    def fallback_case(params: Optional[GenerationParams] = None) -> GeneratedCase:
        """The built-in sample case, with fresh ids."""
        return map_generated_case(FALLBACK_CASE_PAYLOAD, params or GenerationParams())
