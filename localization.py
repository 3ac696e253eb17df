"""
localization.py
===============
Swaps the narrative text of seed content into another language.

``localize_content`` is pure: it returns a new AppState whose seed cases,
clues and suspects carry the text of the requested language. English text
comes from the seed records themselves, other languages from the overlay in
case_data.TRANSLATIONS, both keyed by entity id. Only text fields change:
solved / discovered / examined / interviewed flags, generated content and
every GameState field are left exactly as they were.

Model-generated cases have no overlay. ``translate_generated_content`` sends
their text through the Translator when the player switches language.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Sequence, Tuple, TypeVar

from case_data import DEFAULT_CASES, DEFAULT_CLUES, DEFAULT_SUSPECTS, TRANSLATIONS
from models import AppState, Case, Clue, Suspect
from translator import Translator

logger = logging.getLogger("detective.localization")

CASE_TEXT_FIELDS:    Tuple[str, ...] = ("title", "description", "summary", "location")
CLUE_TEXT_FIELDS:    Tuple[str, ...] = ("title", "description", "location")
SUSPECT_TEXT_FIELDS: Tuple[str, ...] = ("name", "description", "background", "motive", "alibi")

EntityT = TypeVar("EntityT", Case, Clue, Suspect)


def _seed_text(records: Sequence[EntityT], fields: Tuple[str, ...]) -> Dict[str, Dict[str, str]]:
    return {r.id: {f: getattr(r, f) for f in fields} for r in records}


def _overlay(
    records: Sequence[EntityT],
    seed: Mapping[str, Dict[str, str]],
    translated: Mapping[str, Dict[str, str]],
) -> Tuple[EntityT, ...]:
    out = []
    for record in records:
        if record.id not in seed:
            out.append(record)
            continue
        text = dict(seed[record.id])
        text.update(translated.get(record.id, {}))
        out.append(record.model_copy(update=text))
    return tuple(out)


def localize_content(state: AppState, language: str) -> AppState:
    """
    Return ``state`` with seed entity text in ``language``.

    Ids missing from the language's overlay fall back to English text, so a
    partial translation never leaves stale text from a previous language.
    """
    overlay = TRANSLATIONS.get(language, {})
    if language != "en" and not overlay:
        logger.warning("No translated content for language %r; using English", language)

    cases = _overlay(state.cases, _seed_text(DEFAULT_CASES, CASE_TEXT_FIELDS), overlay.get("cases", {}))
    clues = _overlay(state.clues, _seed_text(DEFAULT_CLUES, CLUE_TEXT_FIELDS), overlay.get("clues", {}))
    suspects = _overlay(
        state.suspects,
        _seed_text(DEFAULT_SUSPECTS, SUSPECT_TEXT_FIELDS),
        overlay.get("suspects", {}),
    )
    logger.debug("Localized seed content to %s", language)
    return state.model_copy(update={"cases": cases, "clues": clues, "suspects": suspects})


def translate_generated_content(state: AppState, translator: Translator, source: str, target: str) -> AppState:
    """
    Return ``state`` with the text of model-generated cases translated.

    Seed content has a fixed overlay and is left to ``localize_content``.
    Every non-empty text field of the generated cases, their clues and their
    suspects goes out in one batch request; on any translation failure the
    batch comes back unchanged and so does the state.
    """
    if source == target:
        return state
    case_ids = {c.id for c in state.cases if c.is_llm_generated}
    if not case_ids:
        return state

    groups = (
        ("cases", CASE_TEXT_FIELDS, lambda r: r.id in case_ids),
        ("clues", CLUE_TEXT_FIELDS, lambda r: r.case_id in case_ids),
        ("suspects", SUSPECT_TEXT_FIELDS, lambda r: r.case_id in case_ids),
    )
    slots: List[Tuple[str, int, str]] = []
    texts: List[str] = []
    for attr, fields, selected in groups:
        for index, record in enumerate(getattr(state, attr)):
            if not selected(record):
                continue
            for name in fields:
                value = getattr(record, name)
                if value:
                    slots.append((attr, index, name))
                    texts.append(value)
    if not texts:
        return state

    translated = translator.batch_translate(texts, source, target)
    updates: Dict[Tuple[str, int], Dict[str, str]] = {}
    for (attr, index, name), text in zip(slots, translated):
        updates.setdefault((attr, index), {})[name] = text

    replaced = {}
    for attr, _fields, _selected in groups:
        replaced[attr] = tuple(
            record.model_copy(update=updates[(attr, index)]) if (attr, index) in updates else record
            for index, record in enumerate(getattr(state, attr))
        )
    logger.info("Translated %d text fields of %d generated cases to %s", len(texts), len(case_ids), target)
    return state.model_copy(update=replaced)
