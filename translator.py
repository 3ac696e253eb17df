"""
translator.py
=============
Model-backed translation between English and Thai.

Translation is a convenience, never a blocker: when the client fails or a
batch comes back with the wrong number of segments, the original text is
returned unchanged and the failure is logged.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, TypeVar

from pydantic import BaseModel

from completion import CompletionClient
from config import COMPLETION_CONFIG, MODEL_CONFIG
from errors import CompletionError
from prompts import TRANSLATION_DELIMITER, build_translation_messages

logger = logging.getLogger("detective.translator")

RecordT = TypeVar("RecordT", bound=BaseModel)


class Translator:

    def __init__(self, client: CompletionClient) -> None:
        self.client = client

    def _complete(self, text: str, source: str, target: str, delimiter=None) -> str:
        return self.client.complete(
            build_translation_messages(text, source, target, delimiter),
            model=MODEL_CONFIG.default_model,
            temperature=COMPLETION_CONFIG.temperature,
            max_tokens=COMPLETION_CONFIG.translation_max_tokens,
        )

    def translate_text(self, text: str, source: str, target: str) -> str:
        if source == target or not text.strip():
            return text
        try:
            return self._complete(text, source, target).strip()
        except CompletionError as exc:
            logger.error("Translation %s->%s failed: %s", source, target, exc)
            return text

    def translate_fields(
        self,
        record: RecordT,
        source: str,
        target: str,
        fields: Iterable[str],
    ) -> RecordT:
        """Copy of ``record`` with the named non-empty string fields translated."""
        if source == target:
            return record
        update = {}
        for name in fields:
            value = getattr(record, name, None)
            if isinstance(value, str) and value:
                update[name] = self.translate_text(value, source, target)
        return record.model_copy(update=update)

    def batch_translate(self, texts: Sequence[str], source: str, target: str) -> List[str]:
        """
        Translate several texts in one request.

        Segments are joined with TRANSLATION_DELIMITER and split back apart;
        a reply with a different segment count is discarded.
        """
        if source == target or not texts:
            return list(texts)

        try:
            response = self._complete(TRANSLATION_DELIMITER.join(texts), source, target, TRANSLATION_DELIMITER)
        except CompletionError as exc:
            logger.error("Batch translation %s->%s failed: %s", source, target, exc)
            return list(texts)

        segments = [segment.strip() for segment in response.split(TRANSLATION_DELIMITER)]
        if len(segments) != len(texts):
            logger.error(
                "Batch translation returned %d segments, expected %d",
                len(segments),
                len(texts),
            )
            return list(texts)
        return segments
