"""
completion.py
=============
Completion Client: the only module that talks to the LLM provider.

Sends an ordered list of role/content messages to Groq's chat-completions
endpoint and returns the raw completion text. There is no business logic here
and no retry: the SDK client is built with ``max_retries=0`` so every failure
reaches the caller, which decides whether to try again.

Failure mapping:
    network failure / timeout / non-2xx status  ->  TransportError
    response without choices or message text    ->  FormatError
    no API key configured                       ->  ConfigurationError

The logger name for this module is ``detective.completion``.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Any, Optional, Sequence

import groq

from config import COMPLETION_CONFIG, MODEL_CONFIG
from errors import ConfigurationError, FormatError, TransportError
from models import ChatMessage

logger = logging.getLogger("detective.completion")

_THINK_BLOCK = re.compile(r"<think>.*?</think>", re.DOTALL | re.IGNORECASE)


def strip_reasoning(text: str) -> str:
    """Remove <think>...</think> blocks emitted by reasoning models."""
    return _THINK_BLOCK.sub("", text).strip()


class CompletionClient:
    """
    Interface every mapper depends on.

    Subclasses return the completion text for ``messages`` or raise one of the
    CompletionError subclasses. Tests substitute a scripted implementation.
    """

    def complete(
        self,
        messages: Sequence[ChatMessage],
        model: str = MODEL_CONFIG.default_model,
        temperature: float = COMPLETION_CONFIG.temperature,
        max_tokens: int = COMPLETION_CONFIG.analysis_max_tokens,
    ) -> str:
        raise NotImplementedError


class GroqCompletionClient(CompletionClient):
    """
    Completion client backed by the ``groq`` SDK.

    Args:
        api_key: Groq API key. Falls back to the GROQ_API_KEY environment variable.
        timeout: Per-request timeout in seconds.
        client:  Pre-built SDK client (used by tests to inject a stub).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = COMPLETION_CONFIG.request_timeout,
        client: Any = None,
    ) -> None:
        if client is None:
            key = api_key or os.environ.get("GROQ_API_KEY")
            if not key:
                raise ConfigurationError(
                    "GROQ_API_KEY is not set. Export it or add it to your .env file."
                )
            client = groq.Groq(api_key=key, timeout=timeout, max_retries=0)
        self._client = client

    def complete(
        self,
        messages: Sequence[ChatMessage],
        model: str = MODEL_CONFIG.default_model,
        temperature: float = COMPLETION_CONFIG.temperature,
        max_tokens: int = COMPLETION_CONFIG.analysis_max_tokens,
    ) -> str:
        logger.info(
            "Calling completion API — model=%s, messages=%d, max_tokens=%d",
            model,
            len(messages),
            max_tokens,
        )
        try:
            response = self._client.chat.completions.create(
                model=model,
                messages=[m.as_payload() for m in messages],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except groq.APITimeoutError as exc:
            logger.error("Completion request timed out — model=%s", model)
            raise TransportError("Completion request timed out") from exc
        except groq.APIStatusError as exc:
            logger.error(
                "Completion API error — status=%d, message=%s",
                exc.status_code,
                exc.message,
            )
            raise TransportError(
                f"Completion API error ({exc.status_code}): {exc.message}"
            ) from exc
        except groq.APIConnectionError as exc:
            logger.error("Completion API unreachable: %s", exc)
            raise TransportError(f"Completion API unreachable: {exc}") from exc

        choices = getattr(response, "choices", None)
        if not choices:
            logger.error("Completion API returned no choices — model=%s", model)
            raise FormatError("Received invalid response from the completion API")

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if content is None:
            logger.error("Completion API choice has no message content — model=%s", model)
            raise FormatError("Completion response has no message content")

        if model in MODEL_CONFIG.reasoning_models:
            content = strip_reasoning(content)

        logger.debug("Completion received: %d chars", len(content))
        return content
