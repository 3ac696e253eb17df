"""
config.py
=========
Central configuration module for the Detective Case Engine.

All tunable constants, model identifiers, token budgets, progress weights and
game settings live here so they can be adjusted without touching business
logic.

Usage:
    from config import MODEL_CONFIG, COMPLETION_CONFIG, PROGRESS_CONFIG, GAME_CONFIG
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import FrozenSet, Tuple


# ---------------------------------------------------------------------------
# Model selection
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ModelConfig:
    """
    Groq model identifiers used across the system.

    Attributes:
        default_model:    Model for interviews, clue/suspect analysis and
                          translation, where latency matters more than depth.
        preview_model:    Higher-capability reasoning model for case generation
                          and solution adjudication.
        reasoning_models: Models that emit <think>...</think> blocks which must
                          be stripped before the text reaches any mapper.
    """
    default_model: str = "llama-3.3-70b-versatile"
    preview_model: str = "deepseek-r1-distill-llama-70b"
    reasoning_models: FrozenSet[str] = frozenset({
        "deepseek-r1-distill-llama-70b",
        "qwen/qwen3-32b",
    })


# ---------------------------------------------------------------------------
# Completion budgets
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CompletionConfig:
    """
    Sampling and token budgets per generative task.

    Attributes:
        temperature:            Sampling temperature shared by every task.
        generation_max_tokens:  Budget for a full case (metadata, clues, suspects).
        analysis_max_tokens:    Budget for clue and suspect analysis.
        interview_max_tokens:   Budget for a single in-character answer.
        solution_max_tokens:    Budget for adjudicating a solve attempt.
        translation_max_tokens: Budget for a translation request.
        request_timeout:        Seconds before the transport gives up.
    """
    temperature: float = 0.7

    generation_max_tokens:  int = 4096
    analysis_max_tokens:    int = 2048
    interview_max_tokens:   int = 2048
    solution_max_tokens:    int = 2048
    translation_max_tokens: int = 2048

    request_timeout: float = 60.0


# ---------------------------------------------------------------------------
# Progress weights
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProgressConfig:
    """
    Weights for the derived completion score of the active case.

    discovery_weight + examination_weight + interview_weight == 1.0

    Attributes:
        discovery_weight:   Share earned by discovering every clue.
        examination_weight: Share earned by examining every clue.
        interview_weight:   Share earned by interviewing every suspect.
        in_progress_cap:    Ceiling while the case is unsolved.
        solved_progress:    Value forced by the solve transition.
    """
    discovery_weight:   float = 0.30
    examination_weight: float = 0.40
    interview_weight:   float = 0.30

    in_progress_cap: int = 99
    solved_progress: int = 100


# ---------------------------------------------------------------------------
# Game settings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GameConfig:
    """
    Top-level game settings.

    Attributes:
        save_path:             Default location of the persisted state blob.
        default_language:      Language used when none is requested.
        supported_languages:   Languages with prompt templates and content.
        generated_image_url:   Placeholder artwork for generated cases.
        mention_context_before: Characters kept before a name found in free text.
        mention_context_after:  Characters kept after a name found in free text.
        min_clues / max_clues / min_suspects / max_suspects:
                               Size of a generated case, quoted in the prompt.
    """
    save_path:           str = "detective-game-state.json"
    default_language:    str = "en"
    supported_languages: Tuple[str, ...] = ("en", "th")
    generated_image_url: str = "https://picsum.photos/seed/mystery/800/600"

    mention_context_before: int = 50
    mention_context_after:  int = 100

    min_clues:    int = 5
    max_clues:    int = 8
    min_suspects: int = 3
    max_suspects: int = 5


@dataclass(frozen=True)
class RuntimeConfig:
    """
    Values read from the process environment at import time.

    Attributes:
        environment: "development" (default), "test" or "production".
                     The sample fallback case is only served outside production.
        save_path:   Overrides GameConfig.save_path when DETECTIVE_SAVE_PATH is set.
    """
    environment: str = field(
        default_factory=lambda: os.environ.get("DETECTIVE_ENV", "development").lower()
    )
    save_path: str = field(
        default_factory=lambda: os.environ.get("DETECTIVE_SAVE_PATH", GameConfig.save_path)
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


# ---------------------------------------------------------------------------
# Singleton instances (import-ready)
# ---------------------------------------------------------------------------

MODEL_CONFIG      = ModelConfig()
COMPLETION_CONFIG = CompletionConfig()
PROGRESS_CONFIG   = ProgressConfig()
GAME_CONFIG       = GameConfig()


def runtime_config() -> RuntimeConfig:
    """Read the environment afresh (callers load .env before this runs)."""
    return RuntimeConfig()
