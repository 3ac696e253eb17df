"""
persistence.py
==============
Saves the whole AppState as one JSON document and restores it on start-up.

The document is the camelCase serialisation of AppState (``by_alias=True``),
written synchronously after every dispatch when wired to a GameStore with
``persist_on_change``. A save file that is missing, unreadable, not JSON or
not a valid AppState is logged and ignored: the game starts fresh.

The logger name for this module is ``detective.persistence``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Union

from config import runtime_config
from models import AppState

logger = logging.getLogger("detective.persistence")


def serialize_state(state: AppState) -> str:
    return state.model_dump_json(by_alias=True, indent=2)


def deserialize_state(document: Union[str, bytes]) -> AppState:
    """Raises pydantic.ValidationError for malformed or mismatched documents."""
    return AppState.model_validate_json(document)


class JsonFileStorage:
    """
    Single-file state storage.

    Args:
        path: Location of the save file. Defaults to DETECTIVE_SAVE_PATH, or
              GameConfig.save_path when that is unset.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else Path(runtime_config().save_path)

    def save(self, state: AppState) -> None:
        if not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(serialize_state(state), encoding="utf-8")
        os.replace(tmp, self.path)
        logger.debug("State saved to %s", self.path)

    def load(self) -> Optional[AppState]:
        """The saved state, or None when there is nothing usable to load."""
        if not self.path.exists():
            logger.info("No saved game at %s; starting fresh", self.path)
            return None
        try:
            state = deserialize_state(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            # ValidationError is a ValueError, and so is invalid JSON.
            logger.warning("Failed to load saved game from %s: %s", self.path, exc)
            return None
        logger.info(
            "Loaded saved game from %s: %d cases, active_case=%s",
            self.path,
            len(state.cases),
            state.game_state.active_case,
        )
        return state

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()

    def persist_on_change(self) -> Callable[..., None]:
        """A GameStore listener that saves every new state."""

        def listener(state: AppState, _action: object) -> None:
            try:
                self.save(state)
            except OSError as exc:
                logger.error("Failed to save game to %s: %s", self.path, exc)

        return listener
