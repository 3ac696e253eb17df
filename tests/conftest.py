# tests/conftest.py
# ============================================================
# Shared pytest fixtures for all tests under tests/:
#   - ScriptedCompletionClient: replays canned model replies, records calls
#   - seed_state / case_001 / case_001_clues / case_001_suspects: seed content
#   - game: DetectiveGame on a scripted client, no persistence
# No test touches the network.
# ============================================================

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import pytest


# ---------- Ensure project root is importable ----------
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from case_data import initial_state  # noqa: E402
from completion import CompletionClient  # noqa: E402
from game_engine import DetectiveGame  # noqa: E402
from models import ChatMessage  # noqa: E402


Reply = Union[str, Exception]


class ScriptedCompletionClient(CompletionClient):
    """
    Completion client that returns queued replies in order.

    A queued Exception is raised instead of returned. Every call is recorded
    in ``calls`` as a dict of the keyword arguments plus the messages.
    """

    def __init__(self, replies: Sequence[Reply] = ()) -> None:
        self.replies: List[Reply] = list(replies)
        self.calls: List[Dict[str, Any]] = []

    def queue(self, *replies: Reply) -> "ScriptedCompletionClient":
        self.replies.extend(replies)
        return self

    def complete(self, messages: Sequence[ChatMessage], model: str = "", temperature: float = 0.0, max_tokens: int = 0) -> str:
        self.calls.append(
            {"messages": list(messages), "model": model, "temperature": temperature, "max_tokens": max_tokens}
        )
        if not self.replies:
            raise AssertionError("ScriptedCompletionClient ran out of replies")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def last_messages(self) -> List[ChatMessage]:
        return self.calls[-1]["messages"]


@pytest.fixture
def client() -> ScriptedCompletionClient:
    return ScriptedCompletionClient()


@pytest.fixture
def seed_state():
    return initial_state()


@pytest.fixture
def case_001(seed_state):
    return seed_state.find_case("case-001")


@pytest.fixture
def case_001_clues(seed_state):
    return seed_state.clues_for("case-001")


@pytest.fixture
def case_001_suspects(seed_state):
    return seed_state.suspects_for("case-001")


@pytest.fixture
def game(client) -> DetectiveGame:
    return DetectiveGame(client=client, allow_fallback=True)
