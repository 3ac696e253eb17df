# tests/test_cli.py
from __future__ import annotations

import json

import pytest

from cli import HELP, handle_command
from errors import UnknownEntityError


def test_quit_returns_false(game, capsys):
    assert handle_command(game, "/quit") is False
    assert "Thanks for playing" in capsys.readouterr().out


def test_unknown_command_prints_help(game, capsys):
    assert handle_command(game, "/dance") is True
    assert HELP in capsys.readouterr().out


def test_open_discover_and_status(game, capsys):
    handle_command(game, "/open case-001")
    handle_command(game, "/discover clue-001-1")
    handle_command(game, "/status")
    out = capsys.readouterr().out
    assert "The Museum Heist" in out
    assert "Progress: 10%" in out
    assert "['clue-001-1']" in out


def test_ask_without_question_prints_usage(game, client, capsys):
    handle_command(game, "/ask suspect-001-1")
    assert "Usage: /ask" in capsys.readouterr().out
    assert client.calls == []


def test_solve_parses_evidence_list(game, client, capsys):
    handle_command(game, "/open case-001")
    client.queue(json.dumps({"solved": True, "narrative": "Case closed."}))
    handle_command(game, "/solve suspect-001-2 clue-001-1,clue-001-2 She cut the glass")

    out = capsys.readouterr().out
    assert "Case closed." in out
    assert "CASE SOLVED" in out
    user = client.last_messages[1].content
    assert "Glass Cutter Tool" in user


def test_new_parses_difficulty_and_theme(game, client):
    client.queue(json.dumps({"title": "Harbour", "suspects": [{"name": "Ann", "isGuilty": True}]}))
    handle_command(game, "/new hard smugglers at the docks")

    user = client.last_messages[-1].content
    assert "smugglers at the docks" in user
    assert game.active_case().difficulty == "hard"


def test_domain_errors_propagate(game):
    with pytest.raises(UnknownEntityError):
        handle_command(game, "/open case-404")
