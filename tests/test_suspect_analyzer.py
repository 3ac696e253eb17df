# tests/test_suspect_analyzer.py
from __future__ import annotations

import json

import pytest

from errors import TransportError
from models import Interview, InterviewQuestion, InterviewTurn
from suspect_analyzer import (
    DEFAULT_QUESTIONS,
    SuspectAnalyzer,
    extract_suspect_analysis_from_text,
    map_suspect_analysis,
)


# ---------- analysis: JSON path ----------

@pytest.mark.parametrize("raw, expected", [("150", 100), ("abc", 50), (-20, 0), (65, 65), ("42", 42)])
def test_trustworthiness_is_clamped(case_001_clues, raw, expected):
    analysis = map_suspect_analysis({"trustworthiness": raw}, case_001_clues, "suspect-001-1")
    assert analysis.trustworthiness == expected


def test_connections_resolve_clue_titles(case_001_clues):
    data = {
        "trustworthiness": 30,
        "inconsistencies": "Claims to be sick but bought a watch.",
        "connections": [
            {"clue": "Staff Schedule", "connectionType": "strong", "description": "Called in sick."},
            {"clueTitle": "footage", "description": "Gap during his absence."},
            {"clue": "Fingerprint on the vault"},
        ],
        "suggestedQuestions": ["Where did the watch come from?"],
    }
    analysis = map_suspect_analysis(data, case_001_clues, "suspect-001-1")

    assert analysis.suspect_id == "suspect-001-1"
    assert [c.clue_id for c in analysis.connections] == ["clue-001-3", "clue-001-1"]
    assert analysis.connections[0].connection_type == "strong"
    assert analysis.inconsistencies == ("Claims to be sick but bought a watch.",)
    assert analysis.suggested_questions == ("Where did the watch come from?",)


def test_connections_accept_exact_clue_ids(case_001_clues):
    data = {"connections": [{"clueId": "clue-001-2", "description": "Found nearby."}]}
    analysis = map_suspect_analysis(data, case_001_clues, "suspect-001-1")
    assert [c.clue_id for c in analysis.connections] == ["clue-001-2"]


def test_missing_questions_get_defaults(case_001_clues):
    analysis = map_suspect_analysis({}, case_001_clues, "suspect-001-1")
    assert analysis.trustworthiness == 50
    assert analysis.suggested_questions == DEFAULT_QUESTIONS["en"]


# ---------- analysis: text fallback ----------

def test_text_fallback(case_001_clues):
    text = (
        "Trustworthiness: 35\n"
        "Inconsistencies:\n- Alibi cannot be verified\n- Sudden wealth\n\n"
        "The Staff Schedule shows he called in sick.\n\n"
        "Questions:\n- Who paid for your watch?\n- Note this is not a question\n- Were you really ill?"
    )
    analysis = extract_suspect_analysis_from_text(text, case_001_clues, "suspect-001-1")

    assert analysis.trustworthiness == 35
    assert analysis.inconsistencies == ("Alibi cannot be verified", "Sudden wealth")
    assert [c.clue_id for c in analysis.connections] == ["clue-001-3"]
    assert analysis.connections[0].description == "The suspect may be connected to the Staff Schedule"
    assert analysis.suggested_questions == ("Who paid for your watch?", "Were you really ill?")


def test_text_fallback_defaults(case_001_clues):
    analysis = extract_suspect_analysis_from_text("He seems nervous.", case_001_clues, "suspect-001-1")
    assert analysis.trustworthiness == 50
    assert analysis.inconsistencies == ()
    assert analysis.suggested_questions == DEFAULT_QUESTIONS["en"]


def test_text_fallback_clamps_trustworthiness(case_001_clues):
    analysis = extract_suspect_analysis_from_text("Trustworthiness: 150", case_001_clues, "suspect-001-1")
    assert analysis.trustworthiness == 100


def test_analyze_includes_interview_records(client, seed_state, case_001, case_001_clues):
    suspect = seed_state.find_suspect("suspect-001-1")
    turns = (
        InterviewTurn(question="Where were you?", answer="At home, sick."),
        InterviewTurn(question="Still waiting", pending=True),
    )
    client.queue(json.dumps({"trustworthiness": 40}))
    analysis = SuspectAnalyzer(client).analyze(suspect, case_001_clues, case_001, turns)

    user = client.last_messages[1].content
    assert "Question: Where were you?\nAnswer: At home, sick." in user
    assert "Still waiting" not in user
    assert analysis.trustworthiness == 40


def test_analyze_accepts_legacy_interview(client, seed_state, case_001, case_001_clues):
    suspect = seed_state.find_suspect("suspect-001-1")
    interview = Interview(
        id="int-1",
        suspect_id=suspect.id,
        case_id="case-001",
        questions=(
            InterviewQuestion(id="q1", question="Asked?", answer="Yes.", asked=True),
            InterviewQuestion(id="q2", question="Never asked", asked=False),
        ),
    )
    client.queue("Trustworthiness: 70")
    analysis = SuspectAnalyzer(client).analyze(suspect, case_001_clues, case_001, interview)

    user = client.last_messages[1].content
    assert "Asked?" in user
    assert "Never asked" not in user
    assert analysis.trustworthiness == 70


# ---------- interviews ----------

def test_interview_messages_replay_history(client, seed_state, case_001, case_001_clues):
    suspect = seed_state.find_suspect("suspect-001-2")
    history = (
        InterviewTurn(question="Where were you?", answer="At the hotel bar."),
        InterviewTurn(question="In flight", pending=True),
    )
    client.queue("  I stepped out to take a call.  ")
    answer = SuspectAnalyzer(client).process_interview_question(
        "Why did you leave the bar?", suspect, case_001_clues, case_001, history
    )

    assert answer == "I stepped out to take a call."
    messages = client.last_messages
    assert [m.role for m in messages] == ["system", "user", "user", "assistant", "user"]
    assert "Vanessa Reid" in messages[0].content
    assert "actually guilty" in messages[1].content
    assert "Never directly state whether you are guilty" in messages[1].content
    assert messages[2].content == "Where were you?"
    assert messages[3].content == "At the hotel bar."
    assert messages[-1].content == "Why did you leave the bar?"


def test_innocent_suspect_is_told_so(client, seed_state, case_001, case_001_clues):
    suspect = seed_state.find_suspect("suspect-001-1")
    client.queue("I was sick.")
    SuspectAnalyzer(client).process_interview_question("Hello?", suspect, case_001_clues, case_001)
    assert "You are not guilty" in client.last_messages[1].content


def test_interview_errors_propagate(client, seed_state, case_001, case_001_clues):
    client.queue(TransportError("down"))
    with pytest.raises(TransportError):
        SuspectAnalyzer(client).process_interview_question(
            "Hello?", seed_state.find_suspect("suspect-001-1"), case_001_clues, case_001
        )
