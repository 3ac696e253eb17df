# tests/test_case_generator.py
from __future__ import annotations

import json

import pytest

from case_generator import CaseGenerator, map_generated_case, normalize_relevance
from config import COMPLETION_CONFIG, GAME_CONFIG, MODEL_CONFIG
from errors import ExtractionError, TransportError
from models import GenerationParams
from prompts import build_case_generation_user_prompt


def _payload(**overrides):
    data = {
        "case": {
            "title": "Murder at the Lighthouse",
            "description": "The keeper is found dead.",
            "summary": "A keeper dies in a storm.",
            "location": "North Point Lighthouse",
            "dateTime": "1899-10-31T23:00:00",
            "difficulty": "hard",
        },
        "clues": [
            {"title": "Broken Lamp", "description": "Shattered glass.", "location": "Lamp room",
             "type": "physical", "relevance": "critical"},
            {"item": "Torn Letter", "description": "Half a letter.", "position_found": "Stairs",
             "type": "forensic", "significance": "high"},
        ],
        "suspects": [
            {"name": "Ada Finch", "description": "Assistant keeper", "isGuilty": False},
            {"name": "Silas Crane", "description": "Smuggler", "isGuilty": False},
            {"name": "Mary Dunn", "description": "Supply boat captain", "isGuilty": False},
        ],
        "solution": {"culprit": "Silas Crane", "reasoning": "Silas needed the light out for his run."},
    }
    data.update(overrides)
    return data


def _guilty_names(generated):
    return [s.name for s in generated.suspects if s.is_guilty]


# ---------- prompt ----------

def test_user_prompt_only_mentions_provided_parameters():
    prompt = build_case_generation_user_prompt(GenerationParams(difficulty="hard", era="Victorian"))
    assert prompt == "Create a hard difficulty detective case during the Victorian era"


def test_generate_uses_preview_model_and_generation_budget(client):
    client.queue(json.dumps(_payload()))
    CaseGenerator(client, allow_fallback=False).generate(GenerationParams())
    call = client.calls[0]
    assert call["model"] == MODEL_CONFIG.preview_model
    assert call["max_tokens"] == COMPLETION_CONFIG.generation_max_tokens
    assert call["messages"][0].role == "system"


# ---------- mapping ----------

def test_maps_case_clues_and_suspects():
    generated = map_generated_case(_payload(), GenerationParams())
    case = generated.case

    assert case.title == "Murder at the Lighthouse"
    assert case.difficulty == "hard"
    assert case.is_llm_generated is True
    assert case.image_url == GAME_CONFIG.generated_image_url
    assert {c.case_id for c in generated.clues} == {case.id}
    assert {s.case_id for s in generated.suspects} == {case.id}
    assert not any(c.discovered or c.examined for c in generated.clues)
    assert not any(s.interviewed for s in generated.suspects)
    assert generated.solution == "Silas needed the light out for his run."


def test_clue_field_aliases_and_normalisation():
    generated = map_generated_case(_payload(), GenerationParams())
    letter = generated.clues[1]
    assert letter.title == "Torn Letter"
    assert letter.location == "Stairs"
    assert letter.type == "physical"
    assert letter.relevance == "critical"


@pytest.mark.parametrize(
    "raw, expected",
    [("high", "critical"), ("Medium", "important"), ("low", "minor"), ("minor", "minor"), ("vital", "important")],
)
def test_relevance_normalisation(raw, expected):
    assert normalize_relevance(raw) == expected


def test_case_details_shape_and_evidence_list():
    data = {
        "case_details": {"title": "Dockside", "synopsis": "A body at the docks.", "date": "2024-02-01", "time": "04:00"},
        "evidence": [{"name": "Rope", "significance": "low"}],
        "suspects": [{"name": "Pete"}],
    }
    generated = map_generated_case(data, GenerationParams(difficulty="easy"))
    assert generated.case.title == "Dockside"
    assert generated.case.description == "A body at the docks."
    assert generated.case.summary == "A body at the docks."
    assert generated.case.date_time == "2024-02-01 04:00"
    assert generated.case.difficulty == "easy"
    assert generated.clues[0].title == "Rope"
    assert generated.clues[0].relevance == "minor"


def test_missing_fields_get_defaults():
    generated = map_generated_case({"suspects": [{}], "clues": [{}]}, GenerationParams())
    assert generated.case.title == "Untitled Case"
    assert generated.case.difficulty == "medium"
    assert generated.case.date_time
    assert generated.clues[0].title == "Untitled Clue"
    assert generated.suspects[0].name == "Unknown Suspect"


def test_generated_ids_are_unique():
    a = map_generated_case(_payload(), GenerationParams())
    b = map_generated_case(_payload(), GenerationParams())
    assert a.case.id != b.case.id
    ids = [c.id for c in a.clues] + [s.id for s in a.suspects]
    assert len(ids) == len(set(ids))


# ---------- exactly one guilty suspect ----------

def test_culprit_field_wins_over_payload_flags():
    data = _payload()
    data["suspects"][0]["isGuilty"] = True
    generated = map_generated_case(data, GenerationParams())
    assert _guilty_names(generated) == ["Silas Crane"]


def test_partial_culprit_name_resolves():
    generated = map_generated_case(_payload(solution={"culprit": "Crane", "reasoning": ""}), GenerationParams())
    assert _guilty_names(generated) == ["Silas Crane"]


def test_payload_flag_used_when_culprit_unresolvable():
    data = _payload(solution={"culprit": "The lighthouse ghost", "reasoning": "Nobody knows."})
    data["suspects"][2]["is_guilty"] = "true"
    generated = map_generated_case(data, GenerationParams())
    assert _guilty_names(generated) == ["Mary Dunn"]


def test_only_first_flagged_suspect_stays_guilty():
    data = _payload(solution="")
    for suspect in data["suspects"]:
        suspect["isGuilty"] = True
    generated = map_generated_case(data, GenerationParams())
    assert _guilty_names(generated) == ["Ada Finch"]


def test_reasoning_scan_when_no_culprit_or_flags():
    generated = map_generated_case(
        _payload(solution="It was Mary Dunn, who cut the supply line."), GenerationParams()
    )
    assert _guilty_names(generated) == ["Mary Dunn"]


def test_first_suspect_when_no_signal_at_all():
    generated = map_generated_case(_payload(solution={"reasoning": "A mystery."}), GenerationParams())
    assert _guilty_names(generated) == ["Ada Finch"]


# ---------- failure handling ----------

def test_fallback_case_on_unparseable_reply(client):
    client.queue("I'm sorry, I can't write JSON today.")
    generated = CaseGenerator(client, allow_fallback=True).generate(GenerationParams())
    assert generated.case.title == "The Missing Artifact"
    assert len(generated.clues) == 3
    assert len(generated.suspects) == 2
    assert _guilty_names(generated) == ["Curator"]
    assert generated.clues[2].type == "physical"


def test_fallback_case_on_transport_error(client):
    client.queue(TransportError("boom"))
    generated = CaseGenerator(client, allow_fallback=True).generate(GenerationParams())
    assert generated.case.title == "The Missing Artifact"


def test_fallback_case_when_payload_has_no_suspects(client):
    client.queue(json.dumps(_payload(suspects=[])))
    generated = CaseGenerator(client, allow_fallback=True).generate(GenerationParams())
    assert generated.case.title == "The Missing Artifact"


def test_errors_propagate_without_fallback(client):
    client.queue("not json", TransportError("down"))
    generator = CaseGenerator(client, allow_fallback=False)
    with pytest.raises(ExtractionError):
        generator.generate(GenerationParams())
    with pytest.raises(TransportError):
        generator.generate(GenerationParams())


def test_production_disables_fallback_by_default(client, monkeypatch):
    monkeypatch.setenv("DETECTIVE_ENV", "production")
    assert CaseGenerator(client).allow_fallback is False
    monkeypatch.setenv("DETECTIVE_ENV", "development")
    assert CaseGenerator(client).allow_fallback is True
