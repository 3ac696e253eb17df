# tests/test_game_store.py
from __future__ import annotations

from case_data import DEFAULT_CASES
from game_store import (
    Action,
    ActionType,
    GameStore,
    add_case,
    add_clues,
    add_generated_case,
    add_interview,
    add_suspects,
    discard_interview_turn,
    discover_clue,
    examine_clue,
    game_reducer,
    interview_suspect,
    load,
    reset,
    resolve_interview_turn,
    save_clue_analysis,
    save_suspect_analysis,
    save_suspect_interview,
    set_active_case,
    solve_case,
    start_interview_turn,
)
from case_generator import CaseGenerator
from models import (
    Case,
    Clue,
    ClueAnalysis,
    GenerationParams,
    Interview,
    InterviewTurn,
    Suspect,
    SuspectAnalysis,
)


def _run(state, *actions):
    for action in actions:
        state = game_reducer(state, action)
    return state


# ---------- seed ----------

def test_initial_state_has_three_seed_cases(seed_state):
    assert [c.id for c in seed_state.cases] == ["case-001", "case-002", "case-003"]
    assert seed_state.game_state.active_case is None
    assert seed_state.game_state.game_progress == 0
    for case in seed_state.cases:
        guilty = [s for s in seed_state.suspects_for(case.id) if s.is_guilty]
        assert len(guilty) == 1


# ---------- purity ----------

def test_reducer_never_mutates_input(seed_state):
    before = seed_state.model_dump()
    after = _run(seed_state, set_active_case("case-001"), discover_clue("clue-001-1"), solve_case("case-001"))
    assert seed_state.model_dump() == before
    assert after is not seed_state


# ---------- content actions ----------

def test_add_case_clues_suspects(seed_state):
    case = Case(id="c-new", title="New")
    clue = Clue(id="k-new", case_id="c-new", title="Knife")
    suspect = Suspect(id="s-new", case_id="c-new", name="Sam")
    state = _run(seed_state, add_case(case), add_clues([clue]), add_suspects([suspect]))
    assert state.cases[-1] == case
    assert state.clues[-1] == clue
    assert state.suspects[-1] == suspect


def test_add_generated_case_is_one_transition(seed_state):
    generated = CaseGenerator.fallback_case(GenerationParams())
    state = game_reducer(seed_state, add_generated_case(generated))
    assert len(state.cases) == 4
    assert len(state.clues_for(generated.case.id)) == 3
    assert len(state.suspects_for(generated.case.id)) == 2


def test_add_interview(seed_state):
    interview = Interview(id="i1", suspect_id="suspect-001-1", case_id="case-001")
    state = game_reducer(seed_state, add_interview(interview))
    assert state.interviews == (interview,)


# ---------- tracking and progress ----------

def test_progress_scenario_reaches_43(seed_state):
    state = _run(
        seed_state,
        set_active_case("case-001"),
        discover_clue("clue-001-1"),
        examine_clue("clue-001-1"),
        interview_suspect("suspect-001-1"),
        interview_suspect("suspect-001-2"),
    )
    assert state.game_state.game_progress == 43
    assert state.find_clue("clue-001-1").examined is True
    assert state.find_suspect("suspect-001-2").interviewed is True


def test_repeated_discover_records_the_id_once(seed_state):
    state = _run(seed_state, set_active_case("case-001"), discover_clue("clue-001-1"))
    again = game_reducer(state, discover_clue("clue-001-1"))
    assert again.game_state.discovered_clues == ("clue-001-1",)
    assert again.game_state.game_progress == state.game_state.game_progress


def test_repeated_examine_and_interview_are_deduplicated(seed_state):
    state = _run(
        seed_state,
        examine_clue("clue-001-1"),
        examine_clue("clue-001-1"),
        interview_suspect("suspect-001-1"),
        interview_suspect("suspect-001-1"),
    )
    assert state.game_state.examined_clues == ("clue-001-1",)
    assert state.game_state.interviewed_suspects == ("suspect-001-1",)


def test_examine_without_discover_is_allowed(seed_state):
    state = game_reducer(seed_state, examine_clue("clue-002-1"))
    clue = state.find_clue("clue-002-1")
    assert clue.examined is True
    assert state.game_state.discovered_clues == ()


def test_progress_is_monotone_until_solved(seed_state):
    actions = [set_active_case("case-001")]
    actions += [discover_clue(c.id) for c in seed_state.clues_for("case-001")]
    actions += [examine_clue(c.id) for c in seed_state.clues_for("case-001")]
    actions += [interview_suspect(s.id) for s in seed_state.suspects_for("case-001")]

    state, seen = seed_state, []
    for action in actions:
        state = game_reducer(state, action)
        seen.append(state.game_state.game_progress)
    assert seen == sorted(seen)
    assert seen[-1] == 99

    solved = game_reducer(state, solve_case("case-001"))
    assert solved.game_state.game_progress == 100


def test_solve_case(seed_state):
    state = _run(seed_state, set_active_case("case-001"), solve_case("case-001"), solve_case("case-001"))
    assert state.find_case("case-001").solved is True
    assert state.game_state.cases_solved == ("case-001",)
    assert state.game_state.game_progress == 100


def test_set_active_case_recomputes_progress(seed_state):
    state = _run(
        seed_state,
        set_active_case("case-001"),
        discover_clue("clue-001-1"),
        set_active_case("case-002"),
    )
    assert state.game_state.game_progress == 0
    back = game_reducer(state, set_active_case("case-001"))
    assert back.game_state.game_progress == 10


def test_set_active_case_on_solved_case_is_100(seed_state):
    state = _run(seed_state, set_active_case("case-001"), solve_case("case-001"), set_active_case("case-002"))
    assert state.game_state.game_progress == 0
    back = game_reducer(state, set_active_case("case-001"))
    assert back.game_state.game_progress == 100
    still = game_reducer(back, discover_clue("clue-001-1"))
    assert still.game_state.game_progress == 100


# ---------- reset / load ----------

def test_reset_returns_seed_state(seed_state):
    state = _run(seed_state, set_active_case("case-001"), solve_case("case-001"), reset())
    assert state == seed_state
    assert state.cases == DEFAULT_CASES


def test_load_replaces_state_wholesale(seed_state):
    other = _run(seed_state, set_active_case("case-003"))
    assert game_reducer(seed_state, load(other)) is other


def test_unknown_action_type_leaves_state(seed_state):
    assert game_reducer(seed_state, Action("NOT_AN_ACTION")) is seed_state  # type: ignore[arg-type]


# ---------- caches ----------

def test_save_clue_and_suspect_analysis(seed_state):
    clue_analysis = ClueAnalysis(summary="s")
    suspect_analysis = SuspectAnalysis(suspect_id="suspect-001-1", trustworthiness=20)
    state = _run(
        seed_state,
        save_clue_analysis("clue-001-1", clue_analysis),
        save_suspect_analysis(suspect_analysis),
    )
    assert state.game_state.clue_analyses == {"clue-001-1": clue_analysis}
    assert state.game_state.suspect_analyses == {"suspect-001-1": suspect_analysis}
    assert seed_state.game_state.clue_analyses == {}


# ---------- interview turns ----------

def test_save_suspect_interview_replaces_conversation(seed_state):
    turns = (InterviewTurn(question="Q", answer="A"),)
    state = game_reducer(seed_state, save_suspect_interview("suspect-001-1", turns))
    assert state.game_state.suspect_interviews["suspect-001-1"] == turns


def test_turns_resolve_by_id_out_of_order(seed_state):
    first = InterviewTurn(question="First?")
    second = InterviewTurn(question="Second?")
    state = _run(
        seed_state,
        start_interview_turn("suspect-001-1", first),
        start_interview_turn("suspect-001-1", second),
        resolve_interview_turn("suspect-001-1", second.id, "Answer two"),
        resolve_interview_turn("suspect-001-1", first.id, "Answer one"),
    )
    turns = state.game_state.suspect_interviews["suspect-001-1"]
    assert [(t.question, t.answer, t.pending) for t in turns] == [
        ("First?", "Answer one", False),
        ("Second?", "Answer two", False),
    ]


def test_started_turn_is_pending_and_can_be_discarded(seed_state):
    turn = InterviewTurn(question="Hello?")
    started = game_reducer(seed_state, start_interview_turn("suspect-001-1", turn))
    assert started.game_state.suspect_interviews["suspect-001-1"][0].pending is True

    discarded = game_reducer(started, discard_interview_turn("suspect-001-1", turn.id))
    assert discarded.game_state.suspect_interviews["suspect-001-1"] == ()


def test_resolving_unknown_turn_is_ignored(seed_state):
    state = game_reducer(seed_state, resolve_interview_turn("suspect-001-1", "missing", "A"))
    assert state is seed_state


# ---------- store ----------

def test_store_notifies_subscribers_until_unsubscribed():
    store = GameStore()
    seen = []
    unsubscribe = store.subscribe(lambda state, action: seen.append((action.type, state.game_state.active_case)))

    store.dispatch(set_active_case("case-002"))
    unsubscribe()
    store.dispatch(set_active_case("case-003"))

    assert seen == [(ActionType.SET_ACTIVE_CASE, "case-002")]
    assert store.state.game_state.active_case == "case-003"
