"""
game_engine.py
==============
Core orchestrator for the Detective Case Engine.

Contains:
  DetectiveGame — the single class that wires the completion client, the
                  domain mappers and the GameStore together, and exposes a
                  clean API consumed by the CLI runner (cli.py) or any other
                  front end.

Every player action follows the same path:

    action → prompt builder → CompletionClient → extractor → mapper
           → dispatch into GameStore → progress recomputed → subscribers

Public API summary:
    game = DetectiveGame(client, storage)
    game.open_case(case_id)                          → Case
    game.discover_clue(clue_id)                      → Clue
    game.examine_clue(clue_id)                       → Clue
    game.generate_case(params)                       → GeneratedCase
    game.analyze_clue(clue_id)                       → ClueAnalysis   (cached)
    game.analyze_suspect(suspect_id)                 → SuspectAnalysis (cached)
    game.interview_suspect(suspect_id, question)     → str
    game.solve_case(accused_id, evidence_ids, text)  → CaseSolution
    game.set_language(language)                      → None
    game.reset()                                     → None

Logging
-------
Configure log level and destination once at your entry point, e.g.:

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

The logger name for this module is ``detective.game_engine``.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from case_generator import CaseGenerator
from case_solver import CaseSolver
from clue_analyzer import ClueAnalyzer
from completion import CompletionClient, GroqCompletionClient
from config import GAME_CONFIG
from errors import CompletionError, DetectiveError, UnknownEntityError
from game_store import (
    GameStore,
    add_generated_case,
    discard_interview_turn,
    discover_clue,
    examine_clue,
    interview_suspect,
    load,
    reset,
    resolve_interview_turn,
    save_clue_analysis,
    save_suspect_analysis,
    set_active_case,
    solve_case,
    start_interview_turn,
)
from localization import localize_content, translate_generated_content
from models import (
    AppState,
    Case,
    CaseSolution,
    Clue,
    ClueAnalysis,
    GeneratedCase,
    GenerationParams,
    InterviewTurn,
    Suspect,
    SuspectAnalysis,
)
from persistence import JsonFileStorage
from suspect_analyzer import SuspectAnalyzer
from translator import Translator

# ---------------------------------------------------------------------------
# Module-level logger
#
# Hierarchical name: configure "detective" to capture every module at once.
# ---------------------------------------------------------------------------
logger = logging.getLogger("detective.game_engine")


class DetectiveGame:
    """
    Main game engine.

    Owns the GameStore and one instance of each domain mapper. Front ends
    interact with this class exclusively; they have no direct awareness of
    prompts, the Groq SDK or the reducer.

    Args:
        client:         Completion client. Defaults to GroqCompletionClient,
                        which requires GROQ_API_KEY.
        storage:        Optional JsonFileStorage. When given, the saved game
                        is restored and every dispatch is written back.
        language:       Initial content language ("en" or "th").
        allow_fallback: Passed to CaseGenerator (sample case on failure).

    Attributes:
        store:            The GameStore holding the AppState.
        language:         Current content language.
        case_generator:   CaseGenerator.
        clue_analyzer:    ClueAnalyzer.
        suspect_analyzer: SuspectAnalyzer (analysis and interviews).
        case_solver:      CaseSolver.
        translator:       Translator for model-generated case text.
    """

    def __init__(
        self,
        client: Optional[CompletionClient] = None,
        storage: Optional[JsonFileStorage] = None,
        language: str = GAME_CONFIG.default_language,
        allow_fallback: Optional[bool] = None,
    ) -> None:
        self.client   = client if client is not None else GroqCompletionClient()
        self.storage  = storage
        self.store    = GameStore()
        self.language = GAME_CONFIG.default_language
        self._unsubscribe = None

        self.case_generator   = CaseGenerator(self.client, allow_fallback=allow_fallback)
        self.clue_analyzer    = ClueAnalyzer(self.client)
        self.suspect_analyzer = SuspectAnalyzer(self.client)
        self.case_solver      = CaseSolver(self.client)
        self.translator       = Translator(self.client)

        if storage is not None:
            saved = storage.load()
            if saved is not None:
                self.store.dispatch(load(saved))
            self._unsubscribe = self.store.subscribe(storage.persist_on_change())

        # A restored save carries the seed text of whichever language was
        # active when it was written. Generated text is kept as saved.
        self.set_language(language, translate_generated=False)

        logger.info(
            "DetectiveGame initialised — cases=%d, active_case=%s, language=%s, persistent=%s",
            len(self.state.cases),
            self.state.game_state.active_case,
            self.language,
            storage is not None,
        )

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def state(self) -> AppState:
        return self.store.state

    @property
    def progress(self) -> int:
        return self.state.game_state.game_progress

    def get_case(self, case_id: str) -> Case:
        case = self.state.find_case(case_id)
        if case is None:
            raise UnknownEntityError(f"Unknown case id: {case_id}")
        return case

    def get_clue(self, clue_id: str) -> Clue:
        clue = self.state.find_clue(clue_id)
        if clue is None:
            raise UnknownEntityError(f"Unknown clue id: {clue_id}")
        return clue

    def get_suspect(self, suspect_id: str) -> Suspect:
        suspect = self.state.find_suspect(suspect_id)
        if suspect is None:
            raise UnknownEntityError(f"Unknown suspect id: {suspect_id}")
        return suspect

    def active_case(self) -> Case:
        """The case under investigation; DetectiveError when none is open."""
        case_id = self.state.game_state.active_case
        if case_id is None:
            raise DetectiveError("No case is open. Open a case first.")
        return self.get_case(case_id)

    def discovered_clues(self, case_id: str) -> Tuple[Clue, ...]:
        discovered = set(self.state.game_state.discovered_clues)
        return tuple(
            c for c in self.state.clues_for(case_id) if c.discovered or c.id in discovered
        )

    def conversation(self, suspect_id: str) -> Tuple[InterviewTurn, ...]:
        return self.state.game_state.suspect_interviews.get(suspect_id, ())

    # ------------------------------------------------------------------
    # Navigation and investigation
    # ------------------------------------------------------------------

    def open_case(self, case_id: str) -> Case:
        case = self.get_case(case_id)
        self.store.dispatch(set_active_case(case_id))
        logger.info("Opened case %s (%r), progress=%d", case_id, case.title, self.progress)
        return case

    def discover_clue(self, clue_id: str) -> Clue:
        self.get_clue(clue_id)
        self.store.dispatch(discover_clue(clue_id))
        return self.get_clue(clue_id)

    def examine_clue(self, clue_id: str) -> Clue:
        self.get_clue(clue_id)
        self.store.dispatch(examine_clue(clue_id))
        return self.get_clue(clue_id)

    # ------------------------------------------------------------------
    # Case generation
    # ------------------------------------------------------------------

    def generate_case(self, params: Optional[GenerationParams] = None, open_case: bool = True) -> GeneratedCase:
        """
        Generate a case and fold it into the store in one dispatch.

        Args:
            params:    Generation parameters. The language defaults to the
                       game's current language.
            open_case: Make the new case active immediately.
        """
        if params is None:
            params = GenerationParams(language=self.language)
        generated = self.case_generator.generate(params)
        self.store.dispatch(add_generated_case(generated))
        if open_case:
            self.store.dispatch(set_active_case(generated.case.id))
        logger.info("Added generated case %s (%r)", generated.case.id, generated.case.title)
        return generated

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def analyze_clue(self, clue_id: str, refresh: bool = False) -> ClueAnalysis:
        """
        Analyse a clue, examining it as a side effect.

        A cached analysis is returned without a model call unless ``refresh``.
        """
        clue = self.get_clue(clue_id)
        cached = self.state.game_state.clue_analyses.get(clue_id)
        if cached is not None and not refresh:
            logger.debug("Clue analysis cache hit: %s", clue_id)
            return cached

        case = self.get_case(clue.case_id)
        analysis = self.clue_analyzer.analyze(
            clue,
            self.state.suspects_for(case.id),
            case,
            self.discovered_clues(case.id),
            self.language,
        )
        self.store.dispatch(save_clue_analysis(clue_id, analysis))
        if not self.get_clue(clue_id).examined:
            self.store.dispatch(examine_clue(clue_id))
        return analysis

    def analyze_suspect(self, suspect_id: str, refresh: bool = False) -> SuspectAnalysis:
        """Analyse a suspect against the discovered clues; cached like clues."""
        suspect = self.get_suspect(suspect_id)
        cached = self.state.game_state.suspect_analyses.get(suspect_id)
        if cached is not None and not refresh:
            logger.debug("Suspect analysis cache hit: %s", suspect_id)
            return cached

        case = self.get_case(suspect.case_id)
        analysis = self.suspect_analyzer.analyze(
            suspect,
            self.discovered_clues(case.id),
            case,
            self.conversation(suspect_id),
            self.language,
        )
        self.store.dispatch(save_suspect_analysis(analysis))
        return analysis

    # ------------------------------------------------------------------
    # Interviews
    # ------------------------------------------------------------------

    def interview_suspect(self, suspect_id: str, question: str, is_custom: bool = True) -> str:
        """
        Ask a suspect one question and record the exchange.

        A pending turn with a fresh id is recorded before the model call and
        resolved by that id afterwards. On a completion failure the turn is
        discarded and the error propagates.
        """
        question = question.strip()
        if not question:
            raise DetectiveError("Question must not be empty")

        suspect = self.get_suspect(suspect_id)
        case = self.get_case(suspect.case_id)
        history = self.conversation(suspect_id)

        turn = InterviewTurn(question=question, is_custom=is_custom, pending=True)
        self.store.dispatch(start_interview_turn(suspect_id, turn))

        try:
            answer = self.suspect_analyzer.process_interview_question(
                question,
                suspect,
                self.discovered_clues(case.id),
                case,
                history,
                self.language,
            )
        except CompletionError:
            logger.error("Interview with %s failed; discarding turn %s", suspect.name, turn.id)
            self.store.dispatch(discard_interview_turn(suspect_id, turn.id))
            raise

        self.store.dispatch(resolve_interview_turn(suspect_id, turn.id, answer))
        if suspect_id not in self.state.game_state.interviewed_suspects:
            self.store.dispatch(interview_suspect(suspect_id))
        return answer

    # ------------------------------------------------------------------
    # Solving
    # ------------------------------------------------------------------

    def solve_case(
        self,
        accused_id: str,
        evidence_ids: Sequence[str],
        reasoning: str,
        case_id: Optional[str] = None,
    ) -> CaseSolution:
        """
        Adjudicate an accusation for ``case_id`` (default: the active case).

        The case is marked solved only when the verdict says so.

        Raises:
            CaseValidationError: invalid accusation, before any model call.
        """
        case = self.get_case(case_id) if case_id else self.active_case()
        solution = self.case_solver.evaluate(
            case,
            self.state.suspects_for(case.id),
            self.state.clues_for(case.id),
            accused_id,
            evidence_ids,
            reasoning,
            self.language,
        )
        if solution.solved:
            self.store.dispatch(solve_case(case.id))
        logger.info("Solve attempt for %s — solved=%s", case.id, solution.solved)
        return solution

    # ------------------------------------------------------------------
    # Language and reset
    # ------------------------------------------------------------------

    def set_language(self, language: str, translate_generated: bool = True) -> None:
        """
        Switch content language.

        Seed content swaps to its fixed overlay. Text of model-generated cases
        is translated from the previous language unless ``translate_generated``
        is false.
        """
        if language not in GAME_CONFIG.supported_languages:
            raise DetectiveError(
                f"Unsupported language {language!r}. Supported: {list(GAME_CONFIG.supported_languages)}"
            )
        previous = self.language
        self.language = language
        state = localize_content(self.state, language)
        if translate_generated:
            state = translate_generated_content(state, self.translator, previous, language)
        self.store.dispatch(load(state))
        logger.info("Language set to %s", language)

    def reset(self) -> None:
        """Start over from the seed cases, keeping the current language."""
        logger.info("Game reset requested.")
        self.store.dispatch(reset())
        if self.language != "en":
            self.store.dispatch(load(localize_content(self.state, self.language)))
