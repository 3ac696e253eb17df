"""
cli.py
======
Command-line interface for the Detective Case Engine.

Provides a text-based game loop for development and testing. All game logic
is delegated to DetectiveGame; this module only handles I/O.

Usage:
    python cli.py

Commands during play:
    /cases                              — list all cases and their status
    /open <case_id>                     — open a case
    /new [easy|medium|hard] [theme...]  — generate a new case
    /clues                              — list clues of the open case
    /discover <clue_id>                 — mark a clue discovered
    /examine <clue_id>                  — analyse a clue (marks it examined)
    /suspects                           — list suspects of the open case
    /analyze <suspect_id>               — profile a suspect
    /ask <suspect_id> <question>        — interview a suspect
    /solve <suspect_id> <clue_ids,...> <reasoning> — accuse a suspect
    /lang <en|th>                       — switch content language
    /status                             — show progress
    /reset                              — start over from the seed cases
    /quit                               — exit the game
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from errors import DetectiveError
from game_engine import DetectiveGame
from models import DIFFICULTIES, GenerationParams
from persistence import JsonFileStorage

HELP = (
    "Commands: /cases, /open <id>, /new [difficulty] [theme], /clues, /discover <id>, "
    "/examine <id>, /suspects, /analyze <id>, /ask <id> <question>, "
    "/solve <id> <clue,ids> <reasoning>, /lang <en|th>, /status, /reset, /quit"
)


def _print_cases(game: DetectiveGame) -> None:
    active = game.state.game_state.active_case
    for case in game.state.cases:
        marker = "*" if case.id == active else " "
        status = "SOLVED" if case.solved else case.difficulty
        print(f" {marker} {case.id} – {case.title} [{status}]")


def _print_clues(game: DetectiveGame) -> None:
    for clue in game.state.clues_for(game.active_case().id):
        flags = ("D" if clue.discovered else "-") + ("E" if clue.examined else "-")
        print(f"  [{flags}] {clue.id} – {clue.title} ({clue.type}, {clue.relevance})")


def _print_suspects(game: DetectiveGame) -> None:
    for suspect in game.state.suspects_for(game.active_case().id):
        flag = "I" if suspect.interviewed else "-"
        print(f"  [{flag}] {suspect.id} – {suspect.name}: {suspect.description}")


def handle_command(game: DetectiveGame, user_input: str) -> bool:
    """
    Execute one command line. Returns False when the player quits.

    DetectiveError subclasses are raised to the caller, which prints them.
    """
    command, _, rest = user_input.partition(" ")
    command = command.lower()
    rest = rest.strip()

    if command in {"/quit", "quit", "exit"}:
        print("Thanks for playing!")
        return False

    if command == "/cases":
        _print_cases(game)
    elif command == "/open":
        case = game.open_case(rest)
        print(f"\n{case.title} — {case.location}, {case.date_time}")
        print(case.description)
        print(f"Progress: {game.progress}%")
    elif command == "/new":
        words = rest.split(maxsplit=1)
        difficulty = "medium"
        if words and words[0].lower() in DIFFICULTIES:
            difficulty = words.pop(0).lower()
        theme = " ".join(words) or None
        print("Generating a new case...")
        generated = game.generate_case(
            GenerationParams(difficulty=difficulty, theme=theme, language=game.language)
        )
        print(f"New case: {generated.case.id} – {generated.case.title}")
    elif command == "/clues":
        _print_clues(game)
    elif command == "/discover":
        clue = game.discover_clue(rest)
        print(f"Discovered: {clue.title}. Progress: {game.progress}%")
    elif command == "/examine":
        analysis = game.analyze_clue(rest)
        print(analysis.summary)
        for connection in analysis.connections:
            print(f"  ↳ {game.get_suspect(connection.suspect_id).name}: {connection.description}")
        for step in analysis.next_steps:
            print(f"  • {step}")
        print(f"Progress: {game.progress}%")
    elif command == "/suspects":
        _print_suspects(game)
    elif command == "/analyze":
        analysis = game.analyze_suspect(rest)
        print(f"Trustworthiness: {analysis.trustworthiness}/100")
        for item in analysis.inconsistencies:
            print(f"  ! {item}")
        for question in analysis.suggested_questions:
            print(f"  ? {question}")
    elif command == "/ask":
        suspect_id, _, question = rest.partition(" ")
        if not question.strip():
            print("Usage: /ask <suspect_id> <question>")
            return True
        answer = game.interview_suspect(suspect_id, question)
        print(f"\n[{game.get_suspect(suspect_id).name}]: {answer}")
        print(f"Progress: {game.progress}%")
    elif command == "/solve":
        parts = rest.split(maxsplit=2)
        if len(parts) < 3:
            print("Usage: /solve <suspect_id> <clue_id,clue_id,...> <reasoning>")
            return True
        accused_id, evidence, reasoning = parts
        solution = game.solve_case(accused_id, [e for e in evidence.split(",") if e], reasoning)
        print(solution.narrative)
        print(f"\n{'🎉 CASE SOLVED!' if solution.solved else '❌ CASE UNSOLVED...'} Progress: {game.progress}%")
    elif command == "/lang":
        game.set_language(rest.lower())
        print(f"Language: {game.language}")
    elif command == "/status":
        gs = game.state.game_state
        print(f"  Active case  : {gs.active_case}")
        print(f"  Progress     : {gs.game_progress}%")
        print(f"  Discovered   : {list(gs.discovered_clues)}")
        print(f"  Examined     : {list(gs.examined_clues)}")
        print(f"  Interviewed  : {list(gs.interviewed_suspects)}")
        print(f"  Solved       : {list(gs.cases_solved)}")
    elif command == "/reset":
        game.reset()
        print("Game reset.")
    else:
        print(HELP)
    return True


def run_cli() -> None:
    """
    Main CLI game loop.

    Loads .env, validates GROQ_API_KEY, restores the saved game, then
    processes commands until the player quits.
    """
    load_dotenv()
    if not os.environ.get("GROQ_API_KEY"):
        print("Error: GROQ_API_KEY environment variable is not set.")
        print("  export GROQ_API_KEY='your-key-here'  (or add it to .env)")
        return

    game = DetectiveGame(storage=JsonFileStorage())

    print("\n" + "=" * 60)
    print("   DETECTIVE CASE ENGINE")
    print("=" * 60)
    _print_cases(game)
    print("\n" + HELP)
    print("-" * 60)

    while True:
        try:
            user_input = input(f"\n[{game.progress}%] > ").strip()
        except EOFError:
            break
        if not user_input:
            continue
        try:
            if not handle_command(game, user_input):
                break
        except DetectiveError as exc:
            print(f"Error: {exc}")


if __name__ == "__main__":
    # Configure logging at the entry point so all detective.* loggers emit
    # to stderr at INFO level.
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    run_cli()
