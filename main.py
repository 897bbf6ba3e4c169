import argparse
import random
import signal
import sys
from pathlib import Path

from loguru import logger
from rich.console import Console

from exercises import EngineConfig, InvalidCatalogError, QuestionAdapter
from logging_config import configure_logging
from settings import get_settings
from storage import (
    get_attempt_result_repo,
    get_question_repo,
    import_assignment,
    init_schema,
    load_assignment_file,
)
from ui import PlayerUI


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(description="Exercise Engine")
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="SQLite database path (default: EXERCISE_ENGINE_DB_PATH or data/exercises.db)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for stderr output (default: EXERCISE_ENGINE_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Play subcommand
    play_parser = subparsers.add_parser("play", help="Play an assignment file")
    play_parser.add_argument("file", type=Path, help="Assignment JSON file")
    play_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for item shuffling",
    )
    play_parser.add_argument(
        "--unique-targets",
        action="store_true",
        help="Allow each matching target to hold only one source",
    )
    play_parser.add_argument(
        "--no-shuffle",
        action="store_true",
        help="Show items in authored order",
    )

    # Import subcommand
    import_parser = subparsers.add_parser(
        "import", help="Store an assignment file's questions in the database"
    )
    import_parser.add_argument("file", type=Path, help="Assignment JSON file")

    # Results subcommand
    results_parser = subparsers.add_parser(
        "results", help="Show stored attempts of an exercise"
    )
    results_parser.add_argument("exercise_id", help="Question id")

    return parser


def build_config(args) -> EngineConfig:
    config = EngineConfig()
    config.matching.unique_targets = args.unique_targets
    if args.no_shuffle:
        config.matching.shuffle_items = False
        config.ordering.shuffle_items = False
    return config


def create_sigint_handler(ui: PlayerUI):
    """Create a SIGINT handler that exits with the quit message."""

    def sigint_handler(signum, frame):
        ui.show_quit_message()
        sys.exit(0)

    return sigint_handler


def run_play(args, db_path: Path, ui: PlayerUI) -> int:
    """Play every question of an assignment, recording each completed attempt."""
    assignment = load_assignment_file(args.file)
    if not assignment.questions:
        ui.show_error(f"Assignment {assignment.id} has no questions.")
        return 1

    seed = args.seed if args.seed is not None else get_settings().seed
    adapter = QuestionAdapter(build_config(args), random.Random(seed))
    results_repo = get_attempt_result_repo(db_path)

    signal.signal(signal.SIGINT, create_sigint_handler(ui))
    tracker = ui.create_progress_tracker(len(assignment.questions))

    for index, question in enumerate(assignment.questions):
        try:
            attempt = adapter.create_attempt(question, on_complete=results_repo.record)
        except InvalidCatalogError as e:
            logger.warning("Skipping question {}: {}", question.id, e)
            ui.show_error(f"Question {question.id} cannot be played: {e}")
            continue

        ui.show_title(question.question_text, index + 1, len(assignment.questions))
        result = ui.play(attempt)
        if result is None:
            ui.show_quit_message()
            return 0
        tracker.update(result)

    ui.show_session_complete(tracker)
    return 0


def run_import(args, db_path: Path, ui: PlayerUI) -> int:
    assignment = import_assignment(args.file, db_path)
    ui.show_info(
        f"Imported {len(assignment.questions)} question(s) from assignment "
        f"{assignment.id} into {db_path}"
    )
    return 0


def run_results(args, db_path: Path, ui: PlayerUI) -> int:
    question = get_question_repo(db_path).get_by_id(args.exercise_id)
    if question is not None and question.question_text:
        ui.show_info(question.question_text)
    results = get_attempt_result_repo(db_path).get_for_exercise(args.exercise_id)
    ui.show_results(args.exercise_id, results)
    return 0


COMMANDS = {
    "play": run_play,
    "import": run_import,
    "results": run_results,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point with CLI routing."""
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    if args.command is None:
        parser.print_help()
        return 1

    db_path = args.db or settings.db_path
    init_schema(db_path)

    ui = PlayerUI(Console())
    return COMMANDS[args.command](args, db_path, ui)


if __name__ == "__main__":
    sys.exit(main())
