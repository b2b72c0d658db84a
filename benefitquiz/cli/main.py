from __future__ import annotations

import argparse
import json
import sys
from functools import partial
from pathlib import Path
from typing import List, Optional

from benefitquiz.analysis.supply import supply_table, unique_supply
from benefitquiz.config import AppConfig, load_app_config
from benefitquiz.data.loader import load_bank, load_pool, load_registry
from benefitquiz.data.schemas import DIFFICULTIES, REQUEST_TOPICS
from benefitquiz.errors import BankUnavailableError, RequestValidationError
from benefitquiz.generation.client import QuestionGenerator
from benefitquiz.quiz.build import QuizBuildRequest, QuizBuildResult, build_quiz
from benefitquiz.quiz.session import QuizSession
from benefitquiz.utils.logging import setup_logging
from benefitquiz.utils.rng import RandomSource


def _make_loader(cfg: AppConfig, registry_path: Optional[str]):
    registry = load_registry(registry_path or cfg.banks.registry_path)
    return partial(
        load_pool,
        registry=registry,
        timeout_s=cfg.banks.timeout_s,
        max_workers=cfg.banks.max_workers,
    )


def _build(args, cfg: AppConfig, logger) -> QuizBuildResult:
    request = QuizBuildRequest.from_form(args.topic, args.difficulty, args.count, args.remote)
    seed = args.seed if args.seed is not None else cfg.determinism.seed
    return build_quiz(
        request,
        pool_loader=_make_loader(cfg, args.registry),
        generator=QuestionGenerator(cfg.generator) if args.remote else None,
        rng=RandomSource(seed),
    )


def cmd_build(args, cfg: AppConfig, logger) -> int:
    result = _build(args, cfg, logger)
    payload = {
        "topic": args.topic,
        "difficulty": args.difficulty,
        "requested": result.requested_count,
        "returned": result.effective_count,
        "source": result.source,
        "relaxed": result.relaxed,
        "notice": result.notice,
        "questions": [q.to_dict() for q in result.questions],
    }
    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info("Wrote %d questions to %s", result.effective_count, out)
    else:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    if result.notice:
        print(f"Notice: {result.notice}", file=sys.stderr)
    return 0


def cmd_play(args, cfg: AppConfig, logger) -> int:
    result = _build(args, cfg, logger)
    if result.notice:
        print(f"Notice: {result.notice}")
    if not result.questions:
        print("No questions available for this topic.")
        return 1
    session = QuizSession(
        result.questions, args.topic, args.difficulty, mode="AI" if args.remote else "Local"
    )
    print(f"\n{session.badge()}")
    print("=" * 50)
    while not session.finished:
        q = session.current
        print(f"\n{session.progress_text}: {q.text}")
        for i, choice in enumerate(q.choices):
            print(f"  {chr(ord('A') + i)}) {choice}")
        raw = input("Your answer (letter, or blank to skip): ").strip().upper()
        if not raw:
            session.skip()
            continue
        idx = ord(raw[0]) - ord("A")
        if not 0 <= idx < len(q.choices):
            print("Invalid choice.")
            continue
        fb = session.answer(idx)
        if fb is not None:
            print("Correct." if fb.correct else f"Incorrect. Correct answer: {fb.correct_answer}")
            if fb.explanation:
                print(fb.explanation)
            print(f"Why this matters: {fb.rationale}")
        session.next()

    print("\n" + "=" * 50)
    print(f"{session.title}: {session.score} / {session.total} • {session.percent}%")
    print(session.note)
    print("\nCoaching advice:\n" + session.coaching_advice())
    return 0


def cmd_stats(args, cfg: AppConfig, logger) -> int:
    pool = _make_loader(cfg, args.registry)(args.topic)
    print(supply_table(pool).to_string())
    print()
    for k, v in unique_supply(pool).items():
        print(f"{k}: {v}")
    return 0


def cmd_validate(args, cfg: AppConfig, logger) -> int:
    try:
        questions = load_bank(args.path, topic=args.topic, timeout_s=cfg.banks.timeout_s)
    except BankUnavailableError as e:
        print(f"Error: {e}")
        logger.error("Bank validation failed: %s", e)
        return 1
    print(f"{args.path}: {len(questions)} valid questions")
    stats = unique_supply(questions)
    print(json.dumps(stats, indent=2))
    return 0 if questions else 1


def _add_request_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--topic", "-t", default="mixed", choices=REQUEST_TOPICS, help="Question topic (default: mixed)")
    p.add_argument("--difficulty", "-d", default="easy", choices=DIFFICULTIES, help="Difficulty tier (default: easy)")
    p.add_argument("--count", "-n", default="8", help="Number of questions, 1-100 (default: 8)")
    p.add_argument("--remote", action="store_true", help="Generate questions remotely, falling back to local banks")
    p.add_argument("--seed", type=int, default=None, help="Seed for reproducible selection")
    p.add_argument("--registry", default=None, help="Bank registry YAML (default from config)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="benefitquiz - build deduplicated employee-benefits quizzes",
        epilog="""Examples:
  # Build an 8-question easy basics quiz as JSON
  benefitquiz build --topic basics --difficulty easy --count 8

  # Reproducible mixed quiz written to a file
  benefitquiz build --topic mixed --count 20 --seed 7 --output quizzes/mixed.json

  # Take a quiz in the terminal
  benefitquiz play --topic compliance --difficulty expert --count 5

  # Show bank supply per topic and difficulty
  benefitquiz stats --topic mixed

  # Check a bank file
  benefitquiz validate data/banks/bank.funding.json --topic funding
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", "-c", default="configs/default.json", help="Configuration file path")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    build_parser_ = subparsers.add_parser("build", help="Build a quiz and print it as JSON")
    _add_request_args(build_parser_)
    build_parser_.add_argument("--output", "-o", help="Write the quiz JSON here instead of stdout")

    play_parser = subparsers.add_parser("play", help="Take a quiz interactively")
    _add_request_args(play_parser)

    stats_parser = subparsers.add_parser("stats", help="Show question supply")
    stats_parser.add_argument("--topic", "-t", default="mixed", choices=REQUEST_TOPICS)
    stats_parser.add_argument("--registry", default=None, help="Bank registry YAML")

    validate_parser = subparsers.add_parser("validate", help="Validate a bank file")
    validate_parser.add_argument("path", help="Bank JSON file or URL")
    validate_parser.add_argument("--topic", "-t", default=None, help="Topic for records that omit one")

    return parser


COMMANDS = {
    "build": cmd_build,
    "play": cmd_play,
    "stats": cmd_stats,
    "validate": cmd_validate,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    cfg = load_app_config(args.config)
    logger = setup_logging(cfg.logging, level="DEBUG" if args.verbose else None)

    try:
        return COMMANDS[args.command](args, cfg, logger)
    except RequestValidationError as e:
        print(f"Error: {e.message}")
        logger.error("Invalid request (%s): %s", e.field, e.message)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
