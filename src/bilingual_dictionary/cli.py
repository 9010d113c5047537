"""
Command-line interface for the dictionary.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional

from .batch import BatchResult, ParseError, execute_change_request, load_change_request
from .config import load_config
from .exceptions import DictionaryError
from .models import SUPPORTED_LANGUAGES
from .service import DictionaryService


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the dictionary CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
    except DictionaryError as e:
        print(f"[CONFIG ERROR] {e}", file=sys.stderr)
        return 1
    if args.db:
        config = replace(config, database=args.db)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        with DictionaryService.from_config(config) as service:
            return args.func(service, args)
    except DictionaryError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dictionary",
        description="Polish-English dictionary of words, translations and examples",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML configuration file",
    )
    parser.add_argument(
        "--db",
        type=str,
        help="Database file (overrides configuration)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(title="commands", dest="command")
    languages = sorted(SUPPORTED_LANGUAGES)

    words_parser = subparsers.add_parser("words", help="List every word")
    words_parser.set_defaults(func=cmd_words)

    # word commands
    word_parser = subparsers.add_parser("word", help="Manage words")
    word_sub = word_parser.add_subparsers(title="actions", dest="action", required=True)

    p = word_sub.add_parser("get", help="Look a word up by its text")
    p.add_argument("text")
    p.set_defaults(func=cmd_word_get)

    p = word_sub.add_parser("add", help="Add a word")
    p.add_argument("text")
    p.add_argument("language", choices=languages)
    p.set_defaults(func=cmd_word_add)

    p = word_sub.add_parser("update", help="Change a word's spelling")
    p.add_argument("old_text")
    p.add_argument("language", choices=languages)
    p.add_argument("new_text")
    p.set_defaults(func=cmd_word_update)

    p = word_sub.add_parser("delete", help="Delete a word with its examples and translations")
    p.add_argument("text")
    p.add_argument("language", choices=languages)
    p.set_defaults(func=cmd_word_delete)

    # example commands
    p = subparsers.add_parser("examples", help="List the examples of a word")
    p.add_argument("word")
    p.set_defaults(func=cmd_examples)

    example_parser = subparsers.add_parser("example", help="Manage example sentences")
    example_sub = example_parser.add_subparsers(title="actions", dest="action", required=True)

    p = example_sub.add_parser("add", help="Attach an example to a word")
    p.add_argument("word")
    p.add_argument("language", choices=languages)
    p.add_argument("example")
    p.set_defaults(func=cmd_example_add)

    p = example_sub.add_parser("update", help="Replace an example's text")
    p.add_argument("id", type=int)
    p.add_argument("example")
    p.set_defaults(func=cmd_example_update)

    p = example_sub.add_parser("delete", help="Delete an example")
    p.add_argument("id", type=int)
    p.set_defaults(func=cmd_example_delete)

    # translation commands
    p = subparsers.add_parser("translations", help="List the translations of a word")
    p.add_argument("word")
    p.set_defaults(func=cmd_translations)

    translation_parser = subparsers.add_parser("translation", help="Manage translations")
    translation_sub = translation_parser.add_subparsers(
        title="actions", dest="action", required=True
    )

    p = translation_sub.add_parser("add", help="Link a Polish and an English word")
    p.add_argument("pl")
    p.add_argument("en")
    p.set_defaults(func=cmd_translation_add)

    p = translation_sub.add_parser("update", help="Relink a translation")
    p.add_argument("old_pl")
    p.add_argument("old_en")
    p.add_argument("new_pl")
    p.add_argument("new_en")
    p.set_defaults(func=cmd_translation_update)

    p = translation_sub.add_parser("delete", help="Unlink a Polish and an English word")
    p.add_argument("pl")
    p.add_argument("en")
    p.set_defaults(func=cmd_translation_delete)

    # apply command
    apply_parser = subparsers.add_parser(
        "apply",
        help="Apply changes from a YAML request file",
    )
    apply_parser.add_argument(
        "file",
        type=Path,
        help="YAML file containing change request",
    )
    apply_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Simulate execution without making changes",
    )
    apply_parser.set_defaults(func=cmd_apply)

    return parser


def _emit(payload: Any) -> int:
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


def cmd_words(service: DictionaryService, args: argparse.Namespace) -> int:
    return _emit([w.to_dict() for w in service.list_words()])


def cmd_word_get(service: DictionaryService, args: argparse.Namespace) -> int:
    return _emit(service.get_word(args.text).to_dict())


def cmd_word_add(service: DictionaryService, args: argparse.Namespace) -> int:
    return _emit(service.add_word(args.text, args.language).to_dict())


def cmd_word_update(service: DictionaryService, args: argparse.Namespace) -> int:
    return _emit(service.update_word(args.old_text, args.language, args.new_text).to_dict())


def cmd_word_delete(service: DictionaryService, args: argparse.Namespace) -> int:
    return _emit(service.delete_word(args.text, args.language))


def cmd_examples(service: DictionaryService, args: argparse.Namespace) -> int:
    return _emit([e.to_dict() for e in service.examples_for_word(args.word)])


def cmd_example_add(service: DictionaryService, args: argparse.Namespace) -> int:
    return _emit(service.add_example(args.word, args.language, args.example).to_dict())


def cmd_example_update(service: DictionaryService, args: argparse.Namespace) -> int:
    return _emit(service.update_example(args.id, args.example).to_dict())


def cmd_example_delete(service: DictionaryService, args: argparse.Namespace) -> int:
    return _emit(service.delete_example(args.id))


def cmd_translations(service: DictionaryService, args: argparse.Namespace) -> int:
    return _emit([w.to_dict() for w in service.translations_for_word(args.word)])


def cmd_translation_add(service: DictionaryService, args: argparse.Namespace) -> int:
    return _emit(service.add_translation(args.pl, args.en).to_dict())


def cmd_translation_update(service: DictionaryService, args: argparse.Namespace) -> int:
    translation = service.update_translation(
        args.old_pl, args.old_en, args.new_pl, args.new_en
    )
    return _emit(translation.to_dict())


def cmd_translation_delete(service: DictionaryService, args: argparse.Namespace) -> int:
    return _emit(service.delete_translation(args.pl, args.en))


def cmd_apply(service: DictionaryService, args: argparse.Namespace) -> int:
    """Handle apply command."""
    try:
        request = load_change_request(args.file)
    except ParseError as e:
        print(f"[PARSE ERROR] {e}", file=sys.stderr)
        if e.line:
            print(f"              Line: {e.line}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    print(f"Changes: {len(request.changes)}")
    if request.description:
        print(f"Description: {request.description}")
    if args.dry_run:
        print("[DRY RUN] Simulating execution...")

    result = execute_change_request(service, request, dry_run=args.dry_run)
    _print_batch_result(result)

    if result.failure_count > 0:
        return 1
    return 0


def _print_batch_result(result: BatchResult) -> None:
    """Print batch execution result."""
    print()
    for change in result.changes:
        status = "OK" if change.success else "FAILED"
        print(f"  [{change.index + 1}/{result.total_count}] {change.operation}: {status}")
        if change.message:
            print(f"         {change.message}")

    print("\nResults:")
    print(f"  Total:   {result.total_count}")
    print(f"  Success: {result.success_count}")
    print(f"  Failed:  {result.failure_count}")
    print(f"  Time:    {result.duration_seconds:.2f}s")


if __name__ == "__main__":
    sys.exit(main())
