# src/idea_research/cli.py
"""
Command-line interface for researching startup ideas
"""
import argparse
import logging
from typing import List, Optional

from .database.db import ResearchArchive, ResearchDatabase
from .exceptions import InvalidInputError, QuotaExceededError, ResearchError
from .logging_config import setup_logging
from .manager import ResearchManager
from .text_processing import plain_text_summary

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="idea-research",
        description="Research a startup idea on the web and summarize the market"
    )
    parser.add_argument("idea", nargs="*", help="Idea or research question (prompted when omitted)")
    parser.add_argument("--plain", action="store_true", help="Print the report as plain text instead of Markdown")
    parser.add_argument("--no-save", action="store_true", help="Do not store the result in the archive")
    parser.add_argument("--history", action="store_true", help="List recently stored research")
    parser.add_argument("--limit", type=int, default=10, help="Number of records shown with --history")
    return parser


def display_report(idea: str, keywords: str, summary: str, plain: bool = False):
    """Print a research report"""
    print("\n=== Research Report ===")
    print(f"Idea: {idea}")
    print(f"Keywords: {keywords}")
    print("-" * 60)
    print(plain_text_summary(summary) if plain else summary)
    print("-" * 60)


def display_history(database: ResearchDatabase, limit: int = 10):
    """Print recently stored research records"""
    records = database.list_recent(limit)
    if not records:
        print("\nNo research stored yet.")
        return
    print(f"\n=== Last {len(records)} research records ===")
    for record in records:
        print(f"\nID: {record['_id']}")
        print(f"Idea: {record.get('idea', 'N/A')}")
        print(f"Keywords: {record.get('keywords', '')}")
        print(f"Created: {record.get('createdAt')}")


def main(argv: Optional[List[str]] = None,
         manager: Optional[ResearchManager] = None,
         archive: Optional[ResearchArchive] = None) -> int:
    """Main CLI function"""
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        archive = archive or ResearchArchive()
        if args.history:
            display_history(archive.database, args.limit)
            return 0

        idea = " ".join(args.idea).strip()
        if not idea:
            print("\n=== Idea Research Tool ===")
            idea = input("\nDescribe your startup idea: ").strip()

        manager = manager or ResearchManager()
        report = manager.run(idea)
        display_report(idea, report.keywords, report.summary, plain=args.plain)

        if args.no_save:
            logger.info("Skipping archive (--no-save)")
            return 0
        record_id = archive.save_best_effort(idea, report.keywords, report.summary)
        if record_id:
            print(f"\nSaved research record: {record_id}")
        else:
            print("\nResearch could not be saved (see log).")
        return 0

    except InvalidInputError as e:
        print(f"\nError: {e}")
        return 2
    except QuotaExceededError:
        print("\nError: OpenAI quota exceeded. Check billing.")
        return 1
    except ResearchError as e:
        print(f"\nError: {str(e)}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        print("\nError: Research failed unexpectedly. Try again later.")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
