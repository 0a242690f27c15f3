"""
Command-line entry points.

Examples:
  # Advisory chat seeded with the restaurant's features
  review-advisor chat "巷口老字號牛肉麵，湯頭清燉，座位 20 席"

  # Summarize a restaurant's reviews and keep the result
  review-advisor summarize abc123 summary.json

  # List the raw reviews of a restaurant
  review-advisor reviews abc123
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

import orjson

from review_advisor import __version__
from review_advisor.config import Settings, get_settings
from review_advisor.errors import AdvisorError, GenerationFailed
from review_advisor.reviews.models import ArrayValue, TypedValue
from review_advisor.service import AdvisorServices, build_services

logger = logging.getLogger(__name__)


def describe_value(value: TypedValue) -> str:
    if isinstance(value, ArrayValue):
        return orjson.dumps([item.text for item in value.values]).decode()
    return value.text or ""


def run_chat(
    features: str,
    services: AdvisorServices,
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
    stderr: TextIO = sys.stderr,
) -> int:
    session = services.conversation(features)
    print("── 已載入餐廳特色 ──", file=stdout)
    print(features, file=stdout)
    print(f"輸入你的問題，輸入 {session.exit_keyword} 離開。", file=stdout)

    while session.is_active:
        print("> ", end="", file=stdout, flush=True)
        line = stdin.readline()
        if not line:
            session.close()
            break
        try:
            reply = session.submit(line)
        except GenerationFailed as exc:
            # The turn is lost but the conversation continues.
            print(f"❌ {exc}", file=stderr)
            continue
        if reply is not None:
            print(f"AI: {reply}", file=stdout)

    print("結束對話。", file=stdout)
    return 0


def run_summarize(
    restaurant_id: str,
    output: Optional[Path],
    services: AdvisorServices,
    stdout: TextIO = sys.stdout,
    stderr: TextIO = sys.stderr,
) -> int:
    try:
        result = services.summary_pipeline().run(restaurant_id)
    except AdvisorError as exc:
        print(f"❌ {exc}", file=stderr)
        return 1

    print("====== 特色文字摘要 ======\n", file=stdout)
    print(result.summary, file=stdout)

    if output is not None:
        output.write_bytes(orjson.dumps(result.to_dict(), option=orjson.OPT_INDENT_2))
        print(f"\n✓ 已寫入 {output.resolve()}", file=stdout)
    return 0


def run_reviews(
    restaurant_id: str,
    services: AdvisorServices,
    stdout: TextIO = sys.stdout,
    stderr: TextIO = sys.stderr,
) -> int:
    try:
        documents = services.store.list_reviews(restaurant_id)
    except AdvisorError as exc:
        print(f"❌ {exc}", file=stderr)
        return 1

    if not documents:
        print("找不到任何評論。", file=stdout)
        return 0

    for document in documents:
        print(f"=== Review ID: {document.review_id} ===", file=stdout)
        for key, value in document.fields.items():
            print(f"  {key}: {describe_value(value)}", file=stdout)
        print(file=stdout)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="review-advisor",
        description="Restaurant review summaries and advisory chat backed by Ollama",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1] if __doc__ else None,
    )
    parser.add_argument("--version", action="version", version=__version__)
    subparsers = parser.add_subparsers(dest="command", required=True)

    chat = subparsers.add_parser("chat", help="Interactive advisory chat")
    chat.add_argument("features", help="Restaurant feature description")

    summarize = subparsers.add_parser("summarize", help="Summarize customer reviews")
    summarize.add_argument("restaurant_id", help="Restaurant document id")
    summarize.add_argument(
        "output", nargs="?", type=Path, help="Optional JSON file for the result"
    )

    reviews = subparsers.add_parser("reviews", help="List a restaurant's reviews")
    reviews.add_argument("restaurant_id", help="Restaurant document id")
    return parser


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings)

    logger.debug(f"Running {args.command} command")
    services = build_services(settings)
    try:
        if args.command == "chat":
            return run_chat(args.features, services)
        if args.command == "summarize":
            return run_summarize(args.restaurant_id, args.output, services)
        return run_reviews(args.restaurant_id, services)
    finally:
        services.close()


if __name__ == "__main__":
    sys.exit(main())
