# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""FAQ Map CLI: extract FAQ items and FAQPage JSON-LD from an HTML file.

Usage:
    faqmap extract page.html [--format json|jsonld|script|text]
    cat page.html | faqmap extract - --format script
    faqmap extract page.html --max-bytes 1000000 --budget-ms 250
    faqmap strategies
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path

from .config import ExtractorConfig
from .errors import FaqMapError
from .extractor import ExtractionReport, extract_faq, log_report
from .guards import check_html_size
from .logging_config import configure
from .pipeline_timer import budget_report
from .schema import decide
from .serializer import to_json, to_script_tag, to_text
from .strategies import STRATEGIES

logger = logging.getLogger("faqmap.cli")

_QUESTIONS_LOGGED = 10


def _read_input(path_str: str | None) -> tuple[str, str]:
    """Return (source label, document). "-" or no path reads stdin."""
    if not path_str or path_str == "-":
        return "<stdin>", sys.stdin.read()
    path = Path(path_str)
    return path.name, path.read_text(encoding="utf-8", errors="replace")


def cmd_extract(args: argparse.Namespace) -> None:
    """Extract FAQ items from one document and print them."""
    config = ExtractorConfig.from_env()
    if args.max_bytes:
        config = dataclasses.replace(config, max_html_bytes=args.max_bytes)

    source, html = _read_input(args.path)
    check_html_size(html, config.max_html_bytes)

    reports: list[ExtractionReport] = []

    def _reporter(report: ExtractionReport) -> None:
        log_report(report)
        reports.append(report)

    items = extract_faq(html, config=config, reporter=_reporter)
    decision = decide(items)

    logger.info(
        "faq_schema.decision",
        extra={
            "source": source,
            "extracted_count": decision.count,
            "eligible": decision.eligible,
            "questions": [item.question for item in items][:_QUESTIONS_LOGGED],
        },
    )

    if args.budget_ms and reports:
        overrun = budget_report(reports[-1].elapsed_ms, args.budget_ms)
        if overrun:
            logger.warning("faq.extraction.budget_exceeded", extra=overrun)

    fmt = args.format
    if fmt == "json":
        print(to_json(decision))
    elif fmt == "text":
        print(to_text(decision.items))
    elif not decision.eligible:
        # jsonld/script: nothing to emit below the schema threshold
        print(f"No FAQPage schema: {decision.count} item(s) found.", file=sys.stderr)
    elif fmt == "jsonld":
        print(json.dumps(decision.jsonld, ensure_ascii=False, indent=2))
    else:  # script
        print(to_script_tag(decision.jsonld))


def cmd_strategies(args: argparse.Namespace) -> None:
    """List the extraction strategies in priority order."""
    width = max(len(strategy.name) for strategy in STRATEGIES)
    for rank, strategy in enumerate(STRATEGIES, 1):
        print(f"{rank}. {strategy.name:<{width}}  {strategy.description}")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="FAQ Map CLI",
        prog="faqmap",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging (includes per-strategy counts)")
    parser.add_argument("--json-logs", action="store_true", help="Emit log records as JSON lines on stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    _extract_epilog = """\
examples:
  %(prog)s page.html                      JSON result to stdout
  %(prog)s page.html --format script      <script type="application/ld+json"> tag
  cat page.html | %(prog)s - --format text
"""
    p_extract = subparsers.add_parser(
        "extract",
        help="Extract FAQ items from an HTML document",
        epilog=_extract_epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p_extract.add_argument("path", nargs="?", default="-", metavar="PATH", help="HTML file, or - for stdin")
    p_extract.add_argument(
        "--format",
        type=str,
        choices=["json", "jsonld", "script", "text"],
        default="json",
        help="Output format (default: json)",
    )
    p_extract.add_argument(
        "--max-bytes",
        type=int,
        metavar="N",
        help="Reject input larger than N bytes (default: FAQMAP_MAX_HTML_BYTES or 5 MiB)",
    )
    p_extract.add_argument(
        "--budget-ms",
        type=float,
        metavar="MS",
        help="Warn when extraction takes longer than MS milliseconds",
    )

    subparsers.add_parser("strategies", help="List extraction strategies in priority order")

    commands = {"extract": cmd_extract, "strategies": cmd_strategies}

    args = parser.parse_args(argv)

    configure(json_output=args.json_logs, level="DEBUG" if args.verbose else "INFO")

    try:
        commands[args.command](args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)
    except SystemExit:
        raise
    except (FaqMapError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc(file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
