"""
PhishGuard command line - score text from a file or stdin.
"""

import argparse
import json
import logging
import sys

from phishguard.core.scoring_engine import ScoringEngine, get_scoring_engine


def format_report(report) -> str:
    lines = [
        f"Risk Level: {report.label.value} ({report.score}/100)",
        f"Heuristic score: {report.heuristic_score:.0f}  Model score: {report.ml_score:.0f}",
        "",
        report.explanation,
    ]
    return "\n".join(lines)


def main(argv=None, engine: ScoringEngine = None) -> int:
    parser = argparse.ArgumentParser(description="Score text for phishing risk")
    parser.add_argument("--file", help="Path to a text file to analyze")
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.file:
        with open(args.file, "r", encoding="utf-8", errors="replace") as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    if not text.strip():
        print("Provide --file <path> or pipe text via stdin.", file=sys.stderr)
        return 1

    report = (engine or get_scoring_engine()).score(text)
    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(format_report(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
