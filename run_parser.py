#!/usr/bin/env python3
"""
Command-line script to parse state log files.

Parses each file (direct JSON or text recovery, whichever fits) and prints a
JSON report per file. Progress goes to stderr so stdout stays valid JSON.

Usage:
    python run_parser.py state-logs.json
    python run_parser.py state-logs.txt --summary
    python run_parser.py exports/*.txt -o report.json
    python run_parser.py broken.json --json-fallback --include-document
"""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from statelog_parser.main import StateLogParser
from statelog_parser.config import ParserConfig
from statelog_parser.exceptions import StateLogParserError
from statelog_parser.logger import setup_logger


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Parse wallet state logs (.json or damaged .txt exports)"
    )
    parser.add_argument(
        "files",
        nargs="+",
        help="State log files to parse"
    )
    parser.add_argument(
        "--output", "-o",
        help="Output file for the report (default: print to stdout)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging"
    )
    parser.add_argument(
        "--summary", "-s",
        action="store_true",
        help="Include a structure summary for each parsed file"
    )
    parser.add_argument(
        "--include-document", "-d",
        action="store_true",
        help="Include the recovered document in the report"
    )
    parser.add_argument(
        "--json-fallback",
        action="store_true",
        help="Retry .json files that fail to parse through the recovery pipeline"
    )
    return parser


def parse_one(state_log_parser: StateLogParser, file_path: Path, args) -> dict:
    """Parse one file and return its report entry."""
    try:
        parsed = state_log_parser.parse_file(file_path)
    except StateLogParserError as e:
        print(f"  ✗ {type(e).__name__}: {e.message.splitlines()[0]}", file=sys.stderr)
        return {
            "file": str(file_path),
            "status": "error",
            **e.to_response()
        }
    except OSError as e:
        print(f"  ✗ Error reading file: {e}", file=sys.stderr)
        return {
            "file": str(file_path),
            "status": "error",
            "error": type(e).__name__,
            "message": str(e)
        }

    entry = {
        "file": str(file_path),
        "status": "success",
        "parsing_strategy": parsed.parsing_strategy.value,
        "recovery_strategy": parsed.recovery_strategy,
        "warnings": parsed.warnings
    }
    if args.summary:
        entry["summary"] = parsed.summary.model_dump(mode="json")
    if args.include_document:
        entry["document"] = parsed.document

    via = parsed.recovery_strategy or parsed.parsing_strategy.value
    print(f"  ✓ {parsed.summary.format.value} state log ({via})", file=sys.stderr)
    return entry


def main(argv=None) -> int:
    # Load .env file automatically
    load_dotenv()
    args = build_arg_parser().parse_args(argv)

    config = ParserConfig.from_env(
        json_fallback_to_recovery=True if args.json_fallback else None,
        log_level="DEBUG" if args.verbose else None
    )

    # stdout is reserved for the report. Quiet unless a level was asked for.
    level = config.log_level if "log_level" in config.model_fields_set else "WARNING"
    setup_logger(level=level, stream=sys.stderr)

    state_log_parser = StateLogParser(config=config)

    results = []
    for file_name in args.files:
        file_path = Path(file_name)
        print(f"Parsing: {file_path.name}", file=sys.stderr)
        results.append(parse_one(state_log_parser, file_path, args))

    # ensure_ascii=False preserves unicode characters in the JSON
    output_json = json.dumps(results, indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(output_json, encoding="utf-8")
        print(f"\nReport saved to: {args.output}", file=sys.stderr)
    else:
        print(output_json)

    return 1 if any(r["status"] == "error" for r in results) else 0


if __name__ == "__main__":
    sys.exit(main())
