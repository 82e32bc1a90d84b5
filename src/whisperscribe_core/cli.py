#!/usr/bin/env python3
"""
WhisperScribe command line

Runs the post-processing pipeline over a saved AI response, or starts the
HTTP service.

    whisperscribe clean response.txt
    whisperscribe process --summary --tags response.txt
    whisperscribe serve --port 8080
"""

import argparse
import json
import sys
from dataclasses import asdict

import structlog

from whisperscribe_core.config import ServiceSettings
from whisperscribe_core.errors import ResponseFormatError, ValidationError, WhisperScribeError
from whisperscribe_core.logging import configure_from_settings
from whisperscribe_core.pipeline import process_response
from whisperscribe_core.text import (
    FeatureOptions,
    SummaryLength,
    clean_repetitive_text,
    detect_hallucination,
    format_transcription_output,
    parse_sections,
)

logger = structlog.get_logger()

EXIT_ERROR = 2


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def _cmd_clean(args: argparse.Namespace, settings: ServiceSettings) -> int:
    max_repetitions = args.max_repetitions
    if max_repetitions is None:
        max_repetitions = settings.max_repetitions
    elif max_repetitions < 1:
        raise ValidationError("--max-repetitions must be at least 1", value=max_repetitions)
    print(clean_repetitive_text(_read_input(args.file), max_repetitions))
    return 0


def _cmd_detect(args: argparse.Namespace, settings: ServiceSettings) -> int:
    flagged = detect_hallucination(_read_input(args.file), settings.hallucination_threshold)
    print("true" if flagged else "false")
    return 0


def _cmd_parse(args: argparse.Namespace, settings: ServiceSettings) -> int:
    parsed = parse_sections(_read_input(args.file), include_features=not args.simple)
    print(json.dumps(asdict(parsed), ensure_ascii=False, indent=2))
    return 0


def _cmd_process(args: argparse.Namespace, settings: ServiceSettings) -> int:
    text = _read_input(args.file)
    if not text.strip():
        raise ResponseFormatError("No transcription received", source=args.file)

    options = FeatureOptions(
        include_summary=args.summary,
        propose_tags=args.tags,
        generate_diagram=args.diagram,
        summary_length=SummaryLength(args.summary_length),
        use_fallback=args.fallback,
    )
    result = process_response(text, options, settings)
    if args.json:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        print(format_transcription_output(result, options))
    return 0


def _cmd_serve(args: argparse.Namespace, settings: ServiceSettings) -> int:
    import uvicorn

    from whisperscribe_core.api import create_app

    logger.info("starting_service", host=args.host, port=args.port)
    uvicorn.run(create_app(settings), host=args.host, port=args.port, log_config=None)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="whisperscribe", description="Clean and parse AI transcription responses"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    clean = sub.add_parser("clean", help="Truncate runaway repetitive patterns")
    clean.add_argument("file", nargs="?", default="-", help="Input file (default: stdin)")
    clean.add_argument("--max-repetitions", type=int, help="Allowed repetitions of a pattern")
    clean.set_defaults(handler=_cmd_clean)

    detect = sub.add_parser("detect", help="Print whether text looks hallucinated")
    detect.add_argument("file", nargs="?", default="-")
    detect.set_defaults(handler=_cmd_detect)

    parse = sub.add_parser("parse", help="Print response sections as JSON")
    parse.add_argument("file", nargs="?", default="-")
    parse.add_argument("--simple", action="store_true", help="Treat input as plain transcription")
    parse.set_defaults(handler=_cmd_parse)

    process = sub.add_parser("process", help="Run the full pipeline and print markdown")
    process.add_argument("file", nargs="?", default="-")
    process.add_argument("--summary", action="store_true", help="Include the summary section")
    process.add_argument("--tags", action="store_true", help="Include the tags section")
    process.add_argument("--diagram", action="store_true", help="Include the diagram section")
    process.add_argument(
        "--summary-length",
        choices=[length.value for length in SummaryLength],
        default=SummaryLength.BULLET.value,
    )
    process.add_argument(
        "--fallback", action="store_true", help="Generate missing extras locally"
    )
    process.add_argument("--json", action="store_true", help="Print the result as JSON")
    process.set_defaults(handler=_cmd_process)

    serve = sub.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    serve.add_argument("--port", type=int, default=8000, help="Port to bind to")
    serve.set_defaults(handler=_cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``whisperscribe`` console script."""
    args = build_parser().parse_args(argv)
    try:
        settings = ServiceSettings()
        configure_from_settings(settings)
        return args.handler(args, settings)
    except WhisperScribeError as e:
        logger.error("command_failed", command=args.command, error_code=e.error_code, **e.context)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as e:
        logger.error("input_unreadable", command=args.command, error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
