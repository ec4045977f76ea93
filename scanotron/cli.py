import argparse
import sys
from pathlib import Path
from typing import NoReturn

from pydantic import ValidationError

from scanotron.config.settings import Settings
from scanotron.logging.logger import Log
from scanotron.pipeline.controller import build_controller
from scanotron.pipeline.models import PipelineRequest
from scanotron.reporting.events import ReportMode
from scanotron.reporting.factory import ReportSinkFactory

DESCRIPTION = "Scanotron 2000 - Split PDFs with LLMs."

EPILOG = """\
Process:
  1. Runs pdfbrrr on the PDF with the 'split-happens' prompt to extract a page pattern
     (Pattern is cached in a .brrr file for future runs)
  2. Runs split-happens on the PDF using the pattern to split the document

Examples:
  scanotron document.pdf
  scanotron document.pdf --output ./my-output
  scanotron document.pdf --force  # Regenerate pattern even if cached
  scanotron document.pdf --json   # Machine-readable output
  scanotron document.pdf --model gpt-4 --endpoint https://api.openai.com --apikey your-key
  scanotron document.pdf -m qwen3:4b -e http://localhost:11434
"""


class UsageError(Exception):
    """Raised for invalid or missing command line arguments."""


class ScanotronArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def build_parser() -> ScanotronArgumentParser:
    parser = ScanotronArgumentParser(
        prog="scanotron",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument("document", nargs="?", type=Path, help="Path to the PDF file to process")
    parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Directory where output files will be saved "
        "(default: a folder with the same name next to the input PDF)",
    )
    parser.add_argument("--model", "-m", help="Model name to use for AI processing")
    parser.add_argument("--endpoint", "-e", help="API endpoint URL")
    parser.add_argument("--apikey", "-k", help="API key (can also use API_KEY env var)")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Force regenerate pattern, ignore cached .brrr file",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output logs in JSON format for machine processing",
    )
    return parser


def parse_request(
    parser: argparse.ArgumentParser,
    argv: list[str],
    settings: Settings,
) -> PipelineRequest:
    """Turn command line arguments into a PipelineRequest.

    Raises:
        UsageError: on unknown flags, missing values or a missing document.
    """
    args = parser.parse_args(argv)
    if args.document is None:
        raise UsageError("PDF file parameter is required.")
    return PipelineRequest(
        document=args.document,
        output_dir=args.output,
        model=args.model or None,
        endpoint=args.endpoint or None,
        api_key=args.apikey or settings.api_key or None,
        force=args.force,
        mode=ReportMode.MACHINE if args.json else ReportMode.HUMAN,
    )


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the pipeline and return the exit code."""
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    if not argv:
        parser.print_help()
        return 0

    # Mode must be known before parsing so usage errors are reported in it too.
    mode = ReportMode.MACHINE if "--json" in argv else ReportMode.HUMAN
    report = ReportSinkFactory.create(mode)

    try:
        settings = Settings()
    except ValidationError as exc:
        report.error(f"Invalid configuration: {exc}", {"exception": type(exc).__name__})
        return 1
    Log.configure(settings.log_level)

    try:
        request = parse_request(parser, argv, settings)
    except UsageError as exc:
        report.error(str(exc))
        parser.print_usage(sys.stderr)
        return 1

    controller = build_controller(settings, ReportSinkFactory.create(request.mode))
    return controller.run(request)
