"""Command-line interface for scanned PDF text extraction.

Extracts the text of a scanned PDF and writes it to standard output or a
file. Errors are reported once on standard error and end the process with
a non-zero status.
"""

import argparse
import signal
import sys
from pathlib import Path

from ocrpdf.exceptions import OcrPdfError, OutputWriteError
from ocrpdf.filters.compiler import compile_rules
from ocrpdf.pipeline.extractor import extract_pdf
from ocrpdf.utils.config import AppConfig, load_config
from ocrpdf.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_DESCRIPTION = "Extract text from scanned PDF document FILE; output directed to stdout."


def _die(message: str) -> None:
    print(f"ERROR: {message}", file=sys.stderr)
    sys.exit(1)


def _rule_file(value: str) -> Path:
    """Argument type for ``--filter``: an existing regular file."""
    path = Path(value)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"{value}: file not found")
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"{value}: not a regular file")
    return path


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ocrpdf",
        description=_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", type=Path, help="Scanned PDF document")
    parser.add_argument(
        "--first", type=_positive_int, help="First page number (default: 1)"
    )
    parser.add_argument(
        "--last",
        type=_positive_int,
        help="Last page number (default: last page of the document)",
    )
    parser.add_argument(
        "--filter",
        type=_rule_file,
        action="append",
        default=[],
        dest="filters",
        metavar="FILE",
        help="Filter specification file (may be given multiple times)",
    )
    parser.add_argument("--lang", help="Document language (default: eng)")
    parser.add_argument(
        "--workers", type=_positive_int, help="Parallel OCR workers (default: CPU count)"
    )
    parser.add_argument("--dpi", type=_positive_int, help="Rendering resolution")
    parser.add_argument(
        "-c", "--config", type=Path, help="YAML configuration file"
    )
    parser.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log progress to stderr"
    )
    return parser


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Return a copy of ``config`` with command-line values applied.

    Filter files from the command line run after those from the config.
    """
    ocr = config.ocr.model_copy()
    raster = config.raster.model_copy()
    filters = config.filters.model_copy()

    if args.lang:
        ocr.language = args.lang
    if args.workers:
        ocr.workers = args.workers
    if args.first:
        raster.first_page = args.first
    if args.last:
        raster.last_page = args.last
    if args.dpi:
        raster.dpi = args.dpi
    filters.rule_files = [*filters.rule_files, *(str(f) for f in args.filters)]

    log_level = "INFO" if args.verbose else config.log_level
    return config.model_copy(
        update={"ocr": ocr, "raster": raster, "filters": filters, "log_level": log_level}
    )


def write_output(text: str, output: Path | None) -> None:
    """Write the extracted text, UTF-8 encoded, to ``output`` or standard output.

    Raises:
        OutputWriteError: If the text cannot be encoded or the destination
            cannot be written.
    """
    try:
        data = text.encode("utf-8")
        if output is None:
            sys.stdout.flush()
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()
        else:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_bytes(data)
    except (OSError, UnicodeError) as exc:
        raise OutputWriteError(f"{output or 'stdout'}: {exc}") from exc


def _raise_interrupt(signum: int, frame: object) -> None:
    raise KeyboardInterrupt


def run(args: argparse.Namespace) -> None:
    """Extract the text of ``args.file`` and write it out."""
    config = apply_overrides(load_config(args.config), args)
    setup_logging(config.log_level)

    rules = compile_rules(config.filters.rule_files)
    logger.info(
        "Compiled %d line rules and %d document rules",
        len(rules.line_rules),
        len(rules.document_rules),
    )

    text = extract_pdf(args.file, config, rules)
    write_output(text, args.output)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the extraction.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    args = build_parser().parse_args(argv)

    if not args.file.exists():
        _die(f"{args.file} does not exist")

    previous = signal.signal(signal.SIGTERM, _raise_interrupt)
    try:
        run(args)
    except KeyboardInterrupt:
        _die("Interrupted")
    except OcrPdfError as exc:
        _die(str(exc))
    finally:
        signal.signal(signal.SIGTERM, previous)


if __name__ == "__main__":
    main()
