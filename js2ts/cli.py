import argparse
import logging
import sys
from pathlib import Path

from .config import resolve_settings
from .console import RED, YELLOW, close_logging, configure_logging, print_color
from .discovery import find_candidate_files
from .errors import PrerequisiteError
from .orchestrator import Converter

logger = logging.getLogger('js2ts')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='js2ts',
        description="Convert a project's JavaScript/JSX files to TypeScript/TSX using a remote model.",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog="""
Environment:
  OPENAI_API_KEY       API credential (required)
  OPENAI_MODEL         model identifier (default: gpt-5)
  BATCH_SIZE           files per progress batch (default: 5)
  OPENAI_API_ENDPOINT  override the API endpoint

Examples:
  Convert the project in the current directory:
    js2ts

  List the files that would be converted, without changing anything:
    js2ts --list-files
""",
    )
    parser.add_argument('--root', default='.', help='Project root containing package.json (default: current directory).')
    parser.add_argument('-m', '--model', default=None, help='Model identifier. Overrides OPENAI_MODEL.')
    parser.add_argument('--batch-size', type=int, default=None, help='Files per progress batch. Does not change concurrency.')
    parser.add_argument('--delay', type=float, default=None, help='Seconds to wait between files (default: 0.5).')
    parser.add_argument('--log-file', default=None, help='Append-only log file (default: <root>/conversion.log).')
    parser.add_argument('--list-files', action='store_true', help='List candidate files and exit without converting.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Echo log records to stderr.')
    return parser


def list_files(root: Path) -> int:
    files = find_candidate_files(root)
    for path in files:
        print(path.relative_to(root))
    print(f"{len(files)} files to convert")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    root = Path(args.root).resolve()

    if args.list_files:
        return list_files(root)

    settings = resolve_settings(
        root,
        model=args.model,
        batch_size=args.batch_size,
        delay=args.delay,
        log_file=args.log_file,
    )
    try:
        converter = Converter(settings)
        converter.print_banner()
        converter.check_prerequisites()
        # Nothing, not even the log file, is created until prerequisites pass
        configure_logging(settings.log_path, verbose=args.verbose)
        stats = converter.execute()
    except PrerequisiteError as e:
        print_color(f"Error: {e}", RED)
        return 1
    except KeyboardInterrupt:
        print_color("\nConversion interrupted by user. Restore from the backup directory if needed.", YELLOW)
        logger.info("Conversion interrupted by user")
        return 1
    except Exception as e:
        print_color(f"An unexpected error occurred: {e}", RED)
        logger.critical(f"An unexpected error occurred: {e}", exc_info=True)
        return 1
    finally:
        close_logging()
    return stats.exit_code


if __name__ == '__main__':
    sys.exit(main())
