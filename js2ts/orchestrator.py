import logging
import shutil
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from .backup import backup_dir_name, create_backup
from .client import ConversionClient
from .config import MANIFEST_FILE, TSCONFIG_FILE, Settings
from .console import BLUE, GREEN, RED, YELLOW, print_color
from .discovery import find_candidate_files, is_component_likely
from .errors import AuthError, ConversionError, PrerequisiteError, RewriteError
from .imports import rewrite_imports
from .models import CandidateFile, ConversionResult, RunStatistics
from .report import display_next_steps, display_statistics
from .rewriter import write_converted
from .tsconfig import ensure_tsconfig, has_typescript_dependency

logger = logging.getLogger(__name__)


class Converter:
    """
    Runs one conversion pass over a project.

    Order: prerequisites, backup, tsconfig, enumeration, one file at a time
    conversion, import rewrite, report. Per-file failures are recorded and
    the loop moves on; only a missing prerequisite stops the run, and it does
    so before anything on disk has changed.
    """

    def __init__(self, settings: Settings, client: Optional[ConversionClient] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 now: Optional[Callable[[], datetime]] = None):
        self.settings = settings
        self.root = settings.root
        self.sleep = sleep
        self.client = client or ConversionClient(settings, sleep=sleep)
        self.now = now or datetime.now

    def _display(self, path: Path) -> str:
        try:
            return str(Path(path).relative_to(self.root))
        except ValueError:
            return str(path)

    def check_prerequisites(self):
        print_color("Checking prerequisites...", BLUE)
        if not self.root.is_dir():
            raise PrerequisiteError(f"Project directory not found: {self.root}")
        if not self.settings.api_key:
            raise PrerequisiteError(
                "OPENAI_API_KEY environment variable is not set. "
                "Please set it with: export OPENAI_API_KEY='your-api-key'"
            )
        if not (self.root / MANIFEST_FILE).is_file():
            raise PrerequisiteError(
                f"{MANIFEST_FILE} not found. Please run this from the root of your project."
            )
        print_color("Prerequisites check passed!", GREEN)

    def find_candidates(self) -> List[Path]:
        print_color("Scanning for JavaScript files...", BLUE)
        return find_candidate_files(self.root)

    def backup(self, files: List[Path]) -> Path:
        backup_dir = self.root / backup_dir_name(self.now())
        print_color(f"Creating backup in {self._display(backup_dir)}...", BLUE)
        create_backup(self.root, files, backup_dir)
        print_color(f"Backup created at: {self._display(backup_dir)}", GREEN)
        return backup_dir

    def setup_typescript_config(self):
        print_color("Setting up TypeScript configuration...", BLUE)
        if ensure_tsconfig(self.root):
            print_color(f"Created {TSCONFIG_FILE}", GREEN)
        else:
            print_color(f"{TSCONFIG_FILE} already exists, skipping...", YELLOW)
        if not has_typescript_dependency(self.root):
            print_color("Note: Run 'npm install' or 'yarn install' after conversion completes", YELLOW)
            logger.info("TypeScript dependencies need to be installed")

    def convert_file(self, path: Path) -> ConversionResult:
        """Convert a single file. Always returns exactly one result; never raises for per-file problems."""
        shown = self._display(path)
        print_color(f"Converting: {shown}", BLUE)
        logger.info(f"Starting conversion: {shown}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            print_color(f"✗ Could not read, keeping original: {shown}", RED)
            logger.error(f"Could not read {shown}: {e}")
            return ConversionResult.failed(path, f"read error: {e}")

        if not content.strip():
            print_color(f"⊘ Skipping empty file: {shown}", YELLOW)
            logger.info(f"Skipped empty file: {shown}")
            return ConversionResult.skipped(path, 'empty file')

        candidate = CandidateFile(path=path, content=content,
                                  component_likely=is_component_likely(path, content))

        try:
            converted = self.client.convert(candidate)
        except AuthError as e:
            print_color(f"✗ Authentication failed, keeping original: {shown}", RED)
            logger.error(f"Conversion failed, file unchanged: {shown} ({e})")
            return ConversionResult.failed(path, str(e))
        except ConversionError as e:
            print_color(f"⊘ Failed to convert, keeping original: {shown}", YELLOW)
            logger.error(f"Conversion failed, file unchanged: {shown} ({e})")
            return ConversionResult.failed(path, str(e))

        try:
            new_path = write_converted(self.root, path, converted, candidate.target_extension,
                                       self.settings.temp_dir)
        except RewriteError as e:
            print_color(f"✗ Failed to write converted content, keeping original: {shown}", RED)
            logger.error(str(e))
            return ConversionResult.failed(path, str(e))

        print_color(f"✓ Converted: {shown} → {self._display(new_path)}", GREEN)
        return ConversionResult.converted(path, new_path)

    def convert_all(self, files: List[Path], stats: RunStatistics):
        batch_size = max(1, self.settings.batch_size)
        batch_count = (len(files) + batch_size - 1) // batch_size
        for index, path in enumerate(files):
            if index % batch_size == 0:
                print_color(f"--- Batch {index // batch_size + 1}/{batch_count} ---", BLUE)
            stats.record(self.convert_file(path))
            # Small delay between files to avoid rate limiting
            if index < len(files) - 1 and self.settings.file_delay > 0:
                self.sleep(self.settings.file_delay)

    def update_imports(self) -> List[Path]:
        print_color("Updating import statements...", BLUE)
        changed = rewrite_imports(self.root)
        print_color("Import statements updated!", GREEN)
        return changed

    def cleanup(self):
        if self.settings.temp_dir.exists():
            shutil.rmtree(self.settings.temp_dir, ignore_errors=True)

    def print_banner(self):
        print_color("=========================================", GREEN)
        print_color("JS to TS Automation", GREEN)
        print_color("=========================================", GREEN)
        print()

    def run(self) -> RunStatistics:
        """
        Execute the full pass and return the accumulated statistics.

        Raises:
            PrerequisiteError: raised before any file is touched.
        """
        self.print_banner()
        self.check_prerequisites()
        return self.execute()

    def execute(self) -> RunStatistics:
        """Everything after the prerequisite check; callers must have run check_prerequisites."""
        logger.info(f"Starting conversion process (model: {self.settings.model})")

        stats = RunStatistics()
        try:
            files = self.find_candidates()
            if files:
                stats.backup_dir = self.backup(files)
            self.setup_typescript_config()
            self.settings.temp_dir.mkdir(parents=True, exist_ok=True)

            stats.total_files = len(files)
            print_color(f"Found {stats.total_files} files to convert", GREEN)
            print()
            if not files:
                print_color("No JavaScript files found to convert.", YELLOW)
                logger.info("No JavaScript files found to convert")
                return stats

            self.convert_all(files, stats)
            stats.rewritten_imports = self.update_imports()
            display_statistics(stats)
            display_next_steps(stats, self.settings)
        finally:
            self.cleanup()
        return stats
