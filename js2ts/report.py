import logging

from .config import Settings
from .console import BLUE, GREEN, RED, YELLOW, print_color
from .models import RunStatistics

logger = logging.getLogger(__name__)


def display_statistics(stats: RunStatistics):
    print()
    print_color("================================", BLUE)
    print_color("Conversion Statistics", BLUE)
    print_color("================================", BLUE)
    print(f"{'Total files found:':<24}{stats.total_files}")
    print_color(f"{'Successfully converted:':<24}{stats.converted}", GREEN)
    print_color(f"{'Failed conversions:':<24}{stats.failed}", RED)
    print_color(f"{'Skipped files:':<24}{stats.skipped}", YELLOW)
    print(f"{'Imports updated:':<24}{len(stats.rewritten_imports)}")
    print_color("================================", BLUE)
    print()

    logger.info(
        f"Conversion complete - Total: {stats.total_files}, Success: {stats.converted}, "
        f"Failed: {stats.failed}, Skipped: {stats.skipped}, "
        f"Imports updated: {len(stats.rewritten_imports)}"
    )


def display_next_steps(stats: RunStatistics, settings: Settings):
    print_color("Conversion complete!", GREEN)
    print()
    print_color("Next steps:", YELLOW)
    print("1. Review the converted files")
    print("2. Install TypeScript dependencies:")
    print("   npm install --save-dev typescript @types/react @types/react-dom @types/node")
    print("3. Run type checking: npx tsc --noEmit")
    print("4. Update package.json scripts if needed")
    if stats.backup_dir:
        print(f"5. If you need to rollback, restore from: {stats.backup_dir}")
    print()
    print_color(f"Log file: {settings.log_path}", BLUE)

    if stats.failed:
        print_color(f"Note: {stats.failed} files failed to convert and were left as .js/.jsx files.", YELLOW)
        for result in stats.failed_results:
            print_color(f"  - {result.source}: {result.reason}", YELLOW)
        print_color(f"Check {settings.log_path} for details on which files failed.", YELLOW)
