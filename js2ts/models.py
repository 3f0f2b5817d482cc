from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

CONVERTED = 'converted'
FAILED = 'failed'
SKIPPED = 'skipped'


@dataclass
class CandidateFile:
    """A JS/JSX file eligible for conversion."""
    path: Path
    content: str
    component_likely: bool = False

    @property
    def target_extension(self) -> str:
        return 'tsx' if self.component_likely else 'ts'


@dataclass
class ConversionResult:
    """Outcome for one file. Exactly one of converted, failed or skipped."""
    source: Path
    status: str
    new_path: Optional[Path] = None
    reason: str = ''

    @classmethod
    def converted(cls, source: Path, new_path: Path) -> 'ConversionResult':
        return cls(source=source, status=CONVERTED, new_path=new_path)

    @classmethod
    def failed(cls, source: Path, reason: str) -> 'ConversionResult':
        return cls(source=source, status=FAILED, reason=reason)

    @classmethod
    def skipped(cls, source: Path, reason: str) -> 'ConversionResult':
        return cls(source=source, status=SKIPPED, reason=reason)


@dataclass
class RunStatistics:
    """Per-run accumulator, filled once per file and read at the end."""
    total_files: int = 0
    converted: int = 0
    failed: int = 0
    skipped: int = 0
    results: List[ConversionResult] = field(default_factory=list)
    backup_dir: Optional[Path] = None
    rewritten_imports: List[Path] = field(default_factory=list)

    def record(self, result: ConversionResult):
        if result.status == CONVERTED:
            self.converted += 1
        elif result.status == FAILED:
            self.failed += 1
        elif result.status == SKIPPED:
            self.skipped += 1
        else:
            raise ValueError(f"Unknown conversion status: {result.status}")
        self.results.append(result)

    @property
    def failed_results(self) -> List[ConversionResult]:
        return [r for r in self.results if r.status == FAILED]

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0
