import fnmatch
import os
import re
from pathlib import Path
from typing import Iterator, List

from .config import BACKUP_PREFIX, TEMP_DIR

# Directories never descended into
IGNORE_DIRS = {
    'node_modules',
    '.git',
    'build',
    'dist',
}

# Non-source config files that stay as plain JavaScript
IGNORE_FILE_PATTERNS = [
    '*.config.js',
    '*.setup.js',
    'setupTests.js',
]

SOURCE_SUFFIXES = ('.js', '.jsx')
TYPESCRIPT_SUFFIXES = ('.ts', '.tsx')

REACT_IMPORT_RE = re.compile(r"""import.*from\s*['"]react['"]""")
COMPONENT_TAG_RE = re.compile(r'<[A-Z][a-zA-Z]*|</[A-Z]')


def _is_ignored_dir(name: str) -> bool:
    if name in IGNORE_DIRS:
        return True
    return name.startswith(BACKUP_PREFIX) or name == TEMP_DIR


def _walk(root: Path, suffixes) -> Iterator[Path]:
    for dirpath, dirs, files in os.walk(root):
        # Modifying dirs in-place tells os.walk not to recurse into them
        dirs[:] = sorted(d for d in dirs if not _is_ignored_dir(d))
        for name in sorted(files):
            if name.endswith(suffixes):
                yield Path(dirpath) / name


def is_excluded_file(name: str) -> bool:
    return any(fnmatch.fnmatchcase(name, pattern) for pattern in IGNORE_FILE_PATTERNS)


def find_candidate_files(root: Path) -> List[Path]:
    """
    Recursively finds all .js and .jsx files under root, in a stable order.

    Skips node_modules, version control metadata, build output, the backup
    and staging directories, and known config files such as *.config.js.
    """
    return [p for p in _walk(Path(root), SOURCE_SUFFIXES)
            if not is_excluded_file(p.name)]


def iter_typescript_files(root: Path) -> Iterator[Path]:
    return _walk(Path(root), TYPESCRIPT_SUFFIXES)


def is_component_likely(path: Path, content: str) -> bool:
    """True for .jsx files, React imports, or uppercase JSX tags."""
    if Path(path).suffix == '.jsx':
        return True
    return bool(REACT_IMPORT_RE.search(content) or COMPONENT_TAG_RE.search(content))
