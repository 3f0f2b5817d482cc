import logging
import re
from pathlib import Path
from typing import List

from .discovery import iter_typescript_files

logger = logging.getLogger(__name__)

# from './foo.js' / from "./Bar.jsx"; the quote style is kept
IMPORT_SPECIFIER_RE = re.compile(r"""(\bfrom\s*)(['"])([^'"]+)\.(jsx?)\2""")

SUFFIX_MAP = {'js': 'ts', 'jsx': 'tsx'}


def rewrite_import_specifiers(text: str) -> str:
    def replace(m):
        prefix, quote, target, ext = m.groups()
        return f"{prefix}{quote}{target}.{SUFFIX_MAP[ext]}{quote}"

    return IMPORT_SPECIFIER_RE.sub(replace, text)


def rewrite_imports(root: Path) -> List[Path]:
    """
    Rewrite .js/.jsx import suffixes in every .ts/.tsx file under root.

    A file that cannot be read or written (e.g. not UTF-8) is logged and
    left as it is; the pass always covers the rest. Returns changed files.
    """
    changed = []
    for path in iter_typescript_files(root):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                text = f.read()
            new_text = rewrite_import_specifiers(text)
            if new_text == text:
                continue
            with open(path, 'w', encoding='utf-8') as f:
                f.write(new_text)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not update imports in {path}: {e}")
            continue
        changed.append(path)
        logger.debug(f"Updated imports in {path}")
    logger.info(f"Import statements updated ({len(changed)} files changed)")
    return changed
