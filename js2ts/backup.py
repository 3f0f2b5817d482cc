import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from .config import BACKUP_PREFIX

logger = logging.getLogger(__name__)


def backup_dir_name(now: Optional[datetime] = None, prefix: str = BACKUP_PREFIX) -> str:
    now = now or datetime.now()
    return f"{prefix}-{now.strftime('%Y%m%d-%H%M%S')}"


def create_backup(root: Path, files: Iterable[Path], backup_dir: Path) -> Path:
    """
    Copies every file into backup_dir, preserving paths relative to root.

    Must complete before any file is converted so a failed run can always be
    rolled back by hand from the snapshot. Copy errors propagate.
    """
    root = Path(root)
    backup_dir.mkdir(parents=True, exist_ok=True)
    count = 0
    for path in files:
        target = backup_dir / Path(path).relative_to(root)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(path, target)
        count += 1
    logger.info(f"Backup created successfully ({count} files in {backup_dir})")
    return backup_dir
