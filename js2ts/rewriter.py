import logging
import shutil
from pathlib import Path

from .errors import RewriteError

logger = logging.getLogger(__name__)


def staging_path(root: Path, source: Path, extension: str, staging_dir: Path) -> Path:
    try:
        relative = Path(source).relative_to(root)
    except ValueError:
        relative = Path(Path(source).name)
    return staging_dir / relative.with_suffix('.' + extension)


def write_converted(root: Path, source: Path, content: str, extension: str, staging_dir: Path) -> Path:
    """
    Replaces source with a file of the same stem and the new extension.

    The content is first written to the staging directory. Only when the
    staged file is non-empty is it moved into place, and the original is
    deleted only after the new file exists. On any failure the original is
    left untouched.

    Args:
        root (Path): Project root, used to mirror paths inside staging_dir.
        source (Path): The .js/.jsx file being replaced.
        content (str): Validated converted code.
        extension (str): 'ts' or 'tsx'.
        staging_dir (Path): Temporary directory inside the project.

    Returns:
        Path: The path of the new TypeScript file.

    Raises:
        RewriteError: the new file could not be written.
    """
    source = Path(source)
    new_path = source.with_suffix('.' + extension)
    if new_path != source and new_path.exists():
        # Not a candidate, so not in the backup; never overwrite it
        raise RewriteError(f"{new_path} already exists, keeping {source}")
    staged = staging_path(root, source, extension, staging_dir)

    try:
        staged.parent.mkdir(parents=True, exist_ok=True)
        with open(staged, 'w', encoding='utf-8') as f:
            f.write(content)
            if not content.endswith('\n'):
                f.write('\n')
    except OSError as e:
        raise RewriteError(f"Failed to write converted content for {source}: {e}") from e

    if not staged.is_file() or staged.stat().st_size == 0 or not content.strip():
        staged.unlink(missing_ok=True)
        raise RewriteError(f"Converted content for {source} is empty")

    try:
        shutil.move(str(staged), str(new_path))
    except OSError as e:
        raise RewriteError(f"Failed to create {new_path}: {e}") from e

    if not new_path.is_file() or new_path.stat().st_size == 0:
        raise RewriteError(f"Failed to create new file: {new_path}")

    if new_path != source:
        try:
            source.unlink()
        except OSError as e:
            raise RewriteError(f"Created {new_path} but could not remove {source}: {e}") from e

    logger.info(f"Successfully converted: {source} → {new_path}")
    return new_path
