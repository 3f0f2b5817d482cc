import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

API_ENDPOINT = 'https://api.openai.com/v1/responses'
DEFAULT_MODEL = 'gpt-5'
DEFAULT_BATCH_SIZE = 5
MAX_RETRIES = 3
RETRY_DELAY = 2.0
FILE_DELAY = 0.5
REQUEST_TIMEOUT = 300.0

BACKUP_PREFIX = '.js-to-ts-backup'
TEMP_DIR = '.js-to-ts-temp'
LOG_FILE = 'conversion.log'
CONFIG_FILE = '.js2ts.json'
MANIFEST_FILE = 'package.json'
TSCONFIG_FILE = 'tsconfig.json'


@dataclass
class Settings:
    """Resolved runtime configuration for a conversion run."""
    root: Path
    api_key: str = ''
    model: str = DEFAULT_MODEL
    endpoint: str = API_ENDPOINT
    batch_size: int = DEFAULT_BATCH_SIZE  # advisory, only groups progress output
    max_retries: int = MAX_RETRIES
    retry_delay: float = RETRY_DELAY
    file_delay: float = FILE_DELAY
    request_timeout: float = REQUEST_TIMEOUT
    log_file: Optional[Path] = None

    @property
    def temp_dir(self) -> Path:
        return self.root / TEMP_DIR

    @property
    def log_path(self) -> Path:
        return self.log_file if self.log_file else self.root / LOG_FILE


def load_config_file(root: Path) -> Dict[str, Any]:
    """Read the optional project config file.

    Returns an empty dict when the file is missing or unreadable; a broken
    config file is reported but never stops a run.
    """
    path = root / CONFIG_FILE
    if not path.exists():
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            cfg = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to read config {path}: {e}")
        return {}
    if not isinstance(cfg, dict):
        logger.warning(f"Ignoring config {path}: expected a JSON object")
        return {}
    return cfg


def _first(*values):
    for value in values:
        if value is not None and value != '':
            return value
    return None


def _as_int(value, name: str, default: int) -> int:
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        logger.warning(f"Invalid {name} {value!r}, using {default}")
        return default


def _as_float(value, name: str, default: float) -> float:
    try:
        return max(0.0, float(value))
    except (TypeError, ValueError):
        logger.warning(f"Invalid {name} {value!r}, using {default}")
        return default


def resolve_settings(root: Path, model: Optional[str] = None, batch_size: Optional[int] = None,
                     delay: Optional[float] = None, log_file: Optional[str] = None,
                     env: Optional[Dict[str, str]] = None) -> Settings:
    """Build Settings with precedence CLI flag > environment > config file > default."""
    env = os.environ if env is None else env
    root = Path(root).resolve()
    cfg = load_config_file(root)

    resolved_model = _first(model, env.get('OPENAI_MODEL'), cfg.get('model')) or DEFAULT_MODEL
    resolved_batch = _first(batch_size, env.get('BATCH_SIZE'), cfg.get('batch_size'))
    resolved_delay = _first(delay, cfg.get('file_delay'))
    resolved_timeout = cfg.get('request_timeout')
    endpoint = _first(env.get('OPENAI_API_ENDPOINT'), cfg.get('endpoint')) or API_ENDPOINT

    return Settings(
        root=root,
        api_key=env.get('OPENAI_API_KEY', '').strip(),
        model=str(resolved_model).strip(),
        endpoint=endpoint,
        batch_size=_as_int(resolved_batch, 'batch size', DEFAULT_BATCH_SIZE) if resolved_batch is not None else DEFAULT_BATCH_SIZE,
        file_delay=_as_float(resolved_delay, 'file delay', FILE_DELAY) if resolved_delay is not None else FILE_DELAY,
        request_timeout=_as_float(resolved_timeout, 'request timeout', REQUEST_TIMEOUT) if resolved_timeout is not None else REQUEST_TIMEOUT,
        log_file=Path(log_file) if log_file else None,
    )
