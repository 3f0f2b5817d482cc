import json
import logging
from pathlib import Path

from .config import MANIFEST_FILE, TSCONFIG_FILE

logger = logging.getLogger(__name__)

DEFAULT_TSCONFIG = {
    "compilerOptions": {
        "target": "ES2020",
        "lib": ["ES2020", "DOM", "DOM.Iterable"],
        "jsx": "react-jsx",
        "module": "ESNext",
        "moduleResolution": "bundler",
        "resolveJsonModule": True,
        "allowJs": True,
        "checkJs": False,
        "outDir": "./dist",
        "esModuleInterop": True,
        "forceConsistentCasingInFileNames": True,
        "strict": False,
        "skipLibCheck": True,
        "allowSyntheticDefaultImports": True,
        "noEmit": True,
        "isolatedModules": True,
    },
    "include": ["src/**/*"],
    "exclude": ["node_modules", "build", "dist"],
}


def ensure_tsconfig(root: Path) -> bool:
    """Write tsconfig.json with default options. Returns False if one already exists."""
    path = Path(root) / TSCONFIG_FILE
    if path.exists():
        return False
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(DEFAULT_TSCONFIG, f, indent=2)
        f.write('\n')
    logger.info(f"Created {TSCONFIG_FILE}")
    return True


def has_typescript_dependency(root: Path) -> bool:
    """Check package.json for a typescript entry in any dependency section."""
    path = Path(root) / MANIFEST_FILE
    try:
        with open(path, 'r', encoding='utf-8') as f:
            manifest = json.load(f)
    except (OSError, ValueError):
        return False
    if not isinstance(manifest, dict):
        return False
    for section in ('dependencies', 'devDependencies', 'peerDependencies'):
        deps = manifest.get(section)
        if isinstance(deps, dict) and 'typescript' in deps:
            return True
    return False
