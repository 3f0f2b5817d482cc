from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from js2ts.backup import backup_dir_name, create_backup
from js2ts.config import DEFAULT_BATCH_SIZE, DEFAULT_MODEL, FILE_DELAY, resolve_settings
from js2ts.tsconfig import ensure_tsconfig, has_typescript_dependency


def test_backup_mirrors_relative_paths(tmp_path: Path) -> None:
    (tmp_path / "src" / "ui").mkdir(parents=True)
    a = tmp_path / "src" / "a.js"
    b = tmp_path / "src" / "ui" / "B.jsx"
    a.write_text("const a = 1;\n")
    b.write_text("export const B = () => <div />;\n")

    backup = tmp_path / backup_dir_name(datetime(2025, 1, 2, 3, 4, 5))
    create_backup(tmp_path, [a, b], backup)

    assert backup.name == ".js-to-ts-backup-20250102-030405"
    assert (backup / "src" / "a.js").read_text() == "const a = 1;\n"
    assert (backup / "src" / "ui" / "B.jsx").read_text() == "export const B = () => <div />;\n"


def test_ensure_tsconfig_never_overwrites(tmp_path: Path) -> None:
    assert ensure_tsconfig(tmp_path) is True
    config = json.loads((tmp_path / "tsconfig.json").read_text())
    assert config["compilerOptions"]["jsx"] == "react-jsx"
    assert config["exclude"] == ["node_modules", "build", "dist"]

    (tmp_path / "tsconfig.json").write_text('{"custom": true}\n')
    assert ensure_tsconfig(tmp_path) is False
    assert (tmp_path / "tsconfig.json").read_text() == '{"custom": true}\n'


def test_has_typescript_dependency(tmp_path: Path) -> None:
    manifest = tmp_path / "package.json"
    manifest.write_text('{"dependencies": {"react": "^18"}}')
    assert not has_typescript_dependency(tmp_path)
    manifest.write_text('{"devDependencies": {"typescript": "^5"}}')
    assert has_typescript_dependency(tmp_path)


def test_resolve_settings_defaults(tmp_path: Path) -> None:
    settings = resolve_settings(tmp_path, env={})
    assert settings.api_key == ""
    assert settings.model == DEFAULT_MODEL
    assert settings.batch_size == DEFAULT_BATCH_SIZE
    assert settings.file_delay == FILE_DELAY
    assert settings.log_path == tmp_path.resolve() / "conversion.log"


def test_resolve_settings_precedence(tmp_path: Path) -> None:
    (tmp_path / ".js2ts.json").write_text(json.dumps({"model": "file-model", "batch_size": 7, "file_delay": 0}))
    env = {"OPENAI_API_KEY": "sk-env", "OPENAI_MODEL": "env-model", "BATCH_SIZE": "3"}

    from_env = resolve_settings(tmp_path, env=env)
    assert from_env.api_key == "sk-env"
    assert from_env.model == "env-model"
    assert from_env.batch_size == 3
    assert from_env.file_delay == 0.0

    from_cli = resolve_settings(tmp_path, model="cli-model", batch_size=9, delay=1.5, env=env)
    assert from_cli.model == "cli-model"
    assert from_cli.batch_size == 9
    assert from_cli.file_delay == 1.5

    from_file = resolve_settings(tmp_path, env={})
    assert from_file.model == "file-model"
    assert from_file.batch_size == 7


def test_resolve_settings_ignores_broken_config(tmp_path: Path) -> None:
    (tmp_path / ".js2ts.json").write_text("{not json")
    settings = resolve_settings(tmp_path, env={"BATCH_SIZE": "lots"})
    assert settings.model == DEFAULT_MODEL
    assert settings.batch_size == DEFAULT_BATCH_SIZE
