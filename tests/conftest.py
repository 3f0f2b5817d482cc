from __future__ import annotations

from pathlib import Path

import pytest

from js2ts.config import Settings
from tests.helpers import SleepRecorder


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "package.json").write_text('{"name": "demo", "dependencies": {"react": "^18.0.0"}}\n')
    return tmp_path


@pytest.fixture
def settings(project: Path) -> Settings:
    return Settings(root=project, api_key="sk-test", model="gpt-test", file_delay=0.5)
