from __future__ import annotations

from pathlib import Path

import pytest

from js2ts.errors import RewriteError
from js2ts.rewriter import write_converted


def test_write_converted_replaces_original(tmp_path: Path) -> None:
    source = tmp_path / "src" / "util.js"
    source.parent.mkdir()
    source.write_text("export const a = 1;\n")
    staging = tmp_path / ".js-to-ts-temp"

    new_path = write_converted(tmp_path, source, "export const a: number = 1;", "ts", staging)

    assert new_path == tmp_path / "src" / "util.ts"
    assert new_path.read_text() == "export const a: number = 1;\n"
    assert not source.exists()
    assert not (staging / "src" / "util.ts").exists()


def test_write_converted_uses_component_extension(tmp_path: Path) -> None:
    source = tmp_path / "App.js"
    source.write_text("export default () => <App />;\n")
    new_path = write_converted(tmp_path, source, "export default (): any => <App />;", "tsx", tmp_path / "stage")
    assert new_path.name == "App.tsx"
    assert not source.exists()


def test_empty_content_keeps_original(tmp_path: Path) -> None:
    source = tmp_path / "a.js"
    source.write_text("const a = 1;\n")
    with pytest.raises(RewriteError):
        write_converted(tmp_path, source, "   ", "ts", tmp_path / "stage")
    assert source.read_text() == "const a = 1;\n"
    assert not (tmp_path / "a.ts").exists()


def test_staging_failure_keeps_original(tmp_path: Path) -> None:
    source = tmp_path / "a.js"
    source.write_text("const a = 1;\n")
    # a regular file where the staging directory should be
    blocker = tmp_path / "stage"
    blocker.write_text("not a directory")
    with pytest.raises(RewriteError):
        write_converted(tmp_path, source, "const a: number = 1;", "ts", blocker)
    assert source.exists()
    assert not (tmp_path / "a.ts").exists()


def test_move_failure_keeps_original(tmp_path: Path, monkeypatch) -> None:
    source = tmp_path / "a.js"
    source.write_text("const a = 1;\n")

    def broken_move(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("js2ts.rewriter.shutil.move", broken_move)
    with pytest.raises(RewriteError):
        write_converted(tmp_path, source, "const a: number = 1;", "ts", tmp_path / "stage")
    assert source.exists()
    assert not (tmp_path / "a.ts").exists()


def test_existing_target_is_never_overwritten(tmp_path: Path) -> None:
    source = tmp_path / "util.js"
    source.write_text("export const a = 1;\n")
    existing = tmp_path / "util.ts"
    existing.write_text("// hand-written, precious\n")

    with pytest.raises(RewriteError, match="already exists"):
        write_converted(tmp_path, source, "export const a: number = 1;", "ts", tmp_path / "stage")

    assert existing.read_text() == "// hand-written, precious\n"
    assert source.read_text() == "export const a = 1;\n"
    assert not (tmp_path / "stage" / "util.ts").exists()


def test_two_sources_mapping_to_one_target_keep_the_second(tmp_path: Path) -> None:
    first = tmp_path / "Foo.js"
    first.write_text("export const Foo = () => <Bar />;\n")
    second = tmp_path / "Foo.jsx"
    second.write_text("export default () => <Baz />;\n")
    stage = tmp_path / "stage"

    write_converted(tmp_path, first, "export const Foo = (): any => <Bar />;", "tsx", stage)
    with pytest.raises(RewriteError):
        write_converted(tmp_path, second, "export default (): any => <Baz />;", "tsx", stage)

    assert (tmp_path / "Foo.tsx").read_text() == "export const Foo = (): any => <Bar />;\n"
    assert second.read_text() == "export default () => <Baz />;\n"
