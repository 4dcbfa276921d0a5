"""이 파일은 .py 테스트 모듈로 TMPDIR 생성/기록/삭제 수명주기를 검증합니다."""

import io
from pathlib import Path
import stat

import pytest

from tmpdir_wrapper.core.errors import ConfigurationError, IOFailure
from tmpdir_wrapper.core.logging import BuildConsole
from tmpdir_wrapper.core.settings import GlobalSettings, JobSettings
from tmpdir_wrapper.services import lifecycle, lister
from tmpdir_wrapper.services.lifecycle import TmpdirEnvironment, TmpdirLifecycle


def _lines(stream: io.StringIO):
    return stream.getvalue().splitlines()


def _entry_line(marker: str, size: int, relative: str) -> str:
    return "[TMPDIR]  " + marker + "  " + str(size).rjust(10) + " B  " + relative


def _no_delete(*args, **kwargs):
    raise AssertionError("rmtree must not be called")


def test_setup_then_teardown_with_default_template(
    node_temp: Path, console: BuildConsole, console_stream: io.StringIO
) -> None:
    manager = TmpdirLifecycle(GlobalSettings(), JobSettings())

    environment = manager.setup({"BUILD_TAG": "job-42"}, lambda: str(node_temp), console)

    created = node_temp / "job-42-tmp"
    assert environment.path == str(created)
    assert created.is_dir()
    assert stat.S_IMODE(created.stat().st_mode) == 0o700
    assert environment.env_patch() == {"TEMP": str(created), "TMPDIR": str(created)}

    assert environment.teardown() is True
    assert not created.exists()
    assert _lines(console_stream) == [
        f"[TMPDIR] Creating temporary directory: {created}",
        f"[TMPDIR] Deleting directory: {created}",
    ]


def test_job_template_wins_and_creates_missing_parents(node_temp: Path, console: BuildConsole) -> None:
    manager = TmpdirLifecycle(GlobalSettings(), JobSettings(dir_template="$JOB_NAME/${BUILD_NUMBER}/"))

    environment = manager.setup({"JOB_NAME": "app", "BUILD_NUMBER": "3"}, lambda: str(node_temp), console)

    assert environment.path == str(node_temp / "app" / "3")
    assert (node_temp / "app" / "3").is_dir()


def test_setup_reuses_existing_directory_and_restricts_mode(node_temp: Path, console: BuildConsole) -> None:
    existing = node_temp / "job-1-tmp"
    existing.mkdir(mode=0o755)
    existing.chmod(0o755)
    manager = TmpdirLifecycle(GlobalSettings(), JobSettings())

    manager.setup({"BUILD_TAG": "job-1"}, lambda: str(node_temp), console)

    assert stat.S_IMODE(existing.stat().st_mode) == 0o700


def test_setup_failure_raises_io_failure(
    tmp_path: Path, console: BuildConsole, console_stream: io.StringIO
) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file")
    manager = TmpdirLifecycle(GlobalSettings(), JobSettings())

    with pytest.raises(IOFailure):
        manager.setup({"BUILD_TAG": "job-9"}, lambda: str(blocker), console)
    assert _lines(console_stream) == [f"[TMPDIR] Creating temporary directory: {blocker / 'job-9-tmp'}"]


def test_setup_rejects_empty_resolved_path(node_temp: Path, console: BuildConsole) -> None:
    manager = TmpdirLifecycle(GlobalSettings(), JobSettings(dir_template="${EMPTY}"))

    with pytest.raises(ConfigurationError):
        manager.setup({"EMPTY": ""}, lambda: str(node_temp), console)


def test_apply_env_injects_both_variables(console: BuildConsole, console_stream: io.StringIO) -> None:
    env = {"PATH": "/usr/bin", "TMPDIR": "/tmp"}

    TmpdirEnvironment("/scratch/job-42-tmp", console).apply_env(env)

    assert env == {"PATH": "/usr/bin", "TEMP": "/scratch/job-42-tmp", "TMPDIR": "/scratch/job-42-tmp"}
    assert _lines(console_stream) == ["[TMPDIR] Injected environment variables TEMP and TMPDIR."]


def test_teardown_missing_directory_is_noop(
    tmp_path: Path, console: BuildConsole, console_stream: io.StringIO, monkeypatch: pytest.MonkeyPatch
) -> None:
    missing = str(tmp_path / "gone")
    monkeypatch.setattr(lifecycle.shutil, "rmtree", _no_delete)

    assert TmpdirLifecycle.teardown(missing, True, console) is True
    assert _lines(console_stream) == [f"[TMPDIR] Directory {missing} already deleted during build, nothing to do."]


def test_teardown_logs_contents_in_order(tmp_path: Path, console: BuildConsole, console_stream: io.StringIO) -> None:
    root = tmp_path / "root"
    (root / "sub").mkdir(parents=True)
    (root / "f1").write_bytes(b"12345")
    (root / "sub" / "f2").write_bytes(b"")

    assert TmpdirLifecycle.teardown(str(root), True, console) is True

    assert _lines(console_stream) == [
        f"[TMPDIR] ----- Listing leftover files in directory {root} -----",
        _entry_line("   ", 5, "f1"),
        _entry_line("DIR", 0, "sub/"),
        _entry_line("   ", 0, "sub/f2"),
        "[TMPDIR] --------------------------------",
        f"[TMPDIR] Deleting directory: {root}",
    ]
    assert not root.exists()


def test_teardown_twice_is_idempotent(tmp_path: Path, console: BuildConsole, console_stream: io.StringIO) -> None:
    root = tmp_path / "root"
    root.mkdir()
    environment = TmpdirEnvironment(str(root), console, log_dir_contents=True)

    assert environment.teardown() is True
    assert environment.teardown() is True
    assert _lines(console_stream)[-1] == f"[TMPDIR] Directory {root} already deleted during build, nothing to do."


def test_listing_failure_still_deletes(
    tmp_path: Path, console: BuildConsole, console_stream: io.StringIO, monkeypatch: pytest.MonkeyPatch
) -> None:
    root = tmp_path / "root"
    (root / "locked").mkdir(parents=True)
    (root / "locked" / "secret").write_text("x")
    (root / "zz").write_text("x")
    original = lister.list_sorted

    def flaky(directory):
        if str(directory).endswith("locked"):
            raise IOFailure("permission denied")
        return original(directory)

    monkeypatch.setattr(lister, "list_sorted", flaky)

    assert TmpdirLifecycle.teardown(str(root), True, console) is True

    lines = _lines(console_stream)
    assert lines[1] == _entry_line("DIR", 0, "locked/")
    assert lines[2] == f"[TMPDIR] Failed to list {root / 'locked'}: permission denied"
    assert lines[3] == _entry_line("   ", 1, "zz")
    assert lines[-1] == f"[TMPDIR] Deleting directory: {root}"
    assert not root.exists()


def test_root_listing_failure_still_deletes(
    tmp_path: Path, console: BuildConsole, console_stream: io.StringIO, monkeypatch: pytest.MonkeyPatch
) -> None:
    root = tmp_path / "root"
    root.mkdir()

    def broken(directory):
        raise IOFailure("io error")

    monkeypatch.setattr(lister, "list_sorted", broken)

    assert TmpdirLifecycle.teardown(str(root), True, console) is True
    assert f"[TMPDIR] Failed to list {root}: io error" in _lines(console_stream)
    assert not root.exists()


def test_delete_failure_is_fatal(
    tmp_path: Path, console: BuildConsole, console_stream: io.StringIO, monkeypatch: pytest.MonkeyPatch
) -> None:
    root = tmp_path / "root"
    root.mkdir()

    def refuse(path, *args, **kwargs):
        raise PermissionError("busy")

    monkeypatch.setattr(lifecycle.shutil, "rmtree", refuse)

    with pytest.raises(IOFailure):
        TmpdirLifecycle.teardown(str(root), False, console)
    assert _lines(console_stream)[-1] == f"[TMPDIR] Failed to delete directory {root}: busy"


def _refuse_chmod(self, mode, *args, **kwargs):
    raise PermissionError("chmod not permitted")


def test_chmod_failure_removes_directory_created_by_setup(
    node_temp: Path, console: BuildConsole, console_stream: io.StringIO, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(Path, "chmod", _refuse_chmod)
    manager = TmpdirLifecycle(GlobalSettings(), JobSettings())

    with pytest.raises(IOFailure):
        manager.setup({"BUILD_TAG": "j"}, lambda: str(node_temp), console)

    assert not (node_temp / "j-tmp").exists()
    assert _lines(console_stream) == [f"[TMPDIR] Creating temporary directory: {node_temp / 'j-tmp'}"]


def test_chmod_failure_keeps_preexisting_directory(
    node_temp: Path, console: BuildConsole, monkeypatch: pytest.MonkeyPatch
) -> None:
    existing = node_temp / "j-tmp"
    existing.mkdir()
    (existing / "keep").write_text("x")
    monkeypatch.setattr(Path, "chmod", _refuse_chmod)
    manager = TmpdirLifecycle(GlobalSettings(), JobSettings())

    with pytest.raises(IOFailure):
        manager.setup({"BUILD_TAG": "j"}, lambda: str(node_temp), console)

    assert (existing / "keep").exists()
