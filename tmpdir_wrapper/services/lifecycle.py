"""이 파일은 .py TMPDIR 수명주기 모듈로 빌드 전 생성과 빌드 후 기록/삭제를 담당합니다."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import shutil
from typing import Dict, Mapping, MutableMapping

from tmpdir_wrapper.core.config import DIR_MODE
from tmpdir_wrapper.core.errors import IOFailure
from tmpdir_wrapper.core.logging import BuildConsole
from tmpdir_wrapper.core.paths import TempDirProvider, anchor_path
from tmpdir_wrapper.core.settings import GlobalSettings, JobSettings
from tmpdir_wrapper.core.template import expand_variables, resolve_template
from tmpdir_wrapper.core.types import DirectoryEntry

from .lister import iter_tree

logger = logging.getLogger(__name__)

ENV_KEYS = ("TEMP", "TMPDIR")


def format_entry(entry: DirectoryEntry, root: str) -> str:
    # 경로는 TMPDIR 기준 상대 경로로 표시하고 디렉터리는 끝에 "/"를 붙인다.
    relative = entry.path[min(len(root) + 1, len(entry.path)):]
    marker = "DIR" if entry.is_directory else "   "
    suffix = "/" if entry.is_directory else ""
    return f" {marker}  {entry.size:>10} B  {relative}{suffix}"


class TmpdirEnvironment:
    """한 빌드가 독점하는 TMPDIR 컨텍스트.

    setup에서 만들어지고 teardown에서 소비된다. 빌드 간에 공유하지 않는다.
    """

    def __init__(self, path: str, console: BuildConsole, log_dir_contents: bool = False) -> None:
        self.path = path
        self.console = console
        self.log_dir_contents = log_dir_contents

    def env_patch(self) -> Dict[str, str]:
        # Windows는 TEMP, UNIX 계열은 TMPDIR을 사용하므로 둘 다 설정한다.
        return {key: self.path for key in ENV_KEYS}

    def apply_env(self, env: MutableMapping[str, str]) -> None:
        env.update(self.env_patch())
        self.console.line("Injected environment variables TEMP and TMPDIR.")

    def teardown(self) -> bool:
        return TmpdirLifecycle.teardown(self.path, self.log_dir_contents, self.console)


class TmpdirLifecycle:
    def __init__(self, global_settings: GlobalSettings, job_settings: JobSettings) -> None:
        self.global_settings = global_settings
        self.job_settings = job_settings

    @property
    def dir_template(self) -> str:
        # 변수는 치환하지 않은 템플릿 원문이다.
        return resolve_template(self.job_settings.dir_template, self.global_settings.dir_template)

    def resolve_path(self, build_env: Mapping[str, str], temp_dir_provider: TempDirProvider) -> str:
        resolved = expand_variables(self.dir_template, build_env)
        return anchor_path(resolved, temp_dir_provider)

    def setup(
        self,
        build_env: Mapping[str, str],
        temp_dir_provider: TempDirProvider,
        console: BuildConsole,
    ) -> TmpdirEnvironment:
        # 1) 템플릿 선택/치환 후 노드 임시 디렉터리 기준 절대 경로로 만든다.
        tmpdir = self.resolve_path(build_env, temp_dir_provider)
        console.line(f"Creating temporary directory: {tmpdir}")

        # 2) 상위 디렉터리까지 생성하고 소유자 전용 권한을 설정한다.
        path = Path(tmpdir)
        existed = os.path.lexists(tmpdir)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IOFailure(f"Cannot create temporary directory {tmpdir}: {exc}") from exc
        try:
            path.chmod(DIR_MODE)
        except OSError as exc:
            # 이번 호출에서 만든 디렉터리는 권한이 제한되지 않았으므로 남기지 않는다.
            if not existed:
                TmpdirLifecycle._remove_created(path)
            raise IOFailure(f"Cannot restrict permissions of {tmpdir}: {exc}") from exc

        logger.info("Created TMPDIR %s", tmpdir)
        return TmpdirEnvironment(tmpdir, console, self.job_settings.log_dir_contents)

    @staticmethod
    def _remove_created(path: Path) -> None:
        try:
            path.rmdir()
        except OSError as exc:
            logger.error("Cannot remove half-created TMPDIR %s: %s", path, exc)

    @staticmethod
    def teardown(tmpdir: str, log_dir_contents: bool, console: BuildConsole) -> bool:
        path = Path(tmpdir)

        # 빌드 단계가 직접 지웠을 수 있으므로 존재 여부부터 확인한다.
        if not os.path.lexists(tmpdir):
            console.line(f"Directory {tmpdir} already deleted during build, nothing to do.")
            return True

        if log_dir_contents:
            TmpdirLifecycle._log_contents(tmpdir, console)

        console.line(f"Deleting directory: {tmpdir}")
        try:
            shutil.rmtree(path)
        except OSError as exc:
            console.line(f"Failed to delete directory {tmpdir}: {exc}")
            raise IOFailure(f"Cannot delete temporary directory {tmpdir}: {exc}") from exc

        logger.info("Deleted TMPDIR %s", tmpdir)
        return True

    @staticmethod
    def _log_contents(tmpdir: str, console: BuildConsole) -> None:
        def report_failure(entry: DirectoryEntry, exc: IOFailure) -> None:
            console.line(f"Failed to list {entry.path}: {exc}")
            logger.warning("Listing of %s abandoned: %s", entry.path, exc)

        console.line(f"----- Listing leftover files in directory {tmpdir} -----")
        try:
            for entry in iter_tree(tmpdir, on_error=report_failure):
                console.line(format_entry(entry, tmpdir))
        except IOFailure as exc:
            # 루트 조회 실패도 삭제는 계속 진행한다.
            console.line(f"Failed to list {tmpdir}: {exc}")
            logger.warning("Listing of %s abandoned: %s", tmpdir, exc)
        console.line("--------------------------------")
