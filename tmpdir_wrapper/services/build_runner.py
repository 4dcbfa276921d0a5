"""이 파일은 .py 빌드 실행 모듈로 TMPDIR 수명주기 안에서 빌드 명령을 실행합니다."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import List, Optional

from tmpdir_wrapper.adapters.node import LocalNode
from tmpdir_wrapper.adapters.process import CommandRunner
from tmpdir_wrapper.core.errors import IOFailure
from tmpdir_wrapper.core.logging import BuildConsole
from tmpdir_wrapper.core.settings import GlobalSettings, JobSettings
from tmpdir_wrapper.core.types import BuildInfo

from .lifecycle import TmpdirLifecycle

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    exit_code: int
    tmpdir: str
    teardown_ok: bool

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0 and self.teardown_ok


class BuildRunner:
    def __init__(
        self,
        global_settings: GlobalSettings,
        job_settings: JobSettings,
        node: Optional[LocalNode] = None,
        command_runner: Optional[CommandRunner] = None,
        console: Optional[BuildConsole] = None,
    ) -> None:
        self.lifecycle = TmpdirLifecycle(global_settings, job_settings)
        self.node = node or LocalNode()
        self.command_runner = command_runner or CommandRunner()
        self.console = console or BuildConsole()

    def run(self, build: BuildInfo, command: List[str], cwd: Optional[str] = None) -> BuildResult:
        build_env = build.environment()
        # setup 실패 시 환경 변수를 주입하지 않고 예외를 전파한다.
        environment = self.lifecycle.setup(build_env, self.node.temp_dir, self.console)

        exit_code = 1
        teardown_ok = False
        try:
            environment.apply_env(build_env)
            exit_code = self.command_runner.run(command, build_env, cwd=cwd).exit_code
        finally:
            # 성공/실패/중단 모두 teardown을 실행한다.
            try:
                teardown_ok = environment.teardown()
            except IOFailure as exc:
                logger.error("Teardown of %s failed: %s", environment.path, exc)

        logger.info("Build %s finished with exit code %d", build.build_tag, exit_code)
        return BuildResult(exit_code=exit_code, tmpdir=environment.path, teardown_ok=teardown_ok)
