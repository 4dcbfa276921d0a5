"""이 파일은 .py 프로세스 어댑터로 빌드 명령 실행을 래핑합니다."""

from __future__ import annotations

from dataclasses import dataclass
import subprocess
from typing import Dict, List, Optional

from tmpdir_wrapper.core.errors import CommandError


@dataclass
class CommandResult:
    exit_code: int


class CommandRunner:
    # 타임아웃/취소는 바깥 오케스트레이션 계층이 담당한다.
    def run(self, command: List[str], env: Dict[str, str], cwd: Optional[str] = None) -> CommandResult:
        if not command:
            raise CommandError("Build command is empty")
        try:
            result = subprocess.run(
                command,
                env=env,
                check=False,
                cwd=cwd,
            )
        except OSError as exc:
            raise CommandError(f"Build command failed to start: {exc}") from exc

        return CommandResult(result.returncode)
