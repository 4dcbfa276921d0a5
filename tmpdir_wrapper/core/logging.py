"""이 파일은 .py 로깅 초기화 모듈로 기본 로그 포맷과 빌드 콘솔 출력을 제공합니다."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from .config import LOG_PREFIX

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class BuildConsole:
    """빌드 로그 싱크. 운영 도구가 grep 하는 [TMPDIR] 접두 라인을 기록한다."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def line(self, message: str) -> None:
        text = f"{LOG_PREFIX} {message}"
        self.stream.write(text + "\n")
        self.stream.flush()
        logger.debug(text)
