"""이 파일은 .py 노드 어댑터로 빌드 실행 노드의 임시 디렉터리 조회를 제공합니다."""

from __future__ import annotations

import logging
import tempfile
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class LocalNode:
    # 컨트롤러와 같은 머신에서 빌드를 실행하는 노드이다.
    name: str = "local"

    def temp_dir(self) -> str:
        # 노드의 플랫폼 임시 디렉터리(TMPDIR/TEMP/TMP 또는 OS 기본값)를 조회한다.
        temp_root = tempfile.gettempdir()
        logger.debug("Node %s temp directory: %s", self.name, temp_root)
        return temp_root
