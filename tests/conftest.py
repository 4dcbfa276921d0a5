"""이 파일은 .py 테스트 설정 모듈로 경로를 초기화하고 공용 픽스처를 제공합니다."""

import io
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from tmpdir_wrapper.core.logging import BuildConsole  # noqa: E402


@pytest.fixture
def console_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(console_stream: io.StringIO) -> BuildConsole:
    return BuildConsole(console_stream)


@pytest.fixture
def node_temp(tmp_path: Path) -> Path:
    # 실행 노드의 임시 디렉터리를 대신한다.
    path = tmp_path / "node-tmp"
    path.mkdir()
    return path
