"""이 파일은 .py 설정 모듈로 기본 경로와 TMPDIR 템플릿 기본값을 정의합니다."""

import os
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
STORAGE_DIR = REPO_ROOT / "storage"
# 전역 TMPDIR 템플릿은 빌드마다 고유한 BUILD_TAG를 포함해야 빌드 간 충돌이 없다.
DEFAULT_DIR_TEMPLATE = "${BUILD_TAG}-tmp"
SETTINGS_FILE = Path(
    os.getenv(
        "TMPDIR_WRAPPER_SETTINGS",
        (STORAGE_DIR / "tmpdir_settings.yml").as_posix(),
    )
)
LOG_LEVEL = os.getenv("TMPDIR_WRAPPER_LOG_LEVEL", "INFO")
LOG_PREFIX = "[TMPDIR]"
# 0700: 소유자만 읽기/쓰기/실행 가능
DIR_MODE = 0o700
