"""이 파일은 .py 경로 모듈로 상대 TMPDIR 경로를 노드 임시 디렉터리에 고정합니다."""

from __future__ import annotations

import os
from typing import Callable

from .errors import ConfigurationError

TempDirProvider = Callable[[], str]


def normalize_path(path: str) -> str:
    # 끝의 구분자, 중복 구분자, "."/".." 세그먼트를 정리한다.
    return os.path.normpath(path)


def anchor_path(resolved_path: str, temp_dir_provider: TempDirProvider) -> str:
    """치환이 끝난 경로를 실행 노드 기준의 절대 경로로 만든다.

    상대 경로이면 ``temp_dir_provider``를 한 번 호출해 노드의 임시 디렉터리
    아래로 붙인다. 절대 경로이면 정규화만 한다. 결과는 항상 절대 경로이며
    다시 고정해도 값이 바뀌지 않는다.
    """
    if not resolved_path or not resolved_path.strip():
        # 빈 경로를 허용하면 노드 임시 디렉터리 자체가 삭제 대상이 된다.
        raise ConfigurationError("Resolved TMPDIR path is empty")

    if os.path.isabs(resolved_path):
        return normalize_path(resolved_path)

    temp_root = normalize_path(temp_dir_provider())
    if not os.path.isabs(temp_root):
        raise ConfigurationError(f"Node temp directory {temp_root!r} is not an absolute path")
    anchored = normalize_path(os.path.join(temp_root, resolved_path))
    # 상대 경로는 노드 임시 디렉터리의 하위 경로여야 한다.
    if anchored == temp_root or os.path.commonpath([temp_root, anchored]) != temp_root:
        raise ConfigurationError(f"Resolved TMPDIR path {resolved_path!r} escapes the node temp directory {temp_root}")
    return anchored
