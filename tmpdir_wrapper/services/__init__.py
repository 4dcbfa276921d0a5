"""이 파일은 .py 서비스 패키지 초기화 모듈로 핵심 서비스를 노출합니다."""

from .build_runner import BuildResult, BuildRunner
from .lifecycle import TmpdirEnvironment, TmpdirLifecycle
from .lister import iter_tree, list_sorted

__all__ = [
    "BuildResult",
    "BuildRunner",
    "TmpdirEnvironment",
    "TmpdirLifecycle",
    "iter_tree",
    "list_sorted",
]
