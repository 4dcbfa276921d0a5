"""이 파일은 .py 디렉터리 목록 모듈로 정렬된 하위 항목 조회와 깊이 우선 순회를 제공합니다."""

from __future__ import annotations

from collections import deque
from pathlib import Path
import stat
from typing import Callable, Deque, Iterator, List, Optional, Union

from tmpdir_wrapper.core.errors import IOFailure
from tmpdir_wrapper.core.types import DirectoryEntry

ErrorHandler = Callable[[DirectoryEntry, IOFailure], None]


def _to_entry(path: Path) -> DirectoryEntry:
    # 심볼릭 링크는 따라가지 않고 링크 자체의 정보를 사용한다.
    info = path.lstat()
    if stat.S_ISDIR(info.st_mode):
        return DirectoryEntry(path=str(path), is_directory=True, size=0)
    return DirectoryEntry(path=str(path), is_directory=False, size=info.st_size)


def list_sorted(directory: Union[str, Path]) -> List[DirectoryEntry]:
    # 바로 아래 항목만 조회하고 절대 경로 문자열 기준 오름차순으로 정렬한다.
    try:
        children = sorted(Path(directory).iterdir(), key=str)
        return [_to_entry(child) for child in children]
    except OSError as exc:
        raise IOFailure(f"Cannot list directory {directory}: {exc}") from exc


def iter_tree(
    directory: Union[str, Path],
    on_error: Optional[ErrorHandler] = None,
) -> Iterator[DirectoryEntry]:
    """디렉터리 트리를 깊이 우선으로 순회한다.

    호출 스택 대신 명시적 스택을 사용하므로 중첩 깊이에 제한이 없다.
    하위 디렉터리의 자식은 정렬된 순서 그대로 스택 앞쪽에 넣는다.
    하위 디렉터리 조회 실패는 ``on_error``에 전달하고 그 서브트리만 건너뛴다.
    루트 조회 실패는 그대로 전파한다.
    """
    stack: Deque[DirectoryEntry] = deque(list_sorted(directory))

    while stack:
        entry = stack.popleft()
        yield entry
        if not entry.is_directory:
            continue
        try:
            children = list_sorted(entry.path)
        except IOFailure as exc:
            if on_error is None:
                raise
            on_error(entry, exc)
            continue
        stack.extendleft(reversed(children))
