"""이 파일은 .py 타입 정의 모듈로 빌드 정보와 디렉터리 엔트리 모델을 제공합니다."""

from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class DirectoryEntry:
    # 목록 조회 중에만 쓰이는 임시 구조체로 저장되지 않는다.
    path: str
    is_directory: bool
    # 디렉터리는 항상 0이다.
    size: int = 0


@dataclass
class BuildInfo:
    # 하나의 빌드를 식별하는 정보이다.
    job_name: str
    build_number: int
    # 빌드 실행 전 이미 정의된 환경 변수(노드/잡 변수 등)이다.
    base_env: Dict[str, str] = field(default_factory=dict)

    @property
    def build_tag(self) -> str:
        # 잡 이름의 "/"는 경로 구분자로 해석되지 않도록 "-"로 바꾼다.
        return f"ci-{self.job_name.replace('/', '-')}-{self.build_number}"

    def environment(self) -> Dict[str, str]:
        env = dict(self.base_env)
        env["JOB_NAME"] = self.job_name
        env["BUILD_NUMBER"] = str(self.build_number)
        env["BUILD_TAG"] = self.build_tag
        return env
