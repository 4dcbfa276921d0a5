"""이 파일은 .py 템플릿 모듈로 TMPDIR 경로 템플릿 선택과 변수 치환을 담당합니다."""

from __future__ import annotations

import re
from typing import Mapping

# "$$"는 "$" 문자 그대로이다. 변수는 $NAME 또는 ${NAME} 형식이며 중괄호 형식만 "."을 허용한다.
VARIABLE_PATTERN = re.compile(r"\$(?:(\$)|\{([A-Za-z0-9_.]+)\}|([A-Za-z0-9_]+))")


def resolve_template(job_template: str, global_template: str) -> str:
    # 잡 템플릿이 비어 있지 않으면 전역 템플릿보다 우선한다.
    if job_template:
        return job_template
    return global_template


def expand_variables(template: str, env: Mapping[str, str]) -> str:
    def replacer(match: re.Match) -> str:
        if match.group(1):
            return "$"
        name = match.group(2) or match.group(3)
        value = env.get(name)
        if value is None:
            # 정의되지 않은 변수는 원문 그대로 남긴다.
            return match.group(0)
        return value

    return VARIABLE_PATTERN.sub(replacer, template)
