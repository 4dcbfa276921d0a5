"""이 파일은 .py 공통 예외 모듈로 오류 유형을 표준화합니다."""


class ConfigurationError(ValueError):
    """TMPDIR 템플릿/설정 검증 실패 시 사용합니다."""


class IOFailure(RuntimeError):
    """디렉터리 생성/권한 변경/목록 조회/삭제 실패에 사용합니다."""


class CommandError(RuntimeError):
    """빌드 명령을 시작하지 못했을 때 사용합니다."""
