"""이 파일은 .py 설정 저장소 모듈로 전역/잡 TMPDIR 설정의 검증과 YAML 저장을 담당합니다."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .config import DEFAULT_DIR_TEMPLATE, SETTINGS_FILE
from .errors import ConfigurationError


class GlobalSettings(BaseModel):
    # 잡이 자체 템플릿을 지정하지 않을 때 쓰는 기본 템플릿이다.
    dir_template: str = DEFAULT_DIR_TEMPLATE

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    @field_validator("dir_template")
    @classmethod
    def validate_dir_template(cls, value: str) -> str:
        # 전역 템플릿은 비어 있을 수 없다.
        if not value or not value.strip():
            raise ValueError("dir_template must not be empty")
        return value


class JobSettings(BaseModel):
    # 빈 문자열이면 전역 템플릿을 사용한다.
    dir_template: str = ""
    # True면 삭제 전에 남은 파일 목록을 빌드 로그에 기록한다.
    log_dir_contents: bool = False

    model_config = ConfigDict(extra="forbid", frozen=True)


def _validate(model: type, data: Any, source: str) -> Any:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings in {source} must be a mapping")
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings in {source}: {exc}") from exc


def _read_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Cannot parse settings file {path}: {exc}") from exc


class SettingsStore:
    """전역 설정의 로드/저장 수명주기를 관리한다.

    설정 파일이 없으면 기본값을 사용하며, ``configure``만이 저장된 값을
    바꿀 수 있다. 빈 템플릿은 저장 전에 거부된다.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path or SETTINGS_FILE)

    def load(self) -> GlobalSettings:
        if not self.path.exists():
            return GlobalSettings()
        return _validate(GlobalSettings, _read_yaml(self.path), str(self.path))

    def save(self, settings: GlobalSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload: Dict[str, Any] = settings.model_dump()
        self.path.write_text(yaml.safe_dump(payload, sort_keys=True))

    def configure(self, dir_template: str) -> GlobalSettings:
        # 검증을 통과한 값만 저장한다.
        settings = _validate(GlobalSettings, {"dir_template": dir_template}, "configuration update")
        self.save(settings)
        return settings


def load_job_settings(path: Path) -> JobSettings:
    return _validate(JobSettings, _read_yaml(Path(path)), str(path))
