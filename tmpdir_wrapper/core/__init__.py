"""이 파일은 .py 코어 패키지 초기화 모듈로 주요 심볼을 재노출합니다."""

from .config import DEFAULT_DIR_TEMPLATE, SETTINGS_FILE
from .errors import CommandError, ConfigurationError, IOFailure
from .logging import BuildConsole, setup_logging
from .paths import anchor_path
from .settings import GlobalSettings, JobSettings, SettingsStore, load_job_settings
from .template import expand_variables, resolve_template
from .types import BuildInfo, DirectoryEntry

__all__ = [
    "BuildConsole",
    "BuildInfo",
    "CommandError",
    "ConfigurationError",
    "DEFAULT_DIR_TEMPLATE",
    "DirectoryEntry",
    "GlobalSettings",
    "IOFailure",
    "JobSettings",
    "SETTINGS_FILE",
    "SettingsStore",
    "anchor_path",
    "expand_variables",
    "load_job_settings",
    "resolve_template",
    "setup_logging",
]
