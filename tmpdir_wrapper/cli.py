"""이 파일은 .py 명령행 모듈로 빌드 실행과 전역 설정 변경을 제공합니다."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
import sys
from typing import List, Optional

from tmpdir_wrapper.core.config import LOG_LEVEL
from tmpdir_wrapper.core.errors import CommandError, ConfigurationError, IOFailure
from tmpdir_wrapper.core.logging import BuildConsole, setup_logging
from tmpdir_wrapper.core.settings import JobSettings, SettingsStore, load_job_settings
from tmpdir_wrapper.core.types import BuildInfo
from tmpdir_wrapper.services.build_runner import BuildRunner

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tmpdir-wrapper", description="Run a build inside a private TMPDIR")
    parser.add_argument("--settings", type=Path, default=None, help="global settings YAML file")
    parser.add_argument("--log-level", default=LOG_LEVEL)
    commands = parser.add_subparsers(dest="command", required=True)

    run = commands.add_parser("run", help="run a build command with TEMP/TMPDIR set")
    run.add_argument("--job-name", required=True)
    run.add_argument("--build-number", type=int, required=True)
    run.add_argument("--job-settings", type=Path, default=None, help="per-job settings YAML file")
    run.add_argument("--dir-template", default=None, help="per-job TMPDIR template")
    run.add_argument("--log-dir-contents", action="store_true", default=None)
    run.add_argument("build_command", nargs=argparse.REMAINDER)

    configure = commands.add_parser("configure", help="update the global TMPDIR template")
    configure.add_argument("--dir-template", required=True)
    return parser


def _job_settings(args: argparse.Namespace) -> JobSettings:
    # 파일 설정을 먼저 읽고 명령행 인자로 덮어쓴다.
    settings = load_job_settings(args.job_settings) if args.job_settings else JobSettings()
    overrides = {}
    if args.dir_template is not None:
        overrides["dir_template"] = args.dir_template
    if args.log_dir_contents is not None:
        overrides["log_dir_contents"] = args.log_dir_contents
    if not overrides:
        return settings
    return JobSettings(**{**settings.model_dump(), **overrides})


def _run(args: argparse.Namespace, store: SettingsStore) -> int:
    command = list(args.build_command)
    if command and command[0] == "--":
        command = command[1:]
    runner = BuildRunner(store.load(), _job_settings(args), console=BuildConsole(sys.stdout))
    build = BuildInfo(job_name=args.job_name, build_number=args.build_number, base_env=dict(os.environ))
    result = runner.run(build, command)
    if result.exit_code != 0:
        return result.exit_code
    return 0 if result.teardown_ok else 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    store = SettingsStore(args.settings)

    try:
        if args.command == "configure":
            settings = store.configure(args.dir_template)
            logger.info("Saved global TMPDIR template %s to %s", settings.dir_template, store.path)
            return 0
        return _run(args, store)
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return 2
    except (IOFailure, CommandError) as exc:
        logger.error("Build setup failed: %s", exc)
        return 1
