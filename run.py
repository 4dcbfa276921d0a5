"""이 파일은 .py 엔트리포인트로 TMPDIR 래퍼 명령행 실행을 제공합니다."""

import sys

from tmpdir_wrapper.cli import main

if __name__ == "__main__":
    sys.exit(main())
