# pipeline/common.py
from multiprocessing import cpu_count

from config import MAX_WORKERS

_QUIET = False


def set_quiet(quiet: bool = True) -> None:
    """log() 출력 끄기/켜기 (테스트, --no-progress 용)."""
    global _QUIET
    _QUIET = quiet


def log(msg: str) -> None:
    """간단한 로깅 함수."""
    if not _QUIET:
        print(f"[LOG] {msg}")


def default_num_workers(num_tasks: int) -> int:
    """CPU 코어 수, MAX_WORKERS, 작업 수 중 최소값 (최소 1)."""
    return max(1, min(cpu_count(), MAX_WORKERS, num_tasks))
