# pipeline/batch.py
"""
배치 feature 추출
파일 목록을 워커 풀에 나눠서 처리하고, 입력 순서 그대로 FeatureRecord 리스트 반환

- 순서 보장: Pool.imap 은 완료 순서와 관계없이 입력 순서대로 결과를 돌려줌
  → i번째 레코드는 항상 file_paths[i] (레코드에도 file_name 포함)
- fail-fast: 첫 번째 에러(입력 순서 기준)에서 풀을 종료하고 에러를 그대로 올림.
  그때까지 모은 결과는 버림.
- on_progress(path, error): 파일 하나 끝날 때마다 부모 프로세스에서 호출 (관찰 전용)
"""

from multiprocessing import Pool
from typing import Callable, List, Optional, Sequence

import numpy as np

from config import (
    HEADER_SIZE,
    RANDOM_BYTES_SIZE,
    COMPRESSION_CODEC,
    COMPRESSION_LEVEL,
)
from features import FeatureError, FeatureRecord, FileReadError, compute_features, make_rng
from features.compression import get_compressor
from features.extractor import printable_name

from .common import default_num_workers, log

ProgressCallback = Callable[[object, Optional[FeatureError]], None]


# ===============================
# 파일 읽기
# ===============================
def read_file(path) -> bytes:
    """파일 전체를 읽음. 실패하면 FileReadError (경로 포함)."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise FileReadError(printable_name(path), e.strerror or str(e)) from e


# ===============================
# 단일 파일 처리 (워커에서 실행)
# ===============================
def process_file(
    path,
    seed=None,
    header_size: int = HEADER_SIZE,
    sample_size: int = RANDOM_BYTES_SIZE,
    codec: str = COMPRESSION_CODEC,
    level: int = COMPRESSION_LEVEL,
) -> FeatureRecord:
    """
    읽기 + feature 계산.
    FeatureError가 아닌 예외도 FeatureError(stage="features")로 감싸서
    어떤 파일에서 실패했는지 남긴다.
    """
    content = read_file(path)

    try:
        return compute_features(
            path,
            content,
            make_rng(seed),
            header_size=header_size,
            sample_size=sample_size,
            codec=codec,
            level=level,
        )
    except FeatureError:
        raise
    except Exception as e:
        raise FeatureError(printable_name(path), f"{type(e).__name__}: {e}") from e


# ===============================
# 멀티프로세싱용 래퍼
# ===============================
def _process_file_wrapper(args):
    """
    multiprocessing.Pool에서 사용되는 래퍼 함수
    """
    path, seed, header_size, sample_size, codec, level = args
    return process_file(
        path,
        seed=seed,
        header_size=header_size,
        sample_size=sample_size,
        codec=codec,
        level=level,
    )


def _notify(on_progress: Optional[ProgressCallback], path, error: Optional[FeatureError]) -> None:
    if on_progress is None:
        return
    try:
        on_progress(path, error)
    except Exception as e:
        # 진행 표시 쪽 문제로 결과/에러 전파가 바뀌면 안 됨
        log(f"[batch] progress callback 실패 (무시): {type(e).__name__}: {e}")


def _collect(results, paths: Sequence, on_progress: Optional[ProgressCallback]) -> List[FeatureRecord]:
    """입력 순서대로 결과를 모음. 첫 에러에서 바로 중단."""
    records = []
    it = iter(results)
    for path in paths:
        try:
            record = next(it)
        except FeatureError as e:
            _notify(on_progress, path, e)
            raise
        _notify(on_progress, path, None)
        records.append(record)
    return records


# ===============================
# 배치 실행
# ===============================
def run(
    file_paths: Sequence,
    *,
    seed: Optional[int] = None,
    workers: Optional[int] = None,
    on_progress: Optional[ProgressCallback] = None,
    use_multiprocessing: bool = True,
    header_size: int = HEADER_SIZE,
    sample_size: int = RANDOM_BYTES_SIZE,
    codec: str = COMPRESSION_CODEC,
    level: int = COMPRESSION_LEVEL,
) -> List[FeatureRecord]:
    """
    file_paths 전체에 대해 feature 추출.

    seed를 주면 SeedSequence.spawn 으로 파일마다 독립된 난수 스트림을 만들기 때문에
    워커 수나 실행 순서와 관계없이 결과가 재현됨.
    """
    paths = list(file_paths)
    if not paths:
        return []

    # 코덱 설정 오류는 파일을 읽기 전에 알림
    get_compressor(codec)

    seeds = np.random.SeedSequence(seed).spawn(len(paths))
    task_args = [
        (path, child, header_size, sample_size, codec, level)
        for path, child in zip(paths, seeds)
    ]

    num_workers = workers if workers is not None else default_num_workers(len(paths))

    if use_multiprocessing and num_workers > 1 and len(paths) > 1:
        num_workers = min(num_workers, len(paths))
        log(f"[batch] Processing {len(paths)} file(s) with {num_workers} workers...")

        # with 블록을 벗어나면 terminate() → 에러 시 남은 작업은 버려짐
        with Pool(processes=num_workers) as pool:
            records = _collect(pool.imap(_process_file_wrapper, task_args), paths, on_progress)
    else:
        log(f"[batch] Processing {len(paths)} file(s) (single process)...")
        records = _collect(map(_process_file_wrapper, task_args), paths, on_progress)

    log(f"[batch] 완료: {len(records)} record(s)")
    return records
