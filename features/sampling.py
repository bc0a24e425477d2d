"""
랜덤 바이트 샘플링

파일 내용에서 uniform 하게 (복원추출) 바이트를 뽑는다.
난수 생성기는 항상 인자로 주입받는다 (seed 고정 테스트용).
"""

from typing import Optional, Union

import numpy as np

from config import RANDOM_BYTES_SIZE


def make_rng(seed: Optional[Union[int, np.random.SeedSequence]] = None) -> np.random.Generator:
    """seed가 None이면 실행마다 다른 결과 (SeedSequence도 받음)"""
    return np.random.default_rng(seed)


def random_bytes(
    data: bytes,
    rng: np.random.Generator,
    size: int = RANDOM_BYTES_SIZE,
) -> np.ndarray:
    """
    각 슬롯마다 [0, len(data)) 범위의 인덱스를 독립적으로 뽑아서 그 바이트를 복사.
    복원추출이므로 같은 인덱스/값이 여러 번 나오는 건 정상.
    빈 파일이면 전부 0.
    """
    if not data:
        return np.zeros(size, dtype=np.uint8)

    arr = np.frombuffer(data, dtype=np.uint8)
    idx = rng.integers(0, arr.size, size=size)
    return arr[idx].copy()
