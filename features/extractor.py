"""
단일 파일 feature 추출

compute_features(path, content) -> FeatureRecord
  - entropy           : Shannon entropy (0~8, float32)
  - header            : 선두 HEADER_SIZE 바이트 (부족하면 0 패딩)
  - random_bytes      : RANDOM_BYTES_SIZE 개 복원추출 샘플 (빈 파일이면 전부 0)
  - compression_ratio : 1 - compressed/original (빈 파일이면 0, float32)
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from config import (
    HEADER_SIZE,
    RANDOM_BYTES_SIZE,
    COMPRESSION_CODEC,
    COMPRESSION_LEVEL,
)
from .compression import compression_ratio
from .errors import PathEncodingError
from .sampling import make_rng, random_bytes
from .statistical import header_bytes, shannon_entropy


@dataclass(frozen=True, eq=False)
class FeatureRecord:
    file_name: str
    entropy: np.float32
    header: np.ndarray = field(repr=False)
    random_bytes: np.ndarray = field(repr=False)
    compression_ratio: np.float32

    def __post_init__(self):
        # 생성 후에는 바이트 배열도 수정 불가
        for name in ("header", "random_bytes"):
            arr = np.array(getattr(self, name), dtype=np.uint8)
            arr.setflags(write=False)
            object.__setattr__(self, name, arr)
        object.__setattr__(self, "entropy", np.float32(self.entropy))
        object.__setattr__(self, "compression_ratio", np.float32(self.compression_ratio))

    def __setstate__(self, state):
        # 워커 프로세스에서 pickle로 넘어온 경우에도 읽기 전용 유지
        self.__dict__.update(state)
        self.__post_init__()

    def to_row(self) -> List:
        """CSV 컬럼 순서 그대로 펼친 값 리스트"""
        return [
            self.file_name,
            float(self.entropy),
            *(int(b) for b in self.header),
            *(int(b) for b in self.random_bytes),
            float(self.compression_ratio),
        ]


def printable_name(path) -> str:
    """에러 메시지용: 표현 불가능한 문자는 \\x.. 형태로 치환"""
    return os.fsdecode(path).encode("utf-8", "backslashreplace").decode("utf-8")


def display_name(path) -> str:
    """
    str / bytes / PathLike 경로를 텍스트로 변환.
    UTF-8로 표현할 수 없는 경로(surrogate escape 포함)는 PathEncodingError.
    """
    name = os.fsdecode(path)
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as e:
        raise PathEncodingError(
            printable_name(path), f"경로를 텍스트로 표현할 수 없음 ({e.reason})"
        ) from e
    return name


def compute_features(
    path,
    content: bytes,
    rng: Optional[np.random.Generator] = None,
    *,
    header_size: int = HEADER_SIZE,
    sample_size: int = RANDOM_BYTES_SIZE,
    codec: str = COMPRESSION_CODEC,
    level: int = COMPRESSION_LEVEL,
) -> FeatureRecord:
    """
    파일 하나의 바이트 내용으로 FeatureRecord 생성.
    rng가 없으면 seed 없는 생성기를 새로 만든다 (실행마다 random_bytes가 달라짐).
    """
    file_name = display_name(path)

    if rng is None:
        rng = make_rng()

    return FeatureRecord(
        file_name=file_name,
        entropy=shannon_entropy(content),
        header=header_bytes(content, header_size),
        random_bytes=random_bytes(content, rng, sample_size),
        compression_ratio=compression_ratio(content, codec, level, path=file_name),
    )
