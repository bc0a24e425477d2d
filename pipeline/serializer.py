# pipeline/serializer.py
"""
FeatureRecord 리스트 → CSV

컬럼 순서 (고정):
    file_name, entropy, header_1..header_H, random_byte_1..random_byte_M, compression_ratio

header / random_bytes 는 고정 길이 바이트 배열이라 DataFrame이 알아서 컬럼으로
펼쳐주지 않으므로 컬럼명을 직접 만든다. 바이트 값은 0~255 정수로 기록.
"""

import contextlib
import os
import tempfile
from pathlib import Path
from typing import List, Sequence

import pandas as pd

from config import HEADER_SIZE, RANDOM_BYTES_SIZE
from features import FeatureRecord

from .common import log


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def header_columns(header_size: int = HEADER_SIZE) -> List[str]:
    return [f"header_{i}" for i in range(1, header_size + 1)]


def random_byte_columns(sample_size: int = RANDOM_BYTES_SIZE) -> List[str]:
    return [f"random_byte_{i}" for i in range(1, sample_size + 1)]


def column_names(header_size: int = HEADER_SIZE, sample_size: int = RANDOM_BYTES_SIZE) -> List[str]:
    return [
        "file_name",
        "entropy",
        *header_columns(header_size),
        *random_byte_columns(sample_size),
        "compression_ratio",
    ]


def records_to_frame(
    records: Sequence[FeatureRecord],
    header_size: int = HEADER_SIZE,
    sample_size: int = RANDOM_BYTES_SIZE,
) -> pd.DataFrame:
    """레코드 순서 그대로 한 행씩. 모든 레코드는 같은 모양이어야 함."""
    rows = []
    for record in records:
        if record.header.size != header_size or record.random_bytes.size != sample_size:
            raise ValueError(
                f"레코드 모양 불일치: {record.file_name} "
                f"(header={record.header.size}, random_bytes={record.random_bytes.size}, "
                f"기대값 header={header_size}, random_bytes={sample_size})"
            )
        rows.append(record.to_row())

    columns = column_names(header_size, sample_size)
    df = pd.DataFrame(rows, columns=columns)

    dtypes = {"entropy": "float32", "compression_ratio": "float32"}
    for col in header_columns(header_size) + random_byte_columns(sample_size):
        dtypes[col] = "uint8"
    return df.astype(dtypes)


def write(
    records: Sequence[FeatureRecord],
    sink,
    header_size: int = HEADER_SIZE,
    sample_size: int = RANDOM_BYTES_SIZE,
) -> None:
    """
    sink: 경로(str/Path) 또는 텍스트 스트림.

    경로인 경우 같은 디렉토리의 임시 파일에 먼저 쓰고 os.replace 로 교체.
    중간에 실패하면 임시 파일을 지우므로 잘린 CSV가 남지 않는다.
    """
    df = records_to_frame(records, header_size, sample_size)

    if hasattr(sink, "write"):
        df.to_csv(sink, index=False, lineterminator="\n")
        return

    csv_path = Path(sink)
    csv_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{csv_path.name}.", suffix=".tmp", dir=csv_path.parent
    )
    try:
        with os.fdopen(fd, "w", newline="", encoding="utf-8") as f:
            df.to_csv(f, index=False, lineterminator="\n")
        # mkstemp는 0600으로 만들기 때문에 일반 open("w")와 같은 권한으로 맞춤
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, csv_path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_name)
        raise

    log(f"[serializer] saved to: {csv_path} (rows={len(df)})")


def read(source) -> pd.DataFrame:
    """
    저장된 CSV 다시 읽기.
    file_name은 항상 문자열 ("NA", "123" 같은 이름도 그대로).
    """
    return pd.read_csv(source, dtype={"file_name": str}, keep_default_na=False)
