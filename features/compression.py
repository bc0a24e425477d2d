"""
압축률 계산
DEFLATE (기본, raw stream level 6), ZSTD, LZ4, Snappy 중 하나를 고정 레벨로 사용

compression_ratio = 1 - compressed_size / original_size
- 1에 가까울수록 잘 압축됨 (반복적인 데이터)
- 0 근처 또는 음수: 압축 불가 (랜덤/이미 압축된 데이터, 작은 파일은 헤더 때문에 오히려 커짐)

한 데이터셋 안에서는 코덱/레벨을 섞으면 안 됨.
"""

import zlib

import lz4.frame
import snappy
import zstandard as zstd

from config import COMPRESSION_CODEC, COMPRESSION_LEVEL
from .errors import CompressionError

# 레벨별 ZstdCompressor 재사용 (프로세스마다 따로 생성됨)
_zstd_cctx = {}


def compress_with_deflate(data: bytes, level: int) -> bytes:
    # wbits=-15: zlib 헤더/체크섬 없는 raw DEFLATE → 작은 파일에서도 순수 압축량만 반영
    compressor = zlib.compressobj(level, zlib.DEFLATED, -15)
    return compressor.compress(data) + compressor.flush()


def compress_with_zstd(data: bytes, level: int) -> bytes:
    cctx = _zstd_cctx.get(level)
    if cctx is None:
        cctx = _zstd_cctx[level] = zstd.ZstdCompressor(level=level)
    return cctx.compress(data)


def compress_with_lz4(data: bytes, level: int) -> bytes:
    return lz4.frame.compress(data, compression_level=level)


def compress_with_snappy(data: bytes, level: int) -> bytes:
    # snappy는 레벨 개념이 없음
    return snappy.compress(data)


COMPRESSORS = {
    "deflate": compress_with_deflate,
    "zstd": compress_with_zstd,
    "lz4": compress_with_lz4,
    "snappy": compress_with_snappy,
}


def get_compressor(codec: str):
    try:
        return COMPRESSORS[codec]
    except KeyError:
        raise ValueError(
            f"지원하지 않는 코덱: {codec!r} (사용 가능: {', '.join(COMPRESSORS)})"
        ) from None


def compress(data: bytes, codec: str = COMPRESSION_CODEC, level: int = COMPRESSION_LEVEL) -> bytes:
    return get_compressor(codec)(data, level)


def compression_ratio(
    data: bytes,
    codec: str = COMPRESSION_CODEC,
    level: int = COMPRESSION_LEVEL,
    path: str = "<bytes>",
) -> float:
    """
    빈 데이터는 0으로 나누지 않고 바로 0.0 반환.
    압축 라이브러리 에러는 CompressionError로 감싸서 올림 (path는 에러 메시지용).
    """
    # 코덱 설정 오류는 파일 단위 에러가 아니므로 빈 데이터여도 ValueError
    compressor = get_compressor(codec)

    if not data:
        return 0.0

    try:
        compressed = compressor(data, level)
    except Exception as e:
        raise CompressionError(path, f"{codec} (level {level}) 압축 실패: {e}") from e

    return 1.0 - len(compressed) / len(data)
