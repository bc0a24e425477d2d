"""
features 패키지
파일 단위 특성 추출 관련 모듈들
"""

from .statistical import shannon_entropy, header_bytes
from .sampling import make_rng, random_bytes
from .compression import compress, compression_ratio
from .errors import FeatureError, FileReadError, PathEncodingError, CompressionError
from .extractor import FeatureRecord, compute_features

__all__ = [
    'shannon_entropy',
    'header_bytes',
    'make_rng',
    'random_bytes',
    'compress',
    'compression_ratio',
    'FeatureError',
    'FileReadError',
    'PathEncodingError',
    'CompressionError',
    'FeatureRecord',
    'compute_features',
]
