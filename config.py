# config.py

from pathlib import Path

# ----------------------
# Feature 크기 설정
# ----------------------
# header_1..header_H, random_byte_1..random_byte_M 컬럼 수가 여기서 결정됨
HEADER_SIZE = 8
RANDOM_BYTES_SIZE = 32

# ----------------------
# 압축률 계산용 코덱 설정
# ----------------------
# 한 데이터셋 안의 compression_ratio는 전부 같은 코덱/레벨로 계산해야 비교 가능
COMPRESSION_CODEC = "deflate"
COMPRESSION_LEVEL = 6

SUPPORTED_CODECS = ["deflate", "zstd", "lz4", "snappy"]

# ----------------------
# 멀티프로세싱 설정
# ----------------------
MAX_WORKERS = 32

# ----------------------
# 경로 설정
# ----------------------
PROJECT_ROOT = Path(__file__).resolve().parent

RAW_DIR = PROJECT_ROOT / "raw"
DATA_DIR = PROJECT_ROOT / "data"

DEFAULT_OUTPUT = DATA_DIR / "features.csv"
