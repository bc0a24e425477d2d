import numpy as np

from config import HEADER_SIZE

MAX_ENTROPY = 8.0  # log2(256)


# =========================================
# 1. Shannon Entropy
# =========================================
def byte_histogram(data: bytes) -> np.ndarray:
    """0-255 각 바이트 값의 출현 횟수 (길이 256 배열)"""
    arr = np.frombuffer(data, dtype=np.uint8)
    return np.bincount(arr, minlength=256)


def shannon_entropy(data: bytes) -> float:
    """
    Shannon entropy (bits per byte)
    - 값이 높을수록 (최대 8.0): 데이터가 무작위적이고 압축이 어려움
    - 값이 낮을수록 (최소 0.0): 데이터가 반복적이고 압축이 쉬움

    파일 전체를 한 번 훑음: O(n) 시간, 추가 메모리는 카운터 256개.
    """
    if not data:
        return 0.0

    counts = byte_histogram(data)
    probs = counts[counts > 0] / float(len(data))
    entropy = float((probs * -np.log2(probs)).sum())

    # 단일 값 파일은 -0.0 이 나옴 (+ 0.0 으로 0.0 으로 바꿈), 8.0000001 같은 오차도 잘라냄
    return min(max(entropy, 0.0), MAX_ENTROPY) + 0.0


# =========================================
# 2. Header (선두 바이트 스냅샷)
# =========================================
def header_bytes(data: bytes, size: int = HEADER_SIZE) -> np.ndarray:
    """
    앞쪽 size 바이트 복사. 파일이 더 짧으면 뒤를 0으로 채움 (에러 없음).
    """
    header = np.zeros(size, dtype=np.uint8)
    n = min(len(data), size)
    if n:
        header[:n] = np.frombuffer(data, dtype=np.uint8, count=n)
    return header
