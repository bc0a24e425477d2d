# pipeline/discovery.py
from pathlib import Path
from typing import List


def list_input_files(directory, recursive: bool = True) -> List[Path]:
    """
    directory 안의 모든 '파일' 리스트 반환 (정렬됨 → CSV 행 순서 재현 가능).
    recursive=False 이면 바로 아래 파일만.
    """
    directory = Path(directory)
    if not directory.exists():
        raise FileNotFoundError(
            f"입력 디렉토리가 없습니다: {directory} "
            f"(디렉토리를 만들거나 존재하는 디렉토리를 지정하세요)"
        )
    if not directory.is_dir():
        raise NotADirectoryError(f"디렉토리가 아닙니다: {directory}")

    candidates = directory.rglob("*") if recursive else directory.iterdir()
    files = [p for p in candidates if p.is_file()]
    files.sort()
    return files
