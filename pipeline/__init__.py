"""
pipeline 패키지
파일 목록 → 배치 feature 추출 → CSV 저장
"""

from .batch import read_file, process_file, run
from .discovery import list_input_files
from .serializer import column_names, records_to_frame, write, read

__all__ = [
    'read_file',
    'process_file',
    'run',
    'list_input_files',
    'column_names',
    'records_to_frame',
    'write',
    'read',
]
