"""
feature 추출 스크립트

입력 디렉토리의 모든 파일에 대해 아래 feature를 계산해서 CSV 하나로 저장:
  1. entropy: 바이트 분포의 Shannon 엔트로피 (0~8)
  2. header_1..header_8: 파일 앞 8바이트 (짧으면 0 패딩)
  3. random_byte_1..random_byte_32: 파일 내용에서 복원추출한 랜덤 바이트
  4. compression_ratio: 1 - 압축크기/원본크기 (기본 raw DEFLATE level 6)

사용법:
  python extract_features.py -i raw/ -o data/features.csv
  python extract_features.py -i raw/ -o data/features.csv --seed 42 --codec lz4
"""

import argparse
import sys

from tqdm import tqdm

from config import (
    RAW_DIR,
    DEFAULT_OUTPUT,
    HEADER_SIZE,
    RANDOM_BYTES_SIZE,
    COMPRESSION_CODEC,
    COMPRESSION_LEVEL,
    SUPPORTED_CODECS,
)
from features import FeatureError
from pipeline import list_input_files, run, write
from pipeline.common import log, set_quiet


def positive_int(value: str) -> int:
    """argparse type: 1 이상의 정수만 허용"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"정수가 아닙니다: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"1 이상이어야 합니다: {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="디렉토리 안 파일들의 byte feature(entropy/header/random bytes/compression ratio) CSV 생성",
    )
    parser.add_argument(
        "-i", "--input-directory",
        default=str(RAW_DIR),
        help="feature를 추출할 파일들이 있는 디렉토리 (기본: raw/)",
    )
    parser.add_argument(
        "-o", "--output-file",
        default=str(DEFAULT_OUTPUT),
        help="저장할 CSV 경로 (기본: data/features.csv)",
    )
    parser.add_argument(
        "--no-recursive",
        action="store_true",
        help="하위 디렉토리는 제외",
    )
    parser.add_argument("--seed", type=int, default=None, help="random_bytes 샘플링 시드")
    parser.add_argument("--workers", type=int, default=None, help="워커 프로세스 수 (기본: CPU 코어 수)")
    parser.add_argument("--codec", choices=SUPPORTED_CODECS, default=COMPRESSION_CODEC)
    parser.add_argument("--level", type=int, default=COMPRESSION_LEVEL, help="압축 레벨")
    parser.add_argument("--header-size", type=positive_int, default=HEADER_SIZE)
    parser.add_argument("--sample-size", type=positive_int, default=RANDOM_BYTES_SIZE)
    parser.add_argument("--no-progress", action="store_true", help="진행 표시/로그 출력 끄기")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    set_quiet(args.no_progress)

    try:
        file_list = list_input_files(args.input_directory, recursive=not args.no_recursive)
    except (FileNotFoundError, NotADirectoryError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    log(f"Found {len(file_list)} file(s) in {args.input_directory}")

    with tqdm(
        total=len(file_list),
        desc="Extracting",
        unit="file",
        disable=args.no_progress,
    ) as bar:
        def on_progress(path, error):
            bar.update(1)

        try:
            records = run(
                file_list,
                seed=args.seed,
                workers=args.workers,
                on_progress=on_progress,
                header_size=args.header_size,
                sample_size=args.sample_size,
                codec=args.codec,
                level=args.level,
            )
        except FeatureError as e:
            bar.close()
            print(f"Error: {e}", file=sys.stderr)
            return 1

    try:
        write(records, args.output_file, header_size=args.header_size, sample_size=args.sample_size)
    except OSError as e:
        print(f"Error: CSV 저장 실패 ({args.output_file}): {e}", file=sys.stderr)
        return 1

    log(f"✓ Created {args.output_file}")
    log(f"  Total rows: {len(records)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
