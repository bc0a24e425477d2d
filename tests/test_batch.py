import os

import pytest

from features import FeatureError, FileReadError, PathEncodingError
from pipeline.batch import process_file, read_file, run


def _write_files(directory, contents):
    paths = []
    for i, content in enumerate(contents):
        path = directory / f"{i:03d}.bin"
        path.write_bytes(content)
        paths.append(path)
    return paths


def test_two_file_corpus(corpus):
    a, b = run(corpus, seed=0, use_multiprocessing=False)

    assert a.file_name == str(corpus[0])
    assert a.entropy == 0.0
    assert a.header.tolist() == [0x41] * 8
    assert a.compression_ratio > 0.9

    assert b.file_name == str(corpus[1])
    assert b.entropy == 0.0
    assert b.header.tolist() == [0] * 8
    assert b.random_bytes.tolist() == [0] * 32
    assert b.compression_ratio == 0.0


def test_output_follows_input_order_with_worker_pool(tmp_path):
    # 큰 파일을 앞에 둬서 완료 순서가 입력 순서와 달라지도록
    contents = [os.urandom(2_000_000)] + [bytes([i]) * (i + 1) for i in range(1, 12)]
    paths = _write_files(tmp_path, contents)

    records = run(paths, seed=1, workers=4)

    assert [r.file_name for r in records] == [str(p) for p in paths]
    for record, content in zip(records[1:], contents[1:]):
        assert bytes(record.header[: min(8, len(content))]) == content[:8]


def test_seeded_run_is_reproducible_across_worker_counts(tmp_path):
    paths = _write_files(tmp_path, [os.urandom(1000) for _ in range(6)])

    pooled = run(paths, seed=7, workers=3)
    serial = run(paths, seed=7, use_multiprocessing=False)

    assert [r.to_row() for r in pooled] == [r.to_row() for r in serial]


def test_files_get_independent_samples(tmp_path):
    data = bytes(range(256)) * 8
    paths = _write_files(tmp_path, [data, data])

    first, second = run(paths, seed=3, use_multiprocessing=False)

    assert first.random_bytes.tolist() != second.random_bytes.tolist()


def test_empty_input_gives_empty_output():
    assert run([]) == []


def test_unreadable_file_fails_the_batch(tmp_path):
    paths = _write_files(tmp_path, [b"ok", b"also ok"])
    missing = tmp_path / "missing.bin"
    paths.insert(1, missing)

    with pytest.raises(FileReadError) as exc_info:
        run(paths, seed=0, workers=2)

    assert exc_info.value.stage == "read"
    assert exc_info.value.path == str(missing)


def test_unreadable_file_fails_the_batch_single_process(tmp_path):
    paths = _write_files(tmp_path, [b"ok"]) + [tmp_path / "missing.bin"]
    with pytest.raises(FileReadError):
        run(paths, use_multiprocessing=False)


def test_progress_called_once_per_file(tmp_path):
    paths = _write_files(tmp_path, [b"a", b"bb", b"ccc"])
    seen = []

    run(paths, workers=2, on_progress=lambda path, error: seen.append((path, error)))

    assert seen == [(p, None) for p in paths]


def test_progress_reports_the_failing_file(tmp_path):
    paths = _write_files(tmp_path, [b"a"]) + [tmp_path / "missing.bin"]
    seen = []

    with pytest.raises(FileReadError):
        run(paths, use_multiprocessing=False, on_progress=lambda p, e: seen.append((p, e)))

    assert seen[0] == (paths[0], None)
    assert seen[1][0] == paths[1]
    assert isinstance(seen[1][1], FileReadError)


def test_failing_progress_callback_does_not_change_results(tmp_path):
    paths = _write_files(tmp_path, [b"a" * 10, b"b" * 10])

    def broken(path, error):
        raise RuntimeError("progress bar crashed")

    records = run(paths, seed=0, use_multiprocessing=False, on_progress=broken)
    expected = run(paths, seed=0, use_multiprocessing=False)

    assert [r.to_row() for r in records] == [r.to_row() for r in expected]


def test_unknown_codec_fails_before_reading(tmp_path):
    with pytest.raises(ValueError):
        run([tmp_path / "missing.bin"], codec="brotli")


def test_compression_failure_carries_file_and_stage(tmp_path):
    paths = _write_files(tmp_path, [b"data to compress"])
    with pytest.raises(FeatureError) as exc_info:
        run(paths, use_multiprocessing=False, level=42)
    assert exc_info.value.stage == "compression"
    assert exc_info.value.path == str(paths[0])


def test_read_file_returns_whole_content(tmp_path):
    path = tmp_path / "x.bin"
    path.write_bytes(b"\x00\x01\x02" * 1000)
    assert read_file(path) == b"\x00\x01\x02" * 1000


def test_read_file_on_directory_is_a_read_error(tmp_path):
    with pytest.raises(FileReadError):
        read_file(tmp_path)


def test_process_file_uses_given_widths(tmp_path):
    path = tmp_path / "x.bin"
    path.write_bytes(b"abcdefghij")
    record = process_file(path, seed=0, header_size=4, sample_size=64)
    assert bytes(record.header) == b"abcd"
    assert record.random_bytes.shape == (64,)


def _write_non_text_named_file(directory):
    # 리눅스 파일시스템은 UTF-8이 아닌 바이트 이름도 허용
    path = os.path.join(os.fsencode(directory), b"bad\xff.bin")
    with open(path, "wb") as f:
        f.write(b"some content")
    return path


def test_path_that_is_not_text_fails_the_batch(tmp_path):
    good = _write_files(tmp_path, [b"ok"])
    bad = _write_non_text_named_file(tmp_path)

    with pytest.raises(PathEncodingError) as exc_info:
        run(good + [bad], seed=0, workers=2)

    assert exc_info.value.stage == "path"
    assert "bad\\udcff.bin" in exc_info.value.path


def test_process_file_rejects_surrogate_path(tmp_path):
    bad = os.fsdecode(_write_non_text_named_file(tmp_path))
    with pytest.raises(PathEncodingError):
        process_file(bad, seed=0)
