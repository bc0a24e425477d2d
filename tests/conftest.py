import pytest

from pipeline.common import set_quiet


@pytest.fixture(autouse=True)
def quiet_log():
    set_quiet(True)
    yield
    set_quiet(False)


@pytest.fixture
def corpus(tmp_path):
    """A: 0x41 100바이트, B: 빈 파일"""
    raw = tmp_path / "raw"
    raw.mkdir()
    a = raw / "a.bin"
    b = raw / "b.bin"
    a.write_bytes(b"\x41" * 100)
    b.write_bytes(b"")
    return [a, b]
