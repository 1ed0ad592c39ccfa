"""Unit tests for opening command-line inputs and outputs."""

import io
import os
import sys

import pytest

from chunkseal.core.exceptions import StreamIOError
from chunkseal.frontend.cli.files import open_input, open_output


class FakeStdio:
    def __init__(self, data: bytes = b""):
        self.buffer = io.BytesIO(data)


def test_dash_means_stdin(monkeypatch):
    fake = FakeStdio(b"from stdin")
    monkeypatch.setattr(sys, "stdin", fake)
    with open_input("-") as f:
        assert f.read() == b"from stdin"
    assert not fake.buffer.closed


def test_none_means_stdout(monkeypatch):
    fake = FakeStdio()
    monkeypatch.setattr(sys, "stdout", fake)
    with open_output(None) as f:
        f.write(b"to stdout")
    assert fake.buffer.getvalue() == b"to stdout"
    assert not fake.buffer.closed


def test_regular_files(tmp_path):
    src = tmp_path / "in.bin"
    src.write_bytes(b"payload")
    dst = tmp_path / "out.bin"
    dst.write_bytes(b"old content that is longer")
    with open_input(str(src)) as fin, open_output(str(dst)) as fout:
        fout.write(fin.read())
    assert dst.read_bytes() == b"payload"


def test_missing_input(tmp_path):
    missing = tmp_path / "nope.bin"
    with pytest.raises(StreamIOError, match=r"Unable to access \["):
        with open_input(str(missing)):
            pass


def test_unwritable_output(tmp_path):
    with pytest.raises(StreamIOError, match="Unable to access"):
        with open_output(str(tmp_path / "no" / "such" / "dir" / "out")):
            pass


class FailingCloseSink(io.BytesIO):
    def close(self):
        raise OSError(5, "Input/output error")


class FailingFlushStdout:
    def __init__(self):
        self.buffer = FailingFlush()


class FailingFlush(io.BytesIO):
    def flush(self):
        raise OSError(28, "No space left on device")


@pytest.mark.skipif(not os.path.exists("/dev/full"), reason="needs /dev/full")
def test_deferred_write_error_on_close_is_wrapped():
    with pytest.raises(StreamIOError, match="No space left on device") as excinfo:
        with open_output("/dev/full") as f:
            f.write(b"buffered bytes")
    assert isinstance(excinfo.value.__cause__, OSError)


def test_close_failure_on_file_output_is_wrapped(tmp_path, monkeypatch):
    monkeypatch.setattr(
        "chunkseal.frontend.cli.files.open", lambda path, mode: FailingCloseSink(), raising=False
    )
    with pytest.raises(StreamIOError, match="Input/output error"):
        with open_output(str(tmp_path / "out")) as f:
            f.write(b"x")


def test_stdout_flush_failure_is_wrapped(monkeypatch):
    monkeypatch.setattr(sys, "stdout", FailingFlushStdout())
    with pytest.raises(StreamIOError, match="No space left"):
        with open_output("-") as f:
            f.write(b"x")
