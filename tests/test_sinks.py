"""Tests for applog.sinks module."""

import io
import os
import stat
import sys
import tempfile
from pathlib import Path

import pytest

from applog.sinks import DiscardSink, create_writer, is_terminal


def test_empty_string_discards():
    """"" resolves to a sink that drops everything."""
    sink = create_writer("")
    assert isinstance(sink, DiscardSink)
    assert sink.write("anything") == 8


def test_standard_streams():
    """stdout and stderr resolve to the standard streams, in any case."""
    assert create_writer("stdout") is sys.stdout
    assert create_writer("STDERR") is sys.stderr


def test_sink_passes_through():
    """An object that can be written to is returned unchanged."""
    buf = io.StringIO()
    assert create_writer(buf) is buf


def test_new_file_is_owner_only():
    """A new log file is created with 0600 permissions."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "journal.log"
        sink = create_writer(str(path))
        sink.close()

        assert path.exists()
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600


def test_existing_file_is_appended():
    """Opening an existing file appends to it."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "journal.log"
        path.write_text("line1\n")

        sink = create_writer(path)
        sink.write("line2\n")
        sink.close()

        assert path.read_text() == "line1\nline2\n"


def test_unopenable_path_raises():
    """Resolution failures propagate."""
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(OSError):
            create_writer(str(Path(tmpdir) / "missing" / "journal.log"))


def test_unhandled_input():
    """Objects that aren't sinks, strings or paths are rejected."""
    with pytest.raises(TypeError, match="unhandled input"):
        create_writer(42)


def test_is_terminal():
    """Buffers and regular files are never terminals."""
    assert not is_terminal(io.StringIO())
    assert not is_terminal(DiscardSink())
    with tempfile.TemporaryFile("w") as f:
        assert not is_terminal(f)
