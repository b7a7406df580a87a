"""Tests for applog.alert module."""

import io
import subprocess
import sys
import textwrap

import pytest

from applog import alert
from applog.alert import AlertLogger


def test_warn_line_format():
    """Alert lines carry the ALERT prefix and the caller's file and line."""
    buf = io.StringIO()
    a = AlertLogger(buf)

    a.warn("this is an alert!")

    line = buf.getvalue()
    assert line.startswith("ALERT ")
    assert line.rstrip("\n").endswith("this is an alert!")
    assert __file__ in line


def test_warnf():
    """warnf formats its arguments."""
    buf = io.StringIO()
    a = AlertLogger(buf)
    a.warnf("%d disks degraded", 2)

    assert buf.getvalue().rstrip("\n").endswith("2 disks degraded")


def test_fatal_exits():
    """fatal writes the alert, then exits with status 1."""
    buf = io.StringIO()
    a = AlertLogger(buf)

    with pytest.raises(SystemExit) as exc:
        a.fatal("cannot continue")

    assert exc.value.code == 1
    assert "cannot continue" in buf.getvalue()


def test_abort_prints_traceback():
    """abort writes the error chain without a caller location."""
    buf = io.StringIO()
    a = AlertLogger(buf)

    try:
        try:
            raise KeyError("inner")
        except KeyError as e:
            raise RuntimeError("outer") from e
    except RuntimeError as e:
        err = e

    with pytest.raises(SystemExit):
        a.abort(err)

    output = buf.getvalue()
    first_line = output.splitlines()[0]
    assert first_line.startswith("ALERT ")
    assert first_line.endswith("Aborting program execution due to error(s):")
    assert __file__ not in first_line
    assert "KeyError: 'inner'" in output
    assert "RuntimeError: outer" in output


def test_module_level_warn():
    """The module-level functions use the shared alert logger."""
    buf = io.StringIO()
    alert.set_output(buf)

    alert.warn("shared", "alert")

    line = buf.getvalue()
    assert "shared alert" in line
    assert __file__ in line


def test_fatal_from_worker_thread_terminates_process(tmp_path):
    """A fatal alert raised off the main thread ends the whole process."""
    out = tmp_path / "alerts.log"
    script = textwrap.dedent("""
        import sys
        import threading
        from applog.alert import AlertLogger

        a = AlertLogger(sys.argv[1])
        worker = threading.Thread(target=a.fatalf, args=("lost %s", "quorum"))
        worker.start()
        worker.join()
        print("still alive")
    """)

    result = subprocess.run(
        [sys.executable, "-c", script, str(out)],
        capture_output=True,
        text=True,
    )

    assert result.returncode == 1
    assert "still alive" not in result.stdout
    assert out.read_text().rstrip("\n").endswith("lost quorum")
