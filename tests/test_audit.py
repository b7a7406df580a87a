"""Tests for applog.audit module."""

import io
import logging
import threading

from applog import audit
from applog.audit import AuditLogger

INPUTS = ["line1", "line2", "line3"]


def test_log_and_writer():
    """Logged lines and writer output share the audit output."""
    buf = io.StringIO()
    a = AuditLogger(buf)

    a.log(INPUTS[0])
    a.writer("writer: ").write(INPUTS[1].encode())
    a.logf("%s", INPUTS[2])

    lines = buf.getvalue().splitlines()
    assert len(lines) == 3
    for line, expected in zip(lines, INPUTS, strict=True):
        assert line.endswith(expected)
    assert lines[1].endswith("writer: line2")


def test_set_output_moves_existing_writers():
    """A writer handed out before set_output writes to the new output."""
    buf_a = io.StringIO()
    buf_b = io.StringIO()
    a = AuditLogger(buf_a)

    a.log(INPUTS[0])
    writer = a.writer("writer: ")

    a.set_output(buf_b)
    writer.write(INPUTS[1].encode())

    assert buf_a.getvalue().splitlines()[0].endswith(INPUTS[0])
    assert INPUTS[1] not in buf_a.getvalue()
    assert len(buf_b.getvalue().splitlines()) == 1
    assert buf_b.getvalue().rstrip("\n").endswith("writer: line2")
    assert writer.output is buf_b


def test_every_registered_writer_is_redirected():
    """All writers ever issued follow a redirection."""
    a = AuditLogger(io.StringIO())
    writers = [a.writer(f"w{i}: ") for i in range(5)]
    new_out = io.StringIO()

    a.set_output(new_out)

    assert len(a.externals) == 5
    assert all(w.output is new_out for w in writers)


def test_writer_with_stdlib_logging():
    """Prefixes stack when a writer backs another logger."""
    buf = io.StringIO()
    a = AuditLogger(buf)

    a.log(INPUTS[0])
    handler = logging.StreamHandler(a.writer("writer: "))
    handler.setFormatter(logging.Formatter("2nd log: %(message)s"))
    second = logging.getLogger("audit.test.second")
    second.addHandler(handler)
    second.propagate = False
    try:
        second.warning(INPUTS[1])
    finally:
        second.removeHandler(handler)

    lines = buf.getvalue().splitlines()
    assert lines[0].endswith(INPUTS[0])
    assert lines[1].endswith("writer: 2nd log: " + INPUTS[1])


def test_concurrent_writes_during_redirection():
    """Each write lands whole in exactly one of the outputs."""
    first = io.StringIO()
    a = AuditLogger(first)
    outputs = [first] + [io.StringIO() for _ in range(4)]
    writers = [a.writer(f"w{n} ") for n in range(4)]

    def write_many(n):
        for i in range(200):
            writers[n].write(f"{i}".encode())

    threads = [threading.Thread(target=write_many, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for out in outputs[1:]:
        a.set_output(out)
    for t in threads:
        t.join()

    lines = [line for out in outputs for line in out.getvalue().splitlines()]
    assert len(lines) == 800
    assert len({line.split(" ", 2)[2] for line in lines}) == 800


def test_module_level_redirection():
    """The package-level set_output redirects writers from the package-level factory."""
    before = io.StringIO()
    after = io.StringIO()
    audit.set_output(before)
    writer = audit.writer("pkg: ")

    audit.set_output(after)
    writer.write(b"hello")
    audit.log("world")

    assert before.getvalue() == ""
    lines = after.getvalue().splitlines()
    assert lines[0].endswith("pkg: hello")
    assert lines[1].endswith("world")
