"""
Tests for the log facade: formatting, sinks, silent operation.
"""

import io
import logging

from linux_installer.lib.logger import (
    ConsoleSink,
    LogEntry,
    Logger,
    LoggingSink,
    LogType,
    NullSink,
    SimpleLogFormatter,
    TeeSink,
    null_logger,
)


class ListSink:
    def __init__(self):
        self.lines = []

    def emit(self, entry, line):
        self.lines.append((entry.type, line))


def test_simple_formatter_pads_type():
    fmt = SimpleLogFormatter()
    assert fmt.format(LogEntry(LogType.ERROR, "disk full")) == "[Error  ]-disk full"
    assert fmt.format(LogEntry(LogType.WARNING, "slow mirror")) == "[Warning]-slow mirror"
    assert fmt.format(LogEntry(LogType.INFO, "done")) == "[Info   ]-done"


def test_logger_routes_each_level():
    sink = ListSink()
    log = Logger(sink=sink)

    log.error("e")
    log.warning("w")
    log.info("i")

    assert sink.lines == [
        (LogType.ERROR, "[Error  ]-e"),
        (LogType.WARNING, "[Warning]-w"),
        (LogType.INFO, "[Info   ]-i"),
    ]


def test_custom_formatter():
    class Upper:
        def format(self, entry):
            return entry.message.upper()

    sink = ListSink()
    Logger(formatter=Upper(), sink=sink).info("quiet")
    assert sink.lines == [(LogType.INFO, "QUIET")]


def test_console_sink_splits_streams():
    out, err = io.StringIO(), io.StringIO()
    log = Logger(sink=ConsoleSink(stdout=out, stderr=err))

    log.info("hello")
    log.warning("careful")
    log.error("broken")

    assert out.getvalue() == "[Info   ]-hello\n[Warning]-careful\n"
    assert err.getvalue() == "[Error  ]-broken\n"


def test_console_sink_defaults_to_process_streams(capsys):
    Logger().error("to stderr")
    Logger().info("to stdout")

    captured = capsys.readouterr()
    assert "[Error  ]-to stderr" in captured.err
    assert "[Info   ]-to stdout" in captured.out


def test_logging_sink_forwards_levels(caplog):
    log = Logger(sink=LoggingSink(name="installer.test"))
    with caplog.at_level(logging.INFO, logger="installer.test"):
        log.warning("mirror slow")
        log.error("mirror down")

    levels = [(r.levelno, r.getMessage()) for r in caplog.records]
    assert levels == [
        (logging.WARNING, "[Warning]-mirror slow"),
        (logging.ERROR, "[Error  ]-mirror down"),
    ]


def test_tee_sink_fans_out():
    a, b = ListSink(), ListSink()
    Logger(sink=TeeSink((a, b))).info("x")
    assert a.lines == b.lines == [(LogType.INFO, "[Info   ]-x")]


def test_null_logger_is_silent(capsys):
    log = null_logger()
    log.error("nothing")
    log.info("nothing")
    assert isinstance(log.sink, NullSink)
    assert capsys.readouterr() == ("", "")
