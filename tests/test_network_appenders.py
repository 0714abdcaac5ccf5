import socket
import socketserver
import threading
import itertools

import pytest

from layerlog.appenders import Appender
from layerlog.event import Layout, LoggingEvent
from layerlog.network_appenders import (
    MailParams,
    SmtpAppender,
    SyslogAppender,
    shutdown_sender,
    to_syslog_priority,
)

_counter = itertools.count()


def _unique(prefix):
    return f"{prefix}-{next(_counter)}"


def _event(message, priority=300):
    return LoggingEvent("cat", message, "", priority)


class FakeSyslog:
    def __init__(self):
        self.calls = []

    def openlog(self, ident, option, facility):
        self.calls.append(("openlog", ident, option, facility))

    def syslog(self, priority, message):
        self.calls.append(("syslog", priority, message))

    def closelog(self):
        self.calls.append(("closelog",))


class UpperLayout(Layout):
    def format(self, event):
        return event.message.upper()


@pytest.mark.parametrize(
    "priority, expected",
    [(0, 0), (300, 3), (700, 7)],
)
def test_to_syslog_priority_table(priority, expected):
    assert to_syslog_priority(priority) == expected


def test_to_syslog_priority_clamps():
    assert to_syslog_priority(-1000) == to_syslog_priority(0)
    assert to_syslog_priority(5000) == to_syslog_priority(700)


def test_to_syslog_priority_monotonic_and_bounded():
    values = [to_syslog_priority(p) for p in range(-500, 1500, 25)]
    assert values == sorted(values)
    assert min(values) >= 0 and max(values) <= 7


def test_syslog_opens_on_construction():
    backend = FakeSyslog()
    SyslogAppender(_unique("sys"), "ident", 8, backend=backend)
    assert backend.calls == [("openlog", "ident", 0, 8)]


def test_syslog_append_uses_priority_facility_and_layout():
    backend = FakeSyslog()
    appender = SyslogAppender(
        _unique("sys"), "ident", 8, layout=UpperLayout(), backend=backend
    )
    appender.do_append(_event("hello", priority=300))
    assert backend.calls[-1] == ("syslog", to_syslog_priority(300) | 8, "HELLO")


def test_syslog_reopen_closes_then_opens():
    backend = FakeSyslog()
    appender = SyslogAppender(_unique("sys"), "ident", backend=backend)
    assert appender.reopen() is True
    assert [c[0] for c in backend.calls] == ["openlog", "closelog", "openlog"]


def test_syslog_registers_by_name():
    name = _unique("sys")
    appender = SyslogAppender(name, "ident", backend=FakeSyslog())
    assert Appender.get_appender(name) is appender


def test_mail_params_default_port():
    params = MailParams("mail.example.com", "a@example.com", "b@example.com", "s")
    assert params.port == 25


def test_smtp_appender_keeps_params():
    appender = SmtpAppender(
        _unique("smtp"), "mail.example.com", "a@example.com", "b@example.com", "subj"
    )
    assert appender.mail_params == MailParams(
        "mail.example.com", "a@example.com", "b@example.com", "subj"
    )
    assert appender.reopen() is True


@pytest.fixture
def smtp_server():
    records = []

    class Handler(socketserver.StreamRequestHandler):
        def handle(self):
            self.wfile.write(b"220 ready\r\n")
            while True:
                line = self.rfile.readline()
                if not line:
                    break
                text = line.decode().rstrip("\r\n")
                records.append(text)
                if text == "DATA":
                    self.wfile.write(b"354 go\r\n")
                    while True:
                        body = self.rfile.readline().decode().rstrip("\r\n")
                        records.append(body)
                        if body == ".":
                            break
                    self.wfile.write(b"250 ok\r\n")
                elif text == "QUIT":
                    self.wfile.write(b"221 bye\r\n")
                    break
                else:
                    self.wfile.write(b"250 ok\r\n")

    server = socketserver.ThreadingTCPServer(("127.0.0.1", 0), Handler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server.server_address[1], records
    finally:
        server.shutdown()
        server.server_close()


def test_smtp_dialogue(smtp_server):
    port, records = smtp_server
    name = _unique("smtp")
    appender = SmtpAppender(
        name, "127.0.0.1", "a@example.com", "b@example.com", "Alert",
        port=port,
    )
    assert appender.mail_params == MailParams(
        "127.0.0.1", "a@example.com", "b@example.com", "Alert", port
    )
    assert Appender.get_appender(name) is appender
    appender.do_append(_event("disk full"))
    shutdown_sender()
    assert records == [
        "HELO test",
        "MAIL FROM:a@example.com",
        "RCPT TO:b@example.com",
        "DATA",
        "Subject: Alert",
        "Content-Transfer-Encoding: 8bit",
        "",
        "disk full",
        ".",
        "QUIT",
    ]


def _closed_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_failed_delivery_does_not_block_queue(smtp_server, capsys):
    port, records = smtp_server
    bad = SmtpAppender(
        _unique("smtp"), "127.0.0.1", "a@example.com", "b@example.com", "x",
        port=_closed_port(),
    )
    good = SmtpAppender(
        _unique("smtp"), "127.0.0.1", "a@example.com", "b@example.com", "y",
        port=port,
    )
    bad.do_append(_event("lost"))
    good.do_append(_event("kept"))
    shutdown_sender()
    assert "kept" in records
    assert "lost" not in records
    assert len(capsys.readouterr().out) > 0


def test_shutdown_without_sender_is_harmless():
    shutdown_sender()
    shutdown_sender()
    appender = SmtpAppender(
        _unique("smtp"), "127.0.0.1", "a@example.com", "b@example.com", "z"
    )
    assert Appender.get_appender(appender.name) is appender