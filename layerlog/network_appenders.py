"""Appenders that hand events to the local syslog daemon or send them as mail."""

from __future__ import annotations

import atexit
import socket
import threading
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Optional, Tuple

from .appenders import Appender
from .event import Layout, LoggingEvent, MessageLayout

try:
    import syslog as _stdlib_syslog
except ImportError:  # not available on every platform
    _stdlib_syslog = None

__all__ = [
    "SyslogAppender",
    "MailParams",
    "SmtpAppender",
    "to_syslog_priority",
    "shutdown_sender",
]

LOG_EMERG = 0
LOG_DEBUG = 7

_SMTP_TIMEOUT = 30.0


def to_syslog_priority(priority: int) -> int:
    """Translate a priority value (0 most severe, steps of 100) to a syslog level.

    The scale maps 0..700 onto the eight syslog levels EMERG..DEBUG;
    anything more severe is EMERG and anything less severe is DEBUG.
    """
    shifted = priority + 1
    level = abs(shifted) // 100
    if shifted < 0:
        level = -level
    if level < LOG_EMERG:
        return LOG_EMERG
    if level > LOG_DEBUG:
        return LOG_DEBUG
    return level


class SyslogAppender(Appender):
    """Writes formatted events to syslog under a given ident and facility.

    ``backend`` is any object offering ``openlog``, ``syslog`` and
    ``closelog`` like the standard ``syslog`` module, which is the default.
    """

    def __init__(
        self,
        name: str,
        syslog_name: str,
        facility: int = 0,
        layout: Optional[Layout] = None,
        backend: Any = None,
    ) -> None:
        if backend is None:
            if _stdlib_syslog is None:
                raise RuntimeError("syslog is not available on this platform")
            backend = _stdlib_syslog
        super().__init__(name)
        self.syslog_name = syslog_name
        self.facility = facility
        self._backend = backend
        self._layout: Layout = layout or MessageLayout()
        self.open()

    @property
    def layout(self) -> Layout:
        """The layout used to format events."""
        return self._layout

    @layout.setter
    def layout(self, value: Optional[Layout]) -> None:
        self._layout = value or MessageLayout()

    def open(self) -> None:
        """Open the connection to syslog."""
        self._backend.openlog(self.syslog_name, 0, self.facility)

    def close(self) -> None:
        """Close the connection to syslog."""
        self._backend.closelog()

    def reopen(self) -> bool:
        """Close and open the connection again."""
        self.close()
        self.open()
        return True

    def _append(self, event: LoggingEvent) -> None:
        message = self._layout.format(event)
        priority = to_syslog_priority(event.priority)
        self._backend.syslog(priority | self.facility, message)


@dataclass(frozen=True)
class MailParams:
    """Where and how an SMTP appender delivers its mail."""

    host: str
    from_: str
    to: str
    subject: str
    port: int = 25


def _deliver(params: MailParams, message: str) -> None:
    """Send one message over a plain SMTP dialogue."""
    with socket.create_connection(
        (params.host, params.port), timeout=_SMTP_TIMEOUT
    ) as sock, sock.makefile("rwb") as stream:

        def read_reply() -> None:
            if not stream.readline():
                raise ConnectionError("connection closed by mail server")

        def send(text: str) -> None:
            stream.write(text.encode("utf-8"))
            stream.flush()

        read_reply()
        send("HELO test\r\n")
        read_reply()
        send(f"MAIL FROM:{params.from_}\r\n")
        read_reply()
        send(f"RCPT TO:{params.to}\r\n")
        read_reply()
        send("DATA\r\n")
        read_reply()
        send(
            f"Subject: {params.subject}\r\n"
            "Content-Transfer-Encoding: 8bit\r\n\r\n"
            f"{message}\r\n.\r\n"
        )
        read_reply()
        send("QUIT\r\n")
        read_reply()


class _Sender:
    """A background thread that delivers queued mails one at a time."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._mails: Deque[Tuple[MailParams, LoggingEvent]] = deque()
        self._should_exit = False
        self._thread = threading.Thread(
            target=self._run, name="smtp-sender", daemon=True
        )
        self._thread.start()

    def send(self, params: MailParams, event: LoggingEvent) -> None:
        with self._cond:
            self._mails.append((params, event))
            self._cond.notify_all()

    def shutdown(self) -> None:
        with self._cond:
            self._should_exit = True
            self._cond.notify_all()
        self._thread.join()

    def _run(self) -> None:
        while True:
            with self._cond:
                while not self._mails and not self._should_exit:
                    self._cond.wait()
                if not self._mails:
                    return
                params, event = self._mails[0]
            try:
                _deliver(params, event.message)
            except OSError as exc:
                print(exc)
            with self._cond:
                self._mails.popleft()


_sender: Optional[_Sender] = None
_sender_lock = threading.Lock()
_atexit_registered = False


def _get_sender() -> _Sender:
    global _sender, _atexit_registered
    with _sender_lock:
        if _sender is None:
            _sender = _Sender()
            if not _atexit_registered:
                atexit.register(shutdown_sender)
                _atexit_registered = True
        return _sender


def shutdown_sender() -> None:
    """Deliver the mails still queued and stop the sending thread."""
    global _sender
    with _sender_lock:
        sender, _sender = _sender, None
    if sender is not None:
        sender.shutdown()


class SmtpAppender(Appender):
    """Mails each event's message, delivered by a shared background thread."""

    def __init__(
        self,
        name: str,
        host: str,
        from_: str,
        to: str,
        subject: str,
        port: int = 25,
    ) -> None:
        super().__init__(name)
        self.mail_params = MailParams(host, from_, to, subject, port)

    def _append(self, event: LoggingEvent) -> None:
        _get_sender().send(self.mail_params, event)

    def reopen(self) -> bool:
        return True

    def close(self) -> None:
        """Nothing to release; queued mail is still delivered."""