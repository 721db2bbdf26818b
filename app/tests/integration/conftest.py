"""
Root-level conftest.py for integration tests.

Provides a fake SMTP relay listening on localhost so the email channel can
be exercised over a real socket with the real ``smtplib`` client.
"""

import socket
import socketserver
import threading
from typing import Dict, List, Set

import pytest


class RelayState:
    """What the fake relay accepted, shared across sessions."""

    def __init__(self):
        self.rejected: Set[str] = set()
        self.messages: List[Dict] = []
        self.commands: List[str] = []
        self.lock = threading.Lock()


def _address(argument: str) -> str:
    # "FROM:<a@x.com> SIZE=10" -> "a@x.com"
    start, end = argument.find("<"), argument.find(">")
    return argument[start + 1 : end]


class FakeRelayHandler(socketserver.StreamRequestHandler):
    """Minimal ESMTP dialogue without STARTTLS or AUTH."""

    def reply(self, line: str) -> None:
        self.wfile.write(line.encode("ascii") + b"\r\n")

    def handle(self):
        state: RelayState = self.server.state
        sender = None
        recipients: List[str] = []

        self.reply("220 relay.test ESMTP ready")
        while True:
            line = self.rfile.readline()
            if not line:
                return
            command = line.decode("ascii", "replace").strip()
            verb, _, argument = command.partition(" ")
            verb = verb.upper()
            with state.lock:
                state.commands.append(verb)

            if verb == "EHLO":
                self.wfile.write(b"250-relay.test\r\n250 8BITMIME\r\n")
            elif verb in ("HELO", "RSET", "NOOP"):
                self.reply("250 ok")
            elif verb == "MAIL":
                sender = _address(argument)
                recipients = []
                self.reply("250 2.1.0 sender ok")
            elif verb == "RCPT":
                recipient = _address(argument)
                if recipient in state.rejected:
                    self.reply("550 5.1.1 no such user")
                else:
                    recipients.append(recipient)
                    self.reply("250 2.1.5 recipient ok")
            elif verb == "DATA":
                self.reply("354 end data with <CR><LF>.<CR><LF>")
                data = self._read_data()
                with state.lock:
                    state.messages.append(
                        {"sender": sender, "recipients": recipients, "data": data}
                    )
                self.reply("250 2.0.0 queued")
            elif verb == "QUIT":
                self.reply("221 2.0.0 bye")
                return
            else:
                self.reply("502 5.5.2 command not recognized")

    def _read_data(self) -> bytes:
        lines = []
        while True:
            line = self.rfile.readline()
            if not line or line == b".\r\n":
                break
            if line.startswith(b".."):
                line = line[1:]
            lines.append(line)
        return b"".join(lines)


class FakeRelayServer(socketserver.ThreadingTCPServer):
    daemon_threads = True
    allow_reuse_address = True

    def __init__(self, state: RelayState):
        super().__init__(("127.0.0.1", 0), FakeRelayHandler)
        self.state = state

    @property
    def address(self) -> str:
        host, port = self.server_address[:2]
        return f"{host}:{port}"


@pytest.fixture
def smtp_relay():
    """Running fake relay; yields the server (``.state``, ``.address``)."""
    server = FakeRelayServer(RelayState())
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
    thread.join(timeout=5)


@pytest.fixture
def closed_port() -> int:
    """A localhost port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
