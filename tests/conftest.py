import socket
import struct
import threading

import msgspec.structs
import pytest

from rethinkwire.errors import DriverError
from rethinkwire.transport import codec, framing


class FakeStream:
    """ In-memory stand-in for a connected socket. Reads are served from
        *incoming*; every write is appended to *writes*.
    """

    def __init__(self, incoming=b''):
        self.incoming = bytearray(incoming)
        self.writes = list()
        self.closed = False
        self.fail_writes = False

    @property
    def sent(self):
        return b''.join(self.writes)

    def feed(self, data):
        self.incoming.extend(data)

    def sendall(self, data):
        if self.closed or self.fail_writes:
            raise BrokenPipeError(32, 'Broken pipe')
        self.writes.append(bytes(data))

    def recv(self, n):
        if self.closed:
            raise OSError(9, 'Bad file descriptor')
        chunk = bytes(self.incoming[:n])
        del self.incoming[:n]
        return chunk

    def fileno(self):
        if self.closed:
            return -1
        return 7

    def close(self):
        self.closed = True


class ScriptedServer:
    """ Accept one connection on the loopback interface, answer the
        handshake with *reply*, then answer each incoming frame with the
        next of the *responses*, re-addressed to the token
        of the query it answers.
    """

    def __init__(self, reply=b'SUCCESS\0', responses=()):
        self.reply = reply
        self.responses = list(responses)
        self.handshake = None
        self.frames = list()
        self.accepted = 0

        self.listener = socket.create_server(('127.0.0.1', 0))
        self.port = self.listener.getsockname()[1]

        self.thread = threading.Thread(target=self.run, daemon=True)
        self.thread.start()

    def run(self):
        try:
            conn, _address = self.listener.accept()
        except OSError:
            return

        self.accepted += 1

        with conn:
            magic = framing.recv_exact(conn, 4)
            length = framing.recv_exact(conn, 4)
            key = framing.recv_exact(conn, struct.unpack('<I', length)[0])
            self.handshake = magic + length + key
            conn.sendall(self.reply)

            # Serve until the client hangs up.
            while True:
                try:
                    frame = framing.read_frame(conn)
                except DriverError:
                    return

                self.frames.append(frame)
                if not self.responses:
                    return

                query = codec.decode_query(frame)
                response = msgspec.structs.replace(self.responses.pop(0), token=query.token)
                framing.write_frame(conn, codec.encode_response(response))

    def stop(self):
        self.listener.close()
        self.thread.join(5)


@pytest.fixture
def stream_pair():
    left, right = socket.socketpair()
    yield left, right
    left.close()
    right.close()


@pytest.fixture
def fake_stream():
    return FakeStream()


@pytest.fixture
def make_stream():
    return FakeStream


@pytest.fixture
def scripted_server():

    servers = list()

    def start(reply=b'SUCCESS\0', responses=()):
        server = ScriptedServer(reply, responses)
        servers.append(server)
        return server

    yield start

    for server in servers:
        server.stop()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
