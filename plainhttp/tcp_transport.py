import socket
import ssl

from .errors import (
    TransportError,
    DnsFailureError,
    SocketCreateError,
    SocketConnectError,
    SocketWriteError,
    SocketReadError,
)
from .transport import Transport


class TcpTransport(Transport):
    def __init__(self, tls: bool = False, timeout: float | None = None) -> None:
        self._sock: socket.socket | None = None
        self._tls = tls
        self._timeout = timeout

    def connect(self, host: str, port: int) -> None:
        if self._sock is not None:
            raise TransportError("Transport is already connected.")

        try:
            sock = socket.create_connection((host, port), timeout=self._timeout)
        except socket.gaierror as e:
            raise DnsFailureError(f"DNS Failure for host '{host}'") from e
        except OSError as e:
            raise SocketConnectError(f"Socket connection failed: {e}") from e

        try:
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
            if self._tls:
                sock = ssl.create_default_context().wrap_socket(sock, server_hostname=host)
        except OSError as e:
            sock.close()
            raise SocketCreateError(f"Socket setup failed for host '{host}': {e}") from e

        self._sock = sock

    def write(self, data: bytes) -> int:
        if self._sock is None:
            raise TransportError("Cannot write on a disconnected transport.")

        try:
            self._sock.sendall(data)
            return len(data)
        except OSError as e:
            raise SocketWriteError(f"Socket write failed: {e}") from e

    def read_into(self, buffer: memoryview) -> int:
        if self._sock is None:
            raise TransportError("Cannot read from a disconnected transport.")

        try:
            return self._sock.recv_into(buffer)
        except OSError as e:
            raise SocketReadError(f"Socket read failed: {e}") from e

    def close(self) -> None:
        if self._sock is not None:
            try:
                self._sock.close()
            finally:
                self._sock = None
