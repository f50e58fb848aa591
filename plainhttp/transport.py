from typing import Protocol


class Transport(Protocol):
    """
    A byte stream to one peer, opened for a single request.

    Implementations raise ``TransportError`` subclasses and never return
    partial writes: ``write`` sends everything or raises.
    """

    def connect(self, host: str, port: int) -> None:
        ...

    def write(self, data: bytes) -> int:
        ...

    def read_into(self, buffer: memoryview) -> int:
        """Fill ``buffer`` with what is available; 0 means the peer closed."""
        ...

    def close(self) -> None:
        ...
