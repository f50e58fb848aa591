from dataclasses import dataclass, field
from enum import Enum
from collections.abc import Mapping
from typing import Any, Protocol

from .errors import TransportError


class HttpMethod(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


# Methods whose body travels in the query string rather than the content.
QUERY_METHODS = frozenset({HttpMethod.GET, HttpMethod.HEAD, HttpMethod.OPTIONS})


@dataclass(frozen=True)
class RequestOptions:
    method: HttpMethod = HttpMethod.GET
    header: str | None = None
    content: str | bytes | Mapping[str, Any] | None = None

    def header_lines(self) -> list[str]:
        if not self.header:
            return []
        return self.header.split("\r\n")


@dataclass
class TransportResult:
    """
    Raw outcome of one transport call.

    ``headers`` holds the raw header lines in the order received, status line
    first. ``body`` is None when the call failed, either because of the status
    code or because ``error`` was raised by the network layer.
    """
    headers: list[str] = field(default_factory=list)
    body: str | None = None
    error: TransportError | None = None

    @property
    def failed(self) -> bool:
        return self.body is None

    @property
    def status_line(self) -> str | None:
        return self.headers[0] if self.headers else None


class HttpProtocol(Protocol):
    def send(self, url: str, options: RequestOptions) -> TransportResult:
        ...
