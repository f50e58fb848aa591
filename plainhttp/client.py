import logging

from collections.abc import Mapping
from typing import Any

from .errors import UnexpectedClientError, UnexpectedServerError, UnclassifiedTransportError
from .http1_protocol import Http1Protocol
from .http_protocol import HttpMethod, HttpProtocol
from .request_builder import build_request
from .response import Response
from .status import StatusClass, classify, extract_status_code, reason_phrase


logger = logging.getLogger(__name__)

Body = Mapping[str, Any] | str | bytes | None
Headers = Mapping[str, Any] | None


class HttpClient:
    """
    Sends one blocking request per call and wraps the outcome in a ``Response``.

    4xx and 5xx outcomes raise ``UnexpectedClientError`` and
    ``UnexpectedServerError``. The status code is read back from the raw
    header lines, defaulting to 400 when nothing usable was received (for
    example when the connection was refused).
    """

    def __init__(self, protocol: HttpProtocol | None = None):
        self._protocol = protocol or Http1Protocol()

    def get(self, url: str, body: Body = None, headers: Headers = None) -> Response:
        return self.send(HttpMethod.GET, url, body, headers)

    def post(self, url: str, body: Body = None, headers: Headers = None) -> Response:
        return self.send(HttpMethod.POST, url, body, headers)

    def put(self, url: str, body: Body = None, headers: Headers = None) -> Response:
        return self.send(HttpMethod.PUT, url, body, headers)

    def delete(self, url: str, body: Body = None, headers: Headers = None) -> Response:
        return self.send(HttpMethod.DELETE, url, body, headers)

    def head(self, url: str, body: Body = None, headers: Headers = None) -> Response:
        return self.send(HttpMethod.HEAD, url, body, headers)

    def options(self, url: str, body: Body = None, headers: Headers = None) -> Response:
        return self.send(HttpMethod.OPTIONS, url, body, headers)

    def send(self, method: HttpMethod | str, url: str, body: Body = None, headers: Headers = None) -> Response:
        url, options = build_request(method, url, body, headers)
        logger.debug(f"{options.method.value} {url}")

        result = self._protocol.send(url, options)
        if not result.failed:
            return Response(result.body, result.headers)

        code = extract_status_code(result.headers)
        reason = reason_phrase(code)
        status_class = classify(code)

        if status_class is StatusClass.CLIENT_ERROR:
            error_type = UnexpectedClientError
        elif status_class is StatusClass.SERVER_ERROR:
            error_type = UnexpectedServerError
        else:
            error_type = UnclassifiedTransportError

        raise error_type(code, reason, url, result.headers) from result.error


_default_client = HttpClient()


def send(method: HttpMethod | str, url: str, body: Body = None, headers: Headers = None) -> Response:
    return _default_client.send(method, url, body, headers)


def get(url: str, body: Body = None, headers: Headers = None) -> Response:
    return _default_client.get(url, body, headers)


def post(url: str, body: Body = None, headers: Headers = None) -> Response:
    return _default_client.post(url, body, headers)


def put(url: str, body: Body = None, headers: Headers = None) -> Response:
    return _default_client.put(url, body, headers)


def delete(url: str, body: Body = None, headers: Headers = None) -> Response:
    return _default_client.delete(url, body, headers)


def head(url: str, body: Body = None, headers: Headers = None) -> Response:
    return _default_client.head(url, body, headers)


def options(url: str, body: Body = None, headers: Headers = None) -> Response:
    return _default_client.options(url, body, headers)
