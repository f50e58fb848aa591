import logging

from collections.abc import Callable
from urllib.parse import quote, urlsplit

from .transport import Transport
from .tcp_transport import TcpTransport
from .http_protocol import HttpMethod, HttpProtocol, RequestOptions, TransportResult
from .errors import ConnectionClosedError, HttpParseError, InvalidRequestError, TransportError, UrlParseError


logger = logging.getLogger(__name__)


def _default_transport_factory(tls: bool) -> Transport:
    return TcpTransport(tls=tls)


class Http1Protocol(HttpProtocol):
    """
    One blocking HTTP/1.0 exchange per ``send`` call.

    A fresh transport is opened for every request and closed before returning,
    so the protocol object itself carries no per-request state. Network
    failures and error statuses (>= 400) are reported through the returned
    ``TransportResult`` rather than raised; the raw header lines received so
    far are always included.
    """
    _HEADER_SEPARATOR = b"\r\n\r\n"
    _HEADER_SEPARATOR_CL = b"\r\nContent-Length:"
    _DEFAULT_PORTS = {"http": 80, "https": 443}
    # Characters left untouched when the request target is written out.
    _TARGET_SAFE_CHARS = "/?#[]@!$&'()*+,;=%:~"

    def __init__(
        self,
        transport_factory: Callable[[bool], Transport] | None = None,
        read_chunk_size: int = 4096,
    ):
        self._transport_factory = transport_factory or _default_transport_factory
        self._read_chunk_size = read_chunk_size

    def send(self, url: str, options: RequestOptions) -> TransportResult:
        scheme, host, port, target = self._parse_url(url)
        payload = self._build_request_bytes(options, host, port, scheme, target)

        logger.debug(f"Sending {options.method.value} {url} ({len(payload)} bytes)")

        buffer = bytearray()
        transport = self._transport_factory(scheme == "https")
        try:
            transport.connect(host, port)
            transport.write(payload)
            header_size, content_length = self._read_full_response(transport, buffer, options.method)
            status_code, headers, body = self._parse_response(buffer, header_size, content_length)
        except TransportError as e:
            logger.warning(f"Transport failure for {url}: {e}")
            return TransportResult(headers=self._partial_headers(buffer), error=e)
        finally:
            transport.close()

        result = TransportResult(headers=headers, body=None if status_code >= 400 else body)
        logger.debug(f"Received {result.status_line!r} from {url}")
        return result

    def _parse_url(self, url: str) -> tuple[str, str, int, str]:
        parts = urlsplit(url)
        scheme = parts.scheme.lower()
        if scheme not in self._DEFAULT_PORTS:
            raise UrlParseError(f"Unsupported URL scheme in '{url}'.")
        if not parts.hostname:
            raise UrlParseError(f"No host found in '{url}'.")

        try:
            port = parts.port or self._DEFAULT_PORTS[scheme]
        except ValueError as e:
            raise UrlParseError(f"Invalid port in '{url}'.") from e

        target = parts.path or "/"
        if parts.query:
            target += "?" + parts.query
        return scheme, parts.hostname, port, target

    def _build_request_bytes(
        self, options: RequestOptions, host: str, port: int, scheme: str, target: str
    ) -> bytes:
        content = options.content
        if content is None:
            content_bytes = b""
        elif isinstance(content, str):
            content_bytes = content.encode("utf-8")
        elif isinstance(content, (bytes, bytearray)):
            content_bytes = bytes(content)
        else:
            raise InvalidRequestError(
                f"Cannot send a body of type {type(content).__name__}; serialize it first."
            )

        header_lines = options.header_lines()
        names = {line.split(":", 1)[0].strip().lower() for line in header_lines}

        lines = [f"{options.method.value} {quote(target, safe=self._TARGET_SAFE_CHARS)} HTTP/1.0"]
        if "host" not in names:
            host_value = host if port == self._DEFAULT_PORTS[scheme] else f"{host}:{port}"
            lines.append(f"host: {host_value}")
        lines.extend(header_lines)
        if content_bytes and "content-length" not in names:
            lines.append(f"content-length: {len(content_bytes)}")

        head = "\r\n".join(lines) + "\r\n\r\n"
        return head.encode("utf-8") + content_bytes

    def _read_full_response(
        self, transport: Transport, buffer: bytearray, method: HttpMethod
    ) -> tuple[int, int | None]:
        header_size = 0
        content_length = None
        chunk = bytearray(self._read_chunk_size)
        chunk_view = memoryview(chunk)

        while True:
            bytes_read = transport.read_into(chunk_view)

            if bytes_read == 0:
                if header_size == 0:
                    raise ConnectionClosedError("Connection closed before the response headers were complete.")
                if content_length is not None and len(buffer) < header_size + content_length:
                    raise HttpParseError("Connection closed before full content length was received.")
                break

            buffer += chunk_view[:bytes_read]

            if header_size == 0:
                separator_pos = buffer.find(self._HEADER_SEPARATOR)
                if separator_pos != -1:
                    header_size = separator_pos + len(self._HEADER_SEPARATOR)
                    content_length = self._find_content_length(buffer, header_size)
                    if not self._expects_body(buffer, method):
                        content_length = 0

            if content_length is not None:
                if len(buffer) >= header_size + content_length:
                    break

        return header_size, content_length

    def _find_content_length(self, buffer: bytearray, header_size: int) -> int | None:
        headers_block_lower = buffer[:header_size].lower()
        cl_key_pos = headers_block_lower.find(self._HEADER_SEPARATOR_CL.lower())
        if cl_key_pos == -1:
            return None

        value_start_pos = cl_key_pos + len(self._HEADER_SEPARATOR_CL)
        line_end_pos = buffer.find(b"\r\n", value_start_pos)
        try:
            return int(buffer[value_start_pos:line_end_pos].strip())
        except ValueError:
            raise HttpParseError("Invalid Content-Length value")

    def _expects_body(self, buffer: bytearray, method: HttpMethod) -> bool:
        if method is HttpMethod.HEAD:
            return False
        status_line = bytes(buffer[:buffer.find(b"\r\n")])
        parts = status_line.split(b" ")
        status = parts[1] if len(parts) > 1 else b""
        return not (status.startswith(b"1") or status in (b"204", b"304"))

    def _parse_response(
        self, buffer: bytearray, header_size: int, content_length: int | None
    ) -> tuple[int, list[str], str]:
        headers = self._split_header_lines(bytes(buffer[:header_size]))
        status_line = headers[0] if headers else ""

        parts = status_line.split(" ", 2)
        if len(parts) < 2 or not parts[0].startswith("HTTP/"):
            raise HttpParseError(f"Malformed status line: {status_line!r}")
        try:
            status_code = int(parts[1])
        except ValueError:
            raise HttpParseError("Invalid status code in status line.")

        if content_length is not None:
            raw_body = bytes(buffer[header_size:header_size + content_length])
        else:
            raw_body = bytes(buffer[header_size:])

        try:
            body = raw_body.decode("utf-8")
        except UnicodeDecodeError:
            body = raw_body.decode("latin-1")

        return status_code, headers, body

    def _partial_headers(self, buffer: bytearray) -> list[str]:
        separator_pos = buffer.find(self._HEADER_SEPARATOR)
        block = buffer if separator_pos == -1 else buffer[:separator_pos]
        return self._split_header_lines(bytes(block))

    @staticmethod
    def _split_header_lines(block: bytes) -> list[str]:
        return [line for line in block.decode("latin-1").split("\r\n") if line]
