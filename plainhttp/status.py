"""
Status code helpers: reason phrases, status classes and status-line parsing.

Classification looks only at the first character of the code's string form,
so ``classify("4xx")`` is a client error even though it is not a number.
"""
import html
import re

from enum import Enum


class StatusClass(Enum):
    INFORMATIONAL = "1"
    SUCCESS = "2"
    REDIRECTION = "3"
    CLIENT_ERROR = "4"
    SERVER_ERROR = "5"
    UNKNOWN = ""

    @property
    def is_error(self) -> bool:
        return self in (StatusClass.CLIENT_ERROR, StatusClass.SERVER_ERROR)


REASON_PHRASES: dict[int, str] = {
    100: "Continue",
    101: "Switching Protocols",
    200: "OK",
    201: "Created",
    202: "Accepted",
    203: "Non-Authoritative Information",
    204: "No Content",
    205: "Reset Content",
    206: "Partial Content",
    300: "Multiple Choices",
    301: "Moved Permanently",
    302: "Moved Temporarily",
    303: "See Other",
    304: "Not Modified",
    305: "Use Proxy",
    400: "Bad Request",
    401: "Unauthorized",
    402: "Payment Required",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    406: "Not Acceptable",
    407: "Proxy Authentication Required",
    408: "Request Time-out",
    409: "Conflict",
    410: "Gone",
    411: "Length Required",
    412: "Precondition Failed",
    413: "Request Entity Too Large",
    414: "Request-URI Too Large",
    415: "Unsupported Media Type",
    500: "Internal Server Error",
    501: "Not Implemented",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Time-out",
    505: "HTTP Version not supported",
}

DEFAULT_STATUS_CODE = 400

_STATUS_LINE_RE = re.compile(r"HTTP/\S*\s(\d{3})")


def reason_phrase(code: int | str) -> str:
    try:
        return REASON_PHRASES[int(code)]
    except (KeyError, ValueError, TypeError):
        return f'Unknown http status code "{html.escape(str(code))}"'


def classify(code: int | str) -> StatusClass:
    leading = str(code)[:1]
    for status_class in StatusClass:
        if status_class.value and status_class.value == leading:
            return status_class
    return StatusClass.UNKNOWN


def extract_status_code(header_lines: list[str], default: int = DEFAULT_STATUS_CODE) -> int:
    """Return the code of the first HTTP status line found in the raw headers."""
    match = _STATUS_LINE_RE.search(",".join(header_lines))
    if match is None:
        return default
    return int(match.group(1))
