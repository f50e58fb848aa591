"""plainhttp - a minimal, blocking HTTP client built on the standard library."""

from .client import HttpClient, send, get, post, put, delete, head, options
from .errors import (
    PlainHttpError,
    TransportError,
    HttpClientError,
    HttpStatusError,
    UnexpectedClientError,
    UnexpectedServerError,
    UnclassifiedTransportError,
    BodyDecodeError,
)
from .http_protocol import HttpMethod, RequestOptions, TransportResult
from .request_builder import build_request, build_query
from .response import Response
from .status import StatusClass, classify, reason_phrase

__version__ = "0.1.0"
