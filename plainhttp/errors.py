class PlainHttpError(Exception):
    """Base exception for the plainhttp library."""
    pass

# --- Transport Errors ---

class TransportError(PlainHttpError):
    """A generic error occurred in the transport layer."""
    pass

class DnsFailureError(TransportError): pass
class SocketCreateError(TransportError): pass
class SocketConnectError(TransportError): pass
class SocketWriteError(TransportError): pass
class SocketReadError(TransportError): pass
class ConnectionClosedError(TransportError): pass

# --- HTTP Client Errors ---

class HttpClientError(PlainHttpError):
    """A generic error occurred in the HTTP client logic."""
    pass

class UrlParseError(HttpClientError): pass
class InvalidRequestError(HttpClientError): pass

class HttpParseError(HttpClientError, TransportError):
    """The peer sent something that is not a well-formed HTTP response."""
    pass

# --- HTTP Status Errors ---

class HttpStatusError(PlainHttpError):
    """A request failed and the status code taken from the raw headers explains why."""

    kind = "transport"

    def __init__(self, code: int, reason: str, url: str, headers: list[str]):
        self.code = code
        self.reason = reason
        self.url = url
        self.headers = list(headers)
        super().__init__(
            f"Unexpected {self.kind} error: {code}::{reason} while fetching {url}\n"
            f"Headers: {','.join(self.headers)}"
        )

class UnexpectedClientError(HttpStatusError):
    kind = "client"

class UnexpectedServerError(HttpStatusError):
    kind = "server"

class UnclassifiedTransportError(HttpStatusError):
    """The transport failed but the status code is neither 4xx nor 5xx."""
    kind = "transport"

# --- Response Errors ---

class BodyDecodeError(PlainHttpError):
    def __init__(self, error: Exception):
        self.error = error
        super().__init__(f"Error while decoding JSON body: {error}")
