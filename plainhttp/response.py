import json

from typing import Any

from .errors import BodyDecodeError


JSON_MARKER = "application/json"


class Response:
    """
    Raw body and raw header lines of one successful request.

    ``get_body`` decodes JSON whenever ``application/json`` appears anywhere in
    the joined header lines, not only in ``Content-Type``. The result is not
    cached: every call decodes again and raises again on malformed input.
    """

    def __init__(self, body: str, headers: list[str] | None = None):
        self._body = body
        self._headers = list(headers or [])

    @property
    def body(self) -> str:
        return self._body

    @property
    def headers(self) -> list[str]:
        return list(self._headers)

    def get_headers(self) -> list[str]:
        return self.headers

    def get_body(self) -> Any:
        header_string = ", ".join(self._headers).lower()
        if JSON_MARKER not in header_string:
            return self._body

        try:
            return json.loads(self._body)
        except json.JSONDecodeError as e:
            raise BodyDecodeError(e) from e

    def __repr__(self) -> str:
        status = self._headers[0] if self._headers else "no status line"
        return f"<Response [{status}]>"
