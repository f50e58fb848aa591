import json

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote_plus, unquote_plus

from .errors import InvalidRequestError
from .http_protocol import HttpMethod, QUERY_METHODS, RequestOptions


FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"


def build_query(data: Mapping[str, Any]) -> str:
    """
    Form-encode a mapping, flattening nested data into bracketed keys.

    ``{"a": {"b": [1, 2]}}`` becomes ``a%5Bb%5D%5B0%5D=1&a%5Bb%5D%5B1%5D=2``.
    Booleans are sent as 1/0 and None values are left out.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in data.items():
        _flatten(str(key), value, pairs)
    return "&".join(f"{quote_plus(k)}={quote_plus(v)}" for k, v in pairs)


def _flatten(key: str, value: Any, pairs: list[tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            _flatten(f"{key}[{sub_key}]", sub_value, pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{key}[{index}]", item, pairs)
    elif isinstance(value, bool):
        pairs.append((key, "1" if value else "0"))
    else:
        pairs.append((key, str(value)))


def normalize_headers(headers: Mapping[str, Any] | None) -> dict[str, str]:
    # Last write wins for names that only differ in case.
    normalized: dict[str, str] = {}
    for name, value in (headers or {}).items():
        normalized[name.lower()] = str(value)
    return normalized


def _resolve_method(method: HttpMethod | str) -> HttpMethod:
    if isinstance(method, HttpMethod):
        return method
    try:
        return HttpMethod(method.upper())
    except ValueError:
        raise InvalidRequestError(f"Unsupported HTTP method '{method}'.") from None


def build_request(
    method: HttpMethod | str,
    url: str,
    body: Mapping[str, Any] | str | bytes | None = None,
    headers: Mapping[str, Any] | None = None,
) -> tuple[str, RequestOptions]:
    """
    Turn the call arguments into the final URL and the transport options.

    For GET, HEAD and OPTIONS a mapping body is appended to the query string.
    The encoded pairs are URL-decoded again before they are appended, so the
    URL carries ``q=1 2`` rather than ``q=1+2``. This legacy behavior is kept
    as is, so values containing ``&``, ``=`` or ``+`` do not survive.
    """
    method = _resolve_method(method)
    headers = normalize_headers(headers)
    content = None

    if method in QUERY_METHODS:
        if isinstance(body, Mapping):
            url += "&" if "?" in url else "?"
            url += unquote_plus(build_query(body))
    else:
        declared = headers.get("content-type")
        content_type = declared.strip() if declared else ""
        if isinstance(body, Mapping):
            if not declared:
                headers["content-type"] = FORM_CONTENT_TYPE
                content = build_query(body)
            elif content_type == FORM_CONTENT_TYPE:
                content = build_query(body)
            elif content_type == JSON_CONTENT_TYPE:
                content = json.dumps(body, separators=(",", ":"))
            else:
                # Any other declared type: assume the caller already serialized it.
                content = body
        else:
            if not declared:
                headers["content-type"] = FORM_CONTENT_TYPE
            content = body

    header_block = None
    if headers:
        header_block = "\r\n".join(f"{name}: {value}" for name, value in headers.items())

    return url, RequestOptions(
        method=method,
        header=header_block,
        content=content if content else None,
    )
