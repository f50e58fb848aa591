import pytest


from plainhttp.errors import BodyDecodeError
from plainhttp.response import Response


JSON_HEADERS = ["HTTP/1.1 200 OK", "Content-Type: application/json"]


def test_json_body_is_decoded():
    response = Response('{"a":1}', JSON_HEADERS)

    assert response.get_body() == {"a": 1}


def test_json_sniff_is_case_insensitive():
    response = Response("[1, 2]", ["HTTP/1.1 200 OK", "CONTENT-TYPE: Application/JSON; charset=utf-8"])

    assert response.get_body() == [1, 2]


def test_json_sniff_matches_any_header_line():
    # Legacy behavior: the marker is searched for across all header lines.
    response = Response('"hi"', ["HTTP/1.1 200 OK", "Content-Type: text/plain", "X-Note: was application/json"])

    assert response.get_body() == "hi"


def test_malformed_json_raises_on_every_call():
    response = Response("{invalid}", JSON_HEADERS)

    for _ in range(2):
        with pytest.raises(BodyDecodeError, match="Error while decoding JSON body") as exc_info:
            response.get_body()
        assert exc_info.value.error is exc_info.value.__cause__


def test_get_body_is_not_cached():
    response = Response('{"a": [1]}', JSON_HEADERS)

    first = response.get_body()
    first["a"].append(2)

    assert response.get_body() == {"a": [1]}


def test_non_json_body_is_returned_unchanged():
    raw = "  token-123\r\n\x00ünïcode "
    response = Response(raw, ["HTTP/1.1 200 OK", "Content-Type: text/plain"])

    assert response.get_body() is raw


def test_headers_are_returned_as_received():
    headers = ["HTTP/1.1 200 OK", "Set-Cookie: a=1", "Set-Cookie: a=2"]
    response = Response("", headers)
    headers.append("X-Late: 1")

    assert response.get_headers() == ["HTTP/1.1 200 OK", "Set-Cookie: a=1", "Set-Cookie: a=2"]
    response.get_headers().clear()
    assert len(response.headers) == 3


def test_missing_headers_default_to_empty():
    response = Response("plain")

    assert response.get_headers() == []
    assert response.get_body() == "plain"
    assert repr(response) == "<Response [no status line]>"
