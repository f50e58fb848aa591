import json

import pytest


from plainhttp.__main__ import main, parse_args


def test_parse_args_defaults():
    args = parse_args(["http://x/y"])

    assert args.method == "GET"
    assert args.headers == []
    assert args.data == []
    assert not args.json


def test_parse_args_rejects_unknown_method():
    with pytest.raises(SystemExit):
        parse_args(["-X", "PATCH", "http://x/y"])


def test_prints_headers_and_decoded_payload(live_server, capsys):
    exit_code = main(["-X", "post", "--json", "-d", "name=Jane", "-H", "X-Trace: 1", f"{live_server}/echo"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.startswith("Response headers: \n[\n  \"HTTP/1.1 200 OK\"")
    payload = json.loads(out.split("Response payload: ")[1])
    assert payload["method"] == "POST"
    assert payload["body"] == '{"name":"Jane"}'
    assert payload["headers"]["x-trace"] == "1"


def test_prints_error_and_fails_on_error_status(live_server, capsys):
    exit_code = main([f"{live_server}/status/404"])

    assert exit_code == 1
    assert "Unexpected client error: 404::Not Found" in capsys.readouterr().out


def test_prints_decode_error_for_malformed_json(live_server, capsys):
    exit_code = main([f"{live_server}/broken-json"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Response payload: \nError while decoding JSON body" in out


def test_rejects_malformed_header(capsys):
    with pytest.raises(SystemExit, match="invalid header"):
        main(["-H", "no-colon", "http://x/y"])
