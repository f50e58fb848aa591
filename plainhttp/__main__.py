import argparse
import json
import logging
import sys

from .client import HttpClient
from .errors import PlainHttpError
from .http_protocol import HttpMethod
from .response import Response


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="plainhttp",
        description="Send one HTTP request and print the response headers and payload.",
    )

    parser.add_argument("url", help="The request URL (http:// or https://).")
    parser.add_argument("-X", "--method", type=str.upper, default="GET",
                        choices=[m.value for m in HttpMethod], help="HTTP method to use.")
    parser.add_argument("-H", "--header", action="append", default=[], dest="headers",
                        metavar="'NAME: VALUE'", help="Request header, may be repeated.")
    parser.add_argument("-d", "--data", action="append", default=[], dest="data",
                        metavar="KEY=VALUE", help="Body field, may be repeated.")
    parser.add_argument("--json", action="store_true", help="Send the body fields as JSON.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    return parser.parse_args(argv)


def _split_pairs(values, separator, what):
    pairs = {}
    for value in values:
        key, sep, rest = value.partition(separator)
        if not sep or not key.strip():
            raise SystemExit(f"Error: invalid {what} '{value}'.")
        pairs[key.strip()] = rest.strip() if separator == ":" else rest
    return pairs


def pretty_print_output(output):
    print()
    if isinstance(output, (dict, list)):
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        print(output)
    print()


def print_response(response: Response):
    try:
        print("Response headers: ", end="")
        pretty_print_output(response.get_headers())
        print("Response payload: ", end="")
        pretty_print_output(response.get_body())
    except PlainHttpError as e:
        pretty_print_output(e)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    headers = _split_pairs(args.headers, ":", "header")
    if args.json:
        headers["content-type"] = "application/json"
    body = _split_pairs(args.data, "=", "data field") if args.data else None

    try:
        response = HttpClient().send(args.method, args.url, body, headers)
    except PlainHttpError as e:
        pretty_print_output(e)
        return 1

    print_response(response)
    return 0


if __name__ == "__main__":
    sys.exit(main())
