"""
Entrypoint: load .env and config, send one request, log the parsed response
"""

import argparse
import sys

import structlog
from dotenv import load_dotenv

from simplehttp import Method, Request, SimpleHTTPError
from simplehttp.config import Config
from simplehttp.log import configure_logging

logger = structlog.get_logger(__name__)


def _key_value(text: str):
    key, sep, value = text.partition('=')
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got '{text}'")
    return key, value


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send a single HTTP request and show the parsed response.")
    parser.add_argument("url")
    parser.add_argument("--method", choices=[m.value for m in Method], default=Method.GET.value)
    parser.add_argument("--query", type=_key_value, action="append", default=[], metavar="KEY=VALUE")
    parser.add_argument("--data", type=_key_value, action="append", default=[], metavar="KEY=VALUE")
    parser.add_argument("--timeout", help="timeout in seconds, overrides the config")
    parser.add_argument("--insecure", action="store_true", help="skip TLS certificate validation (debug only)")
    parser.add_argument("--config", dest="config_path", help="path to a config.yaml")
    return parser.parse_args(argv)


def _add_params(add, pairs):
    # repeated keys collect into a list, sent as key[0]=..&key[1]=..
    collected = {}
    for key, value in pairs:
        collected.setdefault(key, []).append(value)
    for key, values in collected.items():
        add(key, values[0] if len(values) == 1 else values)


def build_request(args: argparse.Namespace, config: Config, transport=None) -> Request:
    """Turn parsed CLI arguments into a configured Request."""
    request = Request.from_config(config, args.url, args.method, transport=transport)

    if args.timeout is not None:
        request.set_timeout(args.timeout)
    if args.insecure:
        request.validate_tls = False

    _add_params(request.add_query_parameter, args.query)
    _add_params(request.add_post_parameter, args.data)
    return request


def summarize(response) -> dict:
    summary = {
        'status_code': response.status_code,
        'headers': response.headers,
        'body_size': len(response.raw_body),
    }
    if response.parsed_body is not None:
        title = response.parsed_body.findtext('.//title')
        summary['title'] = title.strip() if title else None
    return summary


def main(argv=None, transport=None) -> int:
    """Send the request described by argv and log its summary."""
    load_dotenv()
    args = parse_args(argv)

    try:
        config = Config(args.config_path)
    except (FileNotFoundError, ValueError) as e:
        print(f"Failed to load configuration: {e}", file=sys.stderr)
        return 1

    configure_logging(config.logging.get('level', 'INFO'), config.logging.get('renderer', 'json'))

    try:
        request = build_request(args, config, transport=transport)
        response = request.send()
    except SimpleHTTPError as e:
        logger.error("request_failed", url=args.url, error=str(e))
        return 1

    logger.info("response_received", url=args.url, **summarize(response))
    return 0


if __name__ == "__main__":
    sys.exit(main())
