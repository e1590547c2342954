import argparse
import sys

from ._logging import get_logger
from .body import open_body
from .config import ensure_complete, load_or_init
from .errors import ApiCallError, UsageError
from .render import render
from .transport import invoke

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apicall",
        description="Call the configured JSON API with a bearer token and pretty-print the response",
        allow_abbrev=False,
    )
    parser.add_argument("-apikey", "--apikey", dest="apikey", default="", help="Key of the API (stored in .config)")
    parser.add_argument("-host", "--host", dest="host", default="", help="Host to call (stored in .config)")
    parser.add_argument("-X", "--request", dest="method", default="GET", help="HTTP method to call (default: GET)")
    parser.add_argument("-d", "--data", dest="data", default="", help="Data to upload, or @file to upload a file")
    parser.add_argument("path", nargs="*", help="Path appended to the host")
    return parser


def cmd_call(args):
    """Handle a single API call: config, body, request, render."""
    if len(args.path) != 1:
        raise UsageError(f"Expected exactly one path argument, got {len(args.path)}: {args.path}")

    config = load_or_init(args.apikey, args.host)
    ensure_complete(config)

    with open_body(args.data) as body:
        response = invoke(args.method, config.host, args.path[0], config.api_key, body)

    if not response.ok:
        logger.info("%s answered %s %s", response.url, response.status_code, response.reason)
    render(response.content)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cmd_call(args)
    except ApiCallError as exc:
        if exc.show_usage:
            parser.print_usage(sys.stderr)
        print(str(exc), file=sys.stderr)
        sys.exit(exc.exit_code)

    sys.exit(0)


if __name__ == "__main__":
    main()
