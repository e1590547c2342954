import re
import threading
import time

import requests
from requests.adapters import HTTPAdapter
from requests.exceptions import InvalidHeader, InvalidSchema, InvalidURL, MissingSchema, RequestException

from .._logging import get_logger
from ..body import Body
from ..data_contract import ApiResponse
from ..errors import RequestError, TransportError
from .config import ClientLimits

CHUNK_SIZE = 64 * 1024
_METHOD_TOKEN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")

logger = get_logger("transport.invoker")


def build_request_url(host: str, path: str) -> str:
    return f"{host}/{path}"


def build_headers(api_key: str) -> dict[str, str]:
    return {
        "content-type": "application/json",
        "accept": "application/json",
        "Authorization": f"Bearer {api_key}",
    }


def _check_method(method: str) -> None:
    if not _METHOD_TOKEN.match(method):
        raise RequestError(f"invalid method {method!r}")


def _check_header_values(headers: dict[str, str]) -> None:
    for name, value in headers.items():
        try:
            value.encode("latin-1")
        except UnicodeEncodeError as exc:
            raise RequestError(f"invalid value for header {name}: {exc}") from exc


def get_api_session(limits: ClientLimits | None = None) -> requests.Session:
    limits = limits or ClientLimits()
    adapter = HTTPAdapter(
        pool_connections=limits.max_idle_connections,
        pool_maxsize=min(limits.max_connections_per_host, limits.max_idle_connections_per_host),
        pool_block=True,
        max_retries=0,
    )
    session = requests.Session()
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def _read_content(response: requests.Response) -> bytes:
    return b"".join(response.iter_content(chunk_size=CHUNK_SIZE))


class _Exchange:
    """One round-trip on a daemon thread, so the caller can stop waiting at the deadline."""

    def __init__(self, session: requests.Session, **request_kwargs):
        self.session = session
        self.request_kwargs = request_kwargs
        self.response: requests.Response | None = None
        self.content: bytes | None = None
        self.error: Exception | None = None
        self._thread = threading.Thread(target=self._run, name="apicall-request", daemon=True)

    def _run(self) -> None:
        try:
            self.response = self.session.request(**self.request_kwargs)
            try:
                self.content = _read_content(self.response)
            finally:
                self.response.close()
        except Exception as exc:
            self.error = exc

    def run(self, timeout: float) -> bool:
        """Start the round-trip and return False if it is still running after ``timeout``."""
        self._thread.start()
        self._thread.join(timeout)
        if not self._thread.is_alive():
            return True
        if self.response is not None:
            self.response.close()
        return False


def invoke(
    method: str,
    host: str,
    path: str,
    api_key: str,
    body: Body = None,
    *,
    limits: ClientLimits | None = None,
    session: requests.Session | None = None,
) -> ApiResponse:
    """Send one authenticated request to ``host/path`` and read the whole response.

    Non-2xx statuses are returned like any other response. Failures to build the
    request raise ``RequestError``; network failures and an exceeded deadline
    raise ``TransportError``. The deadline covers connect, headers and body.
    """
    limits = limits or ClientLimits()
    _check_method(method)
    url = build_request_url(host, path)
    headers = build_headers(api_key)
    _check_header_values(headers)

    owns_session = session is None
    active_session = session or get_api_session(limits)
    exchange = _Exchange(
        active_session,
        method=method,
        url=url,
        data=body,
        headers=headers,
        timeout=limits.requests_timeout,
        stream=True,
    )

    started = time.monotonic()
    logger.info("Sending %s %s", method, url)

    try:
        if not exchange.run(limits.request_deadline_seconds):
            logger.info("Request %s %s abandoned after %.3fs", method, url, time.monotonic() - started)
            raise TransportError(f"request deadline of {limits.request_deadline_seconds:g}s exceeded")
        if exchange.error is not None:
            raise exchange.error
    except (MissingSchema, InvalidSchema, InvalidURL, InvalidHeader) as exc:
        logger.info("Cannot build request %s %s: %s", method, url, exc)
        raise RequestError(str(exc)) from exc
    except (RequestException, OSError) as exc:
        logger.info("Request %s %s failed: %s", method, url, exc)
        raise TransportError(str(exc)) from exc
    finally:
        if owns_session:
            active_session.close()

    response = exchange.response
    content = exchange.content
    elapsed = time.monotonic() - started
    logger.info("Received %s from %s in %.3fs (%s bytes)", response.status_code, url, elapsed, len(content))
    return ApiResponse(
        status_code=response.status_code,
        reason=response.reason,
        url=url,
        content=content,
        content_type=response.headers.get("Content-Type"),
        elapsed_seconds=elapsed,
    )
