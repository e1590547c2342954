"""Public entrypoints for calling a configured JSON API from the command line."""

from .body import open_body
from .config import ApiConfig, ensure_complete, load_or_init, save_config
from .data_contract import ApiResponse
from .errors import (
    ApiCallError,
    BodyError,
    ConfigError,
    RequestError,
    ResponseDecodeError,
    TransportError,
    UsageError,
)
from .render import render
from .transport import ClientLimits, invoke

__version__ = "0.1.0"

__all__ = [
    "ApiCallError",
    "ApiConfig",
    "ApiResponse",
    "BodyError",
    "ClientLimits",
    "ConfigError",
    "RequestError",
    "ResponseDecodeError",
    "TransportError",
    "UsageError",
    "ensure_complete",
    "invoke",
    "load_or_init",
    "open_body",
    "render",
    "save_config",
]
