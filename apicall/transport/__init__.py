from .config import ClientLimits
from .invoker import build_headers, build_request_url, get_api_session, invoke

__all__ = [
	"ClientLimits",
	"build_headers",
	"build_request_url",
	"get_api_session",
	"invoke",
]
