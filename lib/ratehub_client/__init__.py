from .client import RateLimitedClient, Response
from .config_types import ClientConfig
from .deliver import RequestQueue, default_queue
from .errors import ApiError, ConfigurationError, MalformedResponseError, RateHubClientError, TransportError

__all__ = [
    "RateLimitedClient",
    "Response",
    "ClientConfig",
    "RequestQueue",
    "default_queue",
    "ApiError",
    "ConfigurationError",
    "MalformedResponseError",
    "RateHubClientError",
    "TransportError",
]
