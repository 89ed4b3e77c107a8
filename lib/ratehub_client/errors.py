from __future__ import annotations


class RateHubClientError(Exception):
    """Base client error."""


class ConfigurationError(RateHubClientError):
    """Client was constructed without a usable token or host."""


class TransportError(RateHubClientError):
    """Transport/network layer error."""


class ApiError(RateHubClientError):
    def __init__(self, status_code: int, body: str):
        super().__init__(body)
        self.status_code = status_code
        self.body = body


class MalformedResponseError(ApiError):
    """200 response whose body is not valid JSON."""

    def __init__(self, body: str):
        super().__init__(200, body)
