from __future__ import annotations

import functools
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import httpx

from . import timer
from .config_types import ClientConfig
from .deliver import RequestQueue, default_queue
from .env_info import EnvironmentInfo
from .errors import ApiError, ConfigurationError, MalformedResponseError, TransportError
from .identity import new_id
from .ratelimit import RateLimitState
from .request_builder import Query, build_request_path, render_query_for_log

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Response:
    body: Any
    status_code: int
    headers: httpx.Headers


class RateLimitedClient:
    """GET-only API client that waits out exhausted quotas.

    Requests go through a shared :class:`RequestQueue` keyed by this client's
    name, so :meth:`cancel` only abandons work issued by this instance.
    """

    def __init__(
            self,
            cfg: ClientConfig,
            *,
            queue: RequestQueue | None = None,
            env: EnvironmentInfo | None = None,
            id_factory: Callable[[], str] | None = None,
            sleep: Callable[[float], Awaitable[None]] | None = None,
            clock: Callable[[], float] | None = None,
            transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not (cfg.access_token or "").strip() or not (cfg.host or "").strip():
            logger.error("invalid access token or host")
            raise ConfigurationError("invalid access token or host")

        self._cfg = cfg
        self._queue = queue or default_queue()
        env = env or EnvironmentInfo.detect(product=cfg.product, product_version=cfg.product_version)
        self._user_agent = env.user_agent()
        self._name = f"RateLimitedClient:{(id_factory or new_id)()}"
        self._sleep = sleep or timer.sleep
        self._clock = clock or time.time
        self._http = httpx.AsyncClient(timeout=cfg.timeout_s, transport=transport)

    @classmethod
    def from_values(
            cls,
            access_token: str,
            host: str,
            path_prefix: str = "",
            https: bool = True,
            **kwargs: Any,
    ) -> RateLimitedClient:
        return cls(ClientConfig(access_token=access_token, host=host, path_prefix=path_prefix, https=https), **kwargs)

    @property
    def name(self) -> str:
        return self._name

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> RateLimitedClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # --- entry points ---
    async def request_immediate(self, path: str, query: Query | None = None) -> Response:
        return await self._queue.push_immediate(functools.partial(self._request, path, query), self._name)

    async def request(self, path: str, query: Query | None = None) -> Response:
        return await self._queue.push(functools.partial(self._request, path, query), self._name)

    def cancel(self) -> int:
        return self._queue.cancel(self._name)

    # --- single round trip ---
    def _headers(self) -> dict[str, str]:
        return {
            "User-Agent": self._user_agent,
            "Authorization": f"token {self._cfg.access_token}",
        }

    def _url(self, request_path: str) -> str:
        return f"{self._cfg.scheme}://{self._cfg.host}:{self._cfg.port}{request_path}"

    async def _request(self, path: str, query: Query | None = None) -> Response:
        request_path = build_request_path(self._cfg.path_prefix, path, query)
        self._log(path, query)
        try:
            async with self._http.stream("GET", self._url(request_path), headers=self._headers()) as r:
                await self._wait_for_quota(r.headers, request_path)
                await r.aread()
                status_code = r.status_code
                headers = r.headers
                text = r.text
        except httpx.RequestError as e:
            raise TransportError(str(e) or e.__class__.__name__) from e

        return self._build_response(status_code, headers, text)

    async def _wait_for_quota(self, headers: httpx.Headers, request_path: str) -> None:
        # Servers without quota enforcement omit the headers entirely.
        state = RateLimitState.from_headers(headers)
        if state is None:
            return
        logger.info("[rate limit remaining] %d %s", state.remaining, request_path)
        if not state.exhausted:
            return
        wait_ms = state.wait_ms(self._clock() * 1000)
        if wait_ms > 0:
            logger.info("[rate limit] quota exhausted, waiting %.1fs for reset %s", wait_ms / 1000, request_path)
        await self._sleep(wait_ms)

    @staticmethod
    def _build_response(status_code: int, headers: httpx.Headers, text: str) -> Response:
        if status_code != 200:
            raise ApiError(status_code, text)
        try:
            body = json.loads(text)
        except ValueError as e:
            raise MalformedResponseError(text) from e
        return Response(body=body, status_code=status_code, headers=headers)

    def _log(self, path: str, query: Query | None) -> None:
        logger.info("[request] %s", render_query_for_log(path, query))
