from __future__ import annotations

import asyncio

import typer
from ratehub_client import ApiError, MalformedResponseError, RateLimitedClient, Response, TransportError
from ratehub_client.errors_utils import parse_api_error_detail
from ratehub_client.ratelimit import RateLimitState

from .. import console
from ..config import load_config
from ..formatting import format_reset
from ..http import make_client


def parse_query(items: list[str] | None) -> dict[str, str]:
    query: dict[str, str] = {}
    for item in items or []:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            console.err(f"Invalid query parameter: {item} (expected key=value).")
            raise typer.Exit(code=2)
        query[key] = value
    return query


async def fetch(client: RateLimitedClient, path: str, query: dict[str, str], *, immediate: bool) -> Response:
    async with client:
        if immediate:
            return await client.request_immediate(path, query or None)
        return await client.request(path, query or None)


def run_request(client: RateLimitedClient, path: str, query: dict[str, str], *, immediate: bool) -> Response:
    """Run one request to completion, turning client errors into exit code 1."""
    try:
        return asyncio.run(fetch(client, path, query, immediate=immediate))
    except MalformedResponseError as exc:
        console.err(f"GET {path} returned a body that is not JSON: {exc.body[:200]}")
        raise typer.Exit(code=1)
    except ApiError as exc:
        detail = parse_api_error_detail(exc.body)
        message = str((detail or {}).get("message") or exc.body[:1000] or "(empty body)")
        console.err(f"GET {path} failed with {exc.status_code}: {message}")
        raise typer.Exit(code=1)
    except TransportError as exc:
        console.err(f"GET {path} failed: {exc}")
        raise typer.Exit(code=1)


def get(
        path: str = typer.Argument(..., help="API path relative to the configured prefix, e.g. /user."),
        query: list[str] | None = typer.Option(None, "-q", "--query", help="Query parameter as key=value (repeatable)."),
        immediate: bool = typer.Option(False, "--immediate", help="Skip ahead of queued requests."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        host: str | None = typer.Option(None, "--host", help="Override API host."),
        json_out: bool = typer.Option(False, "--json", help="Print the JSON body only."),
):
    params = parse_query(query)
    cfg = load_config()
    client = make_client(cfg, profile=profile, host_override=host)
    resp = run_request(client, path, params, immediate=immediate)

    if json_out:
        console.print_json(resp.body)
        return

    console.info(f"{resp.status_code} {path}")
    state = RateLimitState.from_headers(resp.headers)
    if state is not None:
        console.quota(state.remaining, state.limit, format_reset(state.reset))
    console.print_json(resp.body)
