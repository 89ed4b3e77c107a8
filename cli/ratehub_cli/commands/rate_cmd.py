from __future__ import annotations

import typer
from rich.table import Table

from .. import console
from ..config import load_config
from ..formatting import format_reset
from ..http import make_client
from .get_cmd import run_request

RATE_LIMIT_PATH = "/rate_limit"


def rate_limit(
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        host: str | None = typer.Option(None, "--host", help="Override API host."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    client = make_client(cfg, profile=profile, host_override=host)
    # Jump the queue so the quota can be inspected while other work waits.
    resp = run_request(client, RATE_LIMIT_PATH, {}, immediate=True)
    data = resp.body if isinstance(resp.body, dict) else {}

    if json_out:
        console.print_json(resp.body)
        return

    resources = data.get("resources") if isinstance(data.get("resources"), dict) else {}
    if not resources and isinstance(data.get("rate"), dict):
        resources = {"core": data["rate"]}
    if not resources:
        console.warn("Server did not report any rate limits.")
        return

    table = Table(title="Rate limits")
    table.add_column("resource")
    table.add_column("limit", justify="right")
    table.add_column("used", justify="right")
    table.add_column("remaining", justify="right")
    table.add_column("reset")
    for name, item in resources.items():
        if not isinstance(item, dict):
            continue
        table.add_row(
            str(name),
            str(item.get("limit", "-")),
            str(item.get("used", "-")),
            str(item.get("remaining", "-")),
            format_reset(item.get("reset")),
        )
    console.print(table)
