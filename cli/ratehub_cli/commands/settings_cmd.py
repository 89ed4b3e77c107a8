from __future__ import annotations

import os

import typer

from .. import console
from ..config import (
    ProfileConfig,
    config_path,
    default_config,
    load_config,
    normalize_host,
    normalize_prefix,
    save_config,
)

app = typer.Typer(help="Manage local CLI settings (~/.config/ratehub/config.toml).")


@app.command("init")
def init_settings(
        force: bool = typer.Option(False, "--force", help="Overwrite existing config."),
        host: str = typer.Option(
            ...,
            "--host",
            prompt="API host",
            help="API host like api.github.com or https://ghe.example.com",
        ),
        path_prefix: str = typer.Option("", "--path-prefix", help="Path prefix, e.g. api/v3 for GitHub Enterprise."),
        token: str = typer.Option(..., "--token", prompt="Access token", hide_input=True, help="API access token."),
):
    path = config_path()
    if os.path.exists(path) and not force:
        console.info(f"Config already exists: {path}")
        console.info("Use --force to overwrite.")
        return

    cfg = default_config()
    cfg.host, https = normalize_host(host)
    if https is not None:
        cfg.https = https
    if not cfg.host:
        console.err("Host cannot be empty.")
        raise typer.Exit(code=2)
    cfg.path_prefix = normalize_prefix(path_prefix)
    cfg.auth.token = token.strip()
    saved = save_config(cfg)
    console.ok(f"Config written: {saved}")


@app.command("show")
def show_settings():
    cfg = load_config()
    token_state = "(set)" if (cfg.auth.token or "").strip() else "(empty)"
    console.console.print(
        f"host={cfg.host} path_prefix={cfg.path_prefix or '-'} https={str(cfg.https).lower()} token={token_state}"
    )
    for name, prof in cfg.profiles.items():
        prof_token = "(set)" if prof.token else "(inherit)"
        console.console.print(f"profile {name}: host={prof.host or '(inherit)'} token={prof_token}")


@app.command("get")
def get_setting(
        key: str = typer.Argument(..., help="Setting key (host, path_prefix, https)."),
):
    cfg = load_config()
    k = key.strip().lower()
    if k == "host":
        console.console.print(cfg.host)
        return
    if k == "path_prefix":
        console.console.print(cfg.path_prefix)
        return
    if k == "https":
        console.console.print(str(cfg.https).lower())
        return
    console.err(f"Unknown setting: {key}")
    raise typer.Exit(code=2)


@app.command("set")
def set_setting(
        host: str | None = typer.Option(None, "--host", help="Set API host."),
        path_prefix: str | None = typer.Option(None, "--path-prefix", help="Set API path prefix."),
        https: bool | None = typer.Option(None, "--https/--no-https", help="Use TLS (port 443) or plain HTTP (port 80)."),
        token: str | None = typer.Option(None, "--token", help="Set access token."),
        profile: str | None = typer.Option(None, "--profile", help="Write values into a named profile."),
):
    cfg = load_config()
    if profile:
        prof = cfg.profiles.setdefault(profile, ProfileConfig())
        if host is not None:
            prof.host, scheme_https = normalize_host(host)
            if scheme_https is not None and https is None:
                prof.https = scheme_https
        if path_prefix is not None:
            prof.path_prefix = normalize_prefix(path_prefix)
        if https is not None:
            prof.https = https
        if token is not None:
            prof.token = token.strip()
    else:
        if host is not None:
            cfg.host, scheme_https = normalize_host(host)
            if scheme_https is not None and https is None:
                cfg.https = scheme_https
        if path_prefix is not None:
            cfg.path_prefix = normalize_prefix(path_prefix)
        if https is not None:
            cfg.https = https
        if token is not None:
            cfg.auth.token = token.strip()
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
