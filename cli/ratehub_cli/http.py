from __future__ import annotations

from importlib import metadata

from ratehub_client import ClientConfig, ConfigurationError, RateLimitedClient

from . import console
from .config import ENV_TOKEN, AppConfig, apply_env, apply_profile, normalize_host


def cli_version() -> str:
    try:
        return metadata.version("ratehub")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def make_client(
    cfg: AppConfig,
    *,
    profile: str | None,
    host_override: str | None,
) -> RateLimitedClient:
    effective_cfg = apply_profile(apply_env(cfg), profile)
    host, scheme_https = normalize_host(host_override or effective_cfg.host)
    https = effective_cfg.https if scheme_https is None else scheme_https

    try:
        return RateLimitedClient(
            ClientConfig(
                access_token=effective_cfg.auth.token,
                host=host,
                path_prefix=effective_cfg.path_prefix,
                https=https,
                product_version=cli_version(),
            )
        )
    except ConfigurationError:
        console.err(f"Access token or host is not configured. Run `ratehub settings set --token ...` or set {ENV_TOKEN}.")
        raise SystemExit(1)
