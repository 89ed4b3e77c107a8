from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w
from platformdirs import user_config_dir

APP_NAME = "ratehub"
CONFIG_FILENAME = "config.toml"
HOST_DEFAULT = "api.github.com"
ENV_TOKEN = "RATEHUB_TOKEN"
ENV_HOST = "RATEHUB_HOST"


@dataclass
class AuthConfig:
    token: str = ""


@dataclass
class ProfileConfig:
    host: str = ""
    path_prefix: str | None = None
    https: bool | None = None
    token: str = ""


@dataclass
class AppConfig:
    host: str
    auth: AuthConfig
    path_prefix: str = ""
    https: bool = True
    profiles: dict[str, ProfileConfig] = field(default_factory=dict)


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig(
        host=HOST_DEFAULT,
        auth=AuthConfig(token=""),
        path_prefix="",
        https=True,
        profiles={},
    )


def normalize_host(raw: str | None) -> tuple[str, bool | None]:
    """Strip scheme and trailing slashes from a host setting.

    Returns the bare host and the TLS flag implied by the scheme, or
    ``None`` when no scheme was given.
    """
    value = (raw or "").strip().rstrip("/")
    lowered = value.lower()
    https: bool | None = None
    if lowered.startswith("https://"):
        value, https = value[len("https://"):], True
    elif lowered.startswith("http://"):
        value, https = value[len("http://"):], False
    return value.strip("/"), https


def normalize_prefix(raw: str | None) -> str:
    return (raw or "").strip().strip("/")


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return _prune_none(
        {
            "host": cfg.host,
            "path_prefix": cfg.path_prefix,
            "https": cfg.https,
            "auth": {
                "token": cfg.auth.token,
            },
            "profiles": {
                name: {
                    "host": p.host or None,
                    "path_prefix": p.path_prefix,
                    "https": p.https,
                    "token": p.token or None,
                }
                for name, p in cfg.profiles.items()
            },
        }
    )


def _prune_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _prune_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_prune_none(item) for item in value if item is not None]
    return value


def _profile_from_toml(raw: dict[str, Any]) -> ProfileConfig:
    host, scheme_https = normalize_host(str(raw.get("host") or ""))
    https = raw.get("https")
    if not isinstance(https, bool):
        https = scheme_https
    prefix = raw.get("path_prefix")
    auth_raw = raw.get("auth") if isinstance(raw.get("auth"), dict) else {}
    return ProfileConfig(
        host=host,
        path_prefix=normalize_prefix(prefix) if isinstance(prefix, str) else None,
        https=https,
        token=str(raw.get("token") or auth_raw.get("token") or ""),
    )


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()

    host, scheme_https = normalize_host(str(data.get("host") or ""))
    if host:
        cfg.host = host
    https = data.get("https")
    if isinstance(https, bool):
        cfg.https = https
    elif scheme_https is not None:
        cfg.https = scheme_https
    cfg.path_prefix = normalize_prefix(str(data.get("path_prefix") or ""))

    auth_raw = data.get("auth") or {}
    if isinstance(auth_raw, dict):
        cfg.auth = AuthConfig(token=str(auth_raw.get("token") or ""))

    profiles_raw = data.get("profiles") or {}
    if isinstance(profiles_raw, dict):
        for name, v in profiles_raw.items():
            if isinstance(v, dict):
                cfg.profiles[str(name)] = _profile_from_toml(v)
    return cfg


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def apply_profile(cfg: AppConfig, profile: str | None) -> AppConfig:
    if not profile:
        return cfg
    prof = cfg.profiles.get(profile)
    if prof is None:
        return cfg
    return AppConfig(
        host=prof.host or cfg.host,
        auth=AuthConfig(token=prof.token or cfg.auth.token),
        path_prefix=cfg.path_prefix if prof.path_prefix is None else prof.path_prefix,
        https=cfg.https if prof.https is None else prof.https,
        profiles=cfg.profiles,
    )


def apply_env(cfg: AppConfig) -> AppConfig:
    token = os.getenv(ENV_TOKEN, "").strip()
    host, scheme_https = normalize_host(os.getenv(ENV_HOST, ""))
    if not token and not host:
        return cfg
    return AppConfig(
        host=host or cfg.host,
        auth=AuthConfig(token=token or cfg.auth.token),
        path_prefix=cfg.path_prefix,
        https=cfg.https if scheme_https is None else scheme_https,
        profiles=cfg.profiles,
    )


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
