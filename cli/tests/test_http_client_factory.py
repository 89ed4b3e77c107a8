from __future__ import annotations

import pytest

from ratehub_cli import config
from ratehub_cli.http import make_client


def test_make_client_uses_profile_and_host_override(monkeypatch) -> None:
    monkeypatch.delenv(config.ENV_TOKEN, raising=False)
    monkeypatch.delenv(config.ENV_HOST, raising=False)
    cfg = config.default_config()
    cfg.auth.token = "base-token"
    cfg.profiles["ghe"] = config.ProfileConfig(host="ghe.example.test", path_prefix="api/v3", token="ghe-token")
    captured = {}

    class _FakeClient:
        def __init__(self, client_cfg):
            captured["cfg"] = client_cfg

    monkeypatch.setattr("ratehub_cli.http.RateLimitedClient", _FakeClient)

    make_client(cfg, profile="ghe", host_override=None)
    assert captured["cfg"].host == "ghe.example.test"
    assert captured["cfg"].path_prefix == "api/v3"
    assert captured["cfg"].access_token == "ghe-token"
    assert captured["cfg"].https is True

    make_client(cfg, profile=None, host_override="http://localhost:8080/")
    assert captured["cfg"].host == "localhost:8080"
    assert captured["cfg"].https is False
    assert captured["cfg"].access_token == "base-token"


def test_make_client_without_token_exits(monkeypatch) -> None:
    monkeypatch.delenv(config.ENV_TOKEN, raising=False)
    monkeypatch.delenv(config.ENV_HOST, raising=False)
    cfg = config.default_config()

    with pytest.raises(SystemExit) as excinfo:
        make_client(cfg, profile=None, host_override=None)
    assert excinfo.value.code == 1
