from __future__ import annotations

from typer.testing import CliRunner

from ratehub_cli import config, main


def _use_tmp_config_dir(tmp_path, monkeypatch) -> None:
    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(config, "user_config_dir", _config_dir)


def test_settings_init_writes_config(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    runner = CliRunner()
    result = runner.invoke(
        main.app,
        ["settings", "init", "--host", "https://ghe.example.test/", "--path-prefix", "/api/v3/", "--token", "abc"],
    )

    assert result.exit_code == 0, result.output
    cfg = config.load_config()
    assert cfg.host == "ghe.example.test"
    assert cfg.path_prefix == "api/v3"
    assert cfg.auth.token == "abc"


def test_settings_init_refuses_to_overwrite(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    config.save_config(config.default_config())
    runner = CliRunner()
    result = runner.invoke(main.app, ["settings", "init", "--host", "other.test", "--token", "x"])

    assert result.exit_code == 0
    assert "already exists" in result.output
    assert config.load_config().host == "api.github.com"


def test_settings_set_and_get(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    runner = CliRunner()

    result = runner.invoke(main.app, ["settings", "set", "--host", "http://localhost:8080", "--token", "tok"])
    assert result.exit_code == 0, result.output

    host = runner.invoke(main.app, ["settings", "get", "host"])
    https = runner.invoke(main.app, ["settings", "get", "https"])
    assert host.output.strip() == "localhost:8080"
    assert https.output.strip() == "false"

    unknown = runner.invoke(main.app, ["settings", "get", "nope"])
    assert unknown.exit_code == 2


def test_settings_set_profile_and_show(tmp_path, monkeypatch) -> None:
    _use_tmp_config_dir(tmp_path, monkeypatch)
    runner = CliRunner()

    result = runner.invoke(main.app, ["settings", "set", "--profile", "ghe", "--host", "ghe.example.test", "--no-https"])
    assert result.exit_code == 0, result.output

    cfg = config.load_config()
    assert cfg.profiles["ghe"].host == "ghe.example.test"
    assert cfg.profiles["ghe"].https is False

    shown = runner.invoke(main.app, ["settings", "show"])
    assert "token=(empty)" in shown.output
    assert "profile ghe" in shown.output
