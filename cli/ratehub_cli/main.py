from __future__ import annotations

import typer

from .commands import get_cmd, rate_cmd, settings_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="ratehub",
        help="ratehub CLI: rate-limit aware API requests",
        no_args_is_help=True,
    )

    app.add_typer(settings_cmd.app, name="settings")
    app.command("get")(get_cmd.get)
    app.command("rate-limit")(rate_cmd.rate_limit)

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()


if __name__ == "__main__":
    app()
