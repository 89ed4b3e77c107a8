from __future__ import annotations

import logging


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    # request/rate-limit lines from the client are INFO
    logging.getLogger("ratehub_client").setLevel(logging.DEBUG if verbose else logging.WARNING)

    # httpx/httpcore are noisy below WARNING
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.DEBUG if verbose else logging.WARNING)
