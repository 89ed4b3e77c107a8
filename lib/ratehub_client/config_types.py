from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class ClientConfig:
    access_token: str
    host: str
    path_prefix: str = ""
    https: bool = True
    timeout_s: float = 30.0
    product: str = "RateHub"
    product_version: str | None = None

    @property
    def scheme(self) -> str:
        return "https" if self.https else "http"

    @property
    def port(self) -> int:
        return 443 if self.https else 80
