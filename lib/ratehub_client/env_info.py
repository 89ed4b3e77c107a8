from __future__ import annotations

import platform
from dataclasses import dataclass
from importlib import metadata

import httpx

DIST_NAME = "ratehub"


def _dist_version(name: str) -> str:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return "0.0.0"


@dataclass(frozen=True)
class EnvironmentInfo:
    """Host details rendered into the User-Agent header."""

    product: str
    product_version: str
    runtime_version: str
    framework: str
    framework_version: str
    os_type: str
    os_release: str

    @classmethod
    def detect(
            cls,
            *,
            product: str = "RateHub",
            product_version: str | None = None,
            framework: str | None = None,
            framework_version: str | None = None,
    ) -> EnvironmentInfo:
        # An embedding application passes its own name/version; otherwise
        # the HTTP stack stands in as the host framework.
        if framework is None:
            framework = "httpx"
            framework_version = framework_version or httpx.__version__
        return cls(
            product=product,
            product_version=product_version or _dist_version(DIST_NAME),
            runtime_version=platform.python_version(),
            framework=framework,
            framework_version=framework_version or "0.0.0",
            os_type=platform.system() or "Unknown",
            os_release=platform.release() or "0",
        )

    def user_agent(self) -> str:
        return (
            f"{self.product}/{self.product_version} "
            f"Python/{self.runtime_version} "
            f"{self.framework}/{self.framework_version} "
            f"{self.os_type}/{self.os_release}"
        )
