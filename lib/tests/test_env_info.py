import platform

import httpx

from ratehub_client.env_info import EnvironmentInfo


def test_detect_defaults_to_httpx_as_host_framework() -> None:
    env = EnvironmentInfo.detect(product_version="9.9.9")

    assert env.product == "RateHub"
    assert env.framework == "httpx"
    assert env.framework_version == httpx.__version__
    assert env.runtime_version == platform.python_version()
    assert env.user_agent().startswith(f"RateHub/9.9.9 Python/{platform.python_version()} httpx/")


def test_detect_accepts_embedding_framework() -> None:
    env = EnvironmentInfo.detect(product="Viewer", product_version="2.0.0", framework="Qt", framework_version="6.7")

    assert " Qt/6.7 " in env.user_agent()
    assert env.user_agent().startswith("Viewer/2.0.0 ")


def test_detect_falls_back_when_framework_version_unknown() -> None:
    env = EnvironmentInfo.detect(product_version="1.0.0", framework="Shell")

    assert env.framework_version == "0.0.0"
