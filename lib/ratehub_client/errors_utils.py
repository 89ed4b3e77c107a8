from __future__ import annotations

import json


def parse_api_error_detail(body: str | None) -> dict | None:
    if not body:
        return None
    try:
        data = json.loads(body)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None
