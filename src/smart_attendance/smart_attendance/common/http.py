from __future__ import annotations

from flask import request


def request_payload() -> dict:
    """JSON body when present, otherwise form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()
