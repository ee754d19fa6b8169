"""The response envelope shared by every endpoint.

Success: {"status": true, "message": ..., "data": ...}
Failure: {"status": false, "message": ...}
"""

from typing import Any

from pydantic import BaseModel


def _dump(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, list):
        return [_dump(item) for item in data]
    return data


def success(message: str, data: Any = None) -> dict:
    body = {"status": True, "message": message}
    if data is not None:
        body["data"] = _dump(data)
    return body


def failure(message: str) -> dict:
    return {"status": False, "message": message}
