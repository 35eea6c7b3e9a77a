"""Line-delimited JSON messages exchanged with a lesson front end.

Each request, response and notification is one JSON object on one line.
Requests carry an integer ``id`` that the matching response echoes back;
notifications carry none.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

# Responses to lines that could not be parsed far enough to recover an id.
UNPARSEABLE_ID = 0


@dataclass
class Request:
    id: int
    method: str
    params: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> Request:
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        method = data["method"]
        if not isinstance(method, str):
            raise TypeError("method must be a string")
        params = data.get("params") or {}
        if not isinstance(params, dict):
            raise TypeError("params must be an object")
        return cls(id=data["id"], method=method, params=params)

    @classmethod
    def from_line(cls, line: str) -> Request:
        """Parse one protocol line. Raises ValueError, KeyError or TypeError."""
        return cls.from_dict(json.loads(line))


@dataclass
class Response:
    """Reply to a request; exactly one of ``result`` or ``error`` is sent."""
    id: int
    result: Optional[Any] = None
    error: Optional[str] = None

    @classmethod
    def invalid(cls, reason: Exception) -> Response:
        return cls(id=UNPARSEABLE_ID, error=f"Invalid request: {reason}")

    def to_json_line(self) -> str:
        d = {"id": self.id}
        if self.error is not None:
            d["error"] = self.error
        else:
            d["result"] = self.result
        return json.dumps(d) + "\n"


@dataclass
class Notification:
    """Server-initiated event such as ``catalogLoaded``."""
    method: str
    params: dict = field(default_factory=dict)

    def to_json_line(self) -> str:
        return json.dumps({"method": self.method, "params": self.params}) + "\n"
