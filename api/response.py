"""HTTP response wrapper whose body is read exactly once."""

import json
import logging
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)


class Response:
    """
    Wraps a ``requests.Response``.

    The body is read when the wrapper is created, so it can be inspected any
    number of times afterwards (even for streamed responses).
    """

    def __init__(self, http_response: requests.Response) -> None:
        self.response = http_response
        self._body: str = http_response.text

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def text(self) -> str:
        return self._body

    @property
    def headers(self) -> dict[str, str]:
        return dict(self.response.headers)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        """Parse the stored body as JSON (ValueError when it is not JSON)."""
        return json.loads(self._body)

    def add_json_response(self, json_response: str) -> None:
        """Replace the stored body, e.g. with a trimmed or expected payload."""
        self._body = json_response

    def header(self, name: str) -> Optional[str]:
        return self.response.headers.get(name)

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}] {len(self._body)} chars>"
