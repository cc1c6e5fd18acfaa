"""
API actions.

An action is one request an API object can make ("create user" -> POST
/users). Steps fetch a fresh action by name, fill in parameters, headers
or a body, and send it:

    action = manager.get_action_as_post("create user", uid)
    response = action.with_body({"name": "Ann"}).send(manager.get_api(uid))
"""

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Optional, TypeVar

if TYPE_CHECKING:
    from api.api_manager import API
    from api.response import Response

logger = logging.getLogger(__name__)

A = TypeVar("A", bound="Action")


class Action:
    """Base request definition. Subclasses fix the HTTP method."""

    method: ClassVar[str] = "GET"
    sends_body: ClassVar[bool] = False

    def __init__(
        self,
        name: str,
        path: str,
        parameters: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        body: Any = None,
    ) -> None:
        self.name = name
        self.path = path
        self.parameters: dict[str, Any] = dict(parameters or {})
        self.headers: dict[str, str] = dict(headers or {})
        self.body = body
        self.response: Optional["Response"] = None

    def with_parameter(self: A, key: str, value: Any) -> A:
        self.parameters[key] = value
        return self

    def with_header(self: A, key: str, value: str) -> A:
        self.headers[key] = value
        return self

    def with_body(self: A, body: Any) -> A:
        if not self.sends_body:
            logger.warning(f"{self.method} action '{self.name}' ignores its body")
        self.body = body
        return self

    def send(self, api: "API") -> "Response":
        """Send the request through ``api`` and keep the response."""
        kwargs: dict[str, Any] = {"params": self.parameters or None, "headers": self.headers or None}
        if self.sends_body and self.body is not None:
            kwargs["json"] = self.body
        self.response = api.request(self.method, self.path, **kwargs)
        logger.debug(f"{self.method} {self.path} ({self.name}) -> {self.response.status_code}")
        return self.response

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, path={self.path!r})"


class GET(Action):
    method = "GET"


class POST(Action):
    method = "POST"
    sends_body = True


class PUT(Action):
    method = "PUT"
    sends_body = True


class DELETE(Action):
    method = "DELETE"
