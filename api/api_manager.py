#!/usr/bin/env python3

"""
API objects and the API manager.

An ``API`` subclass describes one service: its base URL and the actions it
supports, registered by name in ``define_actions``. The ``APIManager`` keeps
the API currently under test for each scenario (keyed by a uid), so steps in
parallel scenarios never share one.
"""

# === CORE INFRASTRUCTURE ===
import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
import threading
from typing import Any, Callable, Optional, TypeVar

# === THIRD-PARTY IMPORTS ===
import requests
from requests.adapters import HTTPAdapter
from requests.exceptions import RequestException
from urllib3.util.retry import Retry

# === LOCAL IMPORTS ===
from api.actions import DELETE, GET, POST, PUT, Action
from api.response import Response
from config.config_schema import APIConfig
from core.action_registry import ActionRegistry, normalize_name
from core.exceptions import APIRequestError, NoSuchActionError, NoSuchAPIError

ActionT = TypeVar("ActionT", bound=Action)

DEFAULT_STATUS_FORCELIST = (429, 500, 502, 503, 504)


class API:
    """A service under test: base URL, shared HTTP session, named actions."""

    def __init__(
        self,
        name: str,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
        retries: int = 3,
        backoff_factor: float = 0.5,
        verify_ssl: bool = True,
        status_forcelist: tuple[int, ...] = DEFAULT_STATUS_FORCELIST,
    ) -> None:
        self.name = name
        self.base_url = base_url
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self._actions: ActionRegistry[Action] = ActionRegistry(kind="action")

        if session is None:
            session = requests.Session()
            self._setup_requests_session(session, retries, backoff_factor, status_forcelist)
        self.session = session

        self.define_actions()
        logger.debug(f"API '{self.name}' initialized with actions: {self._actions.names()}")

    @classmethod
    def from_config(cls, name: str, config: APIConfig, **kwargs: Any) -> "API":
        if not config.base_url:
            raise ValueError("api.base_url must be configured to build an API from configuration")
        return cls(
            name,
            config.base_url,
            timeout=config.timeout,
            retries=config.max_retries,
            backoff_factor=config.backoff_factor,
            verify_ssl=config.verify_ssl,
            status_forcelist=tuple(config.retry_status_codes),
            **kwargs,
        )

    @staticmethod
    def _setup_requests_session(
        session: requests.Session, retries: int, backoff_factor: float, status_forcelist: tuple[int, ...]
    ) -> None:
        """Configure the requests session with retry strategy."""
        retry_strategy = Retry(total=retries, backoff_factor=backoff_factor, status_forcelist=list(status_forcelist))
        adapter = HTTPAdapter(pool_connections=10, pool_maxsize=20, max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        logger.debug("Requests session configured with retry strategy.")

    # --- Actions ---

    def define_actions(self) -> None:
        """Register this API's actions. Subclasses override."""

    def register_action(self, name: str, factory: Callable[[], Action]) -> None:
        self._actions.register(name, factory)

    def get(self, name: str, path: str) -> None:
        self.register_action(name, lambda: GET(name, path))

    def post(self, name: str, path: str) -> None:
        self.register_action(name, lambda: POST(name, path))

    def put(self, name: str, path: str) -> None:
        self.register_action(name, lambda: PUT(name, path))

    def delete(self, name: str, path: str) -> None:
        self.register_action(name, lambda: DELETE(name, path))

    def get_action(self, action_name: str) -> Action:
        """A fresh Action for ``action_name`` ("Create User" finds 'create_user')."""
        action = self._actions.create(action_name)
        if action is None:
            error_message = (
                f"Action {normalize_name(action_name)} is not defined for the API object {self.name}. "
                f"Make sure you have spelled the action name correctly in your step and in the API object."
            )
            logger.error(error_message)
            raise NoSuchActionError(error_message, context={"known_actions": self._actions.names()})
        return action

    def action_names(self) -> list[str]:
        return self._actions.names()

    # --- Transport ---

    def url_for(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def request(self, method: str, path: str, **kwargs: Any) -> Response:
        """Send a request and wrap the reply; transport failures raise APIRequestError."""
        url = self.url_for(path)
        kwargs.setdefault("timeout", self.timeout)
        kwargs.setdefault("verify", self.verify_ssl)
        logger.debug(f"Making {method} request to {url} ({self.name})")
        try:
            http_response = self.session.request(method=method, url=url, **kwargs)
        except RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise APIRequestError(f"{method} {url} failed: {e}", url=url, method=method) from e
        return Response(http_response)

    def close(self) -> None:
        self.session.close()


class APIManager:
    """Tracks the API under test per scenario uid."""

    def __init__(self) -> None:
        self._apis: dict[str, API] = {}
        self._lock = threading.Lock()

    @staticmethod
    def default_uid() -> str:
        return str(threading.get_ident())

    def set_api(self, api: API, uid: Optional[str] = None) -> API:
        with self._lock:
            self._apis[uid or self.default_uid()] = api
        return api

    def get_api(self, uid: Optional[str] = None) -> API:
        key = uid or self.default_uid()
        api = self._apis.get(key)
        if api is None:
            error_message = f"No API has been set for '{key}'. Set one with set_api() before using its actions."
            logger.error(error_message)
            raise NoSuchAPIError(error_message)
        return api

    def remove_api(self, uid: Optional[str] = None) -> None:
        with self._lock:
            api = self._apis.pop(uid or self.default_uid(), None)
        if api is not None:
            api.close()

    def get_action(self, action_name: str, uid: Optional[str] = None) -> Action:
        return self.get_api(uid).get_action(action_name)

    def get_action_as_get(self, action_name: str, uid: Optional[str] = None) -> GET:
        return self._typed_action(action_name, uid, GET)

    def get_action_as_post(self, action_name: str, uid: Optional[str] = None) -> POST:
        return self._typed_action(action_name, uid, POST)

    def get_action_as_put(self, action_name: str, uid: Optional[str] = None) -> PUT:
        return self._typed_action(action_name, uid, PUT)

    def get_action_as_delete(self, action_name: str, uid: Optional[str] = None) -> DELETE:
        return self._typed_action(action_name, uid, DELETE)

    def _typed_action(self, action_name: str, uid: Optional[str], kind: type[ActionT]) -> ActionT:
        action = self.get_action(action_name, uid)
        if not isinstance(action, kind):
            error_message = f"Action {normalize_name(action_name)} is a {action.method} action, not a {kind.method} action."
            logger.error(error_message)
            raise NoSuchActionError(error_message)
        return action
