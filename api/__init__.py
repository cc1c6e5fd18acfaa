"""API Integration Package.

Provides the HTTP side of the framework:
- response: single-read response wrapper
- actions: GET/POST/PUT/DELETE request definitions
- api_manager: API objects and the per-scenario API manager
"""

from api.actions import DELETE, GET, POST, PUT, Action
from api.api_manager import API, APIManager
from api.response import Response

__all__ = [
    "API",
    "DELETE",
    "GET",
    "POST",
    "PUT",
    "APIManager",
    "Action",
    "Response",
]
