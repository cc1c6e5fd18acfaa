"""
Core Package - Framework Infrastructure.

Components:
- exceptions: SentinelError hierarchy raised across the framework
- error_handling: safe_execute decorator and ErrorContext
- action_registry: name -> factory registry used for pages and API actions
- browser_manager: WebDriver lifecycle (start, verify, close)
"""

# Version information
__version__ = "1.0.0"

from .error_handling import ErrorContext, safe_execute
from .exceptions import SentinelError

__all__ = [
    "ErrorContext",
    "SentinelError",
    "safe_execute",
]
