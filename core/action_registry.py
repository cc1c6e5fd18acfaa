"""
core/action_registry.py - Named Factory Registry

Maps human-readable names ("create user", "Get Orders") to the callables that
build the matching object. Step definitions look things up by the phrase used
in the feature file, so names are normalised before every lookup: trimmed,
lower-cased, and runs of whitespace collapsed to a single underscore.

Registries are populated explicitly at startup; nothing is discovered by
reflection at lookup time.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_name(name: str) -> str:
    """Normalise a human-readable name into a registry key."""
    return _WHITESPACE_RUN.sub("_", name.strip()).lower()


@dataclass()
class RegistryEntry(Generic[T]):
    """A registered factory and the name it was registered under."""

    key: str
    display_name: str
    factory: Callable[..., T]


class ActionRegistry(Generic[T]):
    """
    Registry of name -> factory.

    Duplicate registrations raise ValueError so two definitions can never
    silently shadow each other.
    """

    def __init__(self, kind: str = "action") -> None:
        self.kind = kind
        self._entries: dict[str, RegistryEntry[T]] = {}

    @staticmethod
    def normalize_name(name: str) -> str:
        return normalize_name(name)

    def register(self, name: str, factory: Callable[..., T]) -> None:
        """Register a new factory under ``name``."""
        key = normalize_name(name)
        if not key:
            raise ValueError(f"Cannot register {self.kind} with an empty name")
        if key in self._entries:
            raise ValueError(f"{self.kind.capitalize()} '{key}' already registered")

        self._entries[key] = RegistryEntry(key=key, display_name=name, factory=factory)
        logger.debug(f"Registered {self.kind} '{key}'")

    def get(self, name: str) -> Optional[Callable[..., T]]:
        """Get the factory registered under ``name``, or None."""
        entry = self._entries.get(normalize_name(name))
        return entry.factory if entry else None

    def create(self, name: str, *args: Any, **kwargs: Any) -> Optional[T]:
        """Build a fresh object from the factory registered under ``name``."""
        factory = self.get(name)
        if factory is None:
            logger.debug(f"No {self.kind} registered as '{normalize_name(name)}'")
            return None
        return factory(*args, **kwargs)

    def display_name(self, name: str) -> Optional[str]:
        entry = self._entries.get(normalize_name(name))
        return entry.display_name if entry else None

    def names(self) -> list[str]:
        """Registered keys in registration order."""
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
