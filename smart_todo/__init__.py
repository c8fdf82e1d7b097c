"""Conditional TODO annotations: evaluate the event a TODO is waiting on."""

from .config import Config, get_config
from .errors import (
    AuthenticationError,
    InvalidConditionResultError,
    InvalidDateFormatError,
    InvalidEventArgumentsError,
    LookupFailedError,
    PackageNotFoundError,
    PackageRegistryUnavailableError,
    ResourceNotFoundError,
    SmartTodoError,
    TransientLookupError,
    UnknownEventError,
)
from .events import (
    ConditionResult,
    EventContext,
    EventRegistry,
    alias,
    register,
    resolve_and_invoke,
)
from .log import setup_logging

__version__ = "0.1.0"

__all__ = [
    "AuthenticationError",
    "ConditionResult",
    "Config",
    "EventContext",
    "EventRegistry",
    "InvalidConditionResultError",
    "InvalidDateFormatError",
    "InvalidEventArgumentsError",
    "LookupFailedError",
    "PackageNotFoundError",
    "PackageRegistryUnavailableError",
    "ResourceNotFoundError",
    "SmartTodoError",
    "TransientLookupError",
    "UnknownEventError",
    "alias",
    "get_config",
    "register",
    "resolve_and_invoke",
    "setup_logging",
]
