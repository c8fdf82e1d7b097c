"""Registry mapping event names to checkers."""

import inspect
import logging
from typing import Any, Callable, Sequence

from ..errors import (
    InvalidConditionResultError,
    InvalidEventArgumentsError,
    UnknownEventError,
)
from .base import ConditionResult, EventChecker
from .context import EventContext

logger = logging.getLogger(__name__)


class EventRegistry:
    """Registry for event checkers.

    This registry maps event names used in TODO annotations (e.g. "date",
    "gem_release") to checker functions. Host applications add their own
    events by registering under a new name; registering under an existing
    name replaces the previous checker (last write wins).

    Usage:
        # Register an event
        @EventRegistry.register("trello_card_close")
        def trello_card_close(context: EventContext, card_id) -> ConditionResult:
            ...

        # Evaluate it for an annotation like TODO(on: trello_card_close(381), ...)
        result = EventRegistry.resolve_and_invoke("trello_card_close", [381])
        if result.met:
            notify(result.message)
    """

    _events: dict[str, EventChecker] = {}
    # alias name -> name it resolves through
    _aliases: dict[str, str] = {}

    @classmethod
    def register(
        cls,
        name: str,
        checker: EventChecker | None = None,
    ) -> Callable[[EventChecker], EventChecker] | EventChecker:
        """Bind ``name`` to ``checker``.

        Can be called directly, ``EventRegistry.register("x", check_x)``, or
        used as a decorator, ``@EventRegistry.register("x")``.
        """

        def decorator(func: EventChecker) -> EventChecker:
            if not callable(func):
                raise TypeError(f"Checker for event '{name}' is not callable")
            if name in cls._events or name in cls._aliases:
                logger.debug(f"Event '{name}' re-registered")
            cls._aliases.pop(name, None)
            cls._events[name] = func
            return func

        if checker is not None:
            return decorator(checker)
        return decorator

    @classmethod
    def alias(cls, existing_name: str, new_name: str) -> None:
        """Make ``new_name`` resolve to the same checker as ``existing_name``.

        The alias follows the existing name, so re-registering the existing
        name also changes what the alias resolves to.

        Raises:
            UnknownEventError: If existing_name is not registered
            ValueError: If existing_name already resolves through new_name
        """
        if not cls.is_registered(existing_name):
            raise UnknownEventError(existing_name)
        if new_name in cls._alias_chain(existing_name):
            raise ValueError(f"Aliasing '{new_name}' to '{existing_name}' would be circular")
        cls._events.pop(new_name, None)
        cls._aliases[new_name] = existing_name

    @classmethod
    def _alias_chain(cls, name: str) -> list[str]:
        chain = [name]
        while name in cls._aliases:
            name = cls._aliases[name]
            chain.append(name)
        return chain

    @classmethod
    def _canonical_name(cls, name: str) -> str:
        return cls._alias_chain(name)[-1]

    @classmethod
    def get(cls, name: str) -> EventChecker | None:
        """Get the checker for an event name, following aliases."""
        return cls._events.get(cls._canonical_name(name))

    @classmethod
    def resolve_and_invoke(
        cls,
        name: str,
        args: Sequence[Any] = (),
        context: EventContext | None = None,
    ) -> ConditionResult:
        """Evaluate the event ``name`` with the annotation's arguments.

        Args:
            name: The event name from the annotation
            args: The annotation's arguments, in order
            context: Collaborators for the checker; defaults to EventContext()

        Returns:
            The checker's ConditionResult, unchanged

        Raises:
            UnknownEventError: If name is not registered
            InvalidEventArgumentsError: If args don't fit the checker's arity
            InvalidConditionResultError: If the checker returns anything else
            LookupFailedError: Propagated from network-backed checkers
        """
        checker = cls.get(name)
        if checker is None:
            raise UnknownEventError(name)

        if context is None:
            context = EventContext()

        args = tuple(args)
        try:
            inspect.signature(checker).bind(context, *args)
        except TypeError as e:
            raise InvalidEventArgumentsError(f"{name}{args!r}: {e}") from e
        except ValueError:
            # Builtins without an introspectable signature; let the call decide
            pass

        result = checker(context, *args)
        if not isinstance(result, ConditionResult):
            raise InvalidConditionResultError(
                f"Event '{name}' returned {type(result).__name__}, expected ConditionResult"
            )

        logger.debug(f"Event {name}{args!r} evaluated: met={result.met}")
        return result

    @classmethod
    def list_events(cls) -> list[str]:
        """List all registered event names, aliases included."""
        return list(cls._events.keys()) + list(cls._aliases.keys())

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if an event name resolves to a checker."""
        return cls.get(name) is not None

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove an event name or alias."""
        cls._events.pop(name, None)
        cls._aliases.pop(name, None)

    @classmethod
    def clear(cls) -> None:
        """Clear all registered events.

        Primarily useful for testing.
        """
        cls._events.clear()
        cls._aliases.clear()


register = EventRegistry.register
alias = EventRegistry.alias
resolve_and_invoke = EventRegistry.resolve_and_invoke
