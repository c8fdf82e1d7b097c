"""Result type and protocol shared by all event checkers."""

from dataclasses import dataclass
from typing import Any, Protocol

from .context import EventContext


@dataclass(frozen=True)
class ConditionResult:
    """Outcome of evaluating an event.

    Either the condition isn't met yet (``met`` is False, no message), or it
    is met and ``message`` is ready to be sent to the TODO assignee.
    """

    met: bool
    message: str = ""

    @classmethod
    def met_with(cls, message: str) -> "ConditionResult":
        return cls(met=True, message=message)

    @classmethod
    def not_met(cls) -> "ConditionResult":
        return cls(met=False)

    def __bool__(self) -> bool:
        return self.met


class EventChecker(Protocol):
    """Protocol for event checkers.

    A checker receives the EventContext followed by the annotation's
    arguments, e.g. ``gem_release(context, "rails", ">= 8.0")``, and returns
    a ConditionResult. Expected "not yet" states are ``not_met()``; failed
    lookups raise a LookupFailedError.
    """

    def __call__(self, context: EventContext, *args: Any) -> ConditionResult:
        ...
