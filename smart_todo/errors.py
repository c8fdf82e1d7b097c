"""Exceptions raised while resolving and evaluating events.

A condition that simply isn't met yet is never an error; checkers return
``ConditionResult.not_met()`` for that. Everything here is an operational
failure the driver has to see.
"""


class SmartTodoError(Exception):
    """Base class for all smart_todo errors."""


class UnknownEventError(SmartTodoError):
    """No checker is registered under the requested event name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown event: {name}")


class InvalidEventArgumentsError(SmartTodoError):
    """The annotation passed arguments the checker can't accept."""


class InvalidDateFormatError(InvalidEventArgumentsError):
    """The date argument couldn't be parsed."""


class InvalidConditionResultError(SmartTodoError):
    """A checker returned something other than a ConditionResult."""


class LookupFailedError(SmartTodoError):
    """An external lookup failed, so the condition couldn't be evaluated."""


class PackageNotFoundError(LookupFailedError):
    """The package registry doesn't know the requested package."""


class ResourceNotFoundError(LookupFailedError):
    """The code-hosting API doesn't know the repository or issue number."""


class AuthenticationError(LookupFailedError):
    """Credentials were required and were missing or rejected."""


class TransientLookupError(LookupFailedError):
    """The lookup kept failing after all retries were used."""


class PackageRegistryUnavailableError(PackageNotFoundError, TransientLookupError):
    """The package registry stayed unreachable, so the package can't be found.

    Caught by handlers for either PackageNotFoundError or TransientLookupError.
    """
