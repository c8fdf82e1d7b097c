"""Python version event: met once the running interpreter matches."""

import platform

from ..errors import InvalidEventArgumentsError
from ..versions import highest_matching, parse_requirements
from .base import ConditionResult
from .context import EventContext
from .registry import EventRegistry


@EventRegistry.register("python_version")
def python_version(context: EventContext, *requirements: str) -> ConditionResult:
    """Check if the running Python version satisfies all ``requirements``.

    Useful for TODOs like "drop this shim once we're on 3.13".
    """
    if not requirements:
        raise InvalidEventArgumentsError("At least one version requirement is needed")
    parsed = parse_requirements(requirements)

    current = platform.python_version()
    if highest_matching([current], parsed) is None:
        return ConditionResult.not_met()
    return ConditionResult.met_with(
        f"The running Python version {current} matches {', '.join(str(r) for r in parsed)}."
    )
