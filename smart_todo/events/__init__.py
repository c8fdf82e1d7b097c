"""Events that can be used in smart_todo annotations.

An annotation names an event and its arguments, for example
``TODO(on: gem_release("rails", ">= 8.0"), to: "dev@example.com")``.
The driver that scanned the annotation evaluates it through the registry:

    from smart_todo.events import EventContext, EventRegistry

    context = EventContext.from_config(get_config())
    result = EventRegistry.resolve_and_invoke("gem_release", ["rails", ">= 8.0"], context)
    if result.met:
        notify(assignee, result.message)

Built-in events:
    date(date)                                  the date has passed
    gem_release(gem, *requirements)             a matching gem version exists
    pypi_release(package, *requirements)        a matching PyPI release exists
    pull_request_close(org, repo, number)       the issue/PR is closed
    issue_close(org, repo, number)              alias of pull_request_close
    python_version(*requirements)               the interpreter version matches

Adding new events:
    1. Write a function taking (context, *args) and returning a ConditionResult
    2. Register it at startup, before evaluating annotations:
       @EventRegistry.register("trello_card_close")
       def trello_card_close(context, card_id):
           ...
    Registering an existing name replaces the built-in checker.
"""

from .base import ConditionResult, EventChecker
from .context import EventContext
from .registry import EventRegistry, alias, register, resolve_and_invoke

# Import event modules to trigger registration
from . import date  # date
from . import package_release  # gem_release, pypi_release
from . import pull_request  # pull_request_close, issue_close
from . import python_version  # python_version

__all__ = [
    "ConditionResult",
    "EventChecker",
    "EventContext",
    "EventRegistry",
    "alias",
    "register",
    "resolve_and_invoke",
]
