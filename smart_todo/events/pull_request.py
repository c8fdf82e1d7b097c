"""GitHub issue and pull request events."""

import logging
import os
import re
from urllib.parse import quote

from ..errors import (
    AuthenticationError,
    InvalidEventArgumentsError,
    LookupFailedError,
    ResourceNotFoundError,
)
from ..lookup import read_json
from .base import ConditionResult
from .context import EventContext
from .registry import EventRegistry

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "SMART_TODO_GITHUB_TOKEN"


def _env_suffix(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9]", "_", name).upper()


def get_token(context: EventContext, organization: str, repo: str) -> str | None:
    """Find the GitHub token to use for ``organization/repo``.

    Looks at, in order: SMART_TODO_GITHUB_TOKEN__<ORG>__<REPO>,
    SMART_TODO_GITHUB_TOKEN__<ORG>, SMART_TODO_GITHUB_TOKEN, then the
    secrets ``github.tokens.<org>`` and ``github.token``.
    """
    org_var = f"{TOKEN_ENV_VAR}__{_env_suffix(organization)}"
    for var in (f"{org_var}__{_env_suffix(repo)}", org_var, TOKEN_ENV_VAR):
        token = os.environ.get(var)
        if token:
            return token

    tokens = context.get_secret("github.tokens", {})
    if isinstance(tokens, dict) and tokens.get(organization):
        return tokens[organization]
    return context.get_secret("github.token") or None


def _get_headers(token: str | None) -> dict[str, str]:
    """Get headers for GitHub API requests."""
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _parse_number(number: int | str) -> int:
    if isinstance(number, bool):
        raise InvalidEventArgumentsError(f"Invalid issue/PR number: {number!r}")
    if isinstance(number, int):
        value = number
    elif isinstance(number, str) and number.strip().lstrip("#").isdigit():
        value = int(number.strip().lstrip("#"))
    else:
        raise InvalidEventArgumentsError(f"Invalid issue/PR number: {number!r}")
    if value <= 0:
        raise InvalidEventArgumentsError(f"Invalid issue/PR number: {number!r}")
    return value


@EventRegistry.register("pull_request_close")
def pull_request_close(
    context: EventContext,
    organization: str,
    repo: str,
    pr_number: int | str,
) -> ConditionResult:
    """Check if the pull request or issue ``pr_number`` is closed.

    Uses the issues endpoint, which serves pull requests as well; a merged
    pull request is reported there as closed.
    """
    if not (isinstance(organization, str) and organization and isinstance(repo, str) and repo):
        raise InvalidEventArgumentsError("Organization and repository are required")
    number = _parse_number(pr_number)

    url = (
        f"{context.github_api_url.rstrip('/')}/repos/"
        f"{quote(organization, safe='')}/{quote(repo, safe='')}/issues/{number}"
    )
    description = f"GitHub lookup for {organization}/{repo}#{number}"
    token = get_token(context, organization, repo)
    response = context.lookup_client().get(url, headers=_get_headers(token), description=description)

    if response.status_code in (401, 403):
        raise AuthenticationError(
            f"GitHub refused access to {organization}/{repo}#{number} "
            f"(HTTP {response.status_code}); check {TOKEN_ENV_VAR}"
        )
    if response.status_code == 404:
        hint = "" if token else f" (no token set; private repos need {TOKEN_ENV_VAR})"
        raise ResourceNotFoundError(f"{organization}/{repo}#{number} was not found{hint}")
    if response.status_code >= 400:
        raise LookupFailedError(f"{description} failed (HTTP {response.status_code})")

    data = read_json(response, description)
    state = data.get("state") if isinstance(data, dict) else None
    if state == "closed":
        return ConditionResult.met_with(
            f"Issue/PR #{number} in {organization}/{repo} is closed."
        )
    if state == "open":
        return ConditionResult.not_met()
    raise LookupFailedError(f"{description} returned an unknown state: {state!r}")


EventRegistry.alias("pull_request_close", "issue_close")
