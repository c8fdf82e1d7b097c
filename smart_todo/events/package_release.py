"""Package release events: met once a matching version is published."""

import logging
from typing import Callable
from urllib.parse import quote

import httpx

from ..errors import (
    InvalidEventArgumentsError,
    LookupFailedError,
    PackageNotFoundError,
    PackageRegistryUnavailableError,
    TransientLookupError,
)
from ..lookup import read_json
from ..versions import highest_matching, parse_requirements
from .base import ConditionResult
from .context import EventContext
from .registry import EventRegistry

logger = logging.getLogger(__name__)


def _fetch(context: EventContext, url: str, package: str, registry: str) -> httpx.Response:
    """GET a registry URL, mapping failures to package errors."""
    description = f"{registry} lookup for {package}"
    try:
        response = context.lookup_client().get(url, description=description)
    except TransientLookupError as e:
        raise PackageRegistryUnavailableError(
            f"Can't tell if {package} exists: {registry} is unreachable ({e})"
        ) from e

    if response.status_code >= 400:
        raise PackageNotFoundError(
            f"The package {package} doesn't seem to exist on {registry} "
            f"(HTTP {response.status_code})"
        )
    return response


def fetch_rubygems_versions(context: EventContext, package: str) -> list[str]:
    """Get all published version numbers of a gem from RubyGems."""
    url = f"{context.rubygems_url.rstrip('/')}/api/v1/versions/{quote(package, safe='')}.json"
    response = _fetch(context, url, package, "RubyGems")

    data = read_json(response, f"RubyGems lookup for {package}")
    if not isinstance(data, list):
        raise LookupFailedError(f"RubyGems lookup for {package} returned an unexpected payload")
    return [str(entry["number"]) for entry in data if isinstance(entry, dict) and "number" in entry]


def fetch_pypi_versions(context: EventContext, package: str) -> list[str]:
    """Get all published version numbers of a project from PyPI."""
    url = f"{context.pypi_url.rstrip('/')}/pypi/{quote(package, safe='')}/json"
    response = _fetch(context, url, package, "PyPI")

    data = read_json(response, f"PyPI lookup for {package}")
    releases = data.get("releases") if isinstance(data, dict) else None
    if not isinstance(releases, dict):
        raise LookupFailedError(f"PyPI lookup for {package} returned an unexpected payload")
    return list(releases.keys())


def check_release(
    context: EventContext,
    package: str,
    requirements: tuple[str, ...],
    fetch_versions: Callable[[EventContext, str], list[str]],
) -> ConditionResult:
    """Check whether ``package`` has a release matching all ``requirements``."""
    if not package or not isinstance(package, str):
        raise InvalidEventArgumentsError(f"Invalid package name: {package!r}")
    if not requirements:
        raise InvalidEventArgumentsError(
            f"At least one version requirement is needed for {package}"
        )
    parsed = parse_requirements(requirements)
    wanted = ", ".join(str(r) for r in parsed)

    versions = fetch_versions(context, package)
    version = highest_matching(versions, parsed)
    if version is None:
        logger.debug(f"No release of {package} matches {wanted}")
        return ConditionResult.not_met()

    return ConditionResult.met_with(
        f"A new version of {package} matching {wanted} was released: {version}."
    )


@EventRegistry.register("gem_release")
def gem_release(context: EventContext, gem_name: str, *requirements: str) -> ConditionResult:
    """Check if a version of ``gem_name`` matching ``requirements`` was released."""
    return check_release(context, gem_name, requirements, fetch_rubygems_versions)


@EventRegistry.register("pypi_release")
def pypi_release(context: EventContext, package: str, *requirements: str) -> ConditionResult:
    """Check if a version of ``package`` matching ``requirements`` is on PyPI."""
    return check_release(context, package, requirements, fetch_pypi_versions)
