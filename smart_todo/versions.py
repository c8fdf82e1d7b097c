"""Version requirements such as ">= 2.0" or "~> 1.4".

Versions are compared with ``packaging.version.Version``: numeric segments
compare as numbers and pre-releases sort before their final release, so
"10.0" > "2.0" and "2.0.0.rc1" < "2.0.0".
"""

import logging
import operator
import re
from typing import Iterable

from packaging.version import InvalidVersion, Version

from .errors import InvalidEventArgumentsError

logger = logging.getLogger(__name__)

REQUIREMENT_PATTERN = re.compile(r"^\s*(~>|~=|>=|<=|==|!=|=|>|<)?\s*(\S+)\s*$")

OPERATORS = {
    "=": operator.eq,
    "==": operator.eq,
    "!=": operator.ne,
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
}


def parse_version(value: str) -> Version | None:
    """Parse a version string, returning None if it isn't a valid version."""
    try:
        return Version(str(value))
    except InvalidVersion:
        return None


class Requirement:
    """A single operator + version constraint.

    Supports ``=``/``==``, ``!=``, ``>``, ``<``, ``>=``, ``<=`` and the
    pessimistic operator ``~>`` (also spelled ``~=``): "~> 2.1" means
    ">= 2.1, < 3.0" and "~> 2.1.3" means ">= 2.1.3, < 2.2". A bare version
    means "=".
    """

    def __init__(self, spec: str):
        match = REQUIREMENT_PATTERN.match(str(spec))
        if match is None:
            raise InvalidEventArgumentsError(f"Invalid version requirement: {spec!r}")

        self.spec = str(spec).strip()
        self.operator = match.group(1) or "="
        self.version = parse_version(match.group(2))
        if self.version is None:
            raise InvalidEventArgumentsError(f"Invalid version in requirement: {spec!r}")

        self._upper_bound = None
        if self.operator in ("~>", "~="):
            self._upper_bound = self._pessimistic_bound(self.version)

    @staticmethod
    def _pessimistic_bound(version: Version) -> Version:
        release = list(version.release)
        if len(release) > 1:
            release.pop()
        release[-1] += 1
        return Version(".".join(str(part) for part in release))

    def satisfied_by(self, version: Version) -> bool:
        if self._upper_bound is not None:
            # Pre-releases of the bound (3.0.0.rc1 for "~> 2.1") are outside the series
            release = Version(".".join(str(part) for part in version.release))
            return self.version <= version and release < self._upper_bound
        return OPERATORS[self.operator](version, self.version)

    def __str__(self) -> str:
        return self.spec

    def __repr__(self) -> str:
        return f"Requirement({self.spec!r})"


def parse_requirements(specs: Iterable[str]) -> list[Requirement]:
    """Parse requirement strings, failing on the first invalid one."""
    return [Requirement(spec) for spec in specs]


def highest_matching(versions: Iterable[str], requirements: list[Requirement]) -> str | None:
    """Return the highest version that satisfies every requirement.

    The version is returned as published (not normalized). Version strings
    that don't parse are skipped.
    """
    best = None
    best_raw = None
    for raw in versions:
        version = parse_version(raw)
        if version is None:
            logger.debug(f"Skipping unparseable version {raw!r}")
            continue
        if all(req.satisfied_by(version) for req in requirements):
            if best is None or version > best:
                best = version
                best_raw = str(raw)
    return best_raw
