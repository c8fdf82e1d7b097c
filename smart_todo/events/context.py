"""Context object handed to every event checker."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

import httpx

from ..config import DEFAULT_CONFIG, Config
from ..lookup import LookupClient


@dataclass
class EventContext:
    """Collaborators shared by the checkers during one scan.

    This provides checkers with access to:
    - The clock (overridable for tests)
    - Registry and API endpoints
    - Timeout/retry settings and an optional HTTP transport
    - Secrets from the config file (API tokens)
    """

    github_api_url: str = DEFAULT_CONFIG["github"]["api_url"]
    rubygems_url: str = DEFAULT_CONFIG["registries"]["rubygems"]
    pypi_url: str = DEFAULT_CONFIG["registries"]["pypi"]

    # Timeout and retry settings for LookupClient
    http: dict[str, Any] = field(default_factory=dict)

    # Credentials from the config's secrets section
    secrets: dict[str, Any] = field(default_factory=dict)

    # Returns "now"; defaults to the local wall clock
    clock: Callable[[], datetime] | None = None

    # Replaces the network layer, e.g. httpx.MockTransport in tests
    transport: httpx.BaseTransport | None = None

    @classmethod
    def from_config(cls, config: Config, **overrides: Any) -> "EventContext":
        """Build a context from a loaded Config."""
        values = {
            "github_api_url": config.github_api_url,
            "rubygems_url": config.rubygems_url,
            "pypi_url": config.pypi_url,
            "http": config.http_settings,
            "secrets": config.secrets,
        }
        values.update(overrides)
        return cls(**values)

    def now(self) -> datetime:
        """Sample the clock once."""
        if self.clock is not None:
            return self.clock()
        return datetime.now()

    def lookup_client(self) -> LookupClient:
        """Create a LookupClient using this context's HTTP settings."""
        return LookupClient(self.http, transport=self.transport)

    def get_secret(self, path: str, default: Any = None) -> Any:
        """Get a secret by dot-separated path.

        Example:
            context.get_secret('github.token')
            context.get_secret('github.tokens.my-org', default='')
        """
        keys = path.split(".")
        value = self.secrets
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value
