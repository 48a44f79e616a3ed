"""Client configuration for gaxios.

A ClientConfig is an immutable value attached to a Client at construction
time. It can be built directly, from a plain dictionary, or from a YAML file.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from ..exceptions import ConfigurationError

CONFIG_KEYS = ("headers", "base_url", "query", "timeout")


def _normalize_headers(headers: Mapping[str, Any]) -> Mapping[str, tuple[str, ...]]:
    normalized: dict[str, tuple[str, ...]] = {}
    for name, value in headers.items():
        if isinstance(value, str):
            normalized[name] = (value,)
        elif isinstance(value, Sequence):
            normalized[name] = tuple(str(v) for v in value)
        else:
            raise ConfigurationError(
                f"header value must be a string or a list of strings, got {type(value).__name__}",
                config_key=f"headers.{name}",
            )
    return MappingProxyType(normalized)


@dataclass(frozen=True)
class ClientConfig:
    """Shared, read-only configuration applied to every request of a Client."""

    headers: Mapping[str, Any] = field(default_factory=dict)
    base_url: str = ""
    query: Mapping[str, Any] = field(default_factory=dict)
    timeout: float = 0
    transport: Any = None

    def __post_init__(self):
        timeout = self.timeout or 0
        if timeout < 0:
            raise ConfigurationError("timeout must not be negative", config_key="timeout")

        # frozen dataclass: bypass __setattr__ to store the read-only views
        object.__setattr__(self, "timeout", timeout)
        object.__setattr__(self, "headers", _normalize_headers(self.headers or {}))
        object.__setattr__(
            self,
            "query",
            MappingProxyType({str(k): str(v) for k, v in (self.query or {}).items()}),
        )
        object.__setattr__(self, "base_url", self.base_url or "")

    def __hash__(self):
        # the read-only mapping views are unhashable themselves
        return hash(
            (
                tuple(self.headers.items()),
                self.base_url,
                tuple(self.query.items()),
                self.timeout,
                self.transport,
            )
        )

    @property
    def request_timeout(self) -> float | None:
        """Timeout handed to the transport; 0 means no timeout."""
        return self.timeout or None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClientConfig":
        """
        Build a config from a plain dictionary.

        Args:
            data: Mapping with any of the keys headers, base_url, query, timeout

        Returns:
            ClientConfig instance

        Raises:
            ConfigurationError: If an unknown key or a wrongly typed value is present
        """
        for key in data:
            if key not in CONFIG_KEYS:
                raise ConfigurationError("unknown configuration key", config_key=str(key))

        headers = data.get("headers") or {}
        query = data.get("query") or {}
        if not isinstance(headers, Mapping):
            raise ConfigurationError("must be a mapping", config_key="headers")
        if not isinstance(query, Mapping):
            raise ConfigurationError("must be a mapping", config_key="query")

        timeout = data.get("timeout", 0) or 0
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise ConfigurationError("must be a number of seconds", config_key="timeout")

        return cls(
            headers=headers,
            base_url=str(data.get("base_url") or ""),
            query=query,
            timeout=timeout,
        )

    def get(self, path: str, default: Any = None) -> Any:
        """Get a configuration value using dot notation.

        Args:
            path: Dot-separated path to the config value (e.g., "headers.Accept")
            default: Default value to return if path is not found

        Returns:
            The configuration value or default if not found

        Example:
            >>> ClientConfig(headers={"Accept": "application/json"}).get("headers.Accept")
            ('application/json',)
        """
        value: Any = {
            "headers": self.headers,
            "base_url": self.base_url,
            "query": self.query,
            "timeout": self.timeout,
            "transport": self.transport,
        }

        for part in path.split("."):
            if isinstance(value, Mapping) and part in value:
                value = value[part]
            else:
                return default

        return value


def load_config(path: Path | str) -> ClientConfig:
    """
    Load a client configuration from a YAML file.

    Args:
        path: Path to a YAML document with headers/base_url/query/timeout keys

    Returns:
        ClientConfig instance

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the document is not a mapping or holds invalid values
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    with open(config_path, encoding="utf-8") as f:
        loaded_config = yaml.safe_load(f)

    # An empty document means "all defaults"
    if loaded_config is None:
        return ClientConfig()

    if not isinstance(loaded_config, dict):
        raise ConfigurationError(
            f"config file {config_path.name} must contain a dictionary, "
            f"got {type(loaded_config).__name__}"
        )

    return ClientConfig.from_dict(loaded_config)
