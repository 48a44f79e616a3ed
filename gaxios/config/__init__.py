"""Configuration module for building and loading client settings."""

from gaxios.exceptions import ConfigurationError

from .loader import ClientConfig, load_config

__all__ = ["ClientConfig", "ConfigurationError", "load_config"]
