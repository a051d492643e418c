"""Configuration-related exceptions for the RAG chat service."""

from .validation import InvalidArgumentError


class ConfigurationError(InvalidArgumentError):
    """Configuration or environment variable errors.

    Raised when required configuration is missing or invalid.
    """

    error_code = "RC_CFG_001"


class MissingConfigurationError(ConfigurationError):
    """One or more required settings are not set."""

    error_code = "RC_CFG_002"
