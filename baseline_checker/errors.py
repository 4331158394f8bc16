"""
Exception hierarchy for the baseline compatibility checker.
"""


class BaselineCheckerError(Exception):
    """Base class for all checker errors."""


class RegistryError(BaselineCheckerError):
    """The feature dataset is missing, unreadable or malformed."""


class ConfigError(BaselineCheckerError):
    """A configuration file or value could not be used."""
