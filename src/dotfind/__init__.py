"""dotfind — find files by name, path and content with dot patterns."""

__version__ = "0.1.0"


class DotfindError(Exception):
    """User-facing CLI error.

    Raised for invalid patterns, malformed filter arguments, bad
    configuration files and missing search roots. The message is
    printed to stderr and the process exits with code 1.
    """


class InvalidPatternError(DotfindError):
    """A dot pattern could not be compiled."""


class FilterPrefixError(DotfindError):
    """A filter argument lacks its ``f=``/``p=``/``c=`` marker."""


class RootTraversalError(DotfindError):
    """A search root does not exist or cannot be read."""


class ConfigError(DotfindError):
    """The configuration file is unreadable or malformed."""
