"""Exception types raised by the minifier."""


class MinifierError(Exception):
    """Base class for minifier failures that are not plain I/O errors."""


class ConfigError(MinifierError):
    """Invalid run configuration (bad attribute list, worker count, ...)."""
