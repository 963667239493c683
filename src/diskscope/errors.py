"""Exception types for diskscope."""


class DiskscopeError(Exception):
    """Base class for diskscope errors."""


class NoRootError(DiskscopeError):
    """Raised when a scan is requested before a root directory is chosen."""


class ConfigError(DiskscopeError):
    """Raised when the settings file cannot be parsed or validated."""
