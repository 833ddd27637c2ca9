"""Mountkit exception hierarchy.

Shared across config, context and middleware so every module raises
and catches the same types.
"""


class MountkitError(Exception):
    """Base for all mountkit-specific errors."""


class ConfigurationError(MountkitError):
    """Raised when mount configuration is invalid.

    Typically raised by ``MountConfig.__post_init__`` at construction time,
    before any request is handled.
    """
