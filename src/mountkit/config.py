"""Mount configuration.

MountConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from mountkit.errors import ConfigurationError

# Characters that would make the route marker ambiguous inside a query string
_RESERVED_ROUTE_CHARS = frozenset("=?/&#")


@dataclass(frozen=True, slots=True)
class MountConfig:
    """How the base path is discovered and how internal URLs are shaped.

    All fields have sensible defaults. Override what you need::

        # WSGI/ASGI: SCRIPT_NAME / root_path is already the mount directory
        config = MountConfig(script_is_file=False)
    """

    # Server variable holding the entry script path (CGI / WSGI naming)
    script_var: str = "SCRIPT_NAME"

    # True when script_var names a file (``/app/index.php``), so the
    # mount directory is its dirname. False when it is the mount itself.
    script_is_file: bool = True

    # Query key that carries the internal route: ``/?p=admin/pages``
    route_param: str = "p"

    def __post_init__(self) -> None:
        if not self.script_var:
            msg = "script_var must be a non-empty server variable name"
            raise ConfigurationError(msg)
        if not self.route_param:
            msg = "route_param must be a non-empty query key"
            raise ConfigurationError(msg)
        bad = sorted(_RESERVED_ROUTE_CHARS.intersection(self.route_param))
        if bad:
            msg = f"route_param {self.route_param!r} contains reserved characters: {''.join(bad)}"
            raise ConfigurationError(msg)
