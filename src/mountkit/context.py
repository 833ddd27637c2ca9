"""Request-scoped mount via ContextVar.

Provides:
- ``Mount``: server variables + config, with the base path memoized.
- ``bind()``: make a fresh ``Mount`` current for one request.
- ``current_mount()``: the bound mount, or the process-wide fallback.

Middleware calls ``bind()`` once per request so the base path is computed
at most once per request and never leaks across requests. Code running
without any binding (a CGI script, a one-off render) falls back to a
process-wide mount over ``os.environ``.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    threads. No locks needed.
"""

import logging
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar

from mountkit.config import MountConfig

logger = logging.getLogger("mountkit.context")


class Mount:
    """Where the application is mounted for one request.

    Attributes:
        environ: Server variables (CGI / WSGI style), e.g. ``SCRIPT_NAME``.
        config: How to read them.

    The base path is computed on first access and reused afterwards.
    """

    __slots__ = ("_base_path", "config", "environ")

    def __init__(self, environ: Mapping[str, str], config: MountConfig | None = None) -> None:
        self.environ = environ
        self.config = config if config is not None else MountConfig()
        self._base_path: str | None = None

    @property
    def script_name(self) -> str:
        """The raw script path, ``""`` when the server did not set it."""
        return self.environ.get(self.config.script_var) or ""

    @property
    def base_path(self) -> str:
        """Mount prefix without trailing slash, ``""`` at the server root."""
        if self._base_path is None:
            # Local import: paths imports this module for current_mount()
            from mountkit.paths import resolve_base_path

            self._base_path = resolve_base_path(
                self.script_name,
                script_is_file=self.config.script_is_file,
            )
            logger.debug(
                "Resolved base path %r from %s=%r",
                self._base_path,
                self.config.script_var,
                self.script_name,
            )
        return self._base_path

    def __repr__(self) -> str:
        return f"<Mount {self.config.script_var}={self.script_name!r}>"


mount_var: ContextVar[Mount] = ContextVar("mountkit_mount")
"""The current request's mount. Set by ``bind()``."""

_process_mount: Mount | None = None


def current_mount() -> Mount:
    """Return the mount bound to this request, or the process-wide one.

    The process-wide mount reads ``os.environ`` and is created on first
    use, so its base path is computed once per process.
    """
    global _process_mount
    try:
        return mount_var.get()
    except LookupError:
        pass
    if _process_mount is None:
        _process_mount = Mount(os.environ)
    return _process_mount


@contextmanager
def bind(environ: Mapping[str, str], config: MountConfig | None = None) -> Iterator[Mount]:
    """Make a fresh ``Mount`` current for the enclosed block.

    Usage::

        with bind({"SCRIPT_NAME": "/centre/public/index.php"}) as mount:
            mount.base_path   # "/centre/public"
            asset("app.css")  # "/centre/public/app.css"

    The previous mount (if any) is restored on exit.
    """
    mount = Mount(environ, config)
    token = mount_var.set(mount)
    try:
        yield mount
    finally:
        mount_var.reset(token)
