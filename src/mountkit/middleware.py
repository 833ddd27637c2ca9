"""Middleware that binds the request's mount before the app runs.

Wrap the application once; every request then sees its own base path
through ``base_path()``, ``asset()`` and ``url()``::

    app = BasePathMiddleware(app)            # ASGI
    application = WSGIBasePathMiddleware(application)  # WSGI

In both protocols the server already reports the mount directory itself
(ASGI ``root_path``, WSGI ``SCRIPT_NAME``), so the default config has
``script_is_file=False``.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable, Iterator, MutableMapping
from contextvars import Context, copy_context
from typing import Any, TypeAlias

from mountkit.config import MountConfig
from mountkit.context import Mount, bind, mount_var

logger = logging.getLogger("mountkit.middleware")

Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]
ASGIApp: TypeAlias = Callable[[Scope, Receive, Send], Awaitable[None]]

WSGIApp: TypeAlias = Callable[[dict[str, Any], Callable[..., Any]], Iterable[bytes]]

ENVIRON_KEY = "mountkit.mount"
"""WSGI environ key under which the request's ``Mount`` is stored."""

_MOUNTED_SCOPES = frozenset({"http", "websocket"})


def _default_config() -> MountConfig:
    return MountConfig(script_is_file=False)


class BasePathMiddleware:
    """ASGI middleware that binds a ``Mount`` from ``scope["root_path"]``.

    Only ``http`` and ``websocket`` scopes are bound; ``lifespan`` passes
    straight through. The mount is also stored in ``scope["state"]`` so
    code that runs outside the request task can pass it explicitly.
    """

    __slots__ = ("_app", "_config")

    def __init__(self, app: ASGIApp, config: MountConfig | None = None) -> None:
        self._app = app
        self._config = config if config is not None else _default_config()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in _MOUNTED_SCOPES:
            await self._app(scope, receive, send)
            return

        environ = {self._config.script_var: scope.get("root_path", "")}
        with bind(environ, self._config) as mount:
            logger.debug("Bound %r for %s %s", mount, scope["type"], scope.get("path", ""))
            scope.setdefault("state", {})[ENVIRON_KEY] = mount
            await self._app(scope, receive, send)


class _BoundBody:
    """Response iterable that produces each chunk inside the request context.

    WSGI servers iterate the body after the application call returns, so
    generator bodies would otherwise run with no mount bound.
    """

    __slots__ = ("_close", "_context", "_iterator")

    def __init__(self, body: Iterable[bytes], context: Context) -> None:
        self._context = context
        self._iterator: Iterator[bytes] = context.run(iter, body)
        self._close: Callable[[], Any] | None = getattr(body, "close", None)

    def __iter__(self) -> Iterator[bytes]:
        return self

    def __next__(self) -> bytes:
        return self._context.run(next, self._iterator)

    def close(self) -> None:
        if self._close is not None:
            self._context.run(self._close)


class WSGIBasePathMiddleware:
    """WSGI middleware that binds a ``Mount`` over the request environ.

    The binding covers the application call and the iteration of the
    response body, including ``close()``. The mount is also stored at
    ``environ["mountkit.mount"]`` for code that runs elsewhere.
    """

    __slots__ = ("_app", "_config")

    def __init__(self, app: WSGIApp, config: MountConfig | None = None) -> None:
        self._app = app
        self._config = config if config is not None else _default_config()

    def __call__(self, environ: dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
        mount = Mount(environ, self._config)
        logger.debug("Bound %r for %s", mount, environ.get("PATH_INFO", ""))
        environ[ENVIRON_KEY] = mount

        # Private copy: the binding lives as long as the body, not the call
        context = copy_context()
        context.run(mount_var.set, mount)
        body = context.run(self._app, environ, start_response)
        return _BoundBody(body, context)
