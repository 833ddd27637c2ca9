"""Mountkit: HTML escaping and mount-aware URL helpers.

For server-rendered apps that may be deployed under a sub-directory
(``/centre/public`` rather than ``/``).

Basic usage::

    from mountkit import asset, bind, e, url

    with bind({"SCRIPT_NAME": "/centre/public/index.php"}):
        asset("assets/css/app.css")  # "/centre/public/assets/css/app.css"
        url("admin/pages")           # "/centre/public/?p=admin/pages"
        e("<b>")                     # "&lt;b&gt;"

Behind a WSGI or ASGI server, wrap the app with ``WSGIBasePathMiddleware``
or ``BasePathMiddleware`` instead of calling ``bind()`` yourself.
"""

__version__ = "0.1.0"
__all__ = [
    "BasePathMiddleware",
    "ConfigurationError",
    "Mount",
    "MountConfig",
    "MountkitError",
    "WSGIBasePathMiddleware",
    "asset",
    "base_path",
    "bind",
    "current_mount",
    "e",
    "register_helpers",
    "resolve_base_path",
    "url",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import mountkit`` from pulling in kida until a helper that
    needs it is used.
    """
    if name == "e":
        from mountkit.escape import e

        return e

    if name in ("asset", "base_path", "resolve_base_path", "url"):
        from mountkit import paths as _paths

        return getattr(_paths, name)

    if name in ("Mount", "bind", "current_mount"):
        from mountkit import context as _context

        return getattr(_context, name)

    if name == "MountConfig":
        from mountkit.config import MountConfig

        return MountConfig

    if name in ("ConfigurationError", "MountkitError"):
        from mountkit import errors as _errors

        return getattr(_errors, name)

    if name in ("BasePathMiddleware", "WSGIBasePathMiddleware"):
        from mountkit import middleware as _middleware

        return getattr(_middleware, name)

    if name == "register_helpers":
        from mountkit.templating import register_helpers

        return register_helpers

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
