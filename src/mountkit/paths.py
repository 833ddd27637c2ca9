"""Mount-aware URL helpers.

``base_path()`` is the single source of truth for the prefix the app is
served under; ``asset()`` and ``url()`` both build on it::

    <link rel="stylesheet" href="{{ asset('assets/css/app.css') }}">
    <a href="{{ url('admin/pages') }}">Pages</a>
    <a href="{{ url('search', {'q': 'enrolment', 'page': 2}) }}">Search</a>

Every helper reads the current request's ``Mount`` (see
``mountkit.context``) unless one is passed explicitly with ``mount=``.
"""

import posixpath
from collections.abc import Iterable, Mapping
from typing import Any, TypeAlias
from urllib.parse import urlencode

from mountkit.context import Mount, current_mount

QueryParams: TypeAlias = Mapping[str, Any] | Iterable[tuple[str, Any]]


def resolve_base_path(script_name: str, *, script_is_file: bool = True) -> str:
    """Turn a script path into a mount prefix.

    Backslashes are treated as path separators. When *script_is_file* is
    true the prefix is the script's directory. Trailing slashes are
    dropped, so the server root yields ``""`` and joining with ``"/..."``
    never doubles a slash.

    Examples::

        >>> resolve_base_path("/centre/public/index.php")
        '/centre/public'
        >>> resolve_base_path("/index.php")
        ''
        >>> resolve_base_path("/centre/")
        ''
        >>> resolve_base_path("/centre/", script_is_file=False)
        '/centre'
    """
    path = script_name.replace("\\", "/")
    if script_is_file:
        # "/centre/" names the directory "/centre" itself, whose parent is "/"
        path = posixpath.dirname(path.rstrip("/"))
    return path.rstrip("/")


def base_path(*, mount: Mount | None = None) -> str:
    """Return the current mount prefix, e.g. ``"/centre/public"`` or ``""``.

    Computed once per request; later calls return the cached string.
    """
    return (mount or current_mount()).base_path


def asset(path: str = "", *, mount: Mount | None = None) -> str:
    """Build the URL of a static resource under the mount prefix.

    Leading slashes on *path* are optional: ``asset("css/app.css")`` and
    ``asset("/css/app.css")`` are the same URL.
    """
    return base_path(mount=mount) + "/" + path.lstrip("/")


def url(
    path: str = "",
    params: QueryParams | None = None,
    *,
    mount: Mount | None = None,
) -> str:
    """Build an internal route URL: ``<base>/?p=<route>``.

    Leading ``/``, ``?`` and ``p=`` tokens are stripped from *path*, so
    ``"admin/pages"``, ``"/admin/pages"`` and ``"?p=admin/pages"`` are the
    same route. An empty route is the root route ``/``.

    When *params* encodes to at least one pair, a second ``?p=`` block
    carrying the form-encoded parameters is appended. Existing links
    depend on that shape, so it is kept even though it is not a single
    well-formed query string.

    Example:
        >>> url("search", {"q": "a b", "page": 2}, mount=Mount({}))
        '/?p=search?p=q=a+b&page=2'
    """
    mount = mount or current_mount()
    marker = mount.config.route_param + "="
    route = f"/?{marker}{_normalize_route(path, marker)}"

    encoded = build_query(params) if params is not None else ""
    query = f"?{marker}{encoded}" if encoded else ""

    return mount.base_path + route + query


def build_query(params: QueryParams) -> str:
    """Form-encode *params* for the route query block.

    Spaces become ``+`` and reserved characters are percent-encoded.
    Order is preserved. ``None`` values are skipped, booleans become
    ``1``/``0`` and whole-number floats drop the fraction (``1.0`` is
    ``1``). Nested mappings and sequences flatten to ``key[sub]`` and
    ``key[0]`` names.
    """
    items = params.items() if isinstance(params, Mapping) else params
    pairs: list[tuple[str, str]] = []
    for key, value in items:
        _flatten(str(key), value, pairs)
    return urlencode(pairs)


def _flatten(name: str, value: Any, out: list[tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{name}[{key}]", item, out)
    elif isinstance(value, list | tuple):
        for index, item in enumerate(value):
            _flatten(f"{name}[{index}]", item, out)
    elif isinstance(value, bool):
        out.append((name, "1" if value else "0"))
    elif isinstance(value, float) and value.is_integer():
        out.append((name, str(int(value))))
    else:
        out.append((name, str(value)))


def _normalize_route(path: str, marker: str) -> str:
    while True:
        if path.startswith(("/", "?")):
            path = path[1:]
        elif path.startswith(marker):
            path = path[len(marker) :]
        else:
            return path or "/"
