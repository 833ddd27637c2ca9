"""Kida environment integration.

Registers the helpers on a kida ``Environment`` so templates can use
them the same way Python code does::

    <h1>{{ page.title | e }}</h1>
    <link rel="stylesheet" href="{{ asset('assets/css/app.css') }}">
    <a href="{{ url('admin/pages') }}">Pages</a>

``asset``, ``url`` and ``base_path`` read the mount bound to the request
being rendered, so one environment serves every request.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from kida import Environment, FileSystemLoader

from mountkit.escape import e
from mountkit.paths import asset, base_path, url

HELPER_FILTERS: dict[str, Callable[..., Any]] = {
    "e": e,
}

HELPER_GLOBALS: dict[str, Callable[..., Any]] = {
    "asset": asset,
    "base_path": base_path,
    "e": e,
    "url": url,
}


def register_helpers(env: Environment) -> Environment:
    """Install the mountkit filters and globals on *env* and return it.

    Existing filters or globals with the same names are replaced.
    """
    env.update_filters(HELPER_FILTERS)
    for name, value in HELPER_GLOBALS.items():
        env.add_global(name, value)
    return env


def create_environment(template_dir: str | Path, *, autoescape: bool = True) -> Environment:
    """Create a kida Environment over *template_dir* with the helpers registered."""
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=autoescape,
    )
    return register_helpers(env)
