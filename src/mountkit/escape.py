"""HTML escaping for text embedded in server-rendered pages.

``e()`` is the one escaping helper templates and handlers share::

    <h1>{{ e(page.title) }}</h1>
    html = f"<td>{e(row.name)}</td>"
"""

import logging
from typing import Any

from kida.template import Markup

logger = logging.getLogger("mountkit.escape")

# ' maps to the decimal &#039;, not html.escape's &#x27;
_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
    }
)


def e(value: Any) -> Markup:
    """Escape *value* for HTML element content or a quoted attribute.

    Replaces ``& < > " '`` with character references. Entities already
    present are escaped again. ``bytes`` are read as UTF-8; invalid UTF-8
    produces an empty string rather than a partially escaped one. ``None``
    becomes ``""`` and anything else goes through ``str()``.

    The result is ``Markup`` so an autoescaping kida template does not
    escape it a second time.

    Example::

        e("<script>")  # "&lt;script&gt;"
        e("a&b")       # "a&amp;b"
    """
    if value is None:
        return Markup("")
    if isinstance(value, bytes | bytearray):
        try:
            text = bytes(value).decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("e() received %d bytes of invalid UTF-8; returning empty", len(value))
            return Markup("")
    else:
        text = str(value)
    # str.translate directly: Markup subclasses wrap translate()
    return Markup(str.translate(text, _ESCAPE_TABLE))
