"""WSGI proxy middleware configuration helper."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Apply :class:`~werkzeug.middleware.proxy_fix.ProxyFix` when ``USE_PROXYFIX`` is set.

    Behind a reverse proxy this makes ``request.url_root`` and the cookie
    ``Secure`` decision follow the ``X-Forwarded-*`` headers of one hop.
    """
    if app.config.get("USE_PROXYFIX", False):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)
