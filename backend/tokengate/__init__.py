"""Expose the application factory at package level.

Provide convenient access to :func:`tokengate.factory.create_app` so callers
can ``from tokengate import create_app`` (e.g. ``flask --app tokengate``).
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
