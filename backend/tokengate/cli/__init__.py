"""Command-line interface registration for the Flask application."""

from __future__ import annotations

from flask import Flask

from .accounts import accounts_cli


def init_app(app: Flask) -> None:
    """Register the ``accounts`` command group on ``app.cli``."""
    app.cli.add_command(accounts_cli)
