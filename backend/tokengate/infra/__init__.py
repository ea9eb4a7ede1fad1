"""Concrete adapters implementing the service ports."""
