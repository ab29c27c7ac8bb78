"""HTTP API for the calculator."""

from calcapi.api.app import create_app

__all__ = ["create_app"]
