"""HTTP API for wedplan."""

from wedplan.api.app import create_app

__all__ = ["create_app"]
