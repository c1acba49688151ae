"""API v1."""

from nearh.api.v1.router import api_router

__all__ = ["api_router"]
