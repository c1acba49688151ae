"""Shared utilities: background tasks and generators."""

from nearh.shared.utils.background import FireAndForget
from nearh.shared.utils.generators import generate_cuid

__all__ = [
    "FireAndForget",
    "generate_cuid",
]
