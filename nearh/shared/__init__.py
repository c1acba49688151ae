"""Shared utilities: telemetry and cross-cutting helpers.

Used by application and infrastructure. No business logic.
"""

from nearh.shared.utils import FireAndForget, generate_cuid

__all__ = [
    "FireAndForget",
    "generate_cuid",
]
