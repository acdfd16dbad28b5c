"""
Repository Pattern for Database Access

Provides a clean abstraction layer over MongoDB collections.
"""

from integration_gateway.repositories.base import BaseRepository
from integration_gateway.repositories.templates import TemplateRepository

__all__ = [
    "BaseRepository",
    "TemplateRepository",
]
