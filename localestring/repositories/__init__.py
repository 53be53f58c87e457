"""Repository interfaces and implementations."""

from .records import RecordsRepo

__all__ = ["RecordsRepo"]
