from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from localestring.infrastructure.query_builder import QueryBuilder


class RecordsRepo(ABC):
    """Repository interface for records of a schema."""

    @abstractmethod
    def get_by_id(self, record_id: int) -> Optional[dict[str, Any]]:
        """Retrieve a record by identifier."""

    @abstractmethod
    def select(
        self, query: QueryBuilder, *, limit: int = 100, offset: int = 0
    ) -> list[dict[str, Any]]:
        """List records matching ``query``."""

    @abstractmethod
    def insert(self, record: dict[str, Any]) -> int:
        """Persist a new record and return its identifier."""

    @abstractmethod
    def update(self, record: dict[str, Any]) -> None:
        """Update an existing record."""

    @abstractmethod
    def delete(self, record_id: int) -> None:
        """Remove a record by identifier."""
