from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class ConstraintKind(StrEnum):
    UNIQUE = "unique"
    INDEX = "index"


@dataclass(frozen=True)
class Constraint:
    kind: ConstraintKind
    columns: tuple[str, ...]
    name: str | None = None

    def index_name(self, table: str) -> str:
        return self.name or f"{table}_{'_'.join(self.columns)}_{self.kind.value}"


@dataclass
class IndexableConstraints:
    """Unique/index constraints declared on a field.

    Composed fields hold one and expand each constraint to their children's
    columns.
    """

    constraints: list[Constraint] = field(default_factory=list)

    def add(self, kind: ConstraintKind, columns: list[str], name: str | None = None) -> Constraint:
        constraint = Constraint(kind, tuple(columns), name)
        if constraint not in self.constraints:
            self.constraints.append(constraint)
        return constraint

    def of_kind(self, kind: ConstraintKind) -> list[Constraint]:
        return [c for c in self.constraints if c.kind is kind]

    def __iter__(self):
        return iter(self.constraints)

    def __len__(self) -> int:
        return len(self.constraints)
