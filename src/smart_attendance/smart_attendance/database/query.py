"""Typed predicate builder for optional, conjunctive filters.

Column expressions are chosen by repositories; values supplied by callers are
only ever bound as ``%s`` parameters.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Predicate:
    sql: str
    params: tuple[Any, ...] = ()


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass
class WhereClause:
    predicates: list[Predicate] = field(default_factory=list)

    def add(self, sql: str, *params: Any) -> "WhereClause":
        self.predicates.append(Predicate(sql=sql, params=tuple(params)))
        return self

    def equals(self, column: str, value: Any) -> "WhereClause":
        return self.add(f"{column} = %s", value)

    def equals_if(self, column: str, value: Optional[Any]) -> "WhereClause":
        if value is not None:
            self.equals(column, value)
        return self

    def on_or_after(self, column: str, value: Optional[Any]) -> "WhereClause":
        if value is not None:
            self.add(f"{column} >= %s", value)
        return self

    def on_or_before(self, column: str, value: Optional[Any]) -> "WhereClause":
        if value is not None:
            self.add(f"{column} <= %s", value)
        return self

    def contains_ci(self, column: str, value: Optional[str]) -> "WhereClause":
        if value:
            self.add(f"LOWER({column}) LIKE %s", f"%{escape_like(value.lower())}%")
        return self

    def render(self) -> tuple[str, tuple[Any, ...]]:
        if not self.predicates:
            return "", ()
        sql = "WHERE " + " AND ".join(p.sql for p in self.predicates)
        params: list[Any] = []
        for p in self.predicates:
            params.extend(p.params)
        return sql, tuple(params)
