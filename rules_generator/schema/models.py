"""Declarative cardinality/order table for rule documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

UNBOUNDED = "unbounded"


class ElementType(str, Enum):
    TEXT = "text"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    LIST = "list"
    MAPPING = "mapping"


@dataclass(frozen=True)
class ItemsRule:
    min: int = 0
    max: Optional[int] = None
    type: ElementType = ElementType.TEXT
    table: Optional[str] = None
    allow_empty: bool = False


@dataclass(frozen=True)
class ElementRule:
    name: str
    min: int = 0
    max: Optional[int] = 1
    must_follow: tuple[str, ...] = ()
    type: ElementType = ElementType.TEXT
    table: Optional[str] = None
    items: Optional[ItemsRule] = None
    allow_empty: bool = False

    @property
    def required(self) -> bool:
        return self.min > 0


@dataclass(frozen=True)
class RuleSchema:
    root: str
    tables: dict[str, tuple[ElementRule, ...]] = field(default_factory=dict)

    def table(self, name: str) -> tuple[ElementRule, ...]:
        return self.tables.get(name, ())
