"""Core entity schema types.

Column, foreign key and entity descriptors are immutable records produced by
annotations. They carry structure only; nothing here talks to a database.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, EnumMeta
from typing import Iterable, List, Optional, Tuple, Union

from .errors import InvalidColumnDefinition, InvalidEnumDomain


class ColumnType(Enum):
    """Supported primitive storage kinds for entity columns."""

    NUMBER = "number"
    STRING = "string"
    ENUM = "enum"


class OnDelete(Enum):
    """Referential action applied when the referenced row is deleted."""

    NO_ACTION = "NO ACTION"
    CASCADE = "CASCADE"
    SET_NULL = "SET NULL"
    RESTRICT = "RESTRICT"


EnumDomainSpec = Union[EnumMeta, Iterable[str]]


def normalize_enum_domain(domain: EnumDomainSpec) -> Tuple[str, ...]:
    """Turn an enum domain declaration into an ordered tuple of unique symbols.

    Accepts either a Python ``Enum`` class or an iterable of strings. For enum
    classes, string member values are used; otherwise member names.
    """
    if isinstance(domain, EnumMeta):
        symbols = [
            member.value if isinstance(member.value, str) else member.name
            for member in domain  # type: ignore[var-annotated]
        ]
    elif isinstance(domain, str):
        # "daily" instead of ["daily"]
        raise InvalidColumnDefinition(
            f"Enum domain must be an Enum class or a collection of strings, got {domain!r}"
        )
    else:
        symbols = list(domain)

    seen: List[str] = []
    for symbol in symbols:
        if not isinstance(symbol, str):
            raise InvalidColumnDefinition(
                f"Enum domain values must be strings, got {symbol!r}"
            )
        if symbol not in seen:
            seen.append(symbol)
    return tuple(seen)


@dataclass(frozen=True)
class ForeignKeyDef:
    """Weak, by-name reference from a column to another entity's column."""

    target_table: str
    target_column: str
    on_delete: OnDelete = OnDelete.NO_ACTION

    @property
    def target(self) -> str:
        return f"{self.target_table}.{self.target_column}"


@dataclass(frozen=True)
class ColumnDef:
    """Definition of a single entity column.

    ``property_key`` is the attribute the column was declared on; it is filled
    in when the descriptor is attached to its owning class.
    """

    name: str
    column_type: ColumnType
    primary: bool = False
    max_length: Optional[int] = None
    enum_domain: Optional[Tuple[str, ...]] = None
    foreign_key: Optional[ForeignKeyDef] = None
    optional: bool = False
    property_key: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidColumnDefinition("Column name must be a non-empty string")
        if not isinstance(self.column_type, ColumnType):
            raise InvalidColumnDefinition(
                f"Column '{self.name}' has unsupported type {self.column_type!r}",
                column_name=self.name,
            )

        if self.max_length is not None:
            if self.column_type is not ColumnType.STRING:
                raise InvalidColumnDefinition(
                    f"Column '{self.name}': max_length only applies to STRING columns",
                    column_name=self.name,
                )
            if isinstance(self.max_length, bool) or not isinstance(self.max_length, int):
                raise InvalidColumnDefinition(
                    f"Column '{self.name}': max_length must be an int",
                    column_name=self.name,
                )
            if self.max_length <= 0:
                raise InvalidColumnDefinition(
                    f"Column '{self.name}': max_length must be positive, got {self.max_length}",
                    column_name=self.name,
                )

        if self.column_type is ColumnType.ENUM:
            if self.enum_domain is None:
                raise InvalidEnumDomain(self.name)
            domain = normalize_enum_domain(self.enum_domain)
            if not domain:
                raise InvalidEnumDomain(self.name)
            object.__setattr__(self, "enum_domain", domain)
        elif self.enum_domain is not None:
            raise InvalidColumnDefinition(
                f"Column '{self.name}': enum_domain only applies to ENUM columns",
                column_name=self.name,
            )

        if self.foreign_key is not None and not isinstance(self.foreign_key, ForeignKeyDef):
            raise InvalidColumnDefinition(
                f"Column '{self.name}': foreign_key must be a ForeignKeyDef",
                column_name=self.name,
            )


@dataclass(frozen=True)
class EntitySchema:
    """Complete, published schema description for one entity."""

    table_name: str
    columns: Tuple[ColumnDef, ...] = ()
    entity: Optional[type] = field(default=None, compare=False, repr=False)

    @property
    def column_names(self) -> List[str]:
        return [col.name for col in self.columns]

    @property
    def primary_key(self) -> Optional[ColumnDef]:
        return next((col for col in self.columns if col.primary), None)

    @property
    def foreign_keys(self) -> List[ColumnDef]:
        """Columns that carry a foreign key, in declaration order."""
        return [col for col in self.columns if col.foreign_key is not None]

    def get_column(self, name: str) -> ColumnDef:
        for col in self.columns:
            if col.name == name:
                return col
        raise KeyError(
            f"Column '{name}' not found on table '{self.table_name}'. "
            f"Available: {self.column_names}"
        )

    def has_column(self, name: str) -> bool:
        return any(col.name == name for col in self.columns)


__all__ = [
    "ColumnType",
    "OnDelete",
    "ForeignKeyDef",
    "ColumnDef",
    "EntitySchema",
    "normalize_enum_domain",
]
