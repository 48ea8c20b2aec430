"""Configuration errors raised while building entity metadata.

All of these indicate an authoring mistake in entity declarations or in the
bootstrap list. They are raised at attachment or registration time and are
meant to stop application startup.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Union


class SchemaConfigurationError(ValueError):
    """Base class for entity metadata configuration errors."""

    def __init__(
        self,
        message: str,
        *,
        entity: Optional[Union[type, str]] = None,
        table_name: Optional[str] = None,
        column_name: Optional[str] = None,
    ):
        self.entity = entity
        self.table_name = table_name
        self.column_name = column_name
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to structured dict for logging."""
        return {
            "error_type": type(self).__name__,
            "entity": getattr(self.entity, "__qualname__", self.entity),
            "table_name": self.table_name,
            "column_name": self.column_name,
            "message": str(self),
        }


class DuplicateColumnName(SchemaConfigurationError):
    """The same column (or DTO property) name was attached twice to one class."""

    def __init__(self, entity: Union[type, str], column_name: str):
        owner = getattr(entity, "__qualname__", entity)
        super().__init__(
            f"Column '{column_name}' is already declared on {owner}",
            entity=entity,
            column_name=column_name,
        )


class TableNameConflict(SchemaConfigurationError):
    """A table name is claimed by two classes, or a class changes its table."""


class MissingTableAnnotation(SchemaConfigurationError):
    """A class was registered as an entity without a table association."""

    def __init__(self, entity: type):
        super().__init__(
            f"{entity.__qualname__} has no table association; decorate it with @table(...)",
            entity=entity,
        )


class MissingPrimaryKey(SchemaConfigurationError):
    """An entity declares no primary key column."""

    def __init__(self, entity: type, table_name: str):
        super().__init__(
            f"Entity {entity.__qualname__} (table '{table_name}') has no primary key column",
            entity=entity,
            table_name=table_name,
        )


class MultiplePrimaryKeys(SchemaConfigurationError):
    """An entity marks more than one column as primary."""

    def __init__(self, entity: type, table_name: str, column_names: Sequence[str]):
        self.primary_columns = list(column_names)
        super().__init__(
            f"Entity {entity.__qualname__} (table '{table_name}') declares "
            f"{len(self.primary_columns)} primary key columns: {self.primary_columns}",
            entity=entity,
            table_name=table_name,
        )


class InvalidColumnDefinition(SchemaConfigurationError):
    """Column options are inconsistent with the column type."""


class InvalidEnumDomain(InvalidColumnDefinition):
    """An ENUM column was declared with an empty or missing domain."""

    def __init__(self, column_name: str):
        super().__init__(
            f"Enum column '{column_name}' must declare at least one value",
            column_name=column_name,
        )


class DanglingForeignKey(SchemaConfigurationError):
    """Foreign keys reference tables or columns that were never registered."""

    def __init__(self, references: Sequence[Any]):
        self.references: List[Any] = list(references)
        details = "; ".join(str(ref) for ref in self.references)
        first = self.references[0] if self.references else None
        super().__init__(
            f"{len(self.references)} dangling foreign key(s): {details}",
            table_name=getattr(first, "source_table", None),
            column_name=getattr(first, "column_name", None),
        )


class RegistryFrozenError(SchemaConfigurationError):
    """A write was attempted after the metadata was frozen."""


__all__ = [
    "SchemaConfigurationError",
    "DuplicateColumnName",
    "TableNameConflict",
    "MissingTableAnnotation",
    "MissingPrimaryKey",
    "MultiplePrimaryKeys",
    "InvalidColumnDefinition",
    "InvalidEnumDomain",
    "DanglingForeignKey",
    "RegistryFrozenError",
]
