"""Entity schema metadata: descriptors, per-class store and entity registry.

- core.py: Type definitions (ColumnType, OnDelete, ForeignKeyDef, ColumnDef, EntitySchema)
- errors.py: Configuration error taxonomy
- metadata_store.py: Per-class metadata store
- declarations.py: ``Entity`` base, ``Column`` / ``@table`` annotations
- registry.py: Entity registry and foreign key verification
- bootstrap.py: Startup registration step
"""

from .bootstrap import bootstrap_entities
from .core import ColumnDef, ColumnType, EntitySchema, ForeignKeyDef, OnDelete
from .declarations import (
    Column,
    DeclarativeMeta,
    Declaration,
    Entity,
    add_column,
    get_columns,
    get_table_name,
    table,
)
from .errors import (
    DanglingForeignKey,
    DuplicateColumnName,
    InvalidColumnDefinition,
    InvalidEnumDomain,
    MissingPrimaryKey,
    MissingTableAnnotation,
    MultiplePrimaryKeys,
    RegistryFrozenError,
    SchemaConfigurationError,
    TableNameConflict,
)
from .metadata_store import MetadataStore, get_default_store
from .registry import DanglingReference, EntityRegistry

__all__ = [
    "ColumnType",
    "OnDelete",
    "ForeignKeyDef",
    "ColumnDef",
    "EntitySchema",
    "Entity",
    "DeclarativeMeta",
    "Declaration",
    "Column",
    "table",
    "add_column",
    "get_columns",
    "get_table_name",
    "MetadataStore",
    "get_default_store",
    "EntityRegistry",
    "DanglingReference",
    "bootstrap_entities",
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
