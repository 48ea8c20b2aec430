"""Per-class metadata store.

Accumulates column descriptors, DTO property descriptors and table names for
classes, keyed by class identity. Annotations write here at class-definition
time; the entity registry and request validation read from it later.

The store has a two-phase lifecycle: it accepts writes until ``freeze()`` is
called, after which any attachment or table association raises
``RegistryFrozenError``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from entity_metadata.utils.logging import get_logger

from .core import ColumnDef
from .errors import (
    DuplicateColumnName,
    RegistryFrozenError,
    SchemaConfigurationError,
    TableNameConflict,
)

if TYPE_CHECKING:
    from entity_metadata.dto.core import PropertyDef

logger = get_logger(__name__)


class MetadataStore:
    """Ordered column/property lists and table names, keyed by class."""

    def __init__(self) -> None:
        self._columns: Dict[type, List[ColumnDef]] = {}
        self._properties: Dict[type, List["PropertyDef"]] = {}
        self._tables: Dict[type, str] = {}
        self._frozen = False

    # --- Lifecycle -------------------------------------------------------------
    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Reject every later write."""
        if not self._frozen:
            self._frozen = True
            logger.info(
                "metadata_store_frozen",
                entity_classes=len(self._columns),
                dto_classes=len(self._properties),
            )

    def _ensure_writable(self, cls: type, what: str) -> None:
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot {what} on {cls.__qualname__}: metadata store is frozen",
                entity=cls,
            )

    # --- Writes ----------------------------------------------------------------
    def attach_column(self, cls: type, column: ColumnDef) -> None:
        """Append a column descriptor to ``cls``.

        Raises:
            DuplicateColumnName: ``column.name`` is already declared on ``cls``
            RegistryFrozenError: the store has been frozen
        """
        self._ensure_writable(cls, f"attach column '{column.name}'")
        columns = self._columns.setdefault(cls, [])
        if any(existing.name == column.name for existing in columns):
            raise DuplicateColumnName(cls, column.name)
        columns.append(column)

    def attach_property(self, cls: type, prop: "PropertyDef") -> None:
        """Append a DTO property descriptor to ``cls``."""
        self._ensure_writable(cls, f"attach property '{prop.property_key}'")
        properties = self._properties.setdefault(cls, [])
        if any(existing.property_key == prop.property_key for existing in properties):
            raise DuplicateColumnName(cls, prop.property_key)
        properties.append(prop)

    def associate_table(self, cls: type, table_name: str) -> None:
        """Record the table ``cls`` persists to.

        Re-associating with the same name is a no-op; a different name raises
        ``TableNameConflict``.
        """
        if not table_name:
            raise SchemaConfigurationError(
                f"{cls.__qualname__}: table name must be a non-empty string",
                entity=cls,
            )
        current = self._tables.get(cls)
        if current == table_name:
            return
        self._ensure_writable(cls, f"associate table '{table_name}'")
        if current is not None:
            raise TableNameConflict(
                f"{cls.__qualname__} is already mapped to table '{current}', "
                f"cannot remap it to '{table_name}'",
                entity=cls,
                table_name=table_name,
            )
        self._tables[cls] = table_name
        logger.debug("table_associated", entity=cls.__qualname__, table_name=table_name)

    def discard(self, cls: type) -> None:
        """Forget every column, property and table recorded for ``cls``.

        Used when a class definition fails after some of its declarations were
        already attached.
        """
        self._ensure_writable(cls, "discard metadata")
        self._columns.pop(cls, None)
        self._properties.pop(cls, None)
        self._tables.pop(cls, None)
        logger.debug("metadata_discarded", entity=cls.__qualname__)

    # --- Reads -----------------------------------------------------------------
    def columns_for(self, cls: type) -> Tuple[ColumnDef, ...]:
        """Columns declared on ``cls`` in attachment order (empty if none)."""
        return tuple(self._columns.get(cls, ()))

    def properties_for(self, cls: type) -> Tuple["PropertyDef", ...]:
        """DTO properties declared on ``cls`` in attachment order (empty if none)."""
        return tuple(self._properties.get(cls, ()))

    def table_name_for(self, cls: type) -> Optional[str]:
        return self._tables.get(cls)

    def primary_key_for(self, cls: type) -> Optional[ColumnDef]:
        return next((col for col in self._columns.get(cls, ()) if col.primary), None)

    def foreign_keys_for(self, cls: type) -> List[ColumnDef]:
        return [col for col in self._columns.get(cls, ()) if col.foreign_key is not None]


@lru_cache()
def get_default_store() -> MetadataStore:
    """Process-wide store used by annotations that are not given one explicitly.

    Created lazily on first use.
    """
    return MetadataStore()


__all__ = [
    "MetadataStore",
    "get_default_store",
]
