"""Entity registry.

Catalog of registered entities keyed by table name. Registration reads the
table name and ordered columns a class accumulated in its ``MetadataStore``,
validates them and publishes an immutable ``EntitySchema``.

Foreign keys are recorded as declared and only resolved by ``verify()``, which
the bootstrap step runs once every entity has been registered, so entities may
register in any order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from entity_metadata.utils.logging import get_logger

from .core import EntitySchema
from .errors import (
    DanglingForeignKey,
    MissingPrimaryKey,
    MissingTableAnnotation,
    MultiplePrimaryKeys,
    RegistryFrozenError,
    TableNameConflict,
)
from .metadata_store import MetadataStore, get_default_store

logger = get_logger(__name__)


@dataclass(frozen=True)
class DanglingReference:
    """A foreign key whose target could not be resolved."""

    source_table: str
    column_name: str
    target_table: str
    target_column: str
    reason: str

    def __str__(self) -> str:
        return (
            f"{self.source_table}.{self.column_name} -> "
            f"{self.target_table}.{self.target_column} ({self.reason})"
        )


class EntityRegistry:
    """Registered entity schemas in registration order."""

    def __init__(self, store: Optional[MetadataStore] = None) -> None:
        self.store = store if store is not None else get_default_store()
        self._schemas: Dict[str, EntitySchema] = {}
        self._tables_by_class: Dict[type, str] = {}
        self._frozen = False

    # --- Registration ------------------------------------------------------------
    def register(self, entity: type) -> EntitySchema:
        """Validate ``entity`` and publish its schema.

        Registering the same class again with unchanged metadata returns the
        already published schema.

        Raises:
            MissingTableAnnotation: ``entity`` has no table association
            MissingPrimaryKey: no column is marked primary
            MultiplePrimaryKeys: more than one column is marked primary
            TableNameConflict: the table name belongs to another class, or the
                class was already registered with different metadata
            RegistryFrozenError: the registry has been frozen
        """
        table_name = self.store.table_name_for(entity)
        if table_name is None:
            raise MissingTableAnnotation(entity)

        schema = EntitySchema(
            table_name=table_name,
            columns=self.store.columns_for(entity),
            entity=entity,
        )

        registered_as = self._tables_by_class.get(entity)
        if registered_as is not None:
            existing = self._schemas[registered_as]
            if existing == schema:
                logger.debug("entity_registration_skipped", table_name=table_name)
                return existing
            raise TableNameConflict(
                f"{entity.__qualname__} was already registered as '{registered_as}' "
                "with different metadata",
                entity=entity,
                table_name=table_name,
            )

        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register {entity.__qualname__}: entity registry is frozen",
                entity=entity,
                table_name=table_name,
            )

        owner = self._schemas.get(table_name)
        if owner is not None:
            raise TableNameConflict(
                f"Table '{table_name}' is already registered by "
                f"{owner.entity.__qualname__ if owner.entity else '<unknown>'}; "
                f"{entity.__qualname__} cannot claim it",
                entity=entity,
                table_name=table_name,
            )

        primary = [col.name for col in schema.columns if col.primary]
        if not primary:
            raise MissingPrimaryKey(entity, table_name)
        if len(primary) > 1:
            raise MultiplePrimaryKeys(entity, table_name, primary)

        self._schemas[table_name] = schema
        self._tables_by_class[entity] = table_name
        logger.info(
            "entity_registered",
            entity=entity.__qualname__,
            table_name=table_name,
            columns=schema.column_names,
            foreign_keys=[col.foreign_key.target for col in schema.foreign_keys],
        )
        return schema

    # --- Reads -------------------------------------------------------------------
    def enumerate(self) -> Tuple[EntitySchema, ...]:
        """All registered schemas in registration order."""
        return tuple(self._schemas.values())

    def get(self, table_name: str) -> EntitySchema:
        if table_name not in self._schemas:
            available = list(self._schemas.keys())
            raise KeyError(f"Table '{table_name}' not found in registry. Available: {available}")
        return self._schemas[table_name]

    def get_for_class(self, entity: type) -> EntitySchema:
        table_name = self._tables_by_class.get(entity)
        if table_name is None:
            raise KeyError(f"{entity.__qualname__} is not a registered entity")
        return self._schemas[table_name]

    def list_tables(self) -> List[str]:
        """Registered table names in registration order."""
        return list(self._schemas.keys())

    def __contains__(self, table_name: object) -> bool:
        return table_name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self) -> Iterator[EntitySchema]:
        return iter(self.enumerate())

    # --- Verification & lifecycle ------------------------------------------------
    def find_dangling_foreign_keys(self) -> List[DanglingReference]:
        """Foreign keys whose target table or column is not registered."""
        dangling: List[DanglingReference] = []
        for schema in self._schemas.values():
            for col in schema.foreign_keys:
                fk = col.foreign_key
                target = self._schemas.get(fk.target_table)
                if target is None:
                    reason = "table not registered"
                elif not target.has_column(fk.target_column):
                    reason = "column not declared"
                else:
                    continue
                dangling.append(
                    DanglingReference(
                        source_table=schema.table_name,
                        column_name=col.name,
                        target_table=fk.target_table,
                        target_column=fk.target_column,
                        reason=reason,
                    )
                )
        return dangling

    def verify(self) -> None:
        """Resolve every foreign key against the registered entities.

        Raises:
            DanglingForeignKey: at least one reference is unresolved; all of
                them are listed on the exception's ``references``
        """
        dangling = self.find_dangling_foreign_keys()
        if dangling:
            logger.error(
                "dangling_foreign_keys_detected",
                references=[str(ref) for ref in dangling],
            )
            raise DanglingForeignKey(dangling)
        logger.info("foreign_keys_verified", tables=len(self._schemas))

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make the registry read-only."""
        if not self._frozen:
            self._frozen = True
            logger.info("registry_frozen", tables=self.list_tables())


__all__ = [
    "DanglingReference",
    "EntityRegistry",
]
