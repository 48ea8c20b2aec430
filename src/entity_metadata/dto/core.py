"""Property metadata for request-body shapes (DTOs).

DTO metadata lives in the same ``MetadataStore`` as entity columns but in a
separate map: a DTO is never registered as an entity and its properties are
never merged with columns.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from entity_metadata.schema.declarations import DeclarativeMeta, Declaration
from entity_metadata.schema.errors import InvalidColumnDefinition
from entity_metadata.schema.metadata_store import MetadataStore, get_default_store


class PropertyType(Enum):
    """Primitive types a DTO property can be coerced to."""

    NUMBER = "number"
    STRING = "string"


@dataclass(frozen=True)
class PropertyDef:
    """One declared request-body field."""

    property_key: str
    property_type: PropertyType
    optional: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.property_type, PropertyType):
            raise InvalidColumnDefinition(
                f"Unsupported property type {self.property_type!r}",
                column_name=self.property_key or None,
            )


class Dto(metaclass=DeclarativeMeta):
    """Base class for request bodies declared with ``Property``."""


class Property(Declaration):
    """Class attribute declaring one DTO field.

    Usage:
        >>> class LoginDTO(Dto):
        ...     username = Property(PropertyType.STRING)
        ...     remember_days = Property(PropertyType.NUMBER, optional=True)
    """

    def __init__(
        self,
        property_type: PropertyType,
        *,
        optional: bool = False,
        store: Optional[MetadataStore] = None,
    ):
        super().__init__(store=store)
        self.definition: PropertyDef = PropertyDef("", property_type, optional=optional)

    def _attach(self, owner: type, attr_name: str) -> PropertyDef:
        definition = dataclasses.replace(self.definition, property_key=attr_name)
        self.store.attach_property(owner, definition)
        return definition

    def __repr__(self) -> str:
        return f"Property({self.definition.property_type})"


def get_properties(
    dto_cls: type, *, store: Optional[MetadataStore] = None
) -> Tuple[PropertyDef, ...]:
    """Ordered property descriptors declared on ``dto_cls`` (empty if none)."""
    return (store or get_default_store()).properties_for(dto_cls)


__all__ = [
    "PropertyType",
    "PropertyDef",
    "Dto",
    "Property",
    "get_properties",
]
