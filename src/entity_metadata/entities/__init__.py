"""Application entities.

Importing this package declares every entity on the default metadata store;
``register_entities`` is the bootstrap list.
"""

from typing import Optional, Tuple

from entity_metadata.config import Settings
from entity_metadata.schema import EntityRegistry, EntitySchema, bootstrap_entities

from .habit import Cadence, Habit
from .user import User

ENTITIES = (User, Habit)


def register_entities(
    registry: EntityRegistry, *, settings: Optional[Settings] = None
) -> Tuple[EntitySchema, ...]:
    """Register, verify and (per settings) freeze all application entities."""
    return bootstrap_entities(registry, ENTITIES, settings=settings)


__all__ = [
    "Cadence",
    "Habit",
    "User",
    "ENTITIES",
    "register_entities",
]
