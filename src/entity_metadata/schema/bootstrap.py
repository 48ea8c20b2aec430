"""Startup step that registers entities and seals the metadata."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from entity_metadata.config import Settings, get_settings
from entity_metadata.utils.logging import bind_context

from .core import EntitySchema
from .registry import EntityRegistry


def bootstrap_entities(
    registry: EntityRegistry,
    entities: Iterable[type],
    *,
    settings: Optional[Settings] = None,
) -> Tuple[EntitySchema, ...]:
    """Register ``entities`` in the given order, then verify and freeze.

    Order does not matter for correctness: foreign keys are only resolved
    after every entity has been registered.

    Args:
        registry: Registry to populate
        entities: Entity classes to register
        settings: Overrides ``get_settings()``; controls whether the foreign
            key check runs and whether the registry and its store are frozen

    Returns:
        The registry's schemas in registration order

    Raises:
        SchemaConfigurationError: any registration or verification failure
    """
    settings = settings or get_settings()
    logger = bind_context(phase="bootstrap")

    for entity in entities:
        registry.register(entity)

    if settings.verify_on_bootstrap:
        registry.verify()

    if settings.freeze_on_bootstrap:
        registry.freeze()
        registry.store.freeze()

    schemas = registry.enumerate()
    logger.info(
        "entities_bootstrapped",
        tables=[schema.table_name for schema in schemas],
        verified=settings.verify_on_bootstrap,
        frozen=settings.freeze_on_bootstrap,
    )
    return schemas


__all__ = ["bootstrap_entities"]
