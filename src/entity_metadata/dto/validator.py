"""Request payload validation driven by DTO property metadata.

Each DTO class is turned into a Pydantic model built from its declared
properties (cached per class and property set). STRING properties accept only
strings; NUMBER properties accept numbers and numeric strings, which are
coerced. A blank string is not a number. Keys not declared on the DTO are
dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError, create_model

from entity_metadata.schema.metadata_store import MetadataStore, get_default_store
from entity_metadata.utils.logging import get_logger

from .core import PropertyDef, PropertyType

logger = get_logger(__name__)

_PYTHON_TYPES: Dict[PropertyType, Any] = {
    PropertyType.STRING: StrictStr,
    PropertyType.NUMBER: Union[int, float],
}


@dataclass
class FieldError:
    """One rejected payload field.

    Attributes:
        field_name: Declared property key
        error_type: Pydantic error type (e.g. 'string_type', 'missing')
        error_message: Human-readable error description
        original_value: Raw value that failed validation (None when missing)
    """

    field_name: str
    error_type: str
    error_message: str
    original_value: Any = None


class DtoValidationError(Exception):
    """Raised when a request payload does not match its DTO declaration."""

    def __init__(self, dto_cls: type, errors: List[FieldError]):
        self.dto_cls = dto_cls
        self.errors = errors
        details = "; ".join(f"{err.field_name}: {err.error_message}" for err in errors)
        super().__init__(f"{dto_cls.__name__} validation failed: {details}")


@lru_cache(maxsize=None)
def _build_model(model_name: str, properties: Tuple[PropertyDef, ...]) -> Type[BaseModel]:
    fields: Dict[str, Any] = {}
    for prop in properties:
        python_type = _PYTHON_TYPES[prop.property_type]
        if prop.optional:
            fields[prop.property_key] = (Optional[python_type], None)
        else:
            fields[prop.property_key] = (python_type, ...)
    return create_model(  # type: ignore[call-overload]
        model_name,
        __config__=ConfigDict(extra="ignore", allow_inf_nan=False, protected_namespaces=()),
        **fields,
    )


def _collect_field_errors(exc: ValidationError, payload: Mapping[str, Any]) -> List[FieldError]:
    # Union members report one error each; keep the first per field
    errors: Dict[str, FieldError] = {}
    for err in exc.errors():
        loc = err["loc"]
        field_name = str(loc[0]) if loc else "<payload>"
        if field_name in errors:
            continue
        errors[field_name] = FieldError(
            field_name=field_name,
            error_type=err["type"],
            error_message=err["msg"],
            original_value=payload.get(field_name),
        )
    return list(errors.values())


def build_dto_model(dto_cls: type, *, store: Optional[MetadataStore] = None) -> Type[BaseModel]:
    """Pydantic model equivalent to the properties declared on ``dto_cls``."""
    properties = (store or get_default_store()).properties_for(dto_cls)
    return _build_model(f"{dto_cls.__name__}Model", properties)


def validate_dto(
    payload: Mapping[str, Any],
    dto_cls: type,
    *,
    store: Optional[MetadataStore] = None,
) -> Dict[str, Any]:
    """Validate and coerce ``payload`` against ``dto_cls``.

    Args:
        payload: Decoded request body
        dto_cls: Class carrying ``Property`` declarations
        store: Metadata store holding the declarations (default store if omitted)

    Returns:
        Dict with the declared keys in declaration order. Optional properties
        missing from the payload are left out.

    Raises:
        DtoValidationError: a required property is missing or a value has the
            wrong type
    """
    if not isinstance(payload, Mapping):
        raise DtoValidationError(
            dto_cls,
            [
                FieldError(
                    field_name="<payload>",
                    error_type="dict_type",
                    error_message=f"expected an object, got {type(payload).__name__}",
                    original_value=payload,
                )
            ],
        )

    model = build_dto_model(dto_cls, store=store)
    try:
        instance = model.model_validate(dict(payload))
    except ValidationError as exc:
        errors = _collect_field_errors(exc, payload)
        logger.warning(
            "dto_validation_failed",
            dto=dto_cls.__name__,
            fields=[err.field_name for err in errors],
        )
        raise DtoValidationError(dto_cls, errors) from exc

    return instance.model_dump(exclude_unset=True)


__all__ = [
    "DtoValidationError",
    "FieldError",
    "build_dto_model",
    "validate_dto",
]
