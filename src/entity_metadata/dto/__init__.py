"""DTO property metadata and request payload validation."""

from .core import Dto, Property, PropertyDef, PropertyType, get_properties
from .validator import DtoValidationError, FieldError, build_dto_model, validate_dto

__all__ = [
    "PropertyType",
    "PropertyDef",
    "Dto",
    "Property",
    "get_properties",
    "DtoValidationError",
    "FieldError",
    "build_dto_model",
    "validate_dto",
]
