"""Declarative annotations for entity classes.

Usage:
    >>> @table("users")
    ... class User(Entity):
    ...     id = Column("id", ColumnType.NUMBER, primary=True)
    ...     username = Column("username", ColumnType.STRING, max_length=255)

Classes built by ``DeclarativeMeta`` (``Entity`` and ``dto.Dto`` subclasses)
collect their ``Column``/``Property`` attributes while the class body runs and
attach them once the class exists, in the order they are written. Either every
declaration of the body is attached or none is. Assigning the same attribute
twice in one body raises ``DuplicateColumnName``.

Columns declared elsewhere can be appended later with ``add_column``.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from .core import ColumnDef, ColumnType, EnumDomainSpec, ForeignKeyDef
from .errors import DuplicateColumnName
from .metadata_store import MetadataStore, get_default_store

T = TypeVar("T", bound=type)

_MISSING = object()


class Declaration:
    """Class attribute that attaches a descriptor to its owning class.

    On the class, the attribute evaluates to the declaration itself; on
    instances it behaves like a plain attribute holding the value.
    """

    definition: Any

    def __init__(self, *, default: Any = None, store: Optional[MetadataStore] = None):
        self.default = default
        self._store = store
        self.attr_name: Optional[str] = None
        self.owner: Optional[type] = None

    @property
    def store(self) -> MetadataStore:
        return self._store or get_default_store()

    def __set_name__(self, owner: type, name: str) -> None:
        # DeclarativeMeta.__new__ binds once the whole body is known
        if not isinstance(owner, DeclarativeMeta):
            raise TypeError(
                f"{type(self).__name__} '{name}' on {owner.__qualname__}: the class "
                f"must derive from Entity or Dto (or use add_column)"
            )

    def bind(self, owner: type, attr_name: str) -> None:
        """Attach this declaration to ``owner`` under ``attr_name``."""
        if self.owner is not None:
            raise TypeError(
                f"{self!r} is already bound to {self.owner.__qualname__}.{self.attr_name}"
            )
        self.definition = self._attach(owner, attr_name)
        self.attr_name = attr_name
        self.owner = owner

    def _attach(self, owner: type, attr_name: str) -> Any:
        raise NotImplementedError

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return instance.__dict__.get(self.attr_name, self.default)

    def __set__(self, instance: Any, value: Any) -> None:
        instance.__dict__[self.attr_name] = value


class _DeclarationNamespace(dict):
    """Class body namespace that refuses to overwrite a declaration."""

    def __init__(self, name: str):
        super().__init__()
        self.name = name

    def __setitem__(self, key: str, value: Any) -> None:
        if isinstance(self.get(key), Declaration):
            raise DuplicateColumnName(self.get("__qualname__", self.name), key)
        super().__setitem__(key, value)


class DeclarativeMeta(type):
    """Metaclass attaching class-body declarations as one unit."""

    @classmethod
    def __prepare__(mcs, name: str, bases: Tuple[type, ...], **kwargs: Any) -> Dict[str, Any]:
        return _DeclarationNamespace(name)

    def __new__(mcs, name: str, bases: Tuple[type, ...], namespace: Dict[str, Any], **kwargs: Any):
        declarations = [
            (attr_name, value)
            for attr_name, value in namespace.items()
            if isinstance(value, Declaration)
        ]
        cls = super().__new__(mcs, name, bases, dict(namespace), **kwargs)

        bound: List[Declaration] = []
        try:
            for attr_name, declaration in declarations:
                declaration.bind(cls, attr_name)
                bound.append(declaration)
        except Exception:
            # The class is never handed out; drop what it already attached
            for store in {id(decl.store): decl.store for decl in bound}.values():
                store.discard(cls)
            for declaration in bound:
                declaration.attr_name = None
                declaration.owner = None
            raise
        return cls


class Entity(metaclass=DeclarativeMeta):
    """Base class for persisted entities declared with ``Column``."""


class Column(Declaration):
    """Class attribute declaring one persisted column."""

    def __init__(
        self,
        name: str,
        column_type: ColumnType,
        *,
        primary: bool = False,
        max_length: Optional[int] = None,
        enum: Optional[EnumDomainSpec] = None,
        foreign_key: Optional[ForeignKeyDef] = None,
        optional: bool = False,
        default: Any = None,
        store: Optional[MetadataStore] = None,
    ):
        super().__init__(default=default, store=store)
        self.definition: ColumnDef = ColumnDef(
            name=name,
            column_type=column_type,
            primary=primary,
            max_length=max_length,
            enum_domain=enum,  # type: ignore[arg-type]
            foreign_key=foreign_key,
            optional=optional,
        )

    def _attach(self, owner: type, attr_name: str) -> ColumnDef:
        definition = dataclasses.replace(self.definition, property_key=attr_name)
        self.store.attach_column(owner, definition)
        return definition

    def __repr__(self) -> str:
        return f"Column({self.definition.name!r}, {self.definition.column_type})"


def table(name: str, *, store: Optional[MetadataStore] = None) -> Callable[[T], T]:
    """Class decorator mapping the decorated class to table ``name``."""

    def decorator(cls: T) -> T:
        (store or get_default_store()).associate_table(cls, name)
        return cls

    return decorator


def add_column(cls: type, attr_name: str, column: Column) -> Column:
    """Declare ``column`` on ``cls`` after the class body has run.

    The column is appended after every column already attached to ``cls`` and
    is set as ``cls.<attr_name>``.
    """
    existing = cls.__dict__.get(attr_name, _MISSING)
    if existing is not _MISSING:
        raise TypeError(f"{cls.__qualname__} already defines attribute '{attr_name}'")
    column.bind(cls, attr_name)
    setattr(cls, attr_name, column)
    return column


def get_columns(cls: type, *, store: Optional[MetadataStore] = None) -> Tuple[ColumnDef, ...]:
    """Ordered column descriptors declared on ``cls``."""
    return (store or get_default_store()).columns_for(cls)


def get_table_name(cls: type, *, store: Optional[MetadataStore] = None) -> Optional[str]:
    return (store or get_default_store()).table_name_for(cls)


__all__ = [
    "Declaration",
    "DeclarativeMeta",
    "Entity",
    "Column",
    "table",
    "add_column",
    "get_columns",
    "get_table_name",
]
