"""
Unit tests for the per-class metadata store.
"""

import pytest

from entity_metadata.dto.core import PropertyDef, PropertyType
from entity_metadata.schema.core import ColumnDef, ColumnType, ForeignKeyDef
from entity_metadata.schema.errors import (
    DuplicateColumnName,
    RegistryFrozenError,
    SchemaConfigurationError,
    TableNameConflict,
)
from entity_metadata.schema.metadata_store import MetadataStore, get_default_store


def _make_class(name: str) -> type:
    return type(name, (), {})


@pytest.mark.unit
class TestColumnAttachment:
    """Tests for attach_column / columns_for."""

    def test_unknown_class_has_no_columns(self, store):
        assert store.columns_for(_make_class("Marker")) == ()

    def test_preserves_attachment_order(self, store):
        cls = _make_class("Wide")
        names = ["id", "zeta", "alpha", "mid", "beta"]
        for name in names:
            store.attach_column(cls, ColumnDef(name, ColumnType.STRING))

        assert [col.name for col in store.columns_for(cls)] == names

    def test_single_attachment_is_accepted(self, store):
        cls = _make_class("User")
        store.attach_column(cls, ColumnDef("username", ColumnType.STRING))
        assert len(store.columns_for(cls)) == 1

    def test_duplicate_column_name_rejected(self, store):
        cls = _make_class("User")
        store.attach_column(cls, ColumnDef("username", ColumnType.STRING))

        with pytest.raises(DuplicateColumnName) as exc_info:
            store.attach_column(cls, ColumnDef("username", ColumnType.NUMBER))

        assert exc_info.value.entity is cls
        assert exc_info.value.column_name == "username"
        # Original descriptor is kept
        assert store.columns_for(cls)[0].column_type is ColumnType.STRING

    def test_same_column_name_on_different_classes(self, store):
        a, b = _make_class("A"), _make_class("B")
        store.attach_column(a, ColumnDef("id", ColumnType.NUMBER))
        store.attach_column(b, ColumnDef("id", ColumnType.NUMBER))

        assert len(store.columns_for(a)) == 1
        assert len(store.columns_for(b)) == 1

    def test_lookup_by_identity_not_name(self, store):
        first = _make_class("Twin")
        second = _make_class("Twin")
        store.attach_column(first, ColumnDef("id", ColumnType.NUMBER))

        assert store.columns_for(second) == ()

    def test_reads_return_snapshot(self, store):
        cls = _make_class("User")
        store.attach_column(cls, ColumnDef("id", ColumnType.NUMBER))
        snapshot = store.columns_for(cls)
        store.attach_column(cls, ColumnDef("name", ColumnType.STRING))

        assert len(snapshot) == 1
        assert len(store.columns_for(cls)) == 2

    def test_primary_and_foreign_key_helpers(self, store):
        cls = _make_class("Habit")
        store.attach_column(cls, ColumnDef("id", ColumnType.NUMBER, primary=True))
        store.attach_column(
            cls,
            ColumnDef("user_id", ColumnType.NUMBER, foreign_key=ForeignKeyDef("users", "id")),
        )

        assert store.primary_key_for(cls).name == "id"
        assert [col.name for col in store.foreign_keys_for(cls)] == ["user_id"]
        assert store.primary_key_for(_make_class("Empty")) is None


@pytest.mark.unit
class TestTableAssociation:
    """Tests for associate_table / table_name_for."""

    def test_unassociated_class(self, store):
        assert store.table_name_for(_make_class("User")) is None

    def test_associate(self, store):
        cls = _make_class("User")
        store.associate_table(cls, "users")
        assert store.table_name_for(cls) == "users"

    def test_same_name_is_idempotent(self, store):
        cls = _make_class("User")
        store.associate_table(cls, "users")
        store.associate_table(cls, "users")
        assert store.table_name_for(cls) == "users"

    def test_different_name_conflicts(self, store):
        cls = _make_class("User")
        store.associate_table(cls, "users")

        with pytest.raises(TableNameConflict):
            store.associate_table(cls, "accounts")
        assert store.table_name_for(cls) == "users"

    def test_empty_name_rejected(self, store):
        with pytest.raises(SchemaConfigurationError):
            store.associate_table(_make_class("User"), "")


@pytest.mark.unit
class TestPropertyAttachment:
    """DTO properties live apart from entity columns."""

    def test_properties_are_separate_from_columns(self, store):
        cls = _make_class("LoginDTO")
        store.attach_property(cls, PropertyDef("username", PropertyType.STRING))

        assert store.columns_for(cls) == ()
        assert [p.property_key for p in store.properties_for(cls)] == ["username"]

    def test_duplicate_property_rejected(self, store):
        cls = _make_class("LoginDTO")
        store.attach_property(cls, PropertyDef("username", PropertyType.STRING))
        with pytest.raises(DuplicateColumnName):
            store.attach_property(cls, PropertyDef("username", PropertyType.NUMBER))

    def test_no_properties(self, store):
        assert store.properties_for(_make_class("Empty")) == ()


@pytest.mark.unit
class TestFreeze:
    """Writes after freeze() are configuration errors."""

    def test_attach_after_freeze(self, store):
        cls = _make_class("Late")
        store.freeze()

        assert store.is_frozen
        with pytest.raises(RegistryFrozenError):
            store.attach_column(cls, ColumnDef("id", ColumnType.NUMBER))
        with pytest.raises(RegistryFrozenError):
            store.attach_property(cls, PropertyDef("id", PropertyType.NUMBER))
        with pytest.raises(RegistryFrozenError):
            store.associate_table(cls, "late")

    def test_reads_still_work_after_freeze(self, store):
        cls = _make_class("User")
        store.associate_table(cls, "users")
        store.attach_column(cls, ColumnDef("id", ColumnType.NUMBER, primary=True))
        store.freeze()

        assert store.table_name_for(cls) == "users"
        assert len(store.columns_for(cls)) == 1
        # Re-stating an existing association is not a write
        store.associate_table(cls, "users")

    def test_freeze_is_idempotent(self, store):
        store.freeze()
        store.freeze()
        assert store.is_frozen


@pytest.mark.unit
class TestDiscard:
    def test_discard_forgets_class(self, store):
        cls, other = _make_class("Broken"), _make_class("Kept")
        store.associate_table(cls, "broken")
        store.attach_column(cls, ColumnDef("id", ColumnType.NUMBER, primary=True))
        store.attach_property(cls, PropertyDef("id", PropertyType.NUMBER))
        store.attach_column(other, ColumnDef("id", ColumnType.NUMBER))

        store.discard(cls)

        assert store.columns_for(cls) == ()
        assert store.properties_for(cls) == ()
        assert store.table_name_for(cls) is None
        assert len(store.columns_for(other)) == 1

    def test_discard_after_freeze(self, store):
        cls = _make_class("User")
        store.attach_column(cls, ColumnDef("id", ColumnType.NUMBER))
        store.freeze()

        with pytest.raises(RegistryFrozenError):
            store.discard(cls)
        assert len(store.columns_for(cls)) == 1


@pytest.mark.unit
def test_default_store_is_shared():
    assert get_default_store() is get_default_store()
    assert isinstance(get_default_store(), MetadataStore)
