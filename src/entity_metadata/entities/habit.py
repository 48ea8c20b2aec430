"""Habits table.

Ownership (``user_id``) is declared after the class body and is appended
after the habit's own columns.
"""

from enum import Enum

from entity_metadata.schema import (
    Column,
    ColumnType,
    Entity,
    ForeignKeyDef,
    OnDelete,
    add_column,
    table,
)


class Cadence(Enum):
    DAILY = "daily"
    WEEKLY = "weekly"


@table("habits")
class Habit(Entity):
    id = Column("id", ColumnType.NUMBER, primary=True, default=0)
    name = Column("name", ColumnType.STRING, max_length=255, default="")
    cadence = Column("cadence", ColumnType.ENUM, enum=Cadence, default=Cadence.DAILY.value)


add_column(
    Habit,
    "user_id",
    Column(
        "user_id",
        ColumnType.NUMBER,
        foreign_key=ForeignKeyDef("users", "id", OnDelete.CASCADE),
    ),
)
