"""Users table."""

from entity_metadata.schema import Column, ColumnType, Entity, table


@table("users")
class User(Entity):
    id = Column("id", ColumnType.NUMBER, primary=True, default=0)
    username = Column("username", ColumnType.STRING, max_length=255, default="")
    email = Column("email", ColumnType.STRING, max_length=255, default="")
    auth_token = Column("auth_token", ColumnType.STRING, optional=True)
    password = Column("password", ColumnType.STRING, default="")
