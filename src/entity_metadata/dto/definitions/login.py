"""Login request body."""

from ..core import Dto, Property, PropertyType


class LoginDTO(Dto):
    username = Property(PropertyType.STRING)
    password = Property(PropertyType.STRING)
