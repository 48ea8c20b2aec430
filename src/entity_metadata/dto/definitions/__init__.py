"""Request body definitions.

Importing this package declares every DTO on the default metadata store.
"""

from .habit import CreateHabitDTO
from .login import LoginDTO

__all__ = [
    "CreateHabitDTO",
    "LoginDTO",
]
