"""Request bodies for habit endpoints."""

from ..core import Dto, Property, PropertyType


class CreateHabitDTO(Dto):
    name = Property(PropertyType.STRING)
    cadence = Property(PropertyType.STRING)
    target_per_week = Property(PropertyType.NUMBER, optional=True)
