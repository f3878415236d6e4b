r"""
Centralized access to all table models.

Importing this package registers every table on `Base.metadata`, which the
bootstrap DDL and the statement builder both rely on.

    from vetclinic.models import Tutor, Pet, Appointment
"""

from .user import User
from .tutor import Tutor
from .pet import Pet
from .service import Service
from .product import Product
from .appointment import Appointment

__all__ = [
    "User",
    "Tutor",
    "Pet",
    "Service",
    "Product",
    "Appointment",
]
