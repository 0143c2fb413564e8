"""
dbrole - role composition for SQLAlchemy active-record models.
"""
import logging

from .exceptions import RoleConfigurationError, RoleError, UnsupportedRelationError
from .models import Base, InheritRole, RelationKind, RoleRelation

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__ = [
     "Base",
     "InheritRole",
     "RelationKind",
     "RoleRelation",
     "RoleError",
     "RoleConfigurationError",
     "UnsupportedRelationError",
]
