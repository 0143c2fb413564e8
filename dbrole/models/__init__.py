# models/__init__.py
from .base import Base
from .relations import RelationKind, RoleRelation
from .inherit_role import InheritRole

__all__ = [
     "Base",
     "RelationKind",
     "RoleRelation",
     "InheritRole",
]
