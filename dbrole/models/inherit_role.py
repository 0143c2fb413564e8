# models/inherit_role.py
"""
InheritRole - table inheritance by composition.

A logical entity is stored as two rows joined 1:1: the host row of the
model using this mixin, and a role row reachable through one of its
relationships. Attributes the host does not declare are read from and
written to the role record, and save()/delete() keep both rows in step.

Master (has-one), the role row points at the host:

     class Student(InheritRole, Base):
          __table__ = Human.__table__
          __role_relation__ = "student_role"
          __role_marking__ = {"role": "student"}

          student_role = relationship("StudentRole", uselist=False)

Slave (belongs-to), the host row points at the role row:

     class Instructor(InheritRole, Base):
          __role_relation__ = "human"
          __role_marking__ = {"role": "instructor"}

          human_id = Column(Integer, ForeignKey("humans.id"), primary_key=True)
          human = relationship("Human")

Role marking attributes are stamped on whichever row carries the
discriminator: the host for has-one, the role record for belongs-to.
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy import and_, inspect
from sqlalchemy.orm import Session

from ..exceptions import RoleConfigurationError
from . import scoping  # noqa: F401  registers the query scope listener
from .forwarding import forwarding_suspended, is_forwardable
from .relations import RelationKind, RoleRelation

logger = logging.getLogger(__name__)


class InheritRole:
     """
     Mixin for Base models composed from a host row and a role row.
     Must precede Base in the class bases.
     """

     __role_relation__ = None
     __role_marking__ = {}

     def __init__(self, **kwargs):
          cls = type(self)
          own = {key: value for key, value in kwargs.items() if hasattr(cls, key)}
          super().__init__(**own)
          for key, value in kwargs.items():
               if key in own:
                    continue
               if not self._role_accepts(key):
                    raise TypeError(f"{key!r} is an invalid keyword argument for {cls.__name__}")
               setattr(self, key, value)

     @classmethod
     def role_relation_name(cls) -> Optional[str]:
          return cls.__role_relation__

     @classmethod
     def role_marking_attributes(cls) -> Dict[str, Any]:
          return dict(cls.__role_marking__ or {})

     @classmethod
     def role_relation(cls) -> RoleRelation:
          name = cls.role_relation_name()
          if not name:
               raise RoleConfigurationError(
                    f"{cls.__name__} does not declare a role relation name"
               )
          return RoleRelation.for_attribute(cls, name)

     @classmethod
     def role_query_criteria(cls):
          """
          Filter limiting queries on a has-one host to its own role,
          or None when there is nothing to filter on.
          """
          marking = cls.role_marking_attributes()
          if not marking or cls.role_relation().kind is not RelationKind.OWNING:
               return None
          return and_(*[getattr(cls, key) == value for key, value in marking.items()])

     def get_role_relation_model(self) -> Any:
          """
          The role record backing this model.

          Loaded through the relationship when the host is persistent,
          otherwise a new unsaved record is created and cached on the host.
          A cached record stays out of the session until the host is saved.
          """
          with forwarding_suspended(self):
               relation = self.role_relation()
               model = getattr(self, relation.name)
               if model is None:
                    model = relation.make()
                    self.cache_relation(relation.name, model)
                    logger.debug("Created %s role record for %r", relation.name, self)
               return model

     # Lifecycle

     def before_save(self, session: Session) -> None:
          super().before_save(session)
          relation = self.role_relation()
          marking = self.role_marking_attributes()

          if relation.kind is RelationKind.OWNING:
               with forwarding_suspended(self):
                    for key, value in marking.items():
                         setattr(self, key, value)
                    role = self.get_relation(relation.name)
                    if role is not None and inspect(role).transient:
                         # assigned, not cached, so the flush links it to the host key
                         self.cache_relation(relation.name, None)
                         self.set_relation(relation.name, role)
               return

          if relation.kind is RelationKind.OWNED:
               # an existing link with no role changes stays as it is
               if not self.relation_loaded(relation.name) and getattr(self, relation.foreign_key) is not None:
                    return
               role = self.get_role_relation_model()
               for key, value in marking.items():
                    setattr(role, key, value)
               # the role row needs its key before the host can refer to it
               relation.persist(role, session)
               setattr(self, relation.foreign_key, getattr(role, relation.owner_key))

     def after_save(self, session: Session) -> None:
          super().after_save(session)
          relation = self.role_relation()
          if relation.kind is RelationKind.OWNED:
               return
          if not self.relation_loaded(relation.name):
               return
          role = self.get_role_relation_model()
          relation.save(self, role, session)

     def before_delete(self, session: Session) -> None:
          super().before_delete(session)
          relation = self.role_relation()
          with forwarding_suspended(self):
               if relation.kind is RelationKind.OWNING:
                    relation.delete(self, session)

     def after_delete(self, session: Session) -> None:
          super().after_delete(session)
          relation = self.role_relation()
          with forwarding_suspended(self):
               if relation.kind is RelationKind.OWNED:
                    relation.delete(self, session)
                    session.flush()

     # Attribute forwarding

     def __getattr__(self, name: str) -> Any:
          # Only reached when regular lookup fails on the host
          if is_forwardable(self, name):
               role = self.get_role_relation_model()
               if name in role.get_attributes() or hasattr(type(role), name):
                    # columns, relationships and methods alike; methods come back bound to the role
                    return getattr(role, name)
          raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

     def _role_accepts(self, name: str) -> bool:
          """Whether an assignment to `name` goes to the role record."""
          if not is_forwardable(self, name):
               return False
          role = self.get_role_relation_model()
          return (
               name in role.get_attributes()
               or name in role.get_fillable()
               or name in role.get_guarded()
          )

     def __setattr__(self, name: str, value: Any) -> None:
          if self._role_accepts(name):
               setattr(self.get_role_relation_model(), name, value)
               return
          super().__setattr__(name, value)

     def __delattr__(self, name: str) -> None:
          forwarded = False
          if is_forwardable(self, name):
               role = self.get_role_relation_model()
               if name in role.get_attributes():
                    delattr(role, name)
                    forwarded = True
          if not forwarded or name in vars(self):
               super().__delattr__(name)
