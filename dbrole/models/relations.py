# models/relations.py
"""
Role relation descriptor.

Describes the 1:1 link between a host model and its role model, derived
from the SQLAlchemy relationship the host declares:

- OWNING (has-one): the role row carries the foreign key to the host,
  e.g. Student.student_role -> students.human_id
- OWNED (belongs-to): the host row carries the foreign key to the role,
  e.g. Instructor.human -> instructors.human_id
"""
import enum
import logging
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy import inspect
from sqlalchemy.orm import RelationshipDirection, Session

from ..exceptions import RoleConfigurationError, UnsupportedRelationError

logger = logging.getLogger(__name__)


class RelationKind(str, enum.Enum):
     """Which side of the 1:1 link the host sits on."""
     OWNING = "OWNING"
     OWNED = "OWNED"


@dataclass(frozen=True)
class RoleRelation:
     """
     A has-one or belongs-to relationship between a host and its role model.

     foreign_key is always the attribute holding the link value:
     on the related class for OWNING, on the host class for OWNED.
     owner_key is the attribute the foreign key refers to.
     """
     name: str
     kind: RelationKind
     host_class: type
     related_class: type
     foreign_key: str
     owner_key: str

     @classmethod
     def for_attribute(cls, host_class: type, name: str) -> "RoleRelation":
          mapper = inspect(host_class)
          if name not in mapper.relationships:
               raise RoleConfigurationError(
                    f"{host_class.__name__}.{name} is not a relationship"
               )
          prop = mapper.relationships[name]

          if len(prop.local_remote_pairs) != 1:
               raise UnsupportedRelationError(
                    f"{host_class.__name__}.{name} links on more than one column"
               )
          local_column, remote_column = prop.local_remote_pairs[0]
          local_key = mapper.get_property_by_column(local_column).key
          remote_key = prop.mapper.get_property_by_column(remote_column).key

          if prop.direction is RelationshipDirection.ONETOMANY and not prop.uselist:
               kind, foreign_key, owner_key = RelationKind.OWNING, remote_key, local_key
          elif prop.direction is RelationshipDirection.MANYTOONE:
               kind, foreign_key, owner_key = RelationKind.OWNED, local_key, remote_key
          else:
               raise UnsupportedRelationError(
                    f"{host_class.__name__}.{name} must be a has-one or belongs-to "
                    f"relationship, got {prop.direction.name}"
                    + (" with uselist=True" if prop.uselist else "")
               )

          return cls(
               name=name,
               kind=kind,
               host_class=host_class,
               related_class=prop.mapper.class_,
               foreign_key=foreign_key,
               owner_key=owner_key,
          )

     def make(self) -> Any:
          """New, unsaved related record."""
          return self.related_class()

     def load(self, host: Any, session: Session) -> Optional[Any]:
          """The related record, from the host's cache or from storage."""
          if host.relation_loaded(self.name):
               return host.get_relation(self.name)
          if self.kind is RelationKind.OWNED:
               key = getattr(host, self.foreign_key)
               return session.get(self.related_class, key) if key is not None else None
          return getattr(host, self.name)

     def persist(self, record: Any, session: Session) -> None:
          save = getattr(record, "save", None)
          if callable(save):
               save(session)
          else:
               session.add(record)
               session.flush()

     def save(self, host: Any, record: Any, session: Session) -> None:
          """
          Persist the related record through this relation.
          An owning relation stamps the host's key on it first.
          """
          if self.kind is RelationKind.OWNING:
               setattr(record, self.foreign_key, getattr(host, self.owner_key))
          self.persist(record, session)

     def delete(self, host: Any, session: Session) -> None:
          """
          Mark the related record for deletion.
          Nothing is flushed. An unsaved record is just dropped from the
          session and from the host.
          """
          record = self.load(host, session)
          if record is None:
               return
          state = inspect(record)
          if state.persistent:
               logger.debug("Deleting %s role record %r", self.name, record)
               session.delete(record)
               return
          if state.pending:
               session.expunge(record)
          host.cache_relation(self.name, None)
