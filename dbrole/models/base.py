# models/base.py
import logging
import re
from typing import Any, Dict, List, Optional

from sqlalchemy import inspect
from sqlalchemy.orm import DeclarativeBase, Session, declared_attr, object_session
from sqlalchemy.orm.attributes import set_committed_value

from ..database import SessionLocal

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.

     Adds an active-record surface on top of the declarative mapping:
     attribute snapshots, mass-assignment declarations, cached relation
     access and save()/delete() with explicit lifecycle hooks.
     """

     # Attribute names open to assignment, and names reserved from it
     __fillable__ = ()
     __guarded__ = ()

     @declared_attr.directive
     def __tablename__(cls) -> str:
          """
          Automatically generate table name from class name.
          Example: PropertyUnit -> property_units
          """
          name = re.sub(r'(?<!^)(?=[A-Z])', '_', cls.__name__).lower()
          # Pluralize (simple version)
          if name.endswith('y'):
               return name[:-1] + 'ies'
          elif name.endswith('s'):
               return name + 'es'
          return name + 's'

     @classmethod
     def primary_key_name(cls) -> str:
          mapper = inspect(cls)
          return mapper.get_property_by_column(mapper.primary_key[0]).key

     def get_fillable(self) -> List[str]:
          return list(type(self).__fillable__)

     def get_guarded(self) -> List[str]:
          return list(type(self).__guarded__)

     def get_attributes(self) -> Dict[str, Any]:
          """
          Column values currently held by this instance.

          Unset columns of a new record and expired columns of a
          persistent one are left out.
          """
          state = inspect(self)
          return {
               prop.key: state.dict[prop.key]
               for prop in state.mapper.column_attrs
               if prop.key in state.dict
          }

     def relation_loaded(self, name: str) -> bool:
          state = inspect(self)
          return name in state.mapper.relationships and name in state.dict

     def get_relation(self, name: str) -> Any:
          """Cached value of a relationship, without triggering a load."""
          return inspect(self).dict.get(name)

     def set_relation(self, name: str, value: Any) -> None:
          setattr(self, name, value)

     def cache_relation(self, name: str, value: Any) -> None:
          """
          Store a relationship value as if it had been loaded.

          Unlike set_relation(), the record is not marked as changed and the
          value is not cascaded into the record's session.
          """
          set_committed_value(self, name, value)

     def get_session(self) -> Session:
          """The session this record belongs to, or the request-scoped one."""
          return object_session(self) or SessionLocal()

     # Lifecycle hooks, run by save() and delete() around the flush

     def before_save(self, session: Session) -> None:
          pass

     def after_save(self, session: Session) -> None:
          pass

     def before_delete(self, session: Session) -> None:
          pass

     def after_delete(self, session: Session) -> None:
          pass

     def save(self, session: Optional[Session] = None) -> "Base":
          """
          Insert or update this record.

          The session is flushed, not committed, so generated keys are
          available to after_save() and to the caller.
          """
          session = session or self.get_session()
          self.before_save(session)
          session.add(self)
          session.flush()
          self.after_save(session)
          logger.debug("Saved %r", self)
          return self

     def delete(self, session: Optional[Session] = None) -> None:
          """
          Delete this record.
          Note that this method does not commit; rollback is up to the caller.
          """
          session = session or self.get_session()
          self.before_delete(session)
          session.delete(self)
          session.flush()
          self.after_delete(session)
          logger.debug("Deleted %r", self)
