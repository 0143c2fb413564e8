# models/scoping.py
"""
Query scope for role hosts sharing a table.

Several has-one hosts may map the same table and tell their rows apart by
their role marking attributes (Student and Graduate both on 'humans', marked
by 'role'). Every ORM select, bulk update and bulk delete gets the marking
attributes of each such host added as loader criteria, so loading, counting
or deleting Students never touches an instructor's row.

The criteria are added for every mapped host, not only the entities listed
in the statement's columns. Counts, select_from() targets and subqueries
are scoped the same way.
"""
from typing import List

from sqlalchemy import event
from sqlalchemy.orm import ORMExecuteState, Session, with_loader_criteria

from .base import Base


def role_scope_options() -> List:
     """Loader criteria options for every host with role marking attributes."""
     options = []
     for mapper in Base.registry.mappers:
          criteria_for = getattr(mapper.class_, "role_query_criteria", None)
          if criteria_for is None:
               continue
          criteria = criteria_for()
          if criteria is not None:
               options.append(with_loader_criteria(mapper.class_, criteria, include_aliases=True))
     return options


@event.listens_for(Session, "do_orm_execute")
def _scope_role_queries(execute_state: ORMExecuteState) -> None:
     # relationship loads inherit the options of the query that loaded their parent
     if execute_state.is_column_load or execute_state.is_relationship_load:
          return
     if not (execute_state.is_select or execute_state.is_update or execute_state.is_delete):
          return

     options = role_scope_options()
     if options:
          execute_state.statement = execute_state.statement.options(*options)
