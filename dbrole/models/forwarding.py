# models/forwarding.py
"""
Forwarding guard and eligibility test for role attribute access.

While a record is resolving or synchronising its role, attribute access on
it must not forward again. The suspension is tracked in a context variable
rather than on the record, so it is scoped to the current thread or task
and never leaks between records.
"""
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, FrozenSet, Iterator

_suspended: ContextVar[FrozenSet[int]] = ContextVar(
     "dbrole_forwarding_suspended", default=frozenset()
)


@contextmanager
def forwarding_suspended(record: Any) -> Iterator[None]:
     """Suspend attribute forwarding for `record` within the block."""
     token = _suspended.set(_suspended.get() | {id(record)})
     try:
          yield
     finally:
          _suspended.reset(token)


def forwarding_is_suspended(record: Any) -> bool:
     return id(record) in _suspended.get()


def is_forwardable(record: Any, name: str) -> bool:
     """
     Whether `name` may be looked up on the role record of `record`.

     Private names, names the host class declares, its primary key, values
     it already holds and relationships it has loaded all stay on the host.
     """
     if name.startswith("_") or forwarding_is_suspended(record):
          return False
     if hasattr(type(record), name) or name in vars(record):
          return False
     if name == record.primary_key_name():
          return False
     if name in record.get_attributes():
          return False
     return not record.relation_loaded(name)
