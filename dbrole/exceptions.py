# exceptions.py
"""
Errors raised by role composition.

They derive from SQLAlchemy's InvalidRequestError, the family SQLAlchemy
itself uses for misconfigured mappings and misuse of the ORM.
"""
from sqlalchemy.exc import InvalidRequestError


class RoleError(InvalidRequestError):
     """Base class for role composition errors."""


class RoleConfigurationError(RoleError):
     """The host model does not name a usable role relationship."""


class UnsupportedRelationError(RoleConfigurationError):
     """The role relationship is neither has-one nor belongs-to."""
