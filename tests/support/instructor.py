# tests/support/instructor.py
from sqlalchemy import Column, Integer, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from dbrole.models import Base, InheritRole


class Instructor(InheritRole, Base):
     """
     Instructor - an 'instructors' row pointing at its human row (belongs-to).
     """
     human_id = Column(Integer, ForeignKey("humans.id"), primary_key=True, autoincrement=False)
     rank_id = Column(Integer, nullable=True)
     salary = Column(Numeric(10, 2), nullable=True)

     human = relationship("Human")

     @classmethod
     def role_relation_name(cls) -> str:
          return "human"

     @classmethod
     def role_marking_attributes(cls):
          return {"role": "instructor"}

     def __repr__(self):
          return f"<Instructor(human_id={self.human_id}, rank_id={self.rank_id})>"
