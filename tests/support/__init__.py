# tests/support/__init__.py
from .human import Human
from .student_role import StudentRole
from .student import Student
from .instructor import Instructor
from .misconfigured import Mentor, Nameless, Misnamed

__all__ = [
     "Human",
     "StudentRole",
     "Student",
     "Instructor",
     "Mentor",
     "Nameless",
     "Misnamed",
]
