from dataclasses import dataclass
from datetime import date
from enum import Enum


class Role(str, Enum):
    TEACHER = "teacher"
    PARENT = "parent"
    STUDENT = "student"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


class IdentifierKind(str, Enum):
    REGISTRATION_NUMBER = "registration_number"
    GENERAL = "general"


@dataclass(frozen=True)
class User:
    id: int
    name: str
    role: str
    phone: str | None = None
    registration_number: str | None = None


@dataclass(frozen=True)
class Principal:
    """Личность из проверенного токена."""
    user_id: int
    role: str
    name: str


@dataclass(frozen=True)
class AttendanceEntry:
    student_id: int
    status: AttendanceStatus


@dataclass(frozen=True)
class AttendanceRow:
    id: int
    student_id: int
    date: date
    status: str
    class_name: str
    student_name: str | None
    roll: int | None


@dataclass(frozen=True)
class StudentSummary:
    id: int
    name: str
    roll: int
    present: int = 0
    absent: int = 0
