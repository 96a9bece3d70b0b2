from dataclasses import dataclass, field

from ..domain.entities import StudentSummary, User


@dataclass
class StoredCredentials:
    user: User
    password_hash: str


@dataclass
class LoginResult:
    token: str
    role: str
    name: str


@dataclass
class ClassReport:
    class_name: str
    students: list[StudentSummary] = field(default_factory=list)
