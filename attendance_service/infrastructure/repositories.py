import datetime

from sqlalchemy import and_, case, delete, func, or_, select
from sqlalchemy.orm import Session

from .models import AttendanceORM, ClassORM, StudentORM, UserORM
from ..application.dto import StoredCredentials
from ..application.use_cases.authenticate_user import ICredentialRepository
from ..application.use_cases.build_class_report import IReportRepository
from ..application.use_cases.record_attendance import (
    IAttendanceRepository,
    IClassRepository,
    IStudentRepository,
)
from ..domain.entities import AttendanceEntry, AttendanceRow, IdentifierKind, StudentSummary, User


def to_domain(u: UserORM) -> User:
    return User(id=u.id, name=u.name, role=u.role, phone=u.phone, registration_number=u.registration_number)


class UserRepository(ICredentialRepository):
    def __init__(self, db: Session): self.db = db

    def find_by_identifier(self, identifier: str, kind: IdentifierKind) -> list[StoredCredentials]:
        if kind == IdentifierKind.REGISTRATION_NUMBER:
            cond = UserORM.registration_number == identifier
        else:
            cond = or_(UserORM.phone == identifier, UserORM.registration_number == identifier)
        # больше двух строк не нужно: важно лишь, единственное ли совпадение
        rows = self.db.execute(select(UserORM).where(cond).limit(2)).scalars().all()
        return [StoredCredentials(user=to_domain(r), password_hash=r.password_hash) for r in rows]


class ClassRepository(IClassRepository):
    def __init__(self, db: Session): self.db = db

    def exists(self, name: str) -> bool:
        return self.db.execute(select(ClassORM.id).where(ClassORM.name == name)).first() is not None

    def list_names(self) -> list[str]:
        return list(self.db.execute(select(ClassORM.name).order_by(ClassORM.name)).scalars())


class StudentRepository(IStudentRepository):
    def __init__(self, db: Session): self.db = db

    def find(self, class_name: str | None = None) -> list[StudentORM]:
        q = select(StudentORM)
        if class_name:
            q = q.where(StudentORM.class_name == class_name)
        return list(self.db.execute(q.order_by(StudentORM.roll, StudentORM.id)).scalars())

    def ids_in_class(self, class_name: str, ids: list[int]) -> set[int]:
        q = select(StudentORM.id).where(StudentORM.class_name == class_name, StudentORM.id.in_(ids))
        return set(self.db.execute(q).scalars())

    def create(self, name: str, roll: int, class_name: str) -> int:
        row = StudentORM(name=name, roll=roll, class_name=class_name)
        self.db.add(row); self.db.commit(); self.db.refresh(row)
        return row.id


class AttendanceRepository(IAttendanceRepository):
    def __init__(self, db: Session): self.db = db

    def replace_for_day(self, day: datetime.date, class_name: str, entries: list[AttendanceEntry]) -> int:
        # удаление и вставка в одной транзакции: конкурентные записи за тот же день сериализует БД
        try:
            self.db.execute(
                delete(AttendanceORM).where(AttendanceORM.date == day, AttendanceORM.class_name == class_name)
            )
            self.db.add_all([
                AttendanceORM(student_id=e.student_id, date=day, status=e.status.value, class_name=class_name)
                for e in entries
            ])
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return len(entries)

    def find(self, day: datetime.date | None = None, class_name: str | None = None) -> list[AttendanceRow]:
        q = (select(AttendanceORM, StudentORM.name, StudentORM.roll)
             .outerjoin(StudentORM, StudentORM.id == AttendanceORM.student_id))
        if day is not None:
            q = q.where(AttendanceORM.date == day)
        if class_name:
            q = q.where(AttendanceORM.class_name == class_name)
        q = q.order_by(StudentORM.roll, AttendanceORM.id)
        return [
            AttendanceRow(id=a.id, student_id=a.student_id, date=a.date, status=a.status,
                          class_name=a.class_name, student_name=name, roll=roll)
            for a, name, roll in self.db.execute(q).all()
        ]


class ReportRepository(IReportRepository):
    def __init__(self, db: Session): self.db = db

    def class_summary(self, class_name: str) -> list[StudentSummary]:
        present = func.coalesce(func.sum(case((AttendanceORM.status == "present", 1), else_=0)), 0)
        absent = func.coalesce(func.sum(case((AttendanceORM.status == "absent", 1), else_=0)), 0)
        q = (select(StudentORM.id, StudentORM.name, StudentORM.roll,
                    present.label("present"), absent.label("absent"))
             .outerjoin(AttendanceORM, and_(AttendanceORM.student_id == StudentORM.id,
                                            AttendanceORM.class_name == class_name))
             .where(StudentORM.class_name == class_name)
             .group_by(StudentORM.id, StudentORM.name, StudentORM.roll)
             .order_by(StudentORM.roll, StudentORM.id))
        return [
            StudentSummary(id=r.id, name=r.name, roll=r.roll, present=int(r.present), absent=int(r.absent))
            for r in self.db.execute(q).all()
        ]
