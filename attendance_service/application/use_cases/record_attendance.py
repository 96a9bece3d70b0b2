from datetime import date as date_type
from typing import Any, Iterable

import structlog

from ...domain.entities import AttendanceEntry, AttendanceStatus
from ...domain.errors import BadRequest

logger = structlog.get_logger()


class IClassRepository:
    def exists(self, name: str) -> bool: ...


class IStudentRepository:
    def ids_in_class(self, class_name: str, ids: list[int]) -> set[int]: ...


class IAttendanceRepository:
    def replace_for_day(self, day: date_type, class_name: str, entries: list[AttendanceEntry]) -> int: ...


def to_entry(raw: Any) -> AttendanceEntry:
    if isinstance(raw, AttendanceEntry):
        return raw
    student_id = getattr(raw, "student_id", None)
    status = getattr(raw, "status", None)
    if isinstance(raw, dict):
        student_id, status = raw.get("student_id"), raw.get("status")
    if not isinstance(student_id, int) or isinstance(student_id, bool):
        raise BadRequest("Invalid student_id")
    try:
        return AttendanceEntry(student_id=student_id, status=AttendanceStatus(status))
    except ValueError:
        raise BadRequest("Invalid status")


class RecordAttendance:
    """Заменяет журнал класса за день целиком: удалить всё за (дата, класс), вставить присланное.

    Повторная отправка того же набора даёт то же состояние. Отправка
    неполного набора удаляет отметки учеников, которых в нём нет.
    Каждый ученик в наборе встречается один раз и числится в этом классе.
    """

    def __init__(self, classes: IClassRepository, students: IStudentRepository, ledger: IAttendanceRepository):
        self.classes = classes
        self.students = students
        self.ledger = ledger

    def execute(self, day: date_type, class_name: str, records: Iterable[Any]) -> int:
        if not isinstance(day, date_type):
            raise BadRequest("Invalid date")
        if not class_name or not class_name.strip():
            raise BadRequest("class_name is required")
        if records is None or isinstance(records, (str, bytes, dict)):
            raise BadRequest("records must be a list")
        entries = [to_entry(r) for r in records]
        ids = [e.student_id for e in entries]
        # не больше одной отметки на ученика за день
        if len(set(ids)) != len(ids):
            raise BadRequest("Duplicate student_id")
        if not self.classes.exists(class_name):
            raise BadRequest("Unknown class")
        if ids and set(ids) - self.students.ids_in_class(class_name, ids):
            raise BadRequest("Unknown student")

        written = self.ledger.replace_for_day(day, class_name, entries)
        logger.info("attendance_recorded", date=day.isoformat(), class_name=class_name, count=written)
        return written
