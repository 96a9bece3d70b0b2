import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ....infrastructure.db import get_db
from ....infrastructure.metrics import attendance_records_written_total
from ....infrastructure.repositories import AttendanceRepository, ClassRepository, StudentRepository
from ....application.use_cases.record_attendance import RecordAttendance
from ....domain.entities import AttendanceEntry, Role
from ..authz import get_principal, require_roles
from ..schemas import AttendanceRowOut, AttendanceSubmit, OkResp
from .school import class_filter

router = APIRouter(prefix="/api/attendance", tags=["attendance"])


@router.post("", response_model=OkResp, dependencies=[Depends(require_roles(Role.TEACHER))])
def record_attendance(payload: AttendanceSubmit, db: Session = Depends(get_db)):
    uc = RecordAttendance(
        classes=ClassRepository(db),
        students=StudentRepository(db),
        ledger=AttendanceRepository(db),
    )
    entries = [AttendanceEntry(student_id=r.student_id, status=r.status) for r in payload.records]
    written = uc.execute(payload.date, payload.class_name, entries)
    attendance_records_written_total.inc(written)
    return OkResp(ok=True)


@router.get("", response_model=list[AttendanceRowOut], dependencies=[Depends(get_principal)])
def list_attendance(
    date: datetime.date | None = Query(None),
    class_name: str | None = Query(None, alias="class"),
    db: Session = Depends(get_db),
):
    rows = AttendanceRepository(db).find(date, class_filter(class_name))
    return [AttendanceRowOut.model_validate(r) for r in rows]
