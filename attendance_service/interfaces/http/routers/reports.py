from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ....infrastructure.db import get_db
from ....infrastructure.repositories import ReportRepository
from ....application.use_cases.build_class_report import BuildClassReport
from ....domain.entities import Role
from ..authz import require_roles
from ..schemas import ClassReportOut, StudentReportOut

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/class/{class_name}", response_model=ClassReportOut,
            dependencies=[Depends(require_roles(Role.TEACHER, Role.PARENT))])
def class_report(class_name: str, db: Session = Depends(get_db)):
    report = BuildClassReport(ReportRepository(db)).execute(class_name)
    return ClassReportOut(
        class_name=report.class_name,
        students=[StudentReportOut.model_validate(s) for s in report.students],
    )
