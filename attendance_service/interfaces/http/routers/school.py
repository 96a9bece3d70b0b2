from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ....infrastructure.db import get_db
from ....infrastructure.repositories import ClassRepository, StudentRepository
from ....domain.entities import Role
from ....domain.errors import BadRequest
from ..authz import get_principal, require_roles
from ..schemas import CreatedResp, StudentCreate, StudentOut

router = APIRouter(prefix="/api", tags=["school"])


def class_filter(value: str | None) -> str | None:
    # "all" в выпадающем списке клиента означает "без фильтра"
    if not value or value == "all":
        return None
    return value


@router.get("/classes", response_model=list[str], dependencies=[Depends(get_principal)])
def list_classes(db: Session = Depends(get_db)):
    return ClassRepository(db).list_names()


@router.get("/students", response_model=list[StudentOut], dependencies=[Depends(get_principal)])
def list_students(class_name: str | None = Query(None, alias="class"), db: Session = Depends(get_db)):
    rows = StudentRepository(db).find(class_filter(class_name))
    return [StudentOut.model_validate(r) for r in rows]


@router.post("/students", response_model=CreatedResp, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_roles(Role.TEACHER))])
def create_student(payload: StudentCreate, db: Session = Depends(get_db)):
    if not ClassRepository(db).exists(payload.class_name):
        raise BadRequest("Unknown class")
    return CreatedResp(id=StudentRepository(db).create(payload.name, payload.roll, payload.class_name))
