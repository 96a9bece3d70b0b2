import datetime

from pydantic import BaseModel, Field

from ...domain.entities import AttendanceStatus


class LoginReq(BaseModel):
    identifier: str
    password: str
    type: str = "general"

class TokenResp(BaseModel):
    token: str
    role: str
    name: str

class MeResp(BaseModel):
    id: int
    role: str
    name: str

class StudentCreate(BaseModel):
    name: str = Field(min_length=1)
    roll: int
    class_name: str = Field(min_length=1)

class StudentOut(BaseModel):
    id: int
    name: str
    roll: int
    class_name: str
    class Config: from_attributes = True

class CreatedResp(BaseModel):
    id: int

class AttendanceItem(BaseModel):
    student_id: int
    status: AttendanceStatus

class AttendanceSubmit(BaseModel):
    date: datetime.date
    class_name: str = Field(min_length=1)
    records: list[AttendanceItem]

class OkResp(BaseModel):
    ok: bool = True

class AttendanceRowOut(BaseModel):
    id: int
    student_id: int
    date: datetime.date
    status: str
    class_name: str
    student_name: str | None = None
    roll: int | None = None
    class Config: from_attributes = True

class StudentReportOut(BaseModel):
    id: int
    name: str
    roll: int
    present: int = 0
    absent: int = 0
    class Config: from_attributes = True

class ClassReportOut(BaseModel):
    class_name: str = Field(alias="class")
    students: list[StudentReportOut]
    class Config:
        populate_by_name = True
