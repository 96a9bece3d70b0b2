from ...domain.entities import StudentSummary
from ..dto import ClassReport


class IReportRepository:
    def class_summary(self, class_name: str) -> list[StudentSummary]: ...


class BuildClassReport:
    def __init__(self, repo: IReportRepository):
        self.repo = repo

    def execute(self, class_name: str) -> ClassReport:
        # счётчики за всё время, без кэша: журнал небольшой
        return ClassReport(class_name=class_name, students=list(self.repo.class_summary(class_name)))
