from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ....infrastructure.db import get_db
from ....infrastructure.metrics import login_attempts_total
from ....infrastructure.ratelimit import limiter
from ....infrastructure.repositories import UserRepository
from ....infrastructure.security import PasswordHasher, TokenIssuer
from ....application.use_cases.authenticate_user import AuthenticateUser
from ....domain.entities import IdentifierKind, Principal
from ....domain.errors import InvalidCredentials
from ....config import settings
from ..authz import get_principal
from ..schemas import LoginReq, MeResp, TokenResp

router = APIRouter(prefix="/api/auth", tags=["auth"])

# "gr" - так клиент исторически называет номер в журнале (registration number)
KIND_BY_TYPE = {
    "gr": IdentifierKind.REGISTRATION_NUMBER,
    "registration_number": IdentifierKind.REGISTRATION_NUMBER,
    "general": IdentifierKind.GENERAL,
}


def identifier_kind(value: str | None) -> IdentifierKind:
    return KIND_BY_TYPE.get((value or "").lower(), IdentifierKind.GENERAL)


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/login", response_model=TokenResp)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(request: Request, payload: LoginReq, db: Session = Depends(get_db)):
    uc = AuthenticateUser(repo=UserRepository(db), hasher=PasswordHasher(), issuer=TokenIssuer())
    try:
        result = uc.execute(payload.identifier, payload.password, identifier_kind(payload.type))
    except InvalidCredentials:
        login_attempts_total.labels(outcome="failure").inc()
        raise
    login_attempts_total.labels(outcome="success").inc()
    return TokenResp(token=result.token, role=result.role, name=result.name)


@router.get("/me", response_model=MeResp)
def me(principal: Principal = Depends(get_principal)):
    return MeResp(id=principal.user_id, role=principal.role, name=principal.name)
