from fastapi import Depends, Header

from ...domain.entities import Principal
from ...domain.errors import Forbidden, MalformedToken, MissingToken
from ...infrastructure.security import decode_token


def extract_bearer_token(authorization: str | None) -> str:
    if not authorization or not authorization.strip():
        raise MissingToken()
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        raise MalformedToken()
    return parts[1]


def get_principal(authorization: str | None = Header(default=None)) -> Principal:
    return decode_token(extract_bearer_token(authorization))


def require_roles(*roles: str):
    """Зависимость FastAPI: пропускает только перечисленные роли (пустой список пускает всех)."""
    allowed = {getattr(r, "value", r) for r in roles}

    def _require(principal: Principal = Depends(get_principal)) -> Principal:
        if allowed and principal.role not in allowed:
            raise Forbidden()
        return principal

    return _require
