import structlog
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from ..config import settings
from ..domain.entities import Principal, User
from ..domain.errors import InvalidOrExpiredToken

logger = structlog.get_logger()

pwd = CryptContext(
    schemes=["bcrypt_sha256", "bcrypt"],
    deprecated="auto",
    bcrypt_sha256__truncate_error=False,
)


class PasswordHasher:
    def hash(self, plain: str) -> str: return pwd.hash(plain)

    def verify(self, plain: str, hashed: str) -> bool:
        try:
            return pwd.verify(plain, hashed)
        except ValueError:
            # хэш в неизвестном формате: для клиента это просто неверный пароль
            logger.warning("password_hash_unrecognized")
            return False

    def dummy_verify(self) -> bool: return pwd.dummy_verify()


def create_access_token(
    user_id: int,
    role: str,
    name: str,
    minutes: int | None = None,
    now: datetime | None = None,
) -> str:
    iat = now or datetime.now(timezone.utc)
    exp = iat + timedelta(minutes=minutes if minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"sub": str(user_id), "role": role, "name": name, "iat": iat, "exp": exp}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Principal:
    """Проверяет подпись и срок действия, возвращает Principal или кидает InvalidOrExpiredToken."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise InvalidOrExpiredToken()
    sub, role = payload.get("sub"), payload.get("role")
    if not sub or not role:
        raise InvalidOrExpiredToken()
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise InvalidOrExpiredToken()
    return Principal(user_id=user_id, role=role, name=payload.get("name", ""))


class TokenIssuer:
    def __init__(self, minutes: int | None = None):
        self.minutes = minutes

    def issue(self, user: User) -> str:
        return create_access_token(user.id, user.role, user.name, minutes=self.minutes)
