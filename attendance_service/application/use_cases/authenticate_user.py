import structlog

from ...domain.entities import IdentifierKind, User
from ...domain.errors import InvalidCredentials
from ..dto import LoginResult, StoredCredentials

logger = structlog.get_logger()


class ICredentialRepository:
    def find_by_identifier(self, identifier: str, kind: IdentifierKind) -> list[StoredCredentials]: ...


class IPasswordHasher:
    def verify(self, plain: str, hashed: str) -> bool: ...
    def dummy_verify(self) -> bool: ...


class ITokenIssuer:
    def issue(self, user: User) -> str: ...


class AuthenticateUser:
    """Проверяет идентификатор и пароль, выдаёт подписанный токен сессии.

    Ошибка одна и та же для неизвестного пользователя и неверного пароля,
    чтобы по ответу нельзя было перебрать существующие номера.
    """

    def __init__(self, repo: ICredentialRepository, hasher: IPasswordHasher, issuer: ITokenIssuer):
        self.repo = repo
        self.hasher = hasher
        self.issuer = issuer

    def execute(self, identifier: str, password: str, kind: IdentifierKind = IdentifierKind.GENERAL) -> LoginResult:
        matches = self.repo.find_by_identifier(identifier, kind) if identifier else []
        if len(matches) != 1:
            # сравнение всё равно выполняем, чтобы время ответа не выдавало отсутствие пользователя
            self.hasher.dummy_verify()
            logger.info("login_failed", kind=kind.value, reason="lookup")
            raise InvalidCredentials()

        creds = matches[0]
        if not self.hasher.verify(password, creds.password_hash):
            logger.info("login_failed", kind=kind.value, reason="password")
            raise InvalidCredentials()

        token = self.issuer.issue(creds.user)
        logger.info("login_succeeded", user_id=creds.user.id, role=creds.user.role)
        return LoginResult(token=token, role=creds.user.role, name=creds.user.name)
