class AttendanceError(Exception):
    status_code: int = 500
    message: str = "Internal error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidCredentials(AttendanceError):
    status_code = 401
    message = "Invalid credentials"


class MissingToken(AttendanceError):
    status_code = 401
    message = "Missing token"


class MalformedToken(AttendanceError):
    status_code = 401
    message = "Invalid token"


class InvalidOrExpiredToken(AttendanceError):
    status_code = 401
    message = "Invalid token"


class Forbidden(AttendanceError):
    status_code = 403
    message = "Forbidden"


class BadRequest(AttendanceError):
    status_code = 400
    message = "Bad request"


class InternalFailure(AttendanceError):
    status_code = 500
    message = "Internal error"


AUTH_ERRORS = (InvalidCredentials, MissingToken, MalformedToken, InvalidOrExpiredToken)
