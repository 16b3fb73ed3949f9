"""Error taxonomy shared by the services and the HTTP layer."""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(AppError):
    """Malformed or missing input. Carries one message per offending field."""

    status_code = 400

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or [message]

    def to_dict(self) -> dict:
        return {"error": self.message, "errors": self.errors}


class NotFoundError(AppError):
    status_code = 404


class InvalidTransitionError(AppError):
    status_code = 400


class InsufficientStockError(AppError):
    status_code = 409


class UnauthorizedError(AppError):
    status_code = 401


class InternalError(AppError):
    status_code = 500
