from fastapi import HTTPException, status

from app.constants.error_codes import ErrorCode


class AppException(HTTPException):
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.error_code = error_code
        self.details = details


class UnauthorizedException(AppException):
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            status.HTTP_401_UNAUTHORIZED,
            message,
            ErrorCode.UNAUTHORIZED,
        )


class NotFoundException(AppException):
    def __init__(self, message: str):
        super().__init__(status.HTTP_404_NOT_FOUND, message, ErrorCode.NOT_FOUND)


class BadRequestException(AppException):
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            status.HTTP_400_BAD_REQUEST,
            message,
            ErrorCode.VALIDATION_ERROR,
            details,
        )
