# account_api/core/exceptions.py
from fastapi import HTTPException


class ErrorMessages:
    # auth
    INVALID_CREDENTIALS = "Invalid credentials"
    USER_ALREADY_EXISTS = "User with such email already exists"
    OAUTH_FAILED = "OAuth authentication failed"

    # user
    INCORRECT_PASSWORD = "Current password is incorrect"
    USER_NOT_FOUND = "User not found"

    # jwt
    INVALID_ACCESS_TOKEN = "Invalid access token"
    INVALID_REFRESH_TOKEN = "Invalid refresh token"
    REFRESH_TOKEN_REQUIRED = "Refresh token is required"

    # verification
    EMAIL_ALREADY_VERIFIED = "Email is already verified"
    INVALID_TOKEN_TYPE = "Invalid token type"
    TOKEN_ALREADY_USED = "Token has already been used"
    TOKEN_EXPIRED = "Token has expired"
    VERIFICATION_TOKEN_NOT_FOUND = "Verification token not found"

    # files
    INVALID_FILE_FORMAT = "Only image files are allowed (jpg, jpeg, png, gif, webp, svg)"
    INVALID_FILE = "Invalid file format or size"


class UnauthorizedError(HTTPException):
    def __init__(self, detail: str = ErrorMessages.INVALID_CREDENTIALS, bearer: bool = False):
        headers = {"WWW-Authenticate": "Bearer"} if bearer else None
        super().__init__(status_code=401, detail=detail, headers=headers)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = ErrorMessages.USER_NOT_FOUND):
        super().__init__(status_code=404, detail=detail)


class BadRequestError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)


class UnprocessableError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=422, detail=detail)


class UnsupportedMediaError(HTTPException):
    def __init__(self, detail: str = ErrorMessages.INVALID_FILE):
        super().__init__(status_code=415, detail=detail)


class PayloadTooLargeError(HTTPException):
    def __init__(self, detail: str = ErrorMessages.INVALID_FILE):
        super().__init__(status_code=413, detail=detail)
