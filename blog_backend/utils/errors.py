from fastapi import HTTPException


class APIError(HTTPException):
    """Base for every error the API answers with. `kind` ends up in the
    `error` field of the response envelope."""

    kind = "InternalError"
    status = 500

    def __init__(self, detail: str, headers: dict = None):
        super().__init__(status_code=self.status, detail=detail, headers=headers)


class ValidationError(APIError):
    kind = "ValidationError"
    status = 400


class Unauthenticated(APIError):
    kind = "Unauthenticated"
    status = 401

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(APIError):
    kind = "Forbidden"
    status = 403


class NotFound(APIError):
    kind = "NotFound"
    status = 404


class Conflict(APIError):
    kind = "Conflict"
    status = 409


class InternalError(APIError):
    kind = "InternalError"
    status = 500

    def __init__(self, detail: str = "Server error"):
        super().__init__(detail)


# Plain HTTPExceptions (e.g. 405 from the router) get a kind from their status
KIND_BY_STATUS = {
    400: "ValidationError",
    401: "Unauthenticated",
    403: "Forbidden",
    404: "NotFound",
    409: "Conflict",
}


def error_body(status_code: int, message: str, kind: str = None) -> dict:
    return {
        "error": kind or KIND_BY_STATUS.get(status_code, "InternalError" if status_code >= 500 else "Error"),
        "message": message,
    }
