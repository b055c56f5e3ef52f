"""
Error taxonomy shared by services and routers.

Services raise these; the handlers registered in app.main turn them into
`{"error": ...}` JSON responses with the matching status code.
"""
from typing import Any, List, Optional


class CRMError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"error": self.message}


class ValidationError(CRMError):
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, message: Optional[str] = None, issues: Optional[List[dict]] = None):
        super().__init__(message)
        self.issues = issues or []

    def to_body(self) -> dict:
        if self.issues:
            return {"error": self.issues}
        return {"error": self.message}


class AuthenticationError(CRMError):
    status_code = 401
    default_message = "Unauthorized"


class AuthorizationError(CRMError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(CRMError):
    status_code = 404
    default_message = "Not found"


def issue(path: Any, message: str, type_: str = "value_error") -> dict:
    if isinstance(path, (list, tuple)):
        path = [p for p in path]
    else:
        path = [path]
    return {"path": path, "message": message, "type": type_}
