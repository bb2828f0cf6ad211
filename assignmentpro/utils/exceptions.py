# assignmentpro/utils/exceptions.py
"""
Error taxonomy shared by services and routers.

Services raise these; main.py renders them as ``{"detail": ..., "reason": ...}``
with the class's status code.
"""

from typing import Optional


class AppError(Exception):
    status_code = 500
    reason = "ERROR"

    def __init__(self, detail: str, reason: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        if reason is not None:
            self.reason = reason


class Unauthorized(AppError):
    status_code = 401
    reason = "UNAUTHORIZED"


class InvalidCredentials(Unauthorized):
    reason = "INVALID_CREDENTIALS"

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail)


class Forbidden(AppError):
    status_code = 403
    reason = "FORBIDDEN"


class PendingApproval(Forbidden):
    reason = "PENDING_APPROVAL"

    def __init__(self, detail: str = "Account pending admin approval"):
        super().__init__(detail)


class PendingPayment(Forbidden):
    reason = "PENDING_PAYMENT"

    def __init__(self, detail: str = "Payment pending admin approval"):
        super().__init__(detail)


class ValidationFailed(AppError):
    status_code = 400
    reason = "VALIDATION"


class NotFound(AppError):
    status_code = 404
    reason = "NOT_FOUND"


class Conflict(AppError):
    status_code = 409
    reason = "CONFLICT"


class Fatal(AppError):
    status_code = 500
    reason = "FATAL"
