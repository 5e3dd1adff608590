from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class ValidationError(AppException):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details
        )

class NotFoundError(AppException):
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND"
        )

class PeriodLockedError(AppException):
    def __init__(self, year: int, month: int):
        super().__init__(
            message=f"Period {month}/{year} is locked and cannot be modified",
            status_code=400,
            error_code="PERIOD_LOCKED",
            details={"year": year, "month": month}
        )

class PeriodStateError(AppException):
    """Lock/unlock requested against a period in the wrong state."""
    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=400,
            error_code="PERIOD_STATE"
        )

class ApprovalAlreadyProcessedError(AppException):
    def __init__(self, message: str = "Request already processed"):
        super().__init__(
            message=message,
            status_code=400,
            error_code="APPROVAL_ALREADY_PROCESSED"
        )

class SettingNotEditableError(AppException):
    def __init__(self, key: str):
        super().__init__(
            message=f"Setting '{key}' is not editable",
            status_code=400,
            error_code="SETTING_NOT_EDITABLE"
        )

class DuplicateSettingError(AppException):
    def __init__(self, key: str):
        super().__init__(
            message=f"Setting key '{key}' already exists",
            status_code=400,
            error_code="DUPLICATE_SETTING"
        )

class AuthenticationError(AppException):
    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTH_FAILED"
        )
