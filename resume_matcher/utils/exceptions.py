"""
Custom Exception Classes for the Resume Matcher
"""
from typing import Dict, Any
from fastapi import HTTPException


class ResumeMatcherError(Exception):
    """Base exception for the resume matcher"""

    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: Dict[str, Any] = None,
        cause: Exception = None
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/response"""
        result = {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InputError(ResumeMatcherError):
    """Raised when caller-supplied input is empty or invalid"""

    def __init__(self, message: str, field: str = None, value: Any = None, **kwargs):
        details = kwargs.pop('details', {})
        if field:
            details['field'] = field
        if value is not None:
            details['invalid_value'] = str(value)[:200]
        super().__init__(message, error_code="INPUT_ERROR", details=details, **kwargs)


class ExtractionError(ResumeMatcherError):
    """Raised when text cannot be pulled out of an uploaded file"""

    def __init__(self, message: str, filename: str = None, media_type: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if filename:
            details['filename'] = filename
        if media_type:
            details['media_type'] = media_type
        super().__init__(message, error_code="EXTRACTION_ERROR", details=details, **kwargs)


class ServiceError(ResumeMatcherError):
    """Raised when an external service (language model, OCR) fails"""

    def __init__(self, message: str, service_name: str = None, status_code: int = None, **kwargs):
        details = kwargs.pop('details', {})
        if service_name:
            details['service_name'] = service_name
        if status_code:
            details['status_code'] = status_code
        super().__init__(message, error_code="SERVICE_ERROR", details=details, **kwargs)


class PersistenceError(ResumeMatcherError):
    """Raised when the resume store cannot be read or written"""

    def __init__(self, message: str, operation: str = None, collection: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if operation:
            details['operation'] = operation
        if collection:
            details['collection'] = collection
        super().__init__(message, error_code="PERSISTENCE_ERROR", details=details, **kwargs)


class ConfigurationError(ResumeMatcherError):
    """Raised when configuration is invalid or missing"""

    def __init__(self, message: str, config_key: str = None, **kwargs):
        details = kwargs.pop('details', {})
        if config_key:
            details['config_key'] = config_key
        super().__init__(message, error_code="CONFIGURATION_ERROR", details=details, **kwargs)


# HTTP Exception Mapping
def map_to_http_exception(exc: ResumeMatcherError) -> HTTPException:
    """Map custom exceptions to HTTP exceptions"""

    status_code_mapping = {
        InputError: 400,
        ExtractionError: 422,
        ConfigurationError: 500,
        PersistenceError: 500,
        ServiceError: 502,
    }

    status_code = status_code_mapping.get(type(exc), 500)

    detail = {
        "error": exc.to_dict(),
        "message": exc.message
    }

    return HTTPException(status_code=status_code, detail=detail)


class ExceptionContext:
    """Context manager that logs an operation and wraps unexpected failures"""

    def __init__(self, operation: str, logger=None, wrap_as=None, **context):
        self.operation = operation
        self.logger = logger
        self.wrap_as = wrap_as or ServiceError
        self.context = context

    def __enter__(self):
        if self.logger:
            self.logger.debug(f"Starting operation: {self.operation}", extra=self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            if self.logger:
                self.logger.debug(f"Operation completed: {self.operation}", extra=self.context)
            return False

        if self.logger:
            self.logger.error(
                f"Operation failed: {self.operation} - {exc_val}",
                extra={**self.context, "exception_type": exc_type.__name__}
            )

        # Re-raise custom exceptions as-is
        if isinstance(exc_val, ResumeMatcherError) or not isinstance(exc_val, Exception):
            return False

        raise self.wrap_as(
            f"{self.operation} failed: {exc_val}",
            details=dict(self.context),
            cause=exc_val
        ) from exc_val
