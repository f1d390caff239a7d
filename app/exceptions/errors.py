from fastapi import status
from fastapi.responses import JSONResponse

class ApplicationException(Exception):
    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_response(self):
        return JSONResponse(
            status_code=self.status_code,
            content={"success": False, "error": {"message": self.message}}
        )


class ValidationError(ApplicationException):
    def __init__(self, message: str):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class AuthenticationError(ApplicationException):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class ProRequiredError(ApplicationException):
    def __init__(self, message: str = "Pro subscription required. Please upgrade to access this feature."):
        super().__init__(message, status.HTTP_403_FORBIDDEN)


class NotFoundError(ApplicationException):
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class PayloadTooLargeError(ApplicationException):
    def __init__(self, message: str = "File too large"):
        super().__init__(message, status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)


class ServiceUnavailableError(ApplicationException):
    def __init__(self, message: str):
        super().__init__(message, status.HTTP_503_SERVICE_UNAVAILABLE)


def internal_error(message: str) -> ApplicationException:
    """Generic 500 carrying a fixed, non-leaking message."""
    return ApplicationException(message, status.HTTP_500_INTERNAL_SERVER_ERROR)
