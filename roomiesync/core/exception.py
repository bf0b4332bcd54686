from fastapi import HTTPException
from typing import Any, Optional
from roomiesync.schemas.result import ErrorCategory


class CustomException(HTTPException):
    """Base exception class for all custom application exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int,
        category: ErrorCategory,
        headers: Optional[dict] = None
    ):
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.category = category

    def __str__(self) -> str:
        return str(self.detail)


class ResourceNotFoundException(CustomException):
    """Exception raised when a requested resource is not found"""

    def __init__(self, resource_name: str, resource_id: Optional[Any] = None):
        if resource_id:
            message = f"{resource_name} with ID '{resource_id}' was not found."
        else:
            message = f"{resource_name} was not found."

        super().__init__(
            message=message,
            status_code=404,
            category=ErrorCategory.NOT_FOUND
        )


class AuthorizationException(CustomException):
    """Exception raised when the acting roommate lacks the required role"""

    def __init__(self, message: Optional[str] = None, status_code: int = 403):
        super().__init__(
            message=message or "You do not have permission to perform this action.",
            status_code=status_code,
            category=ErrorCategory.AUTHORIZATION
        )


class BadRequestException(CustomException):
    """Exception raised for malformed or invalid requests"""

    def __init__(self, message: str = "The request is invalid or malformed."):
        super().__init__(
            message=message,
            status_code=400,
            category=ErrorCategory.BAD_REQUEST
        )
