"""Error taxonomy for the registration service.

Each error is an ``HTTPException`` so controllers and repositories can raise
it directly; FastAPI turns it into the matching response.
"""
from fastapi import HTTPException, status


class RegistrationError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail):
        super().__init__(status_code=self.status_code, detail=detail)


class InvalidArgument(RegistrationError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(RegistrationError):
    status_code = status.HTTP_404_NOT_FOUND


class DuplicateEmail(RegistrationError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, existing_reference_code: str):
        self.existing_reference_code = existing_reference_code
        super().__init__(
            {
                "error": "Email already registered",
                "message": "This email address has already been used for registration.",
                "existing_reference_code": existing_reference_code,
            }
        )


class AlreadyProcessed(RegistrationError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, current_status=None):
        self.current_status = current_status
        detail = {"error": "Submission already processed"}
        if current_status is not None:
            detail["status"] = getattr(current_status, "value", current_status)
        super().__init__(detail)


class ReferenceCodeConflict(RegistrationError):
    status_code = status.HTTP_409_CONFLICT


class StorageUnavailable(RegistrationError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, detail="Database unavailable, please try again later"):
        super().__init__(detail)
