"""
Error taxonomy shared by the services and rendered by the app's exception handlers.
"""
from typing import Any, Dict


class LsmsError(Exception):
    """Base class for errors surfaced to API callers."""
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(LsmsError):
    status_code = 400


class RangeViolation(ValidationError):
    """Roll number is not an integer or lies outside its level's range."""

    def __init__(self, level: str, min_roll: int, max_roll: int):
        super().__init__(f"Roll number for level {level} must be between {min_roll} and {max_roll}.")
        self.level = level
        self.min = min_roll
        self.max = max_roll


class NotFoundError(LsmsError):
    status_code = 404


class ConflictError(LsmsError):
    status_code = 409


class DuplicateEmail(ConflictError):
    def __init__(self, message: str = "Email already exists."):
        super().__init__(message)


class AuthError(LsmsError):
    status_code = 401


class OtpError(LsmsError):
    """OTP failures also carry the soft `success` flag the login page reads."""
    code: str = "otp_error"

    def to_body(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message, "code": self.code}


class LecturerNotFound(OtpError):
    status_code = 404
    code = "not_found"

    def __init__(self, message: str = "Lecturer email not found."):
        super().__init__(message)


class NoChallenge(OtpError):
    status_code = 400
    code = "no_challenge"

    def __init__(self, message: str = "No OTP found. Please request a new code."):
        super().__init__(message)


class ChallengeExpired(OtpError):
    status_code = 401
    code = "expired"

    def __init__(self, message: str = "OTP expired. Please request a new code."):
        super().__init__(message)


class OtpMismatch(OtpError):
    status_code = 401
    code = "mismatch"

    def __init__(self, message: str = "Incorrect OTP."):
        super().__init__(message)
