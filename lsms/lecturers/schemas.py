from pydantic import BaseModel
from typing import Optional

class SignupRequest(BaseModel):
    lec_name: Optional[str] = None
    signin_email: Optional[str] = None
    signin_password: Optional[str] = None

class LoginRequest(BaseModel):
    signin_email: Optional[str] = None
    signin_password: Optional[str] = None

class LoginResponse(BaseModel):
    success: bool
    lec_name: Optional[str] = None
    message: str

class ForgotPasswordRequest(BaseModel):
    signin_email: Optional[str] = None

class CheckEmailRequest(BaseModel):
    email: Optional[str] = None

class CheckEmailResponse(BaseModel):
    exists: bool

class LecturerResponse(BaseModel):
    lec_name: Optional[str] = None
    signin_email: Optional[str] = None
    signin_password: Optional[str] = None

class SuccessResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
