from pydantic import BaseModel
from typing import Optional, Union

class SendOtpRequest(BaseModel):
    email: Optional[str] = None

class ValidateOtpRequest(BaseModel):
    email: Optional[str] = None
    otp: Optional[Union[str, int]] = None

class OtpResponse(BaseModel):
    success: bool
    error: Optional[str] = None
