from pydantic import BaseModel, Field
from typing import Optional

class ExistsResponse(BaseModel):
    exists: bool

class CheckPassRequest(BaseModel):
    pass_: Optional[str] = Field(None, alias="pass")

class KycEmailRequest(BaseModel):
    adminEmail: Optional[str] = None
    userEmail: Optional[str] = None
    image: Optional[str] = None

class SuccessFlag(BaseModel):
    success: bool
    error: Optional[str] = None
