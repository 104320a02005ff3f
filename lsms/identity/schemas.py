from pydantic import BaseModel
from typing import Optional, Union

class VerifyRequest(BaseModel):
    name: Optional[str] = None
    roll_number: Optional[Union[str, int]] = None

class VerifyResponse(BaseModel):
    status: str
    matched_partition: Optional[str] = None
    level: Optional[str] = None

class PartitionLookupRequest(BaseModel):
    roll_number: Optional[Union[str, int]] = None
    file: Optional[str] = None

class ClassListEntry(BaseModel):
    student_name: str
    roll_number: Union[int, str]
