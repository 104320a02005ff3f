import math
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Annotated, Optional, Union

# Infinity and NaN cannot be stored as JSON
Mark = Optional[Union[int, Annotated[float, Field(allow_inf_nan=False)]]]

class StudentUpsertRequest(BaseModel):
    """Body of POST /students. Fields beyond the known ones are stored unchanged."""
    level: Optional[Union[str, int]] = None
    roll_number: Optional[Union[int, str]] = None
    student_name: Optional[str] = None
    SWE210_mark: Mark = None
    MAE101_mark: Mark = None
    SWE200_mark: Mark = None

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="after")
    def reject_non_finite_extras(self):
        for name, value in (self.model_extra or {}).items():
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number")
        return self

class MessageResponse(BaseModel):
    message: str

class AverageResponse(BaseModel):
    average: float
