from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class StudentSubmission(BaseModel):
    """A submission that passed every validation rule."""

    full_name: str = Field(max_length=100)
    dob: date
    gender: str = Field(max_length=20)
    email: str = Field(max_length=100)
    phone: str = Field(max_length=20)
    address: str
    previous_school: Optional[str] = Field(default=None, max_length=200)
    result: str = Field(max_length=100)
    class_applying: str = Field(max_length=50)
    agreed: bool = True


class SubmissionAccepted(BaseModel):
    message: str = "Submission successful"


class ErrorResponse(BaseModel):
    error: str
