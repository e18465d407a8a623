"""
Submission schema
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SubmissionStatus(str, Enum):
    PENDING = 'Pending'
    REVIEWED = 'Reviewed'
    APPROVED = 'Approved'
    REJECTED = 'Rejected'


class Submission(BaseModel):
    """Student project link for one module, reviewed by an admin"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias='_id')
    student_id: Optional[str] = Field(default=None, alias='studentId')
    student_user_id: Optional[str] = Field(default=None, alias='studentUserId')
    course_id: Optional[str] = Field(default=None, alias='courseId')
    course_name: Optional[str] = Field(default=None, alias='courseName')
    module_order: int = Field(alias='moduleOrder')
    link: str
    status: SubmissionStatus = SubmissionStatus.PENDING
    timestamp: Optional[datetime] = None

    def __repr__(self):
        return f'<Submission {self.id} module={self.module_order} status={self.status.value}>'
