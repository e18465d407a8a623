"""
Student schema
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Student(BaseModel):
    """Student record as managed by the admin console"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias='_id')
    username: str
    name: Optional[str] = None
    email: Optional[str] = None
    roll_id: Optional[str] = Field(default=None, alias='rollId')
    student_id: Optional[str] = Field(default=None, alias='studentId')
    assigned_courses: list[str] = Field(default_factory=list, alias='assignedCourses')
    locked: bool = False

    @field_validator('assigned_courses', mode='before')
    @classmethod
    def _course_ids(cls, value: Any):
        # Backend may populate the references with full course documents
        if not value:
            return []
        return [item.get('_id') if isinstance(item, dict) else item for item in value]

    @property
    def display_name(self) -> str:
        return self.name or self.username

    def __repr__(self):
        return f'<Student {self.username}>'
