"""
Course, module and lesson schemas
"""
import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def round_pct(value: float) -> int:
    """Round half-up to an integer percentage clamped to [0, 100]"""
    return max(0, min(100, math.floor(value + 0.5)))


class LessonNode(BaseModel):
    """Lesson inside a module. `locked` is recomputed client-side."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias='_id')
    title: str = ''
    completed: bool = False
    locked: bool = False


class ModuleNode(BaseModel):
    """Ordered top-level unit of a course; owns its lessons in display order"""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias='_id')
    title: str = ''
    order: Optional[int] = None
    task: Optional[str] = None
    completed: bool = False  # only consulted for modules without lessons
    unlocked: bool = False
    lessons: list[LessonNode] = Field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        if not self.lessons:
            return self.completed
        return all(lesson.completed for lesson in self.lessons)

    @property
    def completed_count(self) -> int:
        return sum(1 for lesson in self.lessons if lesson.completed)


class CourseTree(BaseModel):
    """Module -> lesson tree of one course plus the completion marker"""
    model_config = ConfigDict(populate_by_name=True)

    modules: list[ModuleNode] = Field(default_factory=list)
    last_lesson_id: Optional[str] = Field(default=None, alias='lastLessonId')

    def iter_lessons(self):
        """Yield (module, lesson) pairs in progress order"""
        for module in self.modules:
            for lesson in module.lessons:
                yield module, lesson

    def find_lesson(self, lesson_id: str) -> Optional[tuple[ModuleNode, LessonNode]]:
        for module, lesson in self.iter_lessons():
            if lesson.id == lesson_id:
                return module, lesson
        return None

    def find_module(self, order: int) -> Optional[ModuleNode]:
        for module in self.modules:
            if module.order == order:
                return module
        return None

    @property
    def total_lessons(self) -> int:
        return sum(len(module.lessons) for module in self.modules)

    @property
    def completed_lessons(self) -> int:
        return sum(module.completed_count for module in self.modules)


class LessonContent(BaseModel):
    title: str = ''
    outline: Optional[str] = None
    rephrased: Optional[str] = None


class CourseSummary(BaseModel):
    """Course as listed in the admin console"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias='_id')
    title: str
    description: Optional[str] = None
    duration: Optional[str] = None
    mode: Optional[str] = None
    category: Optional[str] = None
    enrolled_count: int = Field(default=0, alias='enrolledCount')


class AssignmentCounts(BaseModel):
    completed: int = 0
    total: int = 0


class StudentCourse(BaseModel):
    """Course tile on the student's dashboard/course list"""
    model_config = ConfigDict(populate_by_name=True)

    course_id: str = Field(alias='courseId')
    title: str = ''
    progress_pct: int = Field(default=0, alias='progressPct')
    assignments: AssignmentCounts = Field(default_factory=AssignmentCounts)

    @field_validator('progress_pct', mode='before')
    @classmethod
    def _whole_pct(cls, value: Any):
        # null and fractional values both reach the tiles as whole percentages
        if value is None:
            return 0
        if isinstance(value, float):
            return round_pct(value)
        return value

    @field_validator('assignments', mode='before')
    @classmethod
    def _assignment_counts(cls, value: Any):
        return value if value is not None else {}

    @property
    def status_label(self) -> str:
        if self.progress_pct <= 0:
            return 'Not Started'
        if self.progress_pct >= 100:
            return 'Completed'
        return 'In Progress'


class StudentCourses(BaseModel):
    name: str = ''
    courses: list[StudentCourse] = Field(default_factory=list)


class Assignment(BaseModel):
    """Per-module project of a course"""
    order: int
    title: str = ''
    type: str = 'mini'
    submitted: bool = False
    marks: Optional[float] = None
