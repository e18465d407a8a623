"""
Response schemas for the LMS backend
"""
from portal.models.course import (
    Assignment,
    CourseSummary,
    CourseTree,
    LessonContent,
    LessonNode,
    ModuleNode,
    StudentCourse,
    StudentCourses,
)
from portal.models.student import Student
from portal.models.submission import Submission, SubmissionStatus
from portal.models.user import LoginResponse, SessionUser

__all__ = [
    'Assignment',
    'CourseSummary',
    'CourseTree',
    'LessonContent',
    'LessonNode',
    'ModuleNode',
    'StudentCourse',
    'StudentCourses',
    'Student',
    'Submission',
    'SubmissionStatus',
    'LoginResponse',
    'SessionUser'
]
