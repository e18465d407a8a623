"""
API gateway client for the LMS REST backend
"""
import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import BaseModel, TypeAdapter, ValidationError

from portal.models.course import (
    Assignment,
    CourseSummary,
    CourseTree,
    LessonContent,
    StudentCourses,
)
from portal.models.student import Student
from portal.models.submission import Submission, SubmissionStatus
from portal.models.user import LoginResponse
from portal.services.errors import (
    AuthError,
    DecodeError,
    PortalError,
    TransportError,
    error_for_status,
)
from portal.services.session_store import SessionStore

logger = logging.getLogger(__name__)


def _server_message(response: requests.Response) -> Optional[str]:
    """Pull the backend's `message` (or `error`) text out of an error body"""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get('message') or body.get('error')
    return None


def _decode(schema, payload: Any):
    """Validate a payload against a pydantic model or a type such as list[Model]"""
    try:
        if isinstance(schema, type) and issubclass(schema, BaseModel):
            return schema.model_validate(payload)
        return TypeAdapter(schema).validate_python(payload)
    except ValidationError as e:
        logger.warning(f"Response did not match {schema}: {e.error_count()} error(s)")
        raise DecodeError() from e


class ApiClient:
    """Authenticated HTTP calls to named backend endpoints"""

    def __init__(self, base_url: str, store: SessionStore, http=None, timeout: float = 10):
        """
        Initialize the client

        Args:
            base_url: Backend root, e.g. http://localhost:5000
            store: Session store the bearer token is read from
            http: Object exposing requests.Session.request (default: new Session)
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.store = store
        self.http = http or requests.Session()
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {'Accept': 'application/json'}
        token = self.store.token
        if token:
            headers['Authorization'] = f'Bearer {token}'
        return headers

    def request(self, method: str, path: str, json: Optional[dict] = None) -> Any:
        """
        Issue one call and return the parsed JSON body (None for empty bodies)

        Raises:
            TransportError: connection failure, timeout or 5xx
            DecodeError: body is not JSON
            PortalError: subclass matching the 4xx status
        """
        url = f'{self.base_url}{path}'
        logger.debug(f"{method} {url}")
        try:
            response = self.http.request(
                method,
                url,
                json=json,
                headers=self._headers(),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise TransportError() from e

        if response.status_code >= 400:
            error = error_for_status(response.status_code, _server_message(response))
            logger.warning(f"{method} {path} -> {response.status_code}: {error.message}")
            raise error

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"{method} {path} returned a non-JSON body")
            raise DecodeError() from e

    def get(self, path: str) -> Any:
        return self.request('GET', path)

    def post(self, path: str, json: Optional[dict] = None) -> Any:
        return self.request('POST', path, json=json)

    def put(self, path: str, json: Optional[dict] = None) -> Any:
        return self.request('PUT', path, json=json)

    def delete(self, path: str) -> Any:
        return self.request('DELETE', path)

    # -------------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------------

    def login(self, username: str, password: str, role: str) -> LoginResponse:
        """Exchange credentials for a token. Rejected credentials raise AuthError."""
        try:
            payload = self.post('/api/auth/login', {
                'username': username,
                'password': password,
                'role': role
            })
        except (AuthError, TransportError, DecodeError):
            raise
        except PortalError as e:
            raise AuthError(e.detail, e.status_code) from e
        return _decode(LoginResponse, payload)

    # -------------------------------------------------------------------------
    # Students (admin)
    # -------------------------------------------------------------------------

    def list_students(self) -> List[Student]:
        return _decode(list[Student], self.get('/api/students') or [])

    def get_student(self, student_id: str) -> Student:
        return _decode(Student, self.get(f'/api/students/{student_id}'))

    def create_student(self, data: Dict[str, Any]) -> Student:
        payload = self.post('/api/students', data)
        if isinstance(payload, dict) and 'student' in payload:
            payload = payload['student']
        return _decode(Student, payload)

    def update_student(self, student_id: str, data: Dict[str, Any]) -> Student:
        return _decode(Student, self.put(f'/api/students/{student_id}', data))

    def delete_student(self, student_id: str):
        self.delete(f'/api/students/{student_id}')

    def change_password(self, student_id: str, old_password: str, new_password: str):
        self.post(f'/api/students/{student_id}/change-password', {
            'oldPassword': old_password,
            'newPassword': new_password
        })

    # -------------------------------------------------------------------------
    # Courses (admin)
    # -------------------------------------------------------------------------

    def list_courses(self) -> List[CourseSummary]:
        return _decode(list[CourseSummary], self.get('/api/courses') or [])

    def create_course(self, data: Dict[str, Any]) -> CourseSummary:
        return _decode(CourseSummary, self.post('/api/courses', data))

    def delete_course(self, course_id: str):
        self.delete(f'/api/courses/{course_id}')

    # -------------------------------------------------------------------------
    # Submissions (admin)
    # -------------------------------------------------------------------------

    def list_submissions(self) -> List[Submission]:
        return _decode(list[Submission], self.get('/api/submissions') or [])

    def update_submission_status(self, submission_id: str, status: SubmissionStatus):
        self.put(f'/api/submissions/{submission_id}', {'status': SubmissionStatus(status).value})

    # -------------------------------------------------------------------------
    # Student console
    # -------------------------------------------------------------------------

    def student_courses(self) -> StudentCourses:
        return _decode(StudentCourses, self.get('/api/student/courses') or {})

    def course_tree(self, course_id: str) -> CourseTree:
        return _decode(CourseTree, self.get(f'/api/student/course/{course_id}'))

    def lesson_content(self, lesson_id: str) -> LessonContent:
        return _decode(LessonContent, self.get(f'/api/student/lesson/{lesson_id}/content'))

    def complete_lesson(self, lesson_id: str):
        self.post(f'/api/student/lesson/{lesson_id}/complete')

    def course_assignments(self, course_id: str) -> List[Assignment]:
        return _decode(list[Assignment], self.get(f'/api/student/course/{course_id}/assignments') or [])

    def complete_module(self, course_id: str, order: int):
        self.post(f'/api/student/course/{course_id}/module/{order}/complete')

    def submit_module(self, course_id: str, order: int, link: str):
        self.post(f'/api/student/course/{course_id}/module/{order}/submit', {'link': link})
