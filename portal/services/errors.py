"""
Error taxonomy for calls against the LMS backend
"""
from typing import Optional


class PortalError(Exception):
    """Base class for every failure surfaced to the views"""

    retryable = False
    default_message = 'Something went wrong'

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.detail = message
        self.message = message or self.default_message
        self.status_code = status_code
        super().__init__(self.message)


class AuthError(PortalError):
    """Bad credentials or an expired/invalid token (HTTP 401)"""
    default_message = 'Login failed'


class PermissionDenied(PortalError):
    """Backend refused the request for this user (HTTP 403)"""
    default_message = 'You do not have access to this resource'


class NotEnrolled(PermissionDenied):
    """Backend rejected a course the student is not enrolled in"""
    default_message = 'You are not enrolled in this course'


class NotFound(PortalError):
    """Resource no longer exists (HTTP 404) or id not in the loaded tree"""
    default_message = 'Not found'


class LessonLocked(PortalError):
    """Attempt to select or complete a unit whose predecessor is incomplete"""
    default_message = 'This lesson is locked. Complete the previous lesson first.'


class ValidationFailed(PortalError):
    """Backend rejected the payload (other 4xx)"""
    default_message = 'The request was rejected'


class TransportError(PortalError):
    """Network failure, timeout or 5xx. The user may trigger the action again."""
    retryable = True
    default_message = 'Could not reach the server, please try again'


class DecodeError(PortalError):
    """Response body was not JSON or did not match the expected schema"""
    default_message = 'Unexpected response from the server'


class RequestInFlight(PortalError):
    """Operation started while the previous one is still loading"""
    default_message = 'Please wait for the previous request to finish'


_STATUS_ERRORS = {
    401: AuthError,
    403: PermissionDenied,
    404: NotFound,
}


def error_for_status(status_code: int, message: Optional[str] = None) -> PortalError:
    """Map an HTTP error status to the matching PortalError instance"""
    if status_code >= 500:
        return TransportError(message, status_code)
    error_class = _STATUS_ERRORS.get(status_code, ValidationFailed)
    return error_class(message, status_code)
