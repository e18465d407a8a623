"""
Student blueprint
"""
from flask import Blueprint

student_bp = Blueprint('student', __name__)

from portal.student import routes  # noqa: E402,F401
