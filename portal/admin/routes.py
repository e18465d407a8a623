"""
Admin routes
"""
import logging
from functools import wraps

from flask import render_template, redirect, url_for, flash, request
from flask_login import login_required, current_user
from portal.admin import admin_bp
from portal.admin.forms import CreateStudentForm, EditStudentForm, CreateCourseForm, SubmissionStatusForm
from portal.models.submission import SubmissionStatus
from portal.services.errors import PortalError
from portal import get_api, flash_error

logger = logging.getLogger(__name__)


def admin_required(f):
    """Decorator to require admin role"""
    @wraps(f)
    @login_required
    def decorated_function(*args, **kwargs):
        if current_user.role != 'admin':
            flash('Access denied. Admin permissions required.', 'error')
            return redirect(url_for('index'))
        return f(*args, **kwargs)
    return decorated_function


def _course_choices(api):
    """(id, title) pairs for the course checkboxes; empty if courses can't be loaded"""
    try:
        return [(c.id, c.title) for c in api.list_courses()]
    except PortalError as e:
        flash_error(e)
        return []


@admin_bp.route('/dashboard')
@admin_required
def dashboard():
    """Admin dashboard"""
    api = get_api()
    stats = {'total_students': 0, 'total_courses': 0, 'total_submissions': 0}

    try:
        stats['total_students'] = len(api.list_students())
        stats['total_courses'] = len(api.list_courses())
        stats['total_submissions'] = len(api.list_submissions())
    except PortalError as e:
        flash_error(e)

    return render_template('admin/dashboard.html', stats=stats)


# ==================== STUDENT MANAGEMENT ====================

@admin_bp.route('/students')
@admin_required
def students():
    """Manage students"""
    api = get_api()
    form = CreateStudentForm()
    form.assigned_courses.choices = _course_choices(api)

    all_students = []
    try:
        all_students = api.list_students()
    except PortalError as e:
        flash_error(e)

    return render_template('admin/students.html', students=all_students, form=form)


@admin_bp.route('/students/create', methods=['POST'])
@admin_required
def create_student():
    """Create a new student"""
    api = get_api()
    form = CreateStudentForm()
    form.assigned_courses.choices = _course_choices(api)

    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, 'error')
        return redirect(url_for('admin.students'))

    try:
        student = api.create_student({
            'username': form.username.data,
            'name': form.name.data,
            'email': form.email.data,
            'password': form.password.data,
            'assignedCourses': form.assigned_courses.data or []
        })
        flash(f'Student created: {student.roll_id or student.username}', 'success')
        logger.info(f"Student {student.username} created")
    except PortalError as e:
        flash_error(e)

    return redirect(url_for('admin.students'))


@admin_bp.route('/students/<student_id>', methods=['GET', 'POST'])
@admin_required
def edit_student(student_id):
    """View and edit a student"""
    api = get_api()

    try:
        student = api.get_student(student_id)
    except PortalError as e:
        flash_error(e)
        return redirect(url_for('admin.students'))

    form = EditStudentForm(obj=student)
    form.assigned_courses.choices = _course_choices(api)

    if form.validate_on_submit():
        try:
            api.update_student(student_id, {
                'name': form.name.data,
                'email': form.email.data,
                'assignedCourses': form.assigned_courses.data or []
            })
            flash(f'Student "{student.username}" updated', 'success')
            return redirect(url_for('admin.students'))
        except PortalError as e:
            flash_error(e)

    return render_template('admin/edit_student.html', form=form, student=student)


@admin_bp.route('/students/<student_id>/delete', methods=['POST'])
@admin_required
def delete_student(student_id):
    """Delete a student"""
    try:
        get_api().delete_student(student_id)
        flash('Student deleted', 'success')
        logger.info(f"Student {student_id} deleted")
    except PortalError as e:
        flash_error(e)

    return redirect(url_for('admin.students'))


# ==================== COURSE MANAGEMENT ====================

@admin_bp.route('/courses')
@admin_required
def courses():
    """Manage courses"""
    form = CreateCourseForm()

    all_courses = []
    try:
        all_courses = get_api().list_courses()
    except PortalError as e:
        flash_error(e)

    return render_template('admin/courses.html', courses=all_courses, form=form)


@admin_bp.route('/courses/create', methods=['POST'])
@admin_required
def create_course():
    """Create a new course"""
    form = CreateCourseForm()

    if not form.validate_on_submit():
        flash('Course title is required', 'error')
        return redirect(url_for('admin.courses'))

    try:
        course = get_api().create_course({
            'title': form.title.data.strip(),
            'description': form.description.data or '',
            'duration': form.duration.data,
            'mode': form.mode.data,
            'category': form.category.data
        })
        flash(f'Course created: {course.title}', 'success')
    except PortalError as e:
        flash_error(e)

    return redirect(url_for('admin.courses'))


@admin_bp.route('/courses/<course_id>/delete', methods=['POST'])
@admin_required
def delete_course(course_id):
    """Delete a course"""
    try:
        get_api().delete_course(course_id)
        flash('Course deleted', 'success')
    except PortalError as e:
        flash_error(e)

    return redirect(url_for('admin.courses'))


# ==================== SUBMISSIONS ====================

@admin_bp.route('/submissions')
@admin_required
def submissions():
    """Review student project submissions"""
    all_submissions = []
    try:
        all_submissions = get_api().list_submissions()
    except PortalError as e:
        flash_error(e)

    selected_id = request.args.get('selected')
    selected = next((s for s in all_submissions if s.id == selected_id), None)
    form = SubmissionStatusForm(status=selected.status.value if selected else None)

    return render_template('admin/submissions.html',
                           submissions=all_submissions,
                           selected=selected,
                           form=form)


@admin_bp.route('/submissions/<submission_id>/status', methods=['POST'])
@admin_required
def update_submission(submission_id):
    """Set the review status of a submission"""
    form = SubmissionStatusForm()

    if not form.validate_on_submit():
        flash('Invalid status', 'error')
        return redirect(url_for('admin.submissions'))

    status = SubmissionStatus(form.status.data)
    try:
        get_api().update_submission_status(submission_id, status)
        flash(f'Submission marked as {status.value}', 'success')
    except PortalError as e:
        flash_error(e)

    return redirect(url_for('admin.submissions'))
