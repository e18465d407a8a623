"""
Student routes
"""
import logging
from functools import wraps

from flask import render_template, redirect, url_for, flash, request
from flask_login import login_required, current_user
from portal.student import student_bp
from portal.student.forms import ProfileForm, ChangePasswordForm, SubmitProjectForm
from portal.models.course import StudentCourses
from portal.services.errors import AuthError, LessonLocked, PortalError
from portal.services.progress_tracker import ProgressTracker, round_pct
from portal import get_api, flash_error

logger = logging.getLogger(__name__)

PROFILE_UNAVAILABLE = 'Your student record id is unknown for this login. Please log in again.'


def student_required(f):
    """Decorator to require student role"""
    @wraps(f)
    @login_required
    def decorated_function(*args, **kwargs):
        if current_user.role != 'student':
            flash('Access denied. This area is for students only.', 'error')
            return redirect(url_for('index'))
        return f(*args, **kwargs)
    return decorated_function


def _load_courses(api):
    """Student's course tiles; an empty listing if the call fails"""
    try:
        return api.student_courses()
    except PortalError as e:
        flash_error(e)
        return StudentCourses()


@student_bp.route('/')
@student_bp.route('/dashboard')
@student_required
def dashboard():
    """Student dashboard with the resume tile for the first course"""
    api = get_api()
    listing = _load_courses(api)
    current_course = listing.courses[0] if listing.courses else None

    position = None
    progress_pct = 0
    if current_course:
        tracker = ProgressTracker(api, current_course.course_id)
        try:
            tracker.load_course_tree()
            position = tracker.current_position()
            progress_pct = tracker.progress_pct
        except PortalError as e:
            if isinstance(e, AuthError):
                raise
            logger.warning(f"Resume tile unavailable for course {current_course.course_id}: {e.message}")
            progress_pct = current_course.progress_pct

    return render_template('student/dashboard.html',
                           student_name=listing.name,
                           course=current_course,
                           position=position,
                           progress_pct=progress_pct)


@student_bp.route('/courses')
@student_required
def courses():
    """Enrolled courses"""
    listing = _load_courses(get_api())
    return render_template('student/courses.html', courses=listing.courses)


@student_bp.route('/course/<course_id>')
@student_required
def course_view(course_id):
    """Module/lesson tree with the selected lesson's content"""
    tracker = ProgressTracker(get_api(), course_id)

    try:
        tracker.load_course_tree()
    except PortalError as e:
        flash_error(e)
        return render_template('student/course_view.html', tracker=None, course_id=course_id)

    lesson_id = request.args.get('lesson') or tracker.current_lesson_id
    if lesson_id:
        try:
            tracker.select_lesson(lesson_id)
        except PortalError as e:
            flash_error(e)

    return render_template('student/course_view.html', tracker=tracker, course_id=course_id)


@student_bp.route('/course/<course_id>/lesson/<lesson_id>/complete', methods=['POST'])
@student_required
def complete_lesson(course_id, lesson_id):
    """Mark a lesson complete and move on to the next unlocked one"""
    tracker = ProgressTracker(get_api(), course_id)

    try:
        tracker.load_course_tree()
        tracker.mark_complete(lesson_id)
    except PortalError as e:
        flash_error(e)
        if isinstance(e, LessonLocked):
            return redirect(url_for('student.course_view', course_id=course_id))
        return redirect(url_for('student.course_view', course_id=course_id, lesson=lesson_id))

    flash(f'Lesson completed. Course progress: {tracker.progress_pct}%', 'success')
    next_id = tracker.next_lesson_id(lesson_id) or lesson_id
    return redirect(url_for('student.course_view', course_id=course_id, lesson=next_id))


# ==================== ASSIGNMENTS ====================

@student_bp.route('/assignments')
@student_required
def assignments():
    """Module projects of the selected course"""
    api = get_api()
    listing = _load_courses(api)
    selected_course = request.args.get('course')

    course_assignments = []
    modules = {}
    if selected_course:
        tracker = ProgressTracker(api, selected_course)
        try:
            course_assignments = api.course_assignments(selected_course)
            tracker.load_course_tree()
            modules = {m.order: m for m in tracker.tree.modules}
        except PortalError as e:
            flash_error(e)

    return render_template('student/assignments.html',
                           courses=listing.courses,
                           selected_course=selected_course,
                           assignments=course_assignments,
                           modules=modules,
                           form=SubmitProjectForm())


@student_bp.route('/assignments/<course_id>/module/<int:order>/submit', methods=['POST'])
@student_required
def submit_project(course_id, order):
    """Submit the project link for a module"""
    form = SubmitProjectForm()

    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, 'error')
        return redirect(url_for('student.assignments', course=course_id))

    tracker = ProgressTracker(get_api(), course_id)
    try:
        tracker.load_course_tree()
        tracker.submit_module(order, form.link.data.strip())
        flash(f'Project for module {order} submitted', 'success')
    except PortalError as e:
        flash_error(e)

    return redirect(url_for('student.assignments', course=course_id))


@student_bp.route('/assignments/<course_id>/module/<int:order>/complete', methods=['POST'])
@student_required
def complete_module(course_id, order):
    """Mark a module complete"""
    tracker = ProgressTracker(get_api(), course_id)
    try:
        tracker.load_course_tree()
        tracker.complete_module(order)
        flash(f'Module {order} marked as complete', 'success')
    except PortalError as e:
        flash_error(e)

    return redirect(url_for('student.assignments', course=course_id))


# ==================== PROGRESS & PROFILE ====================

@student_bp.route('/progress')
@student_required
def progress():
    """Read-only progress summary"""
    listing = _load_courses(get_api())

    overall = 0
    if listing.courses:
        overall = round_pct(sum(c.progress_pct for c in listing.courses) / len(listing.courses))

    return render_template('student/progress.html', courses=listing.courses, overall=overall)


@student_bp.route('/profile', methods=['GET', 'POST'])
@student_required
def profile():
    """View and edit the student's own profile"""
    api = get_api()
    student_id = current_user.user_id

    if not student_id:
        flash(PROFILE_UNAVAILABLE, 'error')
        return render_template('student/profile.html', student=None,
                               form=ProfileForm(), password_form=ChangePasswordForm())

    try:
        student = api.get_student(student_id)
    except PortalError as e:
        flash_error(e)
        return render_template('student/profile.html', student=None,
                               form=ProfileForm(), password_form=ChangePasswordForm())

    form = ProfileForm(obj=student)
    if form.validate_on_submit():
        try:
            api.update_student(student_id, {
                'name': form.name.data,
                'email': form.email.data
            })
            flash('Profile updated successfully', 'success')
            return redirect(url_for('student.profile'))
        except PortalError as e:
            flash_error(e)

    return render_template('student/profile.html', student=student,
                           form=form, password_form=ChangePasswordForm())


@student_bp.route('/profile/password', methods=['POST'])
@student_required
def change_password():
    """Change the student's password"""
    form = ChangePasswordForm()

    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, 'error')
        return redirect(url_for('student.profile'))

    if not current_user.user_id:
        flash(PROFILE_UNAVAILABLE, 'error')
        return redirect(url_for('student.profile'))

    try:
        get_api().change_password(current_user.user_id, form.old_password.data, form.new_password.data)
        flash('Password changed successfully', 'success')
    except PortalError as e:
        flash_error(e)

    return redirect(url_for('student.profile'))
