"""
Authentication routes
"""
import logging

from flask import render_template, redirect, url_for, flash, request
from flask_login import login_user, logout_user, current_user
from portal.auth import auth_bp
from portal.auth.forms import LoginForm
from portal.models.user import SessionUser
from portal.services.errors import PortalError
from portal import get_api, session_store

logger = logging.getLogger(__name__)


def _dashboard_for(role):
    if role == 'admin':
        return url_for('admin.dashboard')
    return url_for('student.dashboard')


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Login route"""
    if current_user.is_authenticated:
        return redirect(_dashboard_for(current_user.role))

    form = LoginForm()

    if form.validate_on_submit():
        try:
            result = get_api().login(form.username.data, form.password.data, form.role.data)
        except PortalError as e:
            flash(e.message, 'error')
        else:
            store = session_store()
            store.start(result.token, result.role, result.user_id, username=form.username.data)
            user = SessionUser.from_store(store)
            login_user(user)
            logger.info(f"User {user.id} logged in as {result.role}")

            next_page = request.args.get('next')
            if not next_page or not next_page.startswith('/') or next_page.startswith('//'):
                next_page = _dashboard_for(result.role)
            return redirect(next_page)

    return render_template('auth/login.html', form=form)


@auth_bp.route('/logout')
def logout():
    """Logout route"""
    logout_user()
    session_store().clear()
    flash('You have been logged out', 'success')
    return redirect(url_for('auth.login'))
