"""
Learn & Grow portal - Application Factory
"""
import logging
import os

import requests
from flask import Flask, current_app, session
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect
from dotenv import load_dotenv

from portal.services.errors import AuthError

# Load environment variables
load_dotenv()

# Initialize extensions
login_manager = LoginManager()
csrf = CSRFProtect()


def create_app(config_name=None, http_session=None):
    """
    Create and configure the Flask application

    Args:
        config_name: Key into portal.config.config (default: FLASK_CONFIG or 'default')
        http_session: Object used by the API client for HTTP calls
                      (default: a shared requests.Session)
    """
    from portal.config import config

    app = Flask(__name__)

    config_name = config_name or os.getenv('FLASK_CONFIG', 'default')
    app.config.from_object(config[config_name])

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )

    app.extensions['api_http'] = http_session or requests.Session()

    # Initialize extensions with app
    login_manager.init_app(app)
    csrf.init_app(app)

    # Configure login manager
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Please log in to access this page.'
    login_manager.login_message_category = 'error'

    # Register blueprints
    from portal.auth import auth_bp
    from portal.admin import admin_bp
    from portal.student import student_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(student_bp, url_prefix='/student')

    # Home route
    @app.route('/')
    def index():
        from flask import redirect, url_for
        from flask_login import current_user

        if current_user.is_authenticated:
            if current_user.role == 'admin':
                return redirect(url_for('admin.dashboard'))
            return redirect(url_for('student.dashboard'))
        return redirect(url_for('auth.login'))

    @app.errorhandler(AuthError)
    def session_expired(error):
        """Backend rejected the token: drop the session and go back to login"""
        from flask import flash, redirect, url_for
        from flask_login import logout_user

        logout_user()
        session_store().clear()
        flash('Your session has expired, please log in again', 'error')
        return redirect(url_for('auth.login'))

    return app


def flash_error(error):
    """Flash a backend failure; an AuthError is re-raised for the app handler"""
    from flask import flash

    if isinstance(error, AuthError):
        raise error
    flash(error.message, 'error')


def session_store():
    """SessionStore over the current request's Flask session"""
    from portal.services.session_store import SessionStore
    return SessionStore(session)


def get_api():
    """ApiClient bound to the current request's session"""
    from portal.services.api_client import ApiClient
    return ApiClient(
        current_app.config['API_BASE_URL'],
        session_store(),
        http=current_app.extensions['api_http'],
        timeout=current_app.config['API_TIMEOUT']
    )


@login_manager.user_loader
def load_user(user_id):
    """Load user from the session store for Flask-Login"""
    from portal.models.user import SessionUser
    user = SessionUser.from_store(session_store())
    if user is None or str(user.id) != str(user_id):
        return None
    return user
