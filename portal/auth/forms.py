"""
Auth forms
"""
from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, RadioField, SubmitField
from wtforms.validators import DataRequired


class LoginForm(FlaskForm):
    """Login form shared by students and admins"""
    username = StringField('Username', validators=[DataRequired()],
                           render_kw={"placeholder": "e.g., Sreya", "autocomplete": "username"})
    password = PasswordField('Password', validators=[DataRequired()],
                             render_kw={"placeholder": "Enter password", "autocomplete": "current-password"})
    role = RadioField('Mode', choices=[('student', 'Student'), ('admin', 'Admin')],
                      default='student', validators=[DataRequired()])
    submit = SubmitField('Login')
