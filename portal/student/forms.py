"""
Student forms
"""
from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, SubmitField
from wtforms.validators import DataRequired, Email, EqualTo, Length, URL


class ProfileForm(FlaskForm):
    """Editable part of the student's profile"""
    name = StringField('Name', validators=[DataRequired()],
                       render_kw={"placeholder": "Full Name"})
    email = StringField('Email', validators=[
        DataRequired(),
        Email(message='Invalid email')
    ], render_kw={"placeholder": "Email Address"})
    submit = SubmitField('Save Changes')


class ChangePasswordForm(FlaskForm):
    old_password = PasswordField('Current Password', validators=[DataRequired()])
    new_password = PasswordField('New Password', validators=[
        DataRequired(),
        Length(min=4, message='Password must be at least 4 characters')
    ])
    confirm_password = PasswordField('Confirm New Password', validators=[
        DataRequired(),
        EqualTo('new_password', message='Passwords must match')
    ])
    submit = SubmitField('Change Password')


class SubmitProjectForm(FlaskForm):
    """Project link for one module"""
    link = StringField('Project Link', validators=[
        DataRequired(message='A link is required'),
        URL(message='Must be a valid URL')
    ], render_kw={"placeholder": "https://github.com/you/project"})
    submit = SubmitField('Submit')
