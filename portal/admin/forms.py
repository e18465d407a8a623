"""
Admin forms
"""
from flask_wtf import FlaskForm
from wtforms import StringField, SelectField, SelectMultipleField, TextAreaField, SubmitField, PasswordField
from wtforms.validators import DataRequired, Email, Length, Optional
from wtforms.widgets import CheckboxInput, ListWidget

from portal.models.submission import SubmissionStatus


class MultiCheckboxField(SelectMultipleField):
    """Select-multiple rendered as a list of checkboxes"""
    widget = ListWidget(prefix_label=False)
    option_widget = CheckboxInput()


class CreateStudentForm(FlaskForm):
    """Form for creating a new student"""
    username = StringField('Username', validators=[
        DataRequired(),
        Length(min=3, max=80, message='Username must be between 3 and 80 characters')
    ], render_kw={"placeholder": "john_doe"})

    name = StringField('Full Name', validators=[DataRequired()],
                       render_kw={"placeholder": "John Doe"})

    email = StringField('Email', validators=[
        DataRequired(),
        Email(message='Invalid email')
    ], render_kw={"placeholder": "john@example.com"})

    password = PasswordField('Password', validators=[
        DataRequired(),
        Length(min=4, message='Password must be at least 4 characters')
    ], render_kw={"placeholder": "Strong password"})

    assigned_courses = MultiCheckboxField('Assign Courses', choices=[], validators=[Optional()])

    submit = SubmitField('Create Student')


class EditStudentForm(FlaskForm):
    """Form for editing student information"""
    name = StringField('Full Name', validators=[DataRequired()])

    email = StringField('Email', validators=[
        DataRequired(),
        Email(message='Invalid email')
    ])

    assigned_courses = MultiCheckboxField('Assigned Courses', choices=[], validators=[Optional()])

    submit = SubmitField('Save Changes')


class CreateCourseForm(FlaskForm):
    """Form for creating a course"""
    title = StringField('Course Title', validators=[DataRequired()],
                        render_kw={"placeholder": "Python Development"})
    description = TextAreaField('Description', validators=[Optional()],
                                render_kw={"placeholder": "Course description"})
    duration = StringField('Duration', default='2 Months', validators=[Optional()])
    mode = SelectField('Mode', choices=[('Remote', 'Remote'), ('Onsite', 'Onsite'), ('Hybrid', 'Hybrid')],
                       default='Remote')
    category = StringField('Category', default='Core Training', validators=[Optional()])
    submit = SubmitField('Create Course')


class SubmissionStatusForm(FlaskForm):
    """Form for reviewing a submission"""
    status = SelectField('Status', choices=[(s.value, s.value) for s in SubmissionStatus],
                         validators=[DataRequired()])
    submit = SubmitField('Update')
