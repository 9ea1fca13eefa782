"""
WTForms for the application.
Only the directory filter: submissions are handled elsewhere.
"""
from flask_wtf import FlaskForm
from wtforms import SelectField, StringField, SubmitField
from wtforms.validators import Optional, Length

from indiebookshop.locations import STATE_NAMES, normalize_state

STATE_CHOICES = [('', 'All states')] + sorted(
    ((code, name) for code, name in STATE_NAMES.items()),
    key=lambda choice: choice[1]
)

class DirectoryFilterForm(FlaskForm):
    """GET form for filtering the directory by location."""
    class Meta:
        # Read-only GET filter, no CSRF token in the query string
        csrf = False
    
    state = SelectField(
        'State / Province',
        choices=STATE_CHOICES,
        coerce=normalize_state,
        validators=[Optional()],
        render_kw={'class': 'form-select'}
    )
    city = StringField(
        'City',
        validators=[
            Optional(),
            Length(max=100, message="City must be at most 100 characters")
        ],
        render_kw={'placeholder': 'e.g., Portland', 'class': 'form-control'}
    )
    county = StringField(
        'County',
        validators=[
            Optional(),
            Length(max=100, message="County must be at most 100 characters")
        ],
        render_kw={'placeholder': 'e.g., Multnomah', 'class': 'form-control'}
    )
    submit = SubmitField('Filter')
