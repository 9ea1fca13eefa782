"""
Error handlers for the application.
"""
from flask import Blueprint, render_template
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('errors', __name__)

@bp.app_errorhandler(404)
def not_found_error(error):
    """Handle 404 errors with a way back to the directory."""
    return render_template('error.html', error_code=404, message="We couldn't find that page"), 404

@bp.app_errorhandler(500)
def internal_error(error):
    """Handle 500 errors."""
    logger.error(f"Internal error: {error}", exc_info=True)
    return render_template('error.html', error_code=500, message="An error occurred. Please try again later."), 500
