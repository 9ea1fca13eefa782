"""
Flask Application Factory
IndieBookshop directory: bookshop pages, county pages and location filters.
"""
from flask import Flask
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

def setup_logging(app):
    """Configure logging for the application."""
    log_dir = Path('logs')
    log_dir.mkdir(exist_ok=True)
    
    log_level = app.config.get('LOG_LEVEL', 'INFO')
    # app.logger is the "indiebookshop" logger, so module loggers propagate to it
    app.logger.setLevel(getattr(logging, log_level, logging.INFO))
    
    # Handlers are attached once even when create_app is called repeatedly (tests)
    if any(isinstance(h, RotatingFileHandler) for h in app.logger.handlers):
        return
    
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    ))
    console_handler.setLevel(logging.INFO)
    
    file_handler = RotatingFileHandler(
        'logs/app.log',
        maxBytes=10240000,  # 10MB
        backupCount=10
    )
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s [in %(pathname)s:%(lineno)d]'
    ))
    file_handler.setLevel(logging.INFO)
    
    app.logger.addHandler(console_handler)
    app.logger.addHandler(file_handler)
    
    # Prevent duplicate logs
    app.logger.propagate = False
    
    app.logger.info('IndieBookshop App startup')

def create_app(config_class=None):
    """
    Create and configure Flask application.
    
    Args:
        config_class: Configuration class (defaults to DevelopmentConfig)
    
    Returns:
        Flask application instance
    """
    app = Flask(__name__)
    
    if config_class is None:
        from indiebookshop.config import DevelopmentConfig
        config_class = DevelopmentConfig
    
    app.config.from_object(config_class)
    
    setup_logging(app)
    
    from indiebookshop.routes import bp as main_bp
    from indiebookshop.errors import bp as errors_bp
    
    app.register_blueprint(main_bp)
    app.register_blueprint(errors_bp)
    
    return app
