"""
Configuration classes for Flask application.
No database: the bookshop collection is read from an API or a JSON file.
"""
import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Base configuration class."""
    # Flask core settings
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    
    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    
    # Absolute site origin used for canonical URLs and redirect targets (no trailing slash)
    BASE_URL = os.environ.get('BASE_URL', 'https://www.indiebookshop.com')
    
    # Bookshop data source: API takes precedence over the local data file
    BOOKSHOPS_API_URL = os.environ.get('BOOKSHOPS_API_URL', '')
    BOOKSHOPS_API_TIMEOUT = int(os.environ.get('BOOKSHOPS_API_TIMEOUT', 10))  # seconds
    BOOKSHOPS_DATA_FILE = os.environ.get('BOOKSHOPS_DATA_FILE', 'data/bookshops.json')
    
    # Cache settings
    CACHE_EXPIRY_MINUTES = int(os.environ.get('CACHE_EXPIRY_MINUTES', 30))

class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True

class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False

config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
