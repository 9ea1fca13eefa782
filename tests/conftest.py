"""
Pytest configuration and fixtures.
"""
import pytest
from indiebookshop import create_app
from indiebookshop.config import DevelopmentConfig
from indiebookshop.models import Bookshop

BASE_URL = 'https://www.indiebookshop.com'

@pytest.fixture
def app():
    """Create application for testing."""
    app = create_app(DevelopmentConfig)
    app.config['TESTING'] = True
    app.config['BASE_URL'] = BASE_URL
    return app

@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()

@pytest.fixture
def powells():
    return Bookshop(id=42, name="Powell's Books", city='Portland', state='OR',
                    county='Multnomah County')

@pytest.fixture
def bookshops(powells):
    """A small collection covering the awkward cases."""
    return [
        powells,
        Bookshop(id=7, name='Broadway Books', city='Portland', state='OR', county='Multnomah'),
        Bookshop(id=11, name='Hillsboro Books', city='Hillsboro', state='OR', county='Washington County'),
        Bookshop(id=12, name='Stillwater Books', city='Stillwater', state='MN', county='Washington County'),
        Bookshop(id=20, name='The Strand', city='New York', state='NY', county='New York County'),
        Bookshop(id=21, name='York Books', city='York', state='PA', county='York County'),
        Bookshop(id=30, name='Main Street Books', city='Lewes', state='DE', county=None),
    ]
