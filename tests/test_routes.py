"""
Tests for Flask routes.
"""
import pytest
from unittest.mock import patch
from indiebookshop.bookshop_source import BookshopSourceError
from indiebookshop.models import Bookshop

class TestBookshopRoutes:
    """Test cases for the bookshop detail route."""
    
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_canonical_url_served(self, mock_get, client, bookshops):
        """Test that the canonical URL renders the bookshop page."""
        mock_get.return_value = bookshops
        
        response = client.get('/bookshop/powells-books')
        
        assert response.status_code == 200
        assert b'<link rel="canonical" href="https://www.indiebookshop.com/bookshop/powells-books">' in response.data
        assert b'Portland' in response.data
    
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_numeric_id_redirects(self, mock_get, client, bookshops):
        """Test that an id URL permanently redirects to the name slug."""
        mock_get.return_value = bookshops
        
        response = client.get('/bookshop/42')
        
        assert response.status_code == 301
        assert response.location == 'https://www.indiebookshop.com/bookshop/powells-books'
    
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_location_url_redirects(self, mock_get, client, bookshops):
        mock_get.return_value = bookshops
        
        for path in ('/bookshop/or/portland/powells-books',
                     '/bookshop/oregon/multnomah/portland/powells-books',
                     '/bookshop/Powells-Books'):
            response = client.get(path)
            assert response.status_code == 301, path
            assert response.location == 'https://www.indiebookshop.com/bookshop/powells-books'
    
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_wrong_state_not_found(self, mock_get, client, bookshops):
        mock_get.return_value = bookshops
        
        response = client.get('/bookshop/wa/portland/powells-books')
        
        assert response.status_code == 404
    
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_unknown_bookshop_not_found(self, mock_get, client, bookshops):
        mock_get.return_value = bookshops
        
        response = client.get('/bookshop/no-such-shop')
        
        assert response.status_code == 404
        assert b'find that page' in response.data
        assert b'Browse the bookshop directory' in response.data
    
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_slug_collision_lists_choices(self, mock_get, client, bookshops):
        """Test that colliding slugs show a choice instead of picking one."""
        mock_get.return_value = bookshops + [
            Bookshop(id=99, name='Powells Books', city='Salem', state='OR')
        ]
        
        response = client.get('/bookshop/powells-books')
        
        assert response.status_code == 200
        assert b'Which bookshop did you mean?' in response.data
        assert b'href="/bookshop/42"' in response.data
        assert b'href="/bookshop/99"' in response.data
    
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_colliding_bookshop_served_at_id(self, mock_get, client, bookshops):
        """Test that a colliding bookshop is canonical at its id URL."""
        mock_get.return_value = bookshops + [
            Bookshop(id=99, name='Powells Books', city='Salem', state='OR')
        ]
        
        response = client.get('/bookshop/42')
        
        assert response.status_code == 200
        assert b'href="https://www.indiebookshop.com/bookshop/42"' in response.data
    
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_source_error_not_found(self, mock_get, client):
        """Test that an unavailable data source degrades to not found."""
        mock_get.side_effect = BookshopSourceError('API down')
        
        response = client.get('/bookshop/powells-books')
        
        assert response.status_code == 404

class TestCountyRoutes:
    """Test cases for county directory pages."""
    
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_county_in_several_states(self, mock_get, client, bookshops):
        mock_get.return_value = bookshops
        
        response = client.get('/directory/county/washington')
        
        assert response.status_code == 200
        assert b'exists in more than one state' in response.data
        assert b'href="/directory/county/mn/washington"' in response.data
        assert b'href="/directory/county/or/washington"' in response.data
    
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_state_qualified_county(self, mock_get, client, bookshops):
        mock_get.return_value = bookshops
        
        response = client.get('/directory/county/or/washington')
        
        assert response.status_code == 200
        assert b'Independent Bookshops in Washington County, Oregon' in response.data
        assert b'Hillsboro Books' in response.data
        assert b'Stillwater Books' not in response.data
        assert b'href="https://www.indiebookshop.com/directory/county/or/washington"' in response.data
    
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_single_state_county(self, mock_get, client, bookshops):
        mock_get.return_value = bookshops
        
        response = client.get('/directory/county/multnomah-county')
        
        assert response.status_code == 200
        assert b'Broadway Books' in response.data
        
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_canonical_follows_requested_county(self, mock_get, client, bookshops):
        """Test that a substring county match keeps the requested county in the canonical URL."""
        mock_get.return_value = bookshops
        
        response = client.get('/directory/county/ny/york')
        
        assert response.status_code == 200
        assert b'The Strand' in response.data
        assert b'href="https://www.indiebookshop.com/directory/county/ny/york"' in response.data
        assert b'new-york' not in response.data
    
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_county_links_use_collision_aware_paths(self, mock_get, client, bookshops):
        mock_get.return_value = bookshops + [
            Bookshop(id=99, name='Powells Books', city='Gresham', state='OR', county='Multnomah County')
        ]
        
        response = client.get('/directory/county/or/multnomah')
        
        assert b'href="/bookshop/42"' in response.data
        assert b'href="/bookshop/99"' in response.data

    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_unknown_county(self, mock_get, client, bookshops):
        mock_get.return_value = bookshops
        
        response = client.get('/directory/county/nowhere')
        
        assert response.status_code == 404

class TestDirectoryRoutes:
    """Test cases for the directory listing and legacy redirects."""
    
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_directory_lists_all(self, mock_get, client, bookshops):
        mock_get.return_value = bookshops
        
        response = client.get('/directory')
        
        assert response.status_code == 200
        assert b'7 bookshops found' in response.data
    
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_directory_state_filter(self, mock_get, client, bookshops):
        mock_get.return_value = bookshops
        
        response = client.get('/directory?state=or')
        
        assert response.status_code == 200
        assert b'3 bookshops found' in response.data
        assert b'Independent Bookshops in Oregon' in response.data
        assert b'href="/directory/county/or/multnomah"' in response.data
        assert b'href="/directory/county/or/washington"' in response.data
    
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_directory_city_filter(self, mock_get, client, bookshops):
        mock_get.return_value = bookshops
        
        response = client.get('/directory?state=OR&city=Portland')
        
        assert b'2 bookshops found' in response.data
        
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_digit_named_bookshop_linked_by_id(self, mock_get, client, bookshops):
        """Test that a name slug equal to another bookshop's id is linked by id."""
        mock_get.return_value = bookshops + [
            Bookshop(id=1984, name='Orwell Books', city='Boulder', state='CO'),
            Bookshop(id=5, name='1984', city='Boulder', state='CO'),
        ]
        
        response = client.get('/directory')
        
        assert b'href="/bookshop/5"' in response.data
        assert b'href="/bookshop/orwell-books"' in response.data
        assert b'href="/bookshop/1984"' not in response.data
        
        detail = client.get('/bookshop/5')
        assert detail.status_code == 200
        assert b'<h1>1984</h1>' in detail.data
    
    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_colliding_bookshops_linked_by_id(self, mock_get, client, bookshops):
        mock_get.return_value = bookshops + [
            Bookshop(id=99, name='Powells Books', city='Salem', state='OR')
        ]
        
        response = client.get('/directory?state=OR')
        
        assert b'href="/bookshop/42"' in response.data
        assert b'href="/bookshop/99"' in response.data
        assert b'href="/bookshop/powells-books"' not in response.data
        assert b'href="/bookshop/broadway-books"' in response.data

    @patch('indiebookshop.routes.BookshopSource.get_bookshops')
    def test_directory_invalid_state(self, mock_get, client, bookshops):
        mock_get.return_value = bookshops
        
        response = client.get('/directory?state=zz')
        
        assert response.status_code == 200
        assert b'0 bookshops found' in response.data
    
    @pytest.mark.parametrize('path, target', [
        ('/directory/state/virginia', '/directory?state=VA'),
        ('/state/or', '/directory?state=OR'),
        ('/directory/browse', '/directory'),
        ('/bookstore/42', '/bookshop/42'),
        ('/directory/county-state/washington-county-or', '/directory/county/or/washington'),
    ])
    def test_legacy_redirects(self, client, path, target):
        response = client.get(path)
        
        assert response.status_code == 301
        assert response.location.endswith(target)
