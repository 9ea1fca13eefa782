"""
Tests for slug generation.
"""
import re
import pytest
from indiebookshop.slugs import slugify

SAMPLE_NAMES = [
    "Powell's Books",
    "  Books -- & More ",
    "Barnes_and_Noble",
    "Café Librería",
    "東京書店",
    "A---B",
    "-leading and trailing-",
    "Tab\tand\nnewline",
    "Books & Co. (Est. 1921)",
    "",
    "   ",
    "ALL CAPS BOOKSHOP",
]

class TestSlugify:
    """Test cases for slugify."""
    
    def test_powells_books(self):
        assert slugify("Powell's Books") == 'powells-books'
    
    def test_collapses_whitespace_and_hyphens(self):
        assert slugify("  Books -- & More ") == 'books-more'
        assert slugify("A---B") == 'a-b'
    
    def test_trims_hyphens(self):
        assert slugify("-leading and trailing-") == 'leading-and-trailing'
    
    def test_empty_input(self):
        assert slugify('') == ''
        assert slugify('   ') == ''
        assert slugify(None) == ''
    
    def test_non_ascii_letters_are_dropped(self):
        assert slugify("Café Librería") == 'caf-librera'
        assert slugify("東京書店") == ''
    
    def test_underscores_are_dropped(self):
        assert slugify("Barnes_and_Noble") == 'barnesandnoble'
    
    @pytest.mark.parametrize('name', SAMPLE_NAMES)
    def test_idempotent(self, name):
        assert slugify(slugify(name)) == slugify(name)
    
    @pytest.mark.parametrize('name', SAMPLE_NAMES)
    def test_only_url_safe_characters(self, name):
        slug = slugify(name)
        assert re.fullmatch(r'[a-z0-9-]*', slug)
        assert not slug.startswith('-')
        assert not slug.endswith('-')
        assert '--' not in slug
