"""
Bookshop data source.
Fetches the bookshop collection from the configured API or a local JSON file,
with file-based caching of the raw records.
"""
import json
import logging
from pathlib import Path

import requests
from flask import current_app

from indiebookshop.cache_manager import CacheManager
from indiebookshop.models import Bookshop
from indiebookshop.resolver import find_slug_collisions

logger = logging.getLogger(__name__)


class BookshopSourceError(Exception):
    """Raised when the bookshop collection cannot be loaded."""


class BookshopSource:
    """Loads the bookshop collection consumed by the resolver."""
    
    @staticmethod
    def _get_config():
        """Get current config values, with fallback defaults."""
        from indiebookshop.config import Config
        
        try:
            if current_app:
                return {
                    'api_url': current_app.config.get('BOOKSHOPS_API_URL', Config.BOOKSHOPS_API_URL),
                    'timeout': current_app.config.get('BOOKSHOPS_API_TIMEOUT', Config.BOOKSHOPS_API_TIMEOUT),
                    'data_file': current_app.config.get('BOOKSHOPS_DATA_FILE', Config.BOOKSHOPS_DATA_FILE),
                }
        except RuntimeError:
            # Not in Flask app context, use defaults
            pass
        
        return {
            'api_url': Config.BOOKSHOPS_API_URL,
            'timeout': Config.BOOKSHOPS_API_TIMEOUT,
            'data_file': Config.BOOKSHOPS_DATA_FILE,
        }
    
    @staticmethod
    def fetch_records(api_url, timeout):
        """
        Fetch raw bookshop records from the bookshops API.
        
        Args:
            api_url: Endpoint returning a JSON array, or an object with a 'results' array
            timeout: Request timeout in seconds
        
        Returns:
            list: Raw bookshop records
        
        Raises:
            BookshopSourceError: If the request fails or the payload is not a list of records
        """
        try:
            logger.info(f"API Call: GET {api_url}")
            response = requests.get(api_url, timeout=timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            logger.error(f"Timeout fetching bookshops from {api_url}")
            raise BookshopSourceError(f"Timeout fetching bookshops: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching bookshops: {e}")
            raise BookshopSourceError(f"Error fetching bookshops: {e}") from e
        except ValueError as e:
            logger.error(f"Invalid JSON from bookshops API: {e}")
            raise BookshopSourceError(f"Invalid JSON from bookshops API: {e}") from e
        
        records = data.get('results') if isinstance(data, dict) else data
        if not isinstance(records, list):
            raise BookshopSourceError("Bookshops API returned an unexpected payload")
        
        logger.info(f"API Response: Status {response.status_code}, Bookshops found: {len(records)}")
        return records
    
    @staticmethod
    def load_records_from_file(data_file):
        """
        Read raw bookshop records from a JSON file.
        
        Args:
            data_file: Path to a JSON array of bookshop records
        
        Returns:
            list: Raw bookshop records
        
        Raises:
            BookshopSourceError: If the file is missing, unreadable or malformed
        """
        path = Path(data_file)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error reading bookshop data file {path}: {e}")
            raise BookshopSourceError(f"Error reading bookshop data file {path}: {e}") from e
        
        records = data.get('results') if isinstance(data, dict) else data
        if not isinstance(records, list):
            raise BookshopSourceError(f"Bookshop data file {path} does not contain a list")
        return records
    
    @staticmethod
    def parse_records(records):
        """
        Convert raw records to live Bookshop objects.
        
        Invalid records are skipped with a warning, and name slugs shared by
        several bookshops are reported so they can be fixed in the data.
        
        Args:
            records: Raw records from the API, the data file or the cache
        
        Returns:
            list: Live bookshops
        """
        bookshops = []
        for record in records:
            if not isinstance(record, dict):
                logger.warning(f"Skipping non-object bookshop record: {record!r}")
                continue
            try:
                bookshop = Bookshop.from_record(record)
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping invalid bookshop record: {e}")
                continue
            if bookshop.live:
                bookshops.append(bookshop)
        
        for slug, shops in find_slug_collisions(bookshops).items():
            logger.warning(
                f"Duplicate slug '{slug}' shared by bookshops "
                f"{', '.join(f'{b.name} (ID: {b.id})' for b in shops)}"
            )
        
        return bookshops
    
    @staticmethod
    def get_bookshops():
        """
        Get the live bookshop collection, using the cache when it is fresh.
        
        Returns:
            list: Live bookshops
        
        Raises:
            BookshopSourceError: If neither the cache nor the source can provide records
        """
        records = CacheManager.get_cached_bookshops()
        
        if records is None:
            config = BookshopSource._get_config()
            if config['api_url']:
                records = BookshopSource.fetch_records(config['api_url'], config['timeout'])
            else:
                records = BookshopSource.load_records_from_file(config['data_file'])
            CacheManager.cache_bookshops(records)
        
        return BookshopSource.parse_records(records)
