"""
Cache Manager for the bookshop collection.
Uses file-based JSON caching (NOT database).

The raw upstream records are stored in a single persistent file (bookshops.json)
that is overwritten in place when it expires.
"""
import json
import os
from datetime import datetime, timedelta
from pathlib import Path
import logging
from flask import current_app

logger = logging.getLogger(__name__)

class CacheManager:
    """
    Manages file-based caching of bookshop records.
    
    One cache file holds the whole collection along with its fetch and expiry times.
    """
    
    # Anchored to the project root, not the process CWD
    PROJECT_ROOT = Path(__file__).resolve().parent.parent
    CACHE_DIR = PROJECT_ROOT / 'cache'
    CACHE_FILENAME = 'bookshops.json'
    
    @staticmethod
    def _get_cache_expiry_minutes():
        """Get cache expiry minutes from config, with fallback."""
        try:
            if current_app:
                return current_app.config.get('CACHE_EXPIRY_MINUTES', 30)
        except RuntimeError:
            # Not in Flask app context, use defaults
            pass
        
        from indiebookshop.config import Config
        return Config.CACHE_EXPIRY_MINUTES
    
    @staticmethod
    def _get_cache_file():
        """
        Get the cache file path, creating the cache directory if needed.
        
        Returns:
            Path: Path to cache file
        """
        CacheManager.CACHE_DIR.mkdir(parents=True, exist_ok=True)
        return CacheManager.CACHE_DIR / CacheManager.CACHE_FILENAME
    
    @staticmethod
    def get_cached_bookshops():
        """
        Retrieve cached bookshop records if valid.
        
        Returns:
            list: Cached records if present and not expired, None otherwise
        """
        cache_file = CacheManager._get_cache_file()
        
        if not cache_file.exists():
            logger.debug("Cache miss (file not found) for bookshops")
            return None
        
        try:
            with open(cache_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            
            expires_at = datetime.fromisoformat(data['expires_at'])
            if datetime.now() < expires_at:
                logger.debug(f"Cache hit: {len(data['records'])} bookshop records")
                return data['records']
            
            logger.debug("Cache expired for bookshops, will refresh from source")
            return None
        except (json.JSONDecodeError, KeyError, ValueError, TypeError) as e:
            logger.error(f"Error reading cache file {cache_file}: {e}")
            # Corrupted cache file - remove it so it can be recreated
            try:
                cache_file.unlink()
                logger.debug(f"Removed corrupted cache file {cache_file}")
            except OSError as delete_error:
                logger.error(f"Error removing corrupted cache file {cache_file}: {delete_error}")
            return None
        except OSError as e:
            logger.error(f"Unexpected error reading cache file {cache_file}: {e}")
            return None
    
    @staticmethod
    def cache_bookshops(records, expiry_minutes=None):
        """
        Cache bookshop records with expiry. Overwrites the existing cache file.
        
        Uses atomic file write (temp file then rename).
        
        Args:
            records: List of raw bookshop records
            expiry_minutes: Cache expiry in minutes (defaults to config value)
        
        Returns:
            bool: True if cache was written successfully, False otherwise
        """
        cache_file = CacheManager._get_cache_file()
        
        if expiry_minutes is None:
            expiry_minutes = CacheManager._get_cache_expiry_minutes()
        
        now = datetime.now()
        data = {
            'records': records,
            'fetched_at': now.isoformat(),
            'expires_at': (now + timedelta(minutes=expiry_minutes)).isoformat()
        }
        
        temp_file = cache_file.with_suffix('.json.tmp')
        
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            
            os.replace(temp_file, cache_file)
            
            logger.info(f"Cache refresh: stored {len(records)} bookshop records")
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error writing cache file {cache_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False
    
    @staticmethod
    def clear_cache():
        """Remove the cache file if it exists."""
        cache_file = CacheManager.CACHE_DIR / CacheManager.CACHE_FILENAME
        if cache_file.exists():
            cache_file.unlink()
            logger.info("Cleared bookshop cache")
