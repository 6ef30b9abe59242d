"""
Pootle Client Cache Layer
Transient + persistent tiers, canonical cache keys, JSON cache file codec
"""

from .store import CacheStore, CacheError, CacheLoadError, CacheSaveError, DEFAULT_CACHE_FILE
from .key_generator import CacheKeyGenerator
from .codec import CacheCodec, register_default_type

__all__ = [
    'CacheStore', 'CacheError', 'CacheLoadError', 'CacheSaveError', 'DEFAULT_CACHE_FILE',
    'CacheKeyGenerator', 'CacheCodec', 'register_default_type',
]
