#!/usr/bin/env python3
"""
Pootle Client Cache Store
Two tiers: transient (process memory) + persistent (mirrored to a cache file)

Implements:
- load() / save() against a single UTF-8 cache file
- transient_get(key) / transient_set(key, value) / transient_flush()
- persistent_get(key) / persistent_set(key, value) / persistent_flush()
- flush_all()
- close() → best-effort save, also run at interpreter exit
- get_stats() → {hits, misses, writes, flushes, entries}

Transient values disappear when the program exits; flush them with
transient_flush() to refresh list endpoints within one run.
Persistent values are written to the cache file on normal exit; flush them with
persistent_flush() to force fresh fetches from the server.
"""

import atexit
import logging
import os
import time
from typing import Dict, Any

from .codec import CacheCodec

logger = logging.getLogger(__name__)

DEFAULT_CACHE_FILE = "pootle-client.cache"


class CacheError(Exception):
    """Base error of the cache store."""


class CacheLoadError(CacheError):
    """The cache file could not be read, created or decoded."""


class CacheSaveError(CacheError):
    """The persistent table could not be written."""


class CacheStore:
    """
    Two-tier key/value store backed by one cache file.

    Design:
    - The persistent table and the file meet only in load() and save()
    - Values are stored as-is, never copied
    - Presence is checked by key, so a cached empty list is still a hit
    - One live store per cache file, no locking
    """

    def __init__(self, cache_file: str = None, codec: CacheCodec = None,
                 log: logging.Logger = None, save_on_exit: bool = True):
        self.cache_file = cache_file or DEFAULT_CACHE_FILE
        self.codec = codec or CacheCodec()
        self.log = log or logger

        self._transient: Dict[str, Any] = {}
        self._persistent: Dict[str, Any] = {}
        self._closed = False

        self.stats = {
            "transient_hits": 0,
            "transient_misses": 0,
            "persistent_hits": 0,
            "persistent_misses": 0,
            "writes": 0,
            "flushes": 0,
            "start_time": time.time(),
        }

        self.load()

        if save_on_exit:
            atexit.register(self.close)

        self.log.info(f"CacheStore initialized at {self.cache_file} "
                      f"({len(self._persistent)} persistent entries)")

    # ── Disk ─────────────────────────────────────────────────────

    def load(self):
        """
        Load the persistent table from the cache file.

        A missing file is created empty so that a later save is known to work.
        Any other read failure, or undecodable contents, is fatal.
        """
        self._transient = {}

        contents = ""
        try:
            with open(self.cache_file, "r", encoding="utf-8") as f:
                contents = f.read()
        except FileNotFoundError:
            try:
                open(self.cache_file, "w", encoding="utf-8").close()
            except OSError as e:
                raise CacheLoadError(
                    f"Couldn't initialize cache file={self.cache_file}, "
                    f"cwd={os.getcwd()}: {e}"
                ) from e
            self.log.debug(f"Created empty cache file {self.cache_file}")
        except OSError as e:
            raise CacheLoadError(
                f"Couldn't read cache file={self.cache_file}, cwd={os.getcwd()}: {e}"
            ) from e

        if not contents.strip():
            self._persistent = {}
            return

        try:
            self._persistent = self.codec.loads(contents)
        except (ValueError, TypeError) as e:
            raise CacheLoadError(
                f"Corrupt cache file={self.cache_file}, cwd={os.getcwd()}: {e}"
            ) from e

        self.log.debug(f"Loaded {len(self._persistent)} entries from {self.cache_file}")

    def save(self):
        """Overwrite the cache file with the persistent table."""
        self.log.debug(f"Cache to '{self.cache_file}' is being persisted")
        try:
            payload = self.codec.dumps(self._persistent)
            with open(self.cache_file, "w", encoding="utf-8") as f:
                f.write(payload)
        except (OSError, TypeError, ValueError) as e:
            raise CacheSaveError(
                f"Couldn't write cache file {self.cache_file} to {os.getcwd()}: {e}"
            ) from e

    def close(self):
        """Persist once at end of life. Failures are logged, never raised."""
        if self._closed:
            return
        self._closed = True
        atexit.unregister(self.close)
        try:
            self.save()
        except Exception as e:
            self.log.warning(f"Cache save on close failed: {e}")

    def __enter__(self) -> "CacheStore":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # ── Transient tier ───────────────────────────────────────────

    def transient_has(self, key: str) -> bool:
        return key in self._transient

    def transient_get(self, key: str, default: Any = None) -> Any:
        if key in self._transient:
            self.stats["transient_hits"] += 1
            self.log.debug(f"Transient hit: {key}")
            return self._transient[key]
        self.stats["transient_misses"] += 1
        return default

    def transient_set(self, key: str, value: Any) -> Any:
        """Store a value in memory only. It is never written to disk."""
        self._transient[key] = value
        self.stats["writes"] += 1
        return value

    def transient_flush(self):
        self._transient = {}
        self.stats["flushes"] += 1
        self.log.info("Transient cache flushed")

    # ── Persistent tier ──────────────────────────────────────────

    def persistent_has(self, key: str) -> bool:
        return key in self._persistent

    def persistent_get(self, key: str, default: Any = None) -> Any:
        if key in self._persistent:
            self.stats["persistent_hits"] += 1
            self.log.debug(f"Persistent hit: {key}")
            return self._persistent[key]
        self.stats["persistent_misses"] += 1
        return default

    def persistent_set(self, key: str, value: Any) -> Any:
        """Store a value in the table that save() writes to the cache file."""
        self._persistent[key] = value
        self.stats["writes"] += 1
        return value

    def persistent_flush(self) -> bool:
        """
        Empty the persistent table and delete the cache file right away.

        Returns:
            False if an existing cache file could not be removed.
        """
        self.log.debug(f"Cache to '{self.cache_file}' is being flushed")
        self._persistent = {}
        self.stats["flushes"] += 1
        try:
            os.unlink(self.cache_file)
        except FileNotFoundError:
            pass
        except OSError as e:
            self.log.error(f"Cache '{self.cache_file}' couldn't be flushed: {e}")
            return False
        self.log.info(f"Persistent cache {self.cache_file} flushed")
        return True

    def flush_all(self) -> bool:
        self.transient_flush()
        return self.persistent_flush()

    # ── Stats ────────────────────────────────────────────────────

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        hits = self.stats["transient_hits"] + self.stats["persistent_hits"]
        misses = self.stats["transient_misses"] + self.stats["persistent_misses"]
        total_requests = hits + misses
        hit_rate = (hits / total_requests * 100) if total_requests > 0 else 0

        return {
            "hits": hits,
            "misses": misses,
            "hit_rate_percent": round(hit_rate, 1),
            "total_requests": total_requests,
            "transient_hits": self.stats["transient_hits"],
            "persistent_hits": self.stats["persistent_hits"],
            "transient_entries": len(self._transient),
            "persistent_entries": len(self._persistent),
            "writes": self.stats["writes"],
            "flushes": self.stats["flushes"],
            "uptime_seconds": int(time.time() - self.stats["start_time"]),
        }
