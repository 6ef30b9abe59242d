#!/usr/bin/env python3
"""
Pootle API Client — cached access to Pootle API v1
Spares the Pootle server from repeated, redundant requests.

Implements:
- language(endpoint) / project(endpoint) / translation_project(endpoint)
  / store(endpoint) / unit(endpoint)                       -> not cached
- languages() / projects() / translation_projects()       -> cached transiently
- find_languages(filters) / find_projects(filters)
  / find_translation_projects(filters)                    -> cached persistently
- search_translation_projects(languages, projects)        -> cached persistently
- search_stores(languages, projects)                      -> cached persistently
- flush_caches() / close()

Transiently cached results live until the program exits or
client.cache.transient_flush() is called. Persistently cached results survive
restarts until client.cache.persistent_flush() is called.
"""

import logging
from typing import Optional, Dict, Any, List, Callable, Type

from cache import CacheStore, CacheCodec, CacheKeyGenerator

from .agent import Agent
from .config import PootleConfig, load_config
from .exceptions import ConfigError
from .filters import Filters, Resolved, Selector, as_selector
from .resources import (
    Resource, Language, Project, TranslationProject, Store, Unit, RESOURCE_TYPES,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
LANGUAGES_ENDPOINT = f"{API_PREFIX}/languages/"
PROJECTS_ENDPOINT = f"{API_PREFIX}/projects/"
TRANSLATION_PROJECTS_ENDPOINT = f"{API_PREFIX}/translation-projects/"

_MISSING = object()


class PootleClient:
    """
    Cached Pootle API client.

    Two caching policies:
    - List endpoints (no inputs): keyed by endpoint path, transient tier
    - Find/search operations: keyed by operation name + canonical inputs,
      persistent tier, reused across runs until flushed

    Usage:
        client = PootleClient(PootleConfig(base_url="https://translate.example.com",
                                           credentials="user:pass"))
        tps = client.search_translation_projects(
            {"code": "fi"}, {"fullname": re.compile("^Koha")},
        )
    """

    def __init__(self, config: Optional[PootleConfig] = None, agent: Agent = None,
                 cache: CacheStore = None, log: logging.Logger = None):
        self.log = log or logger
        if (agent is None or cache is None) and config is None:
            raise ConfigError("PootleClient needs a config unless both agent and cache are given")

        self.agent = agent or Agent(
            config.base_url, config.credentials, config.timeout, log=log,
        )
        self.cache = cache or CacheStore(
            config.cache_file, codec=CacheCodec(RESOURCE_TYPES), log=log,
        )
        for cls in RESOURCE_TYPES:
            self.cache.codec.register(cls)
        self.keys = CacheKeyGenerator(log=log)

    @classmethod
    def from_config_file(cls, path: str, log: logging.Logger = None) -> "PootleClient":
        return cls(load_config(path), log=log)

    # ── Single resources ─────────────────────────────────────────

    def _fetch(self, endpoint: str, resource_cls: Type[Resource]) -> Resource:
        body = self.agent.request("get", endpoint, {})
        return resource_cls.from_dict(body)

    def language(self, endpoint: str) -> Language:
        """Fetch one language, e.g. /api/v1/languages/124/"""
        return self._fetch(endpoint, Language)

    def project(self, endpoint: str) -> Project:
        return self._fetch(endpoint, Project)

    def translation_project(self, endpoint: str) -> TranslationProject:
        return self._fetch(endpoint, TranslationProject)

    def store(self, endpoint: str) -> Store:
        return self._fetch(endpoint, Store)

    def unit(self, endpoint: str) -> Unit:
        return self._fetch(endpoint, Unit)

    # ── Listings, cached transiently ─────────────────────────────

    def _listing(self, endpoint: str, resource_cls: Type[Resource]) -> List[Resource]:
        cached = self.cache.transient_get(endpoint, _MISSING)
        if cached is not _MISSING:
            return cached

        body = self.agent.request("get", endpoint, {})
        objects = [resource_cls.from_dict(o) for o in body.get("objects", [])]
        self.log.debug(f"Listed {len(objects)} {resource_cls.KIND} from {endpoint}")
        return self.cache.transient_set(endpoint, objects)

    def languages(self) -> List[Language]:
        """All languages in the Pootle database."""
        return self._listing(LANGUAGES_ENDPOINT, Language)

    def projects(self) -> List[Project]:
        """All projects in the Pootle database."""
        return self._listing(PROJECTS_ENDPOINT, Project)

    def translation_projects(self) -> List[TranslationProject]:
        """
        All translation projects in the Pootle database.

        Pootle servers usually disable this endpoint and answer 405
        (MethodNotAllowed). search_translation_projects() is the lighter way
        to get at specific translation projects.
        """
        return self._listing(TRANSLATION_PROJECTS_ENDPOINT, TranslationProject)

    # ── Find / search, cached persistently ───────────────────────

    def _persistent(self, key: str, compute: Callable[[], Any]) -> Any:
        cached = self.cache.persistent_get(key, _MISSING)
        if cached is not _MISSING:
            return cached
        self.log.debug(f"Cache miss: {key}")
        return self.cache.persistent_set(key, compute())

    def _find(self, operation: str, filters: Any, listing: Callable[[], List[Resource]]) -> List[Resource]:
        if not isinstance(filters, Filters):
            filters = Filters(filters)
        key = self.keys.generate_cache_key(operation, filters)
        return self._persistent(key, lambda: filters.filter(listing()))

    def find_languages(self, filters: Any) -> List[Language]:
        """Languages matching the filters, e.g. {"code": re.compile("^fi")}."""
        return self._find("find_languages", filters, self.languages)

    def find_projects(self, filters: Any) -> List[Project]:
        return self._find("find_projects", filters, self.projects)

    def find_translation_projects(self, filters: Any) -> List[TranslationProject]:
        """Raises MethodNotAllowed where the server disables the listing."""
        return self._find("find_translation_projects", filters, self.translation_projects)

    def _resolve(self, selector: Selector, find: Callable[[Any], List[Resource]]) -> List[Resource]:
        if isinstance(selector, Resolved):
            return list(selector.items)
        return find(selector.filters)

    def search_translation_projects(self, languages: Any, projects: Any) -> List[TranslationProject]:
        """
        Translation projects shared by the selected languages and projects.

        Args:
            languages: Resolved([...Language]) or language filter criteria
            projects: Resolved([...Project]) or project filter criteria

        Returns:
            One TranslationProject per URI listed on both sides.
        """
        languages = as_selector(languages)
        projects = as_selector(projects)
        key = self.keys.generate_cache_key("search_translation_projects", languages, projects)

        def compute() -> List[TranslationProject]:
            shared = Filters().intersect(
                self._resolve(languages, self.find_languages),
                self._resolve(projects, self.find_projects),
                "translation_projects", "translation_projects",
            )
            return [self.translation_project(i.attribute_value) for i in shared]

        return self._persistent(key, compute)

    def search_stores(self, languages: Any, projects: Any) -> List[Store]:
        """Stores of every translation project search_translation_projects() finds."""
        languages = as_selector(languages)
        projects = as_selector(projects)
        key = self.keys.generate_cache_key("search_stores", languages, projects)

        def compute() -> List[Store]:
            stores = []
            for tp in self.search_translation_projects(languages, projects):
                for store_uri in tp.stores:
                    stores.append(self.store(store_uri))
            return stores

        return self._persistent(key, compute)

    # ── Lifecycle ────────────────────────────────────────────────

    def flush_caches(self) -> bool:
        return self.cache.flush_all()

    def close(self):
        self.cache.close()

    def __enter__(self) -> "PootleClient":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def get_stats(self) -> Dict[str, Any]:
        return {"agent": self.agent.get_stats(), "cache": self.cache.get_stats()}


if __name__ == "__main__":
    import json
    import os
    import sys

    config = load_config(sys.argv[1] if len(sys.argv) > 1 else "config/pootle-client.yml")
    logging.basicConfig(level=config.log_level)

    with PootleClient(config) as client:
        languages = client.languages()
        print(f"\nLanguages ({len(languages)}):")
        for lang in languages:
            print(f"  - [{lang.code}] {lang.fullname}")

        code = os.environ.get("POOTLE_LANGUAGE")
        if code:
            for tp in client.search_translation_projects({"code": code}, {}):
                print(f"  {tp.pootle_path}: {len(tp.stores)} stores")

        print(f"\nClient stats: {json.dumps(client.get_stats(), indent=2)}")
