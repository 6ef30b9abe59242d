"""
Pootle Client — cached access to the Pootle translation server API v1

Provides:
- PootleClient — lookup orchestrator with transient + persistent caching
- Agent — authenticated HTTP transport
- Filters, Resolved, Criteria — resource selection
- Language, Project, TranslationProject, Store, Unit — API resources
- PootleConfig, load_config — YAML + env configuration
"""

from .client import PootleClient
from .agent import Agent
from .config import PootleConfig, load_config
from .filters import Filters, Intersection, Resolved, Criteria
from .resources import Language, Project, TranslationProject, Store, Unit, RESOURCE_TYPES
from .exceptions import (
    PootleClientError, ConfigError, TransportError,
    HTTPError, Unauthorized, Forbidden, NotFound, MethodNotAllowed,
)

__version__ = "0.1.0"

__all__ = [
    'PootleClient', 'Agent', 'PootleConfig', 'load_config',
    'Filters', 'Intersection', 'Resolved', 'Criteria',
    'Language', 'Project', 'TranslationProject', 'Store', 'Unit', 'RESOURCE_TYPES',
    'PootleClientError', 'ConfigError', 'TransportError',
    'HTTPError', 'Unauthorized', 'Forbidden', 'NotFound', 'MethodNotAllowed',
]
