#!/usr/bin/env python3
"""
Pootle API v1 resources

Thin typed views over decoded response bodies:
- Language            /api/v1/languages/<id>/
- Project             /api/v1/projects/<id>/
- TranslationProject  /api/v1/translation-projects/<id>/
- Store               /api/v1/stores/<id>/
- Unit                /api/v1/units/<id>/

See https://pootle.readthedocs.io/en/stable-2.5.1/api/index.html
"""

from dataclasses import dataclass, field, fields, asdict
from typing import Optional, Dict, Any, List

from cache.codec import register_default_type


class Resource:
    """Shared constructors for the resource dataclasses."""

    KIND = "resource"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Build from an API body. Unknown keys are kept in ``raw``."""
        known = {f.name for f in fields(cls) if f.name != "raw"}
        kwargs = {k: v for k, v in data.items() if k in known}
        return cls(raw=data, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        d = dict(self.raw or {})
        d.update(asdict(self))
        d.pop("raw", None)
        return d

    def cache_token(self) -> str:
        return self.resource_uri


@dataclass(eq=True)
class Language(Resource):
    KIND = "Language"

    resource_uri: str = ""
    code: str = ""
    fullname: str = ""
    description: str = ""
    nplurals: Optional[int] = None
    pluralequation: str = ""
    specialchars: str = ""
    translation_projects: List[str] = field(default_factory=list)
    raw: Optional[Dict[str, Any]] = field(default=None, repr=False, compare=False)


@dataclass(eq=True)
class Project(Resource):
    KIND = "Project"

    resource_uri: str = ""
    code: str = ""
    fullname: str = ""
    description: str = ""
    checkstyle: str = ""
    localfiletype: str = ""
    source_language: str = ""
    ignoredfiles: str = ""
    treestyle: str = ""
    translation_projects: List[str] = field(default_factory=list)
    raw: Optional[Dict[str, Any]] = field(default=None, repr=False, compare=False)


@dataclass(eq=True)
class TranslationProject(Resource):
    KIND = "TranslationProject"

    resource_uri: str = ""
    description: str = ""
    language: str = ""
    project: str = ""
    pootle_path: str = ""
    real_path: str = ""
    stores: List[str] = field(default_factory=list)
    raw: Optional[Dict[str, Any]] = field(default=None, repr=False, compare=False)


@dataclass(eq=True)
class Store(Resource):
    KIND = "Store"

    resource_uri: str = ""
    name: str = ""
    file: str = ""
    pending: Optional[str] = None
    pootle_path: str = ""
    state: Optional[int] = None
    sync_time: Optional[str] = None
    tm: Optional[str] = None
    translation_project: str = ""
    units: List[str] = field(default_factory=list)
    raw: Optional[Dict[str, Any]] = field(default=None, repr=False, compare=False)


@dataclass(eq=True)
class Unit(Resource):
    KIND = "Unit"

    resource_uri: str = ""
    source_f: str = ""
    target_f: str = ""
    context: str = ""
    state: Optional[int] = None
    store: str = ""
    locations: str = ""
    developer_comment: str = ""
    translator_comment: str = ""
    commented_by: Optional[str] = None
    commented_on: Optional[str] = None
    submitted_by: Optional[str] = None
    submitted_on: Optional[str] = None
    mtime: Optional[str] = None
    source_length: Optional[int] = None
    source_wordcount: Optional[int] = None
    target_length: Optional[int] = None
    target_wordcount: Optional[int] = None
    suggestions: List[str] = field(default_factory=list)
    raw: Optional[Dict[str, Any]] = field(default=None, repr=False, compare=False)


RESOURCE_TYPES = (Language, Project, TranslationProject, Store, Unit)

for _cls in RESOURCE_TYPES:
    register_default_type(_cls)
