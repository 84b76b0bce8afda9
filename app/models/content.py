"""Static page schema and the default site document built from it."""

import copy
from enum import Enum
from typing import Dict, List, NamedTuple, Tuple, Union

# A page field holds either a plain string or a list of flat string records.
Item = Dict[str, str]
FieldValue = Union[str, List[Item]]
PageContent = Dict[str, FieldValue]
SiteContent = Dict[str, PageContent]

# List field that only the article repository may write.
ARTICLES_FIELD = "articles"


class FieldKind(str, Enum):
    SCALAR = "scalar"
    ITEM_LIST = "item_list"


class FieldSpec(NamedTuple):
    kind: FieldKind
    item_fields: Tuple[str, ...] = ()


def _scalar() -> FieldSpec:
    return FieldSpec(FieldKind.SCALAR)


def _items(*fields: str) -> FieldSpec:
    return FieldSpec(FieldKind.ITEM_LIST, fields)


_TEAM = _items("name", "role", "bio", "image")
_PROJECTS = _items("title", "description", "image")
_GALLERY = _items("image", "caption")
_DOCUMENTS = _items("title", "date", "filePath")

# Page key -> field name -> spec.  Order matters: it is the order fields are
# shown in the admin edit form and written to disk.
PAGE_SCHEMAS: Dict[str, Dict[str, FieldSpec]] = {
    "home": {
        "heroImage": _scalar(),
        "initiatives": _items("title", "description", "image"),
        "partners": _items("name", "url", "logo"),
        "testimonials": _items("quote", "author", "role"),
        "aboutImages": _GALLERY,
    },
    "about": {"teamMembers": _TEAM},
    "george_mukoya": {"teamMembers": _TEAM, "projects": _PROJECTS, "galleryImages": _GALLERY},
    "muduva_nyangana": {"teamMembers": _TEAM, "projects": _PROJECTS, "galleryImages": _GALLERY},
    "gallery": {"images": _items("image", "caption", "category")},
    "news": {ARTICLES_FIELD: _items("id", "title", "date", "tag", "content", "image")},
    "projects": {"projectCards": _items("title", "description", "image", "link")},
    "natural_resources": {"products": _items("name", "description", "image")},
    "hunting": {},
    "youth_forum": {
        "projects": _PROJECTS,
        "opportunities": _items("title", "description", "deadline"),
        "successStories": _items("title", "story", "image"),
        "events": _items("title", "date", "location", "description"),
    },
    "jobs": {
        "vacancies": _items("title", "location", "deadline", "description"),
        "tenders": _items("title", "reference", "deadline", "filePath"),
    },
    "downloads": {"reports": _DOCUMENTS, "minutes": _DOCUMENTS, "documents": _DOCUMENTS},
    "contact": {},
}


def _empty_value(spec: FieldSpec) -> FieldValue:
    return "" if spec.kind is FieldKind.SCALAR else []


_DEFAULT_SITE_CONTENT: SiteContent = {
    page: {field: _empty_value(spec) for field, spec in fields.items()}
    for page, fields in PAGE_SCHEMAS.items()
}


def default_site_content() -> SiteContent:
    """Return a fresh, independently mutable copy of the default document."""
    return copy.deepcopy(_DEFAULT_SITE_CONTENT)


def classify(value: object) -> Union[FieldKind, None]:
    """Return the kind of a stored field value, or ``None`` for any other shape."""
    if isinstance(value, str):
        return FieldKind.SCALAR
    if isinstance(value, list):
        return FieldKind.ITEM_LIST
    return None


def is_file_field(field: str) -> bool:
    """Item fields edited with a file input rather than a text box."""
    lowered = field.lower()
    return lowered.endswith("image") or lowered in {"logo", "filepath"}


def page_title(page_key: str) -> str:
    """``"george_mukoya"`` -> ``"George Mukoya"``."""
    return " ".join(word[:1].upper() + word[1:] for word in page_key.split("_"))
