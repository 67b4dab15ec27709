"""
Pagecraft Kernel -- Shared Types

Data classes used across the generator, history, edits, and document model.
These are the contracts that bind the kernel together.

Wire shape of a landing page (the `data` object the content service stores):

    {
      "visualComponents": [{"id": "c1", "type": "text", "content": "Hi"}],
      "sections": [{"type": "features", "items": ["Fast", "Cheap"]}],
      "html": "<div>...</div>",
      "css": "body { ... }",
      "htmlMode": "generated",
      ...any other page keys (slug, title_tag, ...)
    }
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Literal

# ---------------------------------------------------------------------------
# Component defaults
# ---------------------------------------------------------------------------

# Props a freshly added component starts with
DEFAULT_PROPS: dict[str, dict[str, Any]] = {
    "hero_header": {
        "headline": "Welcome to Our Service",
        "subheadline": "Transform your business with our solutions",
        "ctaText": "Get Started",
        "backgroundImage": "https://source.unsplash.com/1600x600/?business,modern",
    },
    "text": {"content": "Edit this text..."},
    "dynamic_text": {"content": "Dynamic Title"},
    "button": {"text": "Button", "url": "#"},
    "image": {"src": "https://source.unsplash.com/400x300/?business", "alt": "Image"},
    "html_content": {
        "content": '<div style="padding: 20px; text-align: center;"><h2>HTML Content Block</h2></div>',
    },
}

NEW_FEATURE_ITEM = "New feature"

HtmlMode = Literal["generated", "manual"]
HTML_MODES: set[str] = {"generated", "manual"}

# Keys of the wire object that map onto Document fields
_DOCUMENT_KEYS = {"visualComponents", "components", "sections", "html", "css", "htmlMode"}


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class ComponentDescriptor:
    """One structured visual building block: a type plus its own fields."""

    type: str
    id: str | None = None
    props: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        value = self.props.get(key)
        if value is None or value == "":
            return default
        return value

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {}
        if self.id is not None:
            d["id"] = self.id
        d["type"] = self.type
        d.update(self.props)
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ComponentDescriptor:
        props = {k: v for k, v in d.items() if k not in ("id", "type")}
        raw_id = d.get("id")
        return cls(
            type=str(d.get("type", "")),
            id=None if raw_id is None else str(raw_id),
            props=props,
        )


@dataclass
class Document:
    """
    The canonical editable page.

    components, sections, and html overlap: they all describe the same page.
    `html_mode` declares which one html follows:
      - "generated": html is always derived from components + sections
      - "manual": html was edited directly and is kept as-is
    Keys of the stored page that the editor does not model live in `extra`
    and are written back untouched.
    """

    components: list[ComponentDescriptor] = field(default_factory=list)
    sections: list[dict[str, Any]] = field(default_factory=list)
    html: str = ""
    css: str = ""
    html_mode: HtmlMode = "generated"
    extra: dict[str, Any] = field(default_factory=dict)

    def copy(self) -> Document:
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        d = copy.deepcopy(self.extra)
        d["visualComponents"] = [c.to_dict() for c in self.components]
        d["sections"] = copy.deepcopy(self.sections)
        d["html"] = self.html
        d["css"] = self.css
        d["htmlMode"] = self.html_mode
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Document:
        raw_components = d.get("visualComponents")
        if raw_components is None:
            raw_components = d.get("components")
        html = _str_field(d, "html")

        mode = d.get("htmlMode")
        if mode not in HTML_MODES:
            # Stored pages predating htmlMode: keep whatever markup they carry
            mode = "manual" if html.strip() else "generated"

        return cls(
            components=[ComponentDescriptor.from_dict(c) for c in _dict_items(raw_components)],
            sections=[copy.deepcopy(s) for s in _dict_items(d.get("sections"))],
            html=html,
            css=_str_field(d, "css"),
            html_mode=mode,
            extra={k: copy.deepcopy(v) for k, v in d.items() if k not in _DOCUMENT_KEYS},
        )


def _dict_items(value: Any) -> list[dict[str, Any]]:
    """Entries of a stored list field; anything that is not a list of objects is dropped."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _str_field(d: dict[str, Any], key: str) -> str:
    value = d.get(key)
    return value if isinstance(value, str) else ""


@dataclass(frozen=True)
class HistoryEntry:
    """
    Immutable snapshot of a Document at one edit boundary.
    The stored document is private; restore() hands out copies.
    """

    version: int
    _document: Document = field(repr=False)
    label: str = ""

    @classmethod
    def capture(cls, document: Document, version: int, label: str = "") -> HistoryEntry:
        return cls(version=version, _document=copy.deepcopy(document), label=label)

    @property
    def document(self) -> Document:
        return self.restore()

    def restore(self) -> Document:
        return copy.deepcopy(self._document)


@dataclass
class ActiveEdit:
    """
    Replacement values supplied by the visual editor at save time.
    None means "not supplied"; the current Document's value is used instead.
    """

    components: list[ComponentDescriptor] | None = None
    sections: list[dict[str, Any]] | None = None
    html: str | None = None
    css: str | None = None

    def is_empty(self) -> bool:
        return self.components is None and self.sections is None and self.html is None and self.css is None


LoadStatus = Literal["loaded", "auth_pending", "failed", "superseded"]


@dataclass
class LoadResult:
    """Outcome of DocumentModel.load(). Errors are values, not exceptions."""

    status: LoadStatus
    document: Document | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "loaded"


@dataclass
class SaveResult:
    """
    Outcome of DocumentModel.save().
    `version` is the history version the payload was taken from; edits made
    while the save was in flight are not part of it.
    """

    ok: bool
    version: int
    error: str | None = None
    status_code: int | None = None
    superseded: bool = False
