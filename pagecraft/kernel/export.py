"""
Pagecraft Kernel -- Export

One-way export of the current page: a standalone HTML document that can be
written to a temporary file and opened in a browser. Not part of the
edit/save cycle.

Also home of clean_editor_markup(), which strips the attributes the visual
editor adds to elements while they are being edited.
"""

from __future__ import annotations

import re
import tempfile
from pathlib import Path

from pagecraft.kernel.generator import escape

PREVIEW_BASE_CSS = "body { margin: 0; padding: 0; font-family: -apple-system, BlinkMacSystemFont, sans-serif; }"

_EDITOR_ATTR_RE = re.compile(
    r'\s+(?:contenteditable|draggable|data-placeholder|data-component-type|data-component-id)="[^"]*"',
    re.IGNORECASE,
)
_EDITOR_CLASSES = {"editor-component", "selected-element"}
_CLASS_ATTR_RE = re.compile(r'\sclass="([^"]*)"')
_EDITOR_HANDLE_RE = re.compile(
    r'<div[^>]*class="[^"]*\b(?:ve-resize-handle|ve-drag-handle|element-controls)\b[^"]*"[^>]*>\s*</div>',
    re.IGNORECASE,
)


def build_standalone_page(html: str, css: str = "", title: str = "Landing Page Preview") -> str:
    """Wrap a page body in a complete HTML document with its stylesheet inlined."""
    parts: list[str] = []
    parts.append("<!DOCTYPE html>")
    parts.append("<html>")
    parts.append("<head>")
    parts.append('  <meta charset="utf-8"/>')
    parts.append('  <meta name="viewport" content="width=device-width, initial-scale=1"/>')
    parts.append(f"  <title>{escape(title)}</title>")
    parts.append("  <style>")
    parts.append(f"    {PREVIEW_BASE_CSS}")
    if css:
        parts.append(css)
    parts.append("  </style>")
    parts.append("</head>")
    parts.append("<body>")
    parts.append(html)
    parts.append("</body>")
    parts.append("</html>")
    return "\n".join(parts) + "\n"


def write_preview(page: str, directory: str | Path | None = None) -> Path:
    """
    Write a standalone page to a fresh .html file and return its path.
    The file is left for the caller (or the OS temp cleaner) to remove.
    """
    with tempfile.NamedTemporaryFile(
        "w",
        suffix=".html",
        prefix="pagecraft-preview-",
        dir=directory,
        delete=False,
        encoding="utf-8",
    ) as f:
        f.write(page)
        return Path(f.name)


def clean_editor_markup(html: str) -> str:
    """Remove editor-only attributes, classes, and handle elements from markup."""
    html = _EDITOR_HANDLE_RE.sub("", html)
    html = _EDITOR_ATTR_RE.sub("", html)

    def _strip_classes(match: re.Match[str]) -> str:
        kept = [c for c in match.group(1).split() if c not in _EDITOR_CLASSES]
        if not kept:
            return ""
        return f' class="{" ".join(kept)}"'

    return _CLASS_ATTR_RE.sub(_strip_classes, html)
