"""
Pagecraft Kernel -- Generator

Pure function: (components, sections?) -> HTML fragment string.
No IO. Deterministic: same input -> byte-identical output, always.

Every interpolated value goes through escape(). The one exception is the
html_content component, whose whole purpose is to carry raw markup.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from html import escape as _html_escape
from typing import Any

from pagecraft.kernel.types import ComponentDescriptor

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def generate_html(
    components: Iterable[ComponentDescriptor | dict[str, Any]],
    sections: Iterable[dict[str, Any]] | None = None,
) -> str:
    """
    Render components in list order, then sections in list order.
    Unknown component types yield an invisible placeholder; unknown
    section types yield nothing.
    """
    parts = [render_component(c) for c in components]
    parts.extend(render_section(s) for s in sections or [])
    return "".join(parts)


def render_component(component: ComponentDescriptor | dict[str, Any]) -> str:
    """Render a single component descriptor to a markup fragment."""
    if isinstance(component, dict):
        component = ComponentDescriptor.from_dict(component)
    handler = _COMPONENT_TEMPLATES.get(component.type)
    if handler is None:
        return _placeholder(component.type)
    return handler(component)


def render_section(section: dict[str, Any]) -> str:
    """Render a single section record. Sections without a known type render empty."""
    handler = _SECTION_TEMPLATES.get(section.get("type", ""))
    if handler is None:
        return ""
    return handler(section)


def escape(value: Any) -> str:
    """HTML-escape user content, for both text and attribute positions."""
    return _html_escape(str(value), quote=True)


# ---------------------------------------------------------------------------
# Component templates
# ---------------------------------------------------------------------------

HERO_OVERLAY = "linear-gradient(135deg, rgba(0,0,0,0.6), rgba(37,99,235,0.3))"


def _hero_header(c: ComponentDescriptor) -> str:
    background = escape(c.get("backgroundImage", "https://source.unsplash.com/1600/600/?hero"))
    headline = escape(c.get("headline", "Hero Headline"))
    subheadline = escape(c.get("subheadline", "Hero subheadline"))
    cta = escape(c.get("ctaText", "Call to Action"))
    return (
        '<section class="hero-section relative min-h-screen flex items-center justify-center text-white" '
        f'style="background: {HERO_OVERLAY}, url({background}) center/cover;">'
        '<div class="container mx-auto px-4 text-center">'
        f'<h1 class="text-5xl md:text-6xl font-bold mb-6">{headline}</h1>'
        f'<p class="text-xl md:text-2xl mb-8">{subheadline}</p>'
        '<a href="#contact" class="bg-blue-600 hover:bg-blue-700 text-white font-semibold py-4 px-8 rounded-lg">'
        f"{cta}</a>"
        "</div></section>"
    )


def _text(c: ComponentDescriptor) -> str:
    content = escape(c.get("content", "Text content"))
    return f'<div class="py-4"><p class="text-lg text-gray-600">{content}</p></div>'


def _dynamic_text(c: ComponentDescriptor) -> str:
    content = escape(c.get("content", "Dynamic Title"))
    return f'<div class="py-4"><h2 class="text-3xl font-bold text-gray-800">{content}</h2></div>'


def _button(c: ComponentDescriptor) -> str:
    url = escape(c.get("url", "#"))
    text = escape(c.get("text", "Button"))
    return (
        '<div class="py-4 text-center">'
        f'<a href="{url}" class="inline-block bg-blue-600 hover:bg-blue-700 text-white font-semibold py-3 px-6 rounded-lg">'
        f"{text}</a></div>"
    )


def _image(c: ComponentDescriptor) -> str:
    src = escape(c.get("src", "https://source.unsplash.com/600/400/?image"))
    alt = escape(c.get("alt", "Image"))
    return (
        '<div class="py-4 text-center">'
        f'<img src="{src}" alt="{alt}" class="max-w-full h-auto rounded-lg shadow-lg mx-auto"/>'
        "</div>"
    )


def _html_content(c: ComponentDescriptor) -> str:
    # Trusted raw markup block, not escaped
    return str(c.get("content", "<div>HTML Content</div>"))


def _placeholder(component_type: str) -> str:
    # "--" would end the comment early
    label = escape(component_type).replace("--", "- -")
    return f'<div class="py-4"><!-- {label} component --></div>'


_COMPONENT_TEMPLATES: dict[str, Callable[[ComponentDescriptor], str]] = {
    "hero_header": _hero_header,
    "text": _text,
    "dynamic_text": _dynamic_text,
    "button": _button,
    "image": _image,
    "html_content": _html_content,
}


# ---------------------------------------------------------------------------
# Section templates
# ---------------------------------------------------------------------------


def _hero_section(s: dict[str, Any]) -> str:
    title = escape(s.get("title") or "")
    subtitle = escape(s.get("subtitle") or "")
    image = ""
    if s.get("image"):
        image = f'<img src="{escape(s["image"])}" class="mx-auto max-w-md rounded-lg"/>'
    return (
        '<section class="hero py-20 text-center">'
        f'<h1 class="text-4xl font-bold mb-4">{title}</h1>'
        f'<p class="text-xl mb-8">{subtitle}</p>'
        f"{image}</section>"
    )


def _features_section(s: dict[str, Any]) -> str:
    items = "".join(
        f'<div class="p-6 bg-white rounded-lg shadow"><p>{escape(item)}</p></div>'
        for item in s.get("items") or []
    )
    heading = escape(s.get("title") or "Features")
    return (
        '<section class="features py-16"><div class="container mx-auto">'
        f'<h2 class="text-3xl font-bold text-center mb-8">{heading}</h2>'
        f'<div class="grid md:grid-cols-3 gap-6">{items}</div>'
        "</div></section>"
    )


def _cta_section(s: dict[str, Any]) -> str:
    text = escape(s.get("text") or "Call to Action")
    return (
        '<section class="cta py-16 bg-blue-600 text-white text-center">'
        f'<div class="container mx-auto"><h2 class="text-3xl font-bold">{text}</h2></div>'
        "</section>"
    )


_SECTION_TEMPLATES: dict[str, Callable[[dict[str, Any]], str]] = {
    "hero": _hero_section,
    "features": _features_section,
    "cta": _cta_section,
}


# ---------------------------------------------------------------------------
# Stylesheet
# ---------------------------------------------------------------------------

BASE_CSS = """
* { margin: 0; padding: 0; box-sizing: border-box; }
body {
  font-family: 'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
  line-height: 1.6;
  color: #333;
  padding: 20px;
}
h1, h2, h3, h4, h5, h6 { font-weight: 700; color: #1f2937; }
h1 { font-size: 2.25rem; margin-bottom: 1rem; }
h2 { font-size: 1.875rem; margin-bottom: 0.875rem; }
h3 { font-size: 1.5rem; margin-bottom: 0.75rem; }
p { font-size: 1rem; color: #6b7280; margin-bottom: 1rem; line-height: 1.6; }
img { max-width: 100%; height: auto; display: block; border-radius: 8px; }
a { text-decoration: none; transition: all 0.3s ease; }
.container { max-width: 1200px; margin: 0 auto; padding: 0 1rem; }
.hero-section { position: relative; }
.text-center { text-align: center; }
.py-4 { padding: 1rem 0; }
.py-16 { padding: 4rem 0; }
.py-20 { padding: 5rem 0; }
.text-lg { font-size: 1.125rem; }
.text-xl { font-size: 1.25rem; }
.text-3xl { font-size: 1.875rem; }
.text-4xl { font-size: 2.25rem; }
.text-5xl { font-size: 3rem; }
.font-bold { font-weight: 700; }
.text-gray-600 { color: #6b7280; }
.text-gray-800 { color: #1f2937; }
.text-white { color: white; }
.bg-blue-600 { background-color: #2563eb; }
.bg-white { background-color: white; }
.rounded-lg { border-radius: 0.5rem; }
.shadow { box-shadow: 0 1px 3px rgba(0,0,0,0.1); }
.shadow-lg { box-shadow: 0 10px 25px rgba(0,0,0,0.1); }
.max-w-full { max-width: 100%; }
.h-auto { height: auto; }
.mx-auto { margin-left: auto; margin-right: auto; }
.mb-4 { margin-bottom: 1rem; }
.mb-6 { margin-bottom: 1.5rem; }
.mb-8 { margin-bottom: 2rem; }
.grid { display: grid; }
.gap-6 { gap: 1.5rem; }
.p-6 { padding: 1.5rem; }
.inline-block { display: inline-block; }
@media (min-width: 768px) {
  .md\\:grid-cols-3 { grid-template-columns: repeat(3, 1fr); }
  .md\\:text-6xl { font-size: 3.75rem; }
  .md\\:text-2xl { font-size: 1.5rem; }
}
"""


def generate_css() -> str:
    """
    Stylesheet for generated markup.
    The utility classes cover every template, so one sheet fits every page.
    """
    return BASE_CSS.strip() + "\n"
