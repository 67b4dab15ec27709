"""
Pagecraft Generator -- Template Tests

One markup shape per component and section type.

This verifies:
  - each component type renders its documented template
  - missing or empty fields fall back to the type's default text
  - components render in list order, then sections in list order
  - unknown component types render an invisible placeholder
  - unknown section types render nothing
"""

from pagecraft.kernel.generator import generate_css, generate_html, render_component, render_section
from pagecraft.kernel.types import ComponentDescriptor

# ============================================================================
# Fixtures
# ============================================================================


def make_component(component_type: str, **props) -> ComponentDescriptor:
    return ComponentDescriptor(type=component_type, id=f"{component_type}-1", props=props)


# ============================================================================
# Component templates
# ============================================================================


class TestComponentTemplates:
    def test_button(self):
        html = render_component(make_component("button", url="/x", text="Go"))
        assert html == (
            '<div class="py-4 text-center">'
            '<a href="/x" class="inline-block bg-blue-600 hover:bg-blue-700 text-white font-semibold py-3 px-6 rounded-lg">'
            "Go</a></div>"
        )

    def test_text(self):
        html = render_component(make_component("text", content="Hello"))
        assert html == '<div class="py-4"><p class="text-lg text-gray-600">Hello</p></div>'

    def test_dynamic_text(self):
        html = render_component(make_component("dynamic_text", content="Big news"))
        assert html == '<div class="py-4"><h2 class="text-3xl font-bold text-gray-800">Big news</h2></div>'

    def test_image(self):
        html = render_component(make_component("image", src="/a.png", alt="A cat"))
        assert '<img src="/a.png" alt="A cat"' in html
        assert html.startswith('<div class="py-4 text-center">')

    def test_hero_header(self):
        html = render_component(
            make_component(
                "hero_header",
                headline="Spring Sale",
                subheadline="Everything 20% off",
                ctaText="Shop now",
                backgroundImage="/hero.jpg",
            )
        )
        assert html.startswith("<section ")
        assert "url(/hero.jpg) center/cover;" in html
        assert ">Spring Sale</h1>" in html
        assert ">Everything 20% off</p>" in html
        assert '<a href="#contact"' in html
        assert ">Shop now</a>" in html

    def test_html_content_is_passed_through(self):
        raw = '<div class="custom"><b>raw</b></div>'
        assert render_component(make_component("html_content", content=raw)) == raw

    def test_accepts_plain_dict(self):
        assert render_component({"type": "text", "content": "Hi"}) == render_component(
            make_component("text", content="Hi")
        )


class TestDefaults:
    def test_button_defaults(self):
        html = render_component(make_component("button"))
        assert 'href="#"' in html
        assert ">Button</a>" in html

    def test_empty_string_uses_default(self):
        html = render_component(make_component("text", content=""))
        assert ">Text content</p>" in html

    def test_hero_defaults(self):
        html = render_component(make_component("hero_header"))
        assert ">Hero Headline</h1>" in html
        assert ">Hero subheadline</p>" in html
        assert ">Call to Action</a>" in html

    def test_image_default_alt(self):
        assert 'alt="Image"' in render_component(make_component("image", src="/a.png"))


class TestUnknownComponent:
    def test_placeholder_comment(self):
        html = render_component(make_component("carousel"))
        assert html == '<div class="py-4"><!-- carousel component --></div>'

    def test_placeholder_cannot_close_comment_early(self):
        html = render_component(make_component("x-->y"))
        assert html.count("-->") == 1
        assert html.endswith("component --></div>")


# ============================================================================
# Sections
# ============================================================================


class TestSections:
    def test_features_items_rendered_in_order(self):
        html = render_section({"type": "features", "title": "Why us", "items": ["Fast", "Cheap"]})
        assert ">Why us</h2>" in html
        assert html.index("<p>Fast</p>") < html.index("<p>Cheap</p>")

    def test_features_default_heading(self):
        assert ">Features</h2>" in render_section({"type": "features", "items": []})

    def test_cta(self):
        html = render_section({"type": "cta", "text": "Join today"})
        assert ">Join today</h2>" in html

    def test_hero_section_image_optional(self):
        assert "<img" not in render_section({"type": "hero", "title": "T"})
        assert '<img src="/i.png"' in render_section({"type": "hero", "title": "T", "image": "/i.png"})

    def test_unknown_section_renders_nothing(self):
        assert render_section({"type": "testimonials"}) == ""
        assert render_section({}) == ""


# ============================================================================
# Composition
# ============================================================================


class TestGenerateHtml:
    def test_empty_input(self):
        assert generate_html([]) == ""
        assert generate_html([], []) == ""

    def test_components_then_sections(self):
        components = [make_component("text", content="first"), make_component("text", content="second")]
        sections = [{"type": "cta", "text": "last"}]
        html = generate_html(components, sections)

        assert html.index("first") < html.index("second") < html.index("last")

    def test_concatenation_of_fragments(self):
        components = [make_component("text", content="a"), make_component("button")]
        assert generate_html(components) == render_component(components[0]) + render_component(components[1])


class TestGenerateCss:
    def test_stylesheet_covers_template_classes(self):
        css = generate_css()
        for selector in (".py-4", ".text-center", ".rounded-lg", ".hero-section"):
            assert selector in css

    def test_same_sheet_every_call(self):
        assert generate_css() == generate_css()
        assert generate_css().endswith("}\n")
