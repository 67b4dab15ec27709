"""
Pagecraft Types -- Wire Format Tests

Document.from_dict / to_dict against stored page objects.

This verifies:
  - visualComponents is read first, components as a fallback
  - htmlMode is inferred for pages stored without it
  - keys the editor does not model survive a load/save cycle
  - component fields stay flat on the wire
"""

from pagecraft.kernel.types import ActiveEdit, ComponentDescriptor, Document, LoadResult


class TestFromDict:
    def test_visual_components_preferred(self):
        doc = Document.from_dict(
            {"visualComponents": [{"type": "text"}], "components": [{"type": "image"}, {"type": "button"}]}
        )
        assert [c.type for c in doc.components] == ["text"]

    def test_components_fallback(self):
        doc = Document.from_dict({"components": [{"type": "image", "id": "i1", "src": "/a.png"}]})
        assert doc.components == [ComponentDescriptor(type="image", id="i1", props={"src": "/a.png"})]

    def test_empty_page(self):
        doc = Document.from_dict({})
        assert doc == Document()

    def test_null_fields(self):
        doc = Document.from_dict({"visualComponents": None, "sections": None, "html": None, "css": None})
        assert doc.components == []
        assert doc.sections == []
        assert doc.html == ""

    def test_non_dict_entries_skipped(self):
        doc = Document.from_dict({"visualComponents": ["junk", {"type": "text"}], "sections": [3, {"type": "cta"}]})
        assert len(doc.components) == 1
        assert doc.sections == [{"type": "cta"}]

    def test_wrong_field_types_ignored(self):
        doc = Document.from_dict({"visualComponents": 7, "sections": 5, "html": 123, "css": {"a": 1}})
        assert doc.components == []
        assert doc.sections == []
        assert doc.html == ""
        assert doc.css == ""
        assert doc.html_mode == "generated"

    def test_component_sections_as_object_ignored(self):
        doc = Document.from_dict({"components": {"type": "text"}, "sections": "cta"})
        assert doc.components == []
        assert doc.sections == []

    def test_numeric_component_id_becomes_string(self):
        doc = Document.from_dict({"visualComponents": [{"id": 5, "type": "text"}]})
        assert doc.components[0].id == "5"
        assert doc.to_dict()["visualComponents"] == [{"id": "5", "type": "text"}]


class TestHtmlModeInference:
    def test_stored_markup_is_manual(self):
        assert Document.from_dict({"html": "<p>x</p>"}).html_mode == "manual"

    def test_no_markup_is_generated(self):
        assert Document.from_dict({"html": "   "}).html_mode == "generated"

    def test_explicit_mode_kept(self):
        assert Document.from_dict({"html": "<p>x</p>", "htmlMode": "generated"}).html_mode == "generated"

    def test_unknown_mode_inferred(self):
        assert Document.from_dict({"html": "<p>x</p>", "htmlMode": "wysiwyg"}).html_mode == "manual"


class TestToDict:
    def test_extra_keys_round_trip(self):
        page = {"slug": "spring", "meta": {"og": "x"}, "html": "<p>x</p>"}
        out = Document.from_dict(page).to_dict()
        assert out["slug"] == "spring"
        assert out["meta"] == {"og": "x"}

    def test_component_fields_flat(self):
        doc = Document(components=[ComponentDescriptor(type="button", id="b1", props={"text": "Go"})])
        assert doc.to_dict()["visualComponents"] == [{"id": "b1", "type": "button", "text": "Go"}]

    def test_component_without_id(self):
        assert ComponentDescriptor(type="text").to_dict() == {"type": "text"}

    def test_writes_html_mode(self):
        assert Document(html_mode="manual").to_dict()["htmlMode"] == "manual"


class TestSmallTypes:
    def test_active_edit_empty(self):
        assert ActiveEdit().is_empty() is True
        assert ActiveEdit(html="").is_empty() is False

    def test_load_result_ok(self):
        assert LoadResult(status="loaded").ok is True
        assert LoadResult(status="auth_pending").ok is False

    def test_descriptor_get_treats_blank_as_missing(self):
        c = ComponentDescriptor(type="text", props={"content": "", "alt": None, "n": 0})
        assert c.get("content", "d") == "d"
        assert c.get("alt", "d") == "d"
        assert c.get("n", "d") == 0
