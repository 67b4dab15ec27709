"""
Pagecraft Kernel -- Edits

Pure Document -> Document mutators. Each factory below returns a mutator
for DocumentModel.apply_edit():

    model.apply_edit(add_section({"type": "cta", "text": "Buy now"}))
    model.apply_edit(move_section(0, 2))

A mutator never modifies the Document it receives; it returns a new one.
Impossible edits (unknown component id, index out of range) raise EditError
and nothing is committed.
"""

from __future__ import annotations

import copy
import re
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from pagecraft.kernel.reorder import reorder
from pagecraft.kernel.types import (
    DEFAULT_PROPS,
    NEW_FEATURE_ITEM,
    ComponentDescriptor,
    Document,
)

Mutator = Callable[[Document], Document]

_ID_SUFFIX = re.compile(r"^component-(\d+)$")


class EditError(ValueError):
    """An edit that cannot be applied to the current Document."""


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def add_section(section: dict[str, Any]) -> Mutator:
    def mutate(doc: Document) -> Document:
        return replace(doc, sections=[*copy.deepcopy(doc.sections), copy.deepcopy(section)])

    return mutate


def update_section(index: int, section: dict[str, Any]) -> Mutator:
    """Replace the section at `index` wholesale."""

    def mutate(doc: Document) -> Document:
        sections = copy.deepcopy(doc.sections)
        _check_index(sections, index, "section")
        sections[index] = copy.deepcopy(section)
        return replace(doc, sections=sections)

    return mutate


def remove_section(index: int) -> Mutator:
    def mutate(doc: Document) -> Document:
        sections = copy.deepcopy(doc.sections)
        _check_index(sections, index, "section")
        del sections[index]
        return replace(doc, sections=sections)

    return mutate


def move_section(source_index: Any, target_index: Any) -> Mutator:
    """Drag-sort a section. Invalid indices leave the order as it is."""

    def mutate(doc: Document) -> Document:
        return replace(doc, sections=reorder(copy.deepcopy(doc.sections), source_index, target_index))

    return mutate


def add_feature_item(section_index: int, text: str = NEW_FEATURE_ITEM) -> Mutator:
    def mutate(doc: Document) -> Document:
        sections = copy.deepcopy(doc.sections)
        _check_index(sections, section_index, "section")
        section = sections[section_index]
        section["items"] = [*(section.get("items") or []), text]
        return replace(doc, sections=sections)

    return mutate


def update_feature_item(section_index: int, item_index: int, text: str) -> Mutator:
    def mutate(doc: Document) -> Document:
        sections = copy.deepcopy(doc.sections)
        _check_index(sections, section_index, "section")
        items = list(sections[section_index].get("items") or [])
        _check_index(items, item_index, "feature item")
        items[item_index] = text
        sections[section_index]["items"] = items
        return replace(doc, sections=sections)

    return mutate


def remove_feature_item(section_index: int, item_index: int) -> Mutator:
    def mutate(doc: Document) -> Document:
        sections = copy.deepcopy(doc.sections)
        _check_index(sections, section_index, "section")
        items = list(sections[section_index].get("items") or [])
        _check_index(items, item_index, "feature item")
        del items[item_index]
        sections[section_index]["items"] = items
        return replace(doc, sections=sections)

    return mutate


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


def add_component(
    component_type: str,
    props: dict[str, Any] | None = None,
    *,
    component_id: str | None = None,
    index: int | None = None,
) -> Mutator:
    """
    Insert a component (appended unless `index` is given).
    Missing props are filled from the type's defaults.
    """

    def mutate(doc: Document) -> Document:
        components = copy.deepcopy(doc.components)
        merged = {**DEFAULT_PROPS.get(component_type, {}), **(props or {})}
        new_id = component_id or _next_component_id(components)
        if any(c.id == new_id for c in components):
            raise EditError(f"Component '{new_id}' already exists")
        component = ComponentDescriptor(type=component_type, id=new_id, props=copy.deepcopy(merged))
        if index is None:
            components.append(component)
        else:
            if not 0 <= index <= len(components):
                raise EditError(f"Component index {index} out of range")
            components.insert(index, component)
        return replace(doc, components=components)

    return mutate


def update_component(component_id: str, **props: Any) -> Mutator:
    """Shallow-merge `props` into the component's fields."""

    def mutate(doc: Document) -> Document:
        components = copy.deepcopy(doc.components)
        component = _find_component(components, component_id)
        component.props.update(copy.deepcopy(props))
        return replace(doc, components=components)

    return mutate


def remove_component(component_id: str) -> Mutator:
    def mutate(doc: Document) -> Document:
        components = copy.deepcopy(doc.components)
        _find_component(components, component_id)
        return replace(doc, components=[c for c in components if c.id != component_id])

    return mutate


def move_component(source_index: Any, target_index: Any) -> Mutator:
    def mutate(doc: Document) -> Document:
        return replace(doc, components=reorder(copy.deepcopy(doc.components), source_index, target_index))

    return mutate


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------


def set_html(html: str) -> Mutator:
    """Direct markup edit. From here on html is kept as written."""

    def mutate(doc: Document) -> Document:
        return replace(copy.deepcopy(doc), html=html, html_mode="manual")

    return mutate


def set_css(css: str) -> Mutator:
    def mutate(doc: Document) -> Document:
        return replace(copy.deepcopy(doc), css=css)

    return mutate


def regenerate_html() -> Mutator:
    """Drop manual markup; html follows components and sections again."""

    def mutate(doc: Document) -> Document:
        return replace(copy.deepcopy(doc), html_mode="generated")

    return mutate


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_index(items: list, index: int, what: str) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(items):
        raise EditError(f"No {what} at index {index!r}")


def _find_component(components: list[ComponentDescriptor], component_id: str) -> ComponentDescriptor:
    for c in components:
        if c.id == component_id:
            return c
    raise EditError(f"Unknown component '{component_id}'")


def _next_component_id(components: list[ComponentDescriptor]) -> str:
    highest = 0
    for c in components:
        match = _ID_SUFFIX.match(c.id) if isinstance(c.id, str) else None
        if match:
            highest = max(highest, int(match.group(1)))
    return f"component-{highest + 1}"
