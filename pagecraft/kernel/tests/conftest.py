"""
Kernel test configuration and shared page fixtures.

Kernel tests use MemoryGateway; nothing here touches the network.
"""

import pytest

from pagecraft.kernel.document import DocumentModel
from pagecraft.kernel.gateway import MemoryGateway
from pagecraft.kernel.types import Document


def make_page() -> dict:
    """A stored landing page as the content service returns it."""
    return {
        "nama_halaman": "Spring Sale",
        "slug": "spring-sale",
        "visualComponents": [
            {
                "id": "component-1",
                "type": "hero_header",
                "headline": "Spring Sale",
                "subheadline": "Everything 20% off",
                "ctaText": "Shop now",
                "backgroundImage": "https://cdn.example.com/hero.jpg",
            },
            {"id": "component-2", "type": "button", "url": "/shop", "text": "Browse"},
        ],
        "sections": [
            {"type": "features", "title": "Why us", "items": ["Fast shipping", "Easy returns"]},
            {"type": "cta", "text": "Join today"},
        ],
        "html": "<div><h1>Spring Sale</h1></div>",
        "css": "h1 { color: red; }",
    }


@pytest.fixture
def page() -> dict:
    return make_page()


@pytest.fixture
def gateway(page) -> MemoryGateway:
    return MemoryGateway({"page-1": page})


@pytest.fixture
def model(gateway, page) -> DocumentModel:
    """A model seeded with the stored page, as if load() had succeeded."""
    m = DocumentModel(gateway, "page-1")
    m.seed(Document.from_dict(page))
    return m
