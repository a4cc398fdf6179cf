"""Unit tests for editor_adapter.page_documents module."""

import pytest

from src.editor_adapter.errors import ConversionError
from src.editor_adapter.page_documents import (
    PageDocument,
    all_documents_to_pages,
    all_pages_to_documents,
    document_to_page,
    page_to_document,
)
from src.models.canonical_page import PageMeta
from tests.fixtures.sample_pages import make_pages, make_stack_page, native_entry


class TestPageToDocument:
    """Test cases for page_to_document()."""

    def test_meta_carried_alongside(self):
        """Label, route and browser title are untouched by conversion."""
        page = make_stack_page("p1", label="Home", route="/")
        page.browser_title = "Home | Shop"

        document = page_to_document(page)

        assert document.id == "p1"
        assert document.meta == PageMeta(label="Home", route="/", browser_title="Home | Shop")
        assert document.entry["_component"] == "CanvasStack"

    def test_to_dict(self):
        """JSON shape uses browserTitle and omits it when unset."""
        document = PageDocument(id="p", entry={"_id": "r"}, meta=PageMeta(label="L", route="/l"))

        assert document.to_dict() == {
            "id": "p",
            "entry": {"_id": "r"},
            "meta": {"label": "L", "route": "/l"},
        }


class TestDocumentToPage:
    """Test cases for document_to_page()."""

    def test_builds_page_from_entry(self):
        """The entry becomes the content tree and meta fills the page fields."""
        meta = PageMeta(label="About", route="/about", browser_title="About us")

        page = document_to_page("about", native_entry("root", "Go"), meta)

        assert page.id == "about"
        assert page.label == "About"
        assert page.route == "/about"
        assert page.browser_title == "About us"
        assert page.content.children[0].props == {"label": "Go"}
        assert page.native_entry is None

    def test_non_entry_raises(self):
        """A root that is not an object cannot become a page."""
        with pytest.raises(ConversionError):
            document_to_page("x", "nope", PageMeta(label="X", route="/x"))


class TestBulkConversion:
    """Test cases for the whole-project variants."""

    def test_round_trip_whole_project(self):
        """Every page converts to a document and back with the same content."""
        pages = make_pages()

        documents = all_pages_to_documents(pages)
        back = all_documents_to_pages(documents)

        assert list(documents) == ["p1", "p2"]
        assert set(back) == set(pages)
        for page_id, page in pages.items():
            assert back[page_id].content.to_dict() == page.content.to_dict()
            assert back[page_id].meta == page.meta
