"""Tests for core.registry."""

import pytest

from core.documents import DocumentStore
from core.errors import DocumentNotFound
from core.registry import CapabilityRegistry, describe, identity_from_uri, uri_for


@pytest.fixture
def registry(store):
    return CapabilityRegistry(store)


class TestResources:
    def test_one_descriptor_per_document(self, registry, store):
        uris = [d.uri for d in registry.list_resources()]
        assert uris == [f"docs://{identity}" for identity in store.list_documents()]

    def test_descriptor_fields(self, registry):
        guide = next(d for d in registry.list_resources() if d.uri == "docs://guide.md")
        assert guide.name == "Documentation: guide"
        assert guide.mime_type == "text/markdown"
        assert guide.description == "Internal documentation from guide.md"

    def test_advertised_mime_type_matches_read(self, registry, store):
        for descriptor in registry.list_resources():
            assert store.get(identity_from_uri(descriptor.uri)).mime_type == descriptor.mime_type

    def test_display_name_drops_only_the_extension(self):
        assert describe("release.notes.md").name == "Documentation: release.notes"

    def test_round_trip_to_content(self, registry, store):
        for descriptor in registry.list_resources():
            identity = identity_from_uri(descriptor.uri)
            assert store.read_document(identity) == store.read_document(descriptor.uri[len("docs://"):])

    def test_empty_store(self, tmp_path):
        assert CapabilityRegistry(DocumentStore(tmp_path)).list_resources() == []


class TestUris:
    @pytest.mark.parametrize("identity", ["guide.md", "release notes.md", "café.md", "100%.md"])
    def test_uri_round_trip(self, identity):
        assert identity_from_uri(uri_for(identity)) == identity

    def test_plain_filenames_are_not_encoded(self):
        assert uri_for("guide.md") == "docs://guide.md"

    def test_trailing_slash_is_ignored(self):
        assert identity_from_uri("docs://guide.md/") == "guide.md"

    def test_foreign_scheme_is_not_found(self):
        with pytest.raises(DocumentNotFound):
            identity_from_uri("file:///etc/passwd")


class TestTools:
    def test_exactly_two_tools(self, registry):
        assert [t.name for t in registry.list_tools()] == ["search_docs", "get_weather"]

    def test_tools_do_not_depend_on_documents(self, tmp_path):
        empty = CapabilityRegistry(DocumentStore(tmp_path / "missing"))
        assert [t.name for t in empty.list_tools()] == ["search_docs", "get_weather"]

    def test_input_schemas(self, registry):
        schemas = {t.name: t.input_schema for t in registry.list_tools()}
        assert schemas["search_docs"]["properties"]["query"]["type"] == "string"
        assert schemas["search_docs"]["required"] == ["query"]
        assert schemas["get_weather"]["properties"]["city"]["type"] == "string"
        assert schemas["get_weather"]["required"] == ["city"]
