"""Tests for saving, loading and resetting the persisted document."""
import json

import pytest

from richview.document import Document, Block, Text, PARAGRAPH, HEADING_ONE, IMAGE, to_json
from richview.storage import DocumentGateway, MemoryStore, DEFAULT_VALUE


def make_document():
    return Document([
        Block.create(PARAGRAPH, [Text.create("Saved", marks=["bold"], key="t1")], key="p1"),
        Block.create(IMAGE, data={"src": "data:image/png;base64,YQ=="}, key="img"),
        Block.create(PARAGRAPH, [Text.create("", key="t2")], key="p2"),
    ], key="doc")


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def gateway(store):
    return DocumentGateway(store, key="content")


class TestSave:

    def test_save_writes_canonical_json(self, gateway, store):
        payload = gateway.save(make_document())
        assert store.get("content") == payload == to_json(make_document())

    def test_save_overwrites(self, gateway, store):
        gateway.save(make_document())
        gateway.save(gateway.default_document())
        assert json.loads(store.get("content"))["document"]["key"] == "default"


class TestLoad:

    def test_round_trip(self, gateway):
        gateway.save(make_document())
        assert gateway.load() == make_document()

    def test_missing_key_gives_default(self, gateway):
        assert gateway.load() == gateway.default_document()

    @pytest.mark.parametrize("payload", [
        "",
        "{broken",
        "[]",
        json.dumps({"document": {"key": "d", "nodes": [{"key": "x"}]}}),
        json.dumps({"document": {"key": "d", "nodes": [
            {"key": "p", "type": "paragraph", "nodes": [{"key": "p", "text": "dup", "marks": []}]},
        ]}}),
        json.dumps({"document": {"key": "d", "nodes": [
            {"key": "i", "type": "image", "nodes": [{"key": "t", "text": "caption", "marks": []}]},
        ]}}),
    ])
    def test_invalid_payload_gives_default(self, gateway, store, payload):
        store.set("content", payload)
        assert gateway.load() == gateway.default_document()

    def test_repairable_document_is_normalized(self, gateway, store):
        store.set("content", json.dumps({"document": {"key": "d", "nodes": [
            {"key": "h", "type": "heading-one", "nodes": [{"key": "t", "text": "Title", "marks": []}]},
        ]}}))
        document = gateway.load()
        assert [b.type for b in document.nodes] == [HEADING_ONE, PARAGRAPH]

    def test_large_fragmented_document_survives_load(self, gateway):
        leaves = [Text.create("x", key=f"t{i}") for i in range(1200)]
        gateway.save(Document([Block.create(PARAGRAPH, leaves, key="p")], key="big"))
        document = gateway.load()
        assert document.key == "big"
        assert document.block_text("p") == "x" * 1200


class TestReset:

    def test_reset_deletes_and_returns_default(self, gateway, store):
        gateway.save(make_document())
        document = gateway.reset()
        assert store.get("content") is None
        assert document == Document.model_load(DEFAULT_VALUE)

    def test_default_document_is_fresh_value(self, gateway):
        assert gateway.default_document() == gateway.default_document()


class TestConfiguration:

    def test_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("RICHVIEW_STORAGE_KEY", "draft")
        store = MemoryStore()
        DocumentGateway(store).save(make_document())
        assert store.get("draft") is not None
        assert store.get("content") is None
