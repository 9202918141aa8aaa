"""Tests for the persisted snapshot format."""
import json

import pytest
from pydantic import BaseModel, ValidationError

from richview.document import Document, Block, Text, IMAGE, PARAGRAPH, to_json, from_json
from richview.errors import SnapshotError


def make_document():
    return Document([
        Block.create(PARAGRAPH, [
            Text.create("plain ", key="t1"),
            Text.create("styled", marks=["italic", "bold"], key="t2"),
        ], key="p1"),
        Block.create(IMAGE, data={"src": "https://example.com/cat.png"}, key="img"),
        Block.create(PARAGRAPH, [Text.create("", key="t3")], key="p2"),
    ], key="doc")


class TestDump:

    def test_snapshot_shape(self):
        data = make_document().model_dump()
        assert data["document"]["key"] == "doc"
        paragraph, image, _ = data["document"]["nodes"]
        assert paragraph == {
            "key": "p1",
            "type": "paragraph",
            "nodes": [
                {"key": "t1", "text": "plain ", "marks": []},
                {"key": "t2", "text": "styled", "marks": [{"type": "bold"}, {"type": "italic"}]},
            ],
        }
        assert image == {
            "key": "img",
            "type": "image",
            "nodes": [],
            "data": {"src": "https://example.com/cat.png"},
        }

    def test_canonical_json(self):
        payload = to_json(make_document())
        assert ": " not in payload and ", " not in payload.replace("plain ", "")
        assert payload == to_json(from_json(payload))
        assert json.loads(payload)["document"]["key"] == "doc"


class TestLoad:

    def test_round_trip(self):
        doc = make_document()
        assert Document.model_load(doc.model_dump()) == doc
        assert from_json(to_json(doc)) == doc

    def test_round_trip_keeps_data(self):
        doc = from_json(to_json(make_document()))
        assert doc.get_block("img").data == {"src": "https://example.com/cat.png"}

    @pytest.mark.parametrize("data", [
        {},
        {"document": {"key": "d", "nodes": [{"key": "x"}]}},
        {"document": {"key": "d", "nodes": [{"key": "p", "type": "paragraph", "bogus": 1}]}},
        {"document": {"key": "d", "nodes": [{"key": "t", "text": "top-level text"}]}},
    ])
    def test_malformed_snapshot(self, data):
        with pytest.raises(SnapshotError):
            Document.model_load(data)

    def test_duplicate_keys(self):
        data = {"document": {"key": "d", "nodes": [
            {"key": "p", "type": "paragraph", "nodes": [{"key": "p", "text": "x", "marks": []}]},
        ]}}
        with pytest.raises(SnapshotError):
            Document.model_load(data)

    @pytest.mark.parametrize("payload", ["not json", "[1, 2]", ""])
    def test_invalid_json(self, payload):
        with pytest.raises(SnapshotError):
            from_json(payload)


class TestPydanticField:

    class Holder(BaseModel):
        document: Document

    def test_validate_from_snapshot(self):
        holder = self.Holder(document=make_document().model_dump())
        assert holder.document == make_document()

    def test_dump_as_snapshot(self):
        holder = self.Holder(document=make_document())
        assert holder.model_dump()["document"] == make_document().model_dump()

    def test_invalid_snapshot_is_validation_error(self):
        with pytest.raises(ValidationError):
            self.Holder(document={"document": {}})
