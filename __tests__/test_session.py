"""Tests for the editor session: snapshot publishing, selection and persistence."""
import pytest

from richview.commands import CommandMeta, run_command
from richview.document import Document, Block, Text, PARAGRAPH, HEADING_ONE, BULLETED_LIST, IMAGE, BOLD, to_json
from richview.errors import SelectionError
from richview.selection import Point, Range
from richview.session import EditorSession
from richview.storage import DocumentGateway, MemoryStore


def make_document():
    return Document([
        Block.create(PARAGRAPH, [Text.create("Hello world", key="t1")], key="p1"),
        Block.create(PARAGRAPH, [Text.create("end", key="t2")], key="p2"),
    ], key="doc")


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def session(store):
    return EditorSession(make_document(), gateway=DocumentGateway(store, key="content"))


class TestStartup:

    def test_loads_saved_document(self, store):
        store.set("content", to_json(make_document()))
        session = EditorSession(gateway=DocumentGateway(store, key="content"))
        assert session.document == make_document()

    def test_falls_back_to_default(self, store):
        session = EditorSession(gateway=DocumentGateway(store, key="content"))
        assert session.document.key == "default"
        assert session.selection == Range.collapsed("default-title", 0)

    def test_initial_document_is_normalized(self, store):
        doc = Document([Block.create(HEADING_ONE, [Text.create("Title")])])
        session = EditorSession(doc, gateway=DocumentGateway(store))
        assert session.document.nodes[-1].type == PARAGRAPH

    def test_initial_selection(self, store):
        session = EditorSession(make_document(), Range.collapsed("t2", 1), gateway=DocumentGateway(store))
        assert session.selection == Range.collapsed("p2", 1)


class TestSelection:

    def test_select_resolves_points(self, session):
        selection = session.select(Range.between("t1", 2, "p2", 1))
        assert selection.anchor == Point(key="p1", offset=2)
        assert session.selection == selection

    def test_select_invalid_range(self, session):
        with pytest.raises(SelectionError):
            session.select(Range.collapsed("gone"))
        assert session.selection == Range.collapsed("p1", 0)


class TestPublishing:

    def test_edit_replaces_snapshot(self, session):
        before = session.document
        session.select(Range.between("p1", 0, "p1", 5))
        assert session.toggle_mark(BOLD)
        assert session.document is not before
        assert before == make_document()
        assert session.version == 1
        assert session.has_mark(BOLD)

    def test_noop_edit_is_not_published(self, session):
        session.select(Range.collapsed("p1", 3))
        assert not session.toggle_mark(BOLD)
        assert session.version == 0

    def test_listeners(self, session):
        seen = []
        unsubscribe = session.subscribe(seen.append)
        session.set_block_type(HEADING_ONE)
        assert seen == [session.document]
        unsubscribe()
        session.set_block_type(HEADING_ONE)
        assert len(seen) == 1

    def test_toolbar_state(self, session):
        session.select(Range.between("p1", 0, "p2", 1))
        session.set_block_type(BULLETED_LIST)
        state = session.toolbar_state()
        assert state[BULLETED_LIST] is True
        assert state["numbered-list"] is False
        assert state[BOLD] is False
        assert session.is_list_active(BULLETED_LIST)


class TestImages:

    def test_selection_moves_onto_image(self, session):
        session.select(Range.collapsed("p1", 5))
        assert session.insert_image("cat.png")
        image = session.document.nodes[1]
        assert image.type == IMAGE
        assert session.selection == Range.collapsed(image.key)

    def test_stale_generation(self, session):
        assert not session.insert_image("cat.png", generation=session.generation + 1)
        assert session.version == 0

    def test_stale_target(self, session):
        assert not session.insert_image("cat.png", Range.collapsed("gone"))
        assert session.version == 0

    def test_insert_several(self, session):
        session.select(Range.collapsed("p1", 11))
        assert session.insert_images(["a.png", "", "b.png"]) == 2
        srcs = [node.data.get("src") for node in session.document.nodes]
        assert srcs[:3] == [None, "a.png", "b.png"]


class TestPersistence:

    def test_save(self, session, store):
        payload = session.save()
        assert store.get("content") == payload
        assert payload == to_json(session.document)

    def test_reset(self, session, store):
        session.save()
        session.select(Range.collapsed("p2", 2))
        document = session.reset()
        assert store.get("content") is None
        assert document.key == "default"
        assert session.document is document
        assert session.generation == 1
        assert session.selection == Range.collapsed("default-title", 0)


class TestCommandRegistry:

    def test_registered_commands(self):
        assert {"toggle_mark", "set_block_type", "insert_image", "save", "reset"} <= set(CommandMeta.list_commands())

    def test_run_save_and_reset(self, session, store):
        assert run_command(session, "save")
        assert store.get("content") is not None
        assert run_command(session, "reset")
        assert store.get("content") is None
