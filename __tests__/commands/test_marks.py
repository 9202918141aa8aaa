"""Tests for mark queries and toggling."""
from richview.commands import toggle_mark, add_mark, remove_mark, has_mark, active_marks
from richview.document import Document, Block, Text, PARAGRAPH, BOLD, ITALIC
from richview.selection import Range


def make_document():
    return Document([
        Block.create(PARAGRAPH, [Text.create("Hello world", key="t1")], key="p1"),
        Block.create(PARAGRAPH, [Text.create("Second", key="t2")], key="p2"),
        Block.create(PARAGRAPH, [Text.create("", key="t3")], key="p3"),
    ], key="doc")


def leaves(document, block_key):
    return [(t.text, t.mark_types) for t in document.get_block(block_key).nodes]


class TestToggleMark:

    def test_adds_mark_to_selected_characters(self):
        doc = toggle_mark(make_document(), Range.between("p1", 0, "p1", 5), BOLD)
        assert leaves(doc, "p1") == [("Hello", {"bold"}), (" world", set())]
        assert doc.get_block("p1").nodes[0].key == "t1"

    def test_middle_of_leaf(self):
        doc = toggle_mark(make_document(), Range.between("p1", 2, "p1", 4), ITALIC)
        assert leaves(doc, "p1") == [("He", set()), ("ll", {"italic"}), ("o world", set())]

    def test_toggle_twice_restores_document(self):
        original = make_document()
        for selection in [
            Range.between("p1", 0, "p1", 5),
            Range.between("p1", 2, "p1", 4),
            Range.between("p1", 6, "p2", 3),
            Range.between("p2", 3, "p1", 6),
        ]:
            once = toggle_mark(original, selection, BOLD)
            assert once != original
            assert toggle_mark(once, selection, BOLD) == original

    def test_across_blocks(self):
        doc = toggle_mark(make_document(), Range.between("p1", 6, "p2", 3), BOLD)
        assert leaves(doc, "p1") == [("Hello ", set()), ("world", {"bold"})]
        assert leaves(doc, "p2") == [("Sec", {"bold"}), ("ond", set())]

    def test_any_marked_leaf_turns_mark_off(self):
        doc = toggle_mark(make_document(), Range.between("p1", 0, "p1", 5), BOLD)
        whole = Range.between("p1", 0, "p1", 11)
        assert has_mark(doc, whole, BOLD)
        doc = toggle_mark(doc, whole, BOLD)
        assert leaves(doc, "p1") == [("Hello world", set())]

    def test_collapsed_selection_is_noop(self):
        doc = make_document()
        assert toggle_mark(doc, Range.collapsed("p1", 3), BOLD) is doc

    def test_marks_combine(self):
        selection = Range.between("p1", 0, "p1", 5)
        doc = add_mark(make_document(), selection, BOLD)
        doc = add_mark(doc, selection, ITALIC)
        assert leaves(doc, "p1")[0] == ("Hello", {"bold", "italic"})
        doc = remove_mark(doc, selection, BOLD)
        assert leaves(doc, "p1")[0] == ("Hello", {"italic"})


class TestMarkQueries:

    def test_has_mark_at_cursor(self):
        doc = toggle_mark(make_document(), Range.between("p1", 0, "p1", 5), BOLD)
        assert has_mark(doc, Range.collapsed("p1", 3), BOLD)
        assert has_mark(doc, Range.collapsed("p1", 5), BOLD)
        assert not has_mark(doc, Range.collapsed("p1", 6), BOLD)

    def test_active_marks(self):
        doc = toggle_mark(make_document(), Range.between("p1", 0, "p1", 5), BOLD)
        assert active_marks(doc, Range.between("p1", 0, "p1", 11)) == {"bold"}
        assert active_marks(doc, Range.collapsed("p2", 0)) == set()
