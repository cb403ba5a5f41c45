"""
Unit tests for cascade toggling.
"""

import unittest

from checktree.engine import toggle_cascade, toggle_with_signal, set_all_completed, find_node
from checktree.models import CheckableItem, Note


def item(item_id, completed=False, children=None):
    return CheckableItem(id=item_id, text=item_id, completed=completed, children=children or [])


def flags(forest):
    """Map every checkable identity to its completed flag."""
    result = {}
    for block in forest:
        if isinstance(block, CheckableItem):
            result[block.id] = block.completed
            result.update(flags(block.children))
    return result


class TestToggleCascade(unittest.TestCase):
    """Test toggling with downward cascade and upward un-completion."""

    def setUp(self):
        self.forest = [
            item("parent", children=[
                item("child1", children=[item("grandchild")]),
                item("child2"),
            ])
        ]

    def test_complete_parent_completes_descendants(self):
        """Test completing a parent marks the whole subtree completed."""
        new_forest = toggle_cascade(self.forest, "parent")

        self.assertEqual(flags(new_forest), {
            "parent": True, "child1": True, "grandchild": True, "child2": True
        })

    def test_uncomplete_grandchild_clears_ancestors(self):
        """Test un-completing a leaf clears its ancestors but not its siblings."""
        completed = toggle_cascade(self.forest, "parent")
        new_forest = toggle_cascade(completed, "grandchild")

        self.assertEqual(flags(new_forest), {
            "parent": False, "child1": False, "grandchild": False, "child2": True
        })

    def test_parent_stays_open_until_toggled(self):
        """Test a full toggle sequence over a parent, its children and a grandchild."""
        forest = self.forest
        for item_id in ("grandchild", "child1", "child2"):
            forest = toggle_cascade(forest, item_id)

        self.assertEqual(flags(forest), {
            "parent": False, "child1": True, "grandchild": True, "child2": True
        })

        forest = toggle_cascade(forest, "parent")
        self.assertTrue(all(flags(forest).values()))

        forest = toggle_cascade(forest, "grandchild")
        self.assertEqual(flags(forest), {
            "parent": False, "child1": False, "grandchild": False, "child2": True
        })

    def test_completing_child_does_not_complete_parent(self):
        """Test completion never propagates upward."""
        forest = [item("parent", children=[item("only")])]
        new_forest = toggle_cascade(forest, "only")

        self.assertTrue(find_node(new_forest, "only").completed)
        self.assertFalse(find_node(new_forest, "parent").completed)

    def test_toggle_twice_restores_uniform_subtree(self):
        """Test a toggle pair restores the target and its uniform subtree."""
        once = toggle_cascade(self.forest, "child1")
        twice = toggle_cascade(once, "child1")

        self.assertEqual(flags(twice), flags(self.forest))

    def test_missing_target_is_noop(self):
        """Test toggling an unknown identity returns the same forest."""
        self.assertIs(toggle_cascade(self.forest, "missing"), self.forest)

    def test_notes_are_not_toggled(self):
        """Test a note identity is not a toggle target."""
        forest = [Note(id="n", text="note"), item("a")]
        self.assertIs(toggle_cascade(forest, "n"), forest)

    def test_signal_reports_uncompletion(self):
        """Test the recursive signal tells callers a toggle turned an item off."""
        forest = [item("a", completed=True)]

        _, found, uncompleted = toggle_with_signal(forest, "a")
        self.assertTrue(found)
        self.assertTrue(uncompleted)

        _, found, uncompleted = toggle_with_signal([item("a")], "a")
        self.assertTrue(found)
        self.assertFalse(uncompleted)

    def test_untouched_siblings_are_shared(self):
        """Test subtrees off the toggle path are not rebuilt."""
        forest = [item("a", children=[item("a1")]), item("b")]
        new_forest = toggle_cascade(forest, "a1")

        self.assertIs(new_forest[1], forest[1])


class TestSetAllCompleted(unittest.TestCase):
    """Test bulk completion."""

    def test_complete_and_clear_everything(self):
        """Test every checkable item follows the requested value."""
        forest = [item("a", children=[item("a1")]), Note(id="n", text="n"), item("b", completed=True)]

        done = set_all_completed(forest, True)
        self.assertTrue(all(flags(done).values()))
        self.assertIsInstance(done[1], Note)

        cleared = set_all_completed(done, False)
        self.assertFalse(any(flags(cleared).values()))

    def test_unchanged_forest_is_same_object(self):
        """Test nothing is rebuilt when every flag already matches."""
        forest = [item("a", completed=True, children=[item("a1", completed=True)])]
        self.assertIs(set_all_completed(forest, True), forest)


if __name__ == '__main__':
    unittest.main()
