"""
Tests for fragmenting and unfragmenting.
"""
import unittest
from datetime import timedelta

from subkit.core.models import Item, Region, Style, Subtitles
from subkit.processors.fragmenter import Fragmenter


def seconds(value):
    return timedelta(seconds=value)


def item(start, end, text):
    return Item.from_text(seconds(start), seconds(end), text)


def describe(subtitles):
    return [(i.start_at.total_seconds(), i.end_at.total_seconds(), str(i)) for i in subtitles.items]


class TestFragment(unittest.TestCase):
    """Splitting at window boundaries"""

    def test_item_spanning_several_windows(self):
        subtitles = Subtitles(items=[item(1, 5, "A")])
        Fragmenter.fragment(subtitles, seconds(2))
        self.assertEqual(describe(subtitles), [(1, 2, "A"), (2, 4, "A"), (4, 5, "A")])

    def test_only_straddling_items_are_split(self):
        subtitles = Subtitles(items=[item(0, 3, "A"), item(3, 7, "B")])
        Fragmenter.fragment(subtitles, seconds(4))
        self.assertEqual(describe(subtitles), [(0, 3, "A"), (3, 4, "B"), (4, 7, "B")])

    def test_result_is_ordered(self):
        subtitles = Subtitles(items=[item(5, 6, "late"), item(1, 3, "early")])
        Fragmenter.fragment(subtitles, seconds(2))
        self.assertEqual(describe(subtitles), [(1, 2, "early"), (2, 3, "early"), (5, 6, "late")])

    def test_split_parts_share_style_and_region(self):
        style, region = Style(id="s"), Region(id="r")
        original = item(1, 3, "A")
        original.style, original.region = style, region
        subtitles = Subtitles(items=[original])

        Fragmenter.fragment(subtitles, seconds(2))

        left, right = subtitles.items
        self.assertIs(left.style, style)
        self.assertIs(right.style, style)
        self.assertIs(right.region, region)
        self.assertIsNot(left.lines, right.lines)

    def test_empty_document(self):
        subtitles = Subtitles()
        Fragmenter.fragment(subtitles, seconds(2))
        self.assertEqual(subtitles.items, [])

    def test_period_must_be_positive(self):
        with self.assertRaises(ValueError):
            Fragmenter.fragment(Subtitles(items=[item(0, 1, "A")]), timedelta(0))


class TestUnfragment(unittest.TestCase):
    """Merging touching same-text items"""

    def test_fragment_then_unfragment(self):
        subtitles = Subtitles(items=[item(1, 5, "A"), item(5.5, 9, "B")])
        Fragmenter.fragment(subtitles, seconds(2))
        self.assertGreater(len(subtitles.items), 2)
        Fragmenter.unfragment(subtitles)
        self.assertEqual(describe(subtitles), [(1, 5, "A"), (5.5, 9, "B")])

    def test_gap_prevents_merge(self):
        subtitles = Subtitles(items=[item(0, 1, "A"), item(2, 3, "A")])
        Fragmenter.unfragment(subtitles)
        self.assertEqual(len(subtitles.items), 2)

    def test_different_text_in_between(self):
        subtitles = Subtitles(items=[item(0, 2, "A"), item(1, 3, "B"), item(2, 4, "A")])
        Fragmenter.unfragment(subtitles)
        self.assertEqual(describe(subtitles), [(0, 4, "A"), (1, 3, "B")])

    def test_end_never_shrinks(self):
        subtitles = Subtitles(items=[item(0, 5, "A"), item(1, 3, "A")])
        Fragmenter.unfragment(subtitles)
        self.assertEqual(describe(subtitles), [(0, 5, "A")])

    def test_unordered_input(self):
        subtitles = Subtitles(items=[item(2, 4, "A"), item(0, 2, "A")])
        Fragmenter.unfragment(subtitles)
        self.assertEqual(describe(subtitles), [(0, 4, "A")])


if __name__ == '__main__':
    unittest.main()
