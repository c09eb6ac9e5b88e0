"""
Tests for cross-dialect style propagation.
"""
import unittest

from subkit.core.models import Color
from subkit.core.style_attributes import (
    Dialect, Justification, STLPosition, StyleAttributes, WebVTTTag,
)


def tag_names(style):
    return [tag.name for tag in style.webvtt_tags]


class TestSRTPropagation(unittest.TestCase):
    """SRT fields -> WebVTT/TTML fields"""

    def test_numpad_positions(self):
        expected = {
            1: ("90%", "left"), 2: ("90%", ""), 3: ("90%", "right"),
            4: ("50%", "left"), 5: ("50%", ""), 6: ("50%", "right"),
            7: ("10%", "left"), 8: ("10%", ""), 9: ("10%", "right"),
        }
        for position, (line_position, align) in expected.items():
            with self.subTest(position=position):
                style = StyleAttributes(srt_position=position)
                style.propagate_srt_attributes()
                self.assertEqual(style.webvtt_position, line_position)
                self.assertEqual(style.webvtt_align, align)

    def test_unset_position_leaves_webvtt_alone(self):
        style = StyleAttributes(webvtt_position="33%")
        style.propagate_srt_attributes()
        self.assertEqual(style.webvtt_position, "33%")

    def test_emphasis_and_tags(self):
        style = StyleAttributes(srt_bold=True, srt_underline=True)
        style.propagate_srt_attributes()
        self.assertTrue(style.webvtt_bold)
        self.assertFalse(style.webvtt_italics)
        self.assertTrue(style.webvtt_underline)
        self.assertEqual(tag_names(style), ["b", "u"])

    def test_color_copies_to_ttml(self):
        style = StyleAttributes(srt_color="#ff0000")
        style.propagate_srt_attributes()
        self.assertEqual(style.ttml_color, "#ff0000")

    def test_other_dialects_are_untouched(self):
        style = StyleAttributes(srt_bold=True, ssa_bold=False, stl_italics=True)
        style.propagate_srt_attributes()
        self.assertFalse(style.ssa_bold)
        self.assertTrue(style.stl_italics)


class TestSSAPropagation(unittest.TestCase):
    """SSA fields -> SRT/WebVTT emphasis"""

    def test_set_flags_are_copied(self):
        style = StyleAttributes(ssa_bold=True, ssa_italic=False)
        style.propagate_ssa_attributes()
        self.assertTrue(style.srt_bold)
        self.assertTrue(style.webvtt_bold)
        self.assertFalse(style.srt_italics)
        self.assertEqual(tag_names(style), ["b"])

    def test_nothing_set_is_a_no_op(self):
        existing = [WebVTTTag(name="c", classes=["yellow"])]
        style = StyleAttributes(ssa_font_name="Arial", webvtt_tags=list(existing), srt_bold=True)
        style.propagate_ssa_attributes()
        self.assertTrue(style.srt_bold)
        self.assertEqual(style.webvtt_tags, existing)


class TestSTLPropagation(unittest.TestCase):
    """STL justification and rows -> WebVTT align and line"""

    def test_teletext_rows_are_shifted(self):
        style = StyleAttributes(stl_justification=Justification.RIGHT,
                                stl_position=STLPosition(vertical_position=20, max_rows=23))
        style.propagate_stl_attributes()
        self.assertEqual(style.webvtt_align, "right")
        self.assertEqual(style.webvtt_line, "82%")

    def test_other_row_counts(self):
        style = StyleAttributes(stl_justification=Justification.LEFT,
                                stl_position=STLPosition(vertical_position=6, max_rows=12))
        style.propagate_stl_attributes()
        self.assertEqual(style.webvtt_align, "left")
        self.assertEqual(style.webvtt_line, "50%")

    def test_first_teletext_row(self):
        style = StyleAttributes(stl_position=STLPosition(vertical_position=0, max_rows=23))
        style.propagate_stl_attributes()
        self.assertEqual(style.webvtt_line, "0%")

    def test_centered_and_unchanged_keep_align(self):
        for justification in (Justification.CENTERED, Justification.UNCHANGED):
            with self.subTest(justification=justification):
                style = StyleAttributes(stl_justification=justification, webvtt_align="left")
                style.propagate_stl_attributes()
                self.assertEqual(style.webvtt_align, "left")


class TestTeletextPropagation(unittest.TestCase):

    def test_color(self):
        style = StyleAttributes(teletext_color=Color(red=255, green=128))
        style.propagate(Dialect.TELETEXT)
        self.assertEqual(style.ttml_color, "#ff8000")


class TestTTMLPropagation(unittest.TestCase):
    """TTML layout -> WebVTT region and cue settings"""

    def test_horizontal_layout(self):
        style = StyleAttributes(ttml_text_align="center", ttml_extent="80% 20%", ttml_origin="10% 70%")
        style.propagate_ttml_attributes()
        self.assertEqual(style.webvtt_align, "center")
        self.assertEqual(style.webvtt_width, "80%")
        self.assertEqual(style.webvtt_lines, 4)
        self.assertEqual(style.webvtt_size, "20%")
        self.assertEqual(style.webvtt_region_anchor, "0%,0%")
        self.assertEqual(style.webvtt_viewport_anchor, "10%,70%")
        self.assertEqual(style.webvtt_scroll, "up")
        self.assertEqual(style.webvtt_line, "10%")
        self.assertEqual(style.webvtt_position, "70%")

    def test_vertical_writing_mode_swaps_roles(self):
        style = StyleAttributes(ttml_extent="80% 20%", ttml_origin="10% 70%", ttml_writing_mode="tbrl")
        style.propagate_ttml_attributes()
        self.assertEqual(style.webvtt_size, "80%")
        self.assertEqual(style.webvtt_line, "70%")
        self.assertEqual(style.webvtt_position, "10%")

    def test_pixel_height(self):
        style = StyleAttributes(ttml_extent="640px 54px")
        style.propagate_ttml_attributes()
        self.assertEqual(style.webvtt_lines, 10)

    def test_non_integer_height_keeps_lines(self):
        style = StyleAttributes(ttml_extent="80% 12.5%")
        style.propagate_ttml_attributes()
        self.assertEqual(style.webvtt_lines, 0)
        self.assertEqual(style.webvtt_width, "80%")


class TestWebVTTPropagation(unittest.TestCase):

    def test_back_to_srt(self):
        style = StyleAttributes(webvtt_bold=True, webvtt_italics=True, ttml_color="#00ff00")
        style.propagate(Dialect.WEBVTT)
        self.assertTrue(style.srt_bold)
        self.assertTrue(style.srt_italics)
        self.assertFalse(style.srt_underline)
        self.assertEqual(style.srt_color, "#00ff00")


class TestWebVTTTag(unittest.TestCase):

    def test_rendering(self):
        self.assertEqual(WebVTTTag(name="c", classes=["yellow", "bg_blue"]).start_tag(), "<c.yellow.bg_blue>")
        self.assertEqual(WebVTTTag(name="lang", annotation="en").start_tag(), "<lang en>")
        self.assertEqual(WebVTTTag(name="lang", annotation="en").end_tag(), "</lang>")

    def test_empty_name(self):
        self.assertEqual(WebVTTTag().start_tag(), "")
        self.assertEqual(WebVTTTag().end_tag(), "")


if __name__ == '__main__':
    unittest.main()
