"""
Tests for the SubRip reader and writer.
"""
import io
import unittest
from datetime import timedelta

from subkit.core.errors import FormatError, NoSubtitlesError
from subkit.core.models import Item, Line, LineItem, Subtitles
from subkit.core.style_attributes import StyleAttributes
from subkit.formats.srt import SRTHandler


SAMPLE_SRT = """1
00:00:01,000 --> 00:00:02,500
Hello <b>world</b>

2
00:00:03,000 --> 00:00:04,000
{\\an8}<i>Top</i> line
Second line

3
00:00:05,000 --> 00:00:06,000 X1:100 X2:200 Y1:10 Y2:20
<font color="#ff0000">Red</font> text
"""


def read(text):
    return SRTHandler.read(io.BytesIO(text.encode("utf-8") if isinstance(text, str) else text))


def write(subtitles):
    stream = io.BytesIO()
    SRTHandler.write(subtitles, stream)
    return stream.getvalue().decode("utf-8")


class TestSRTReader(unittest.TestCase):
    """Parsing SubRip content"""

    def test_items_and_timing(self):
        subtitles = read(SAMPLE_SRT)
        self.assertEqual(len(subtitles.items), 3)
        first = subtitles.items[0]
        self.assertEqual(first.start_at, timedelta(seconds=1))
        self.assertEqual(first.end_at, timedelta(milliseconds=2500))
        self.assertEqual(first.index, 1)
        self.assertEqual(str(first), "Hello world")
        self.assertEqual(subtitles.items[2].end_at, timedelta(seconds=6))

    def test_bold_tag(self):
        first = read(SAMPLE_SRT).items[0]
        plain, bold = first.lines[0].items
        self.assertEqual(plain.text, "Hello ")
        self.assertIsNone(plain.inline_style)
        self.assertEqual(bold.text, "world")
        self.assertTrue(bold.inline_style.srt_bold)
        self.assertEqual([tag.name for tag in bold.inline_style.webvtt_tags], ["b"])

    def test_position_and_multiple_lines(self):
        second = read(SAMPLE_SRT).items[1]
        self.assertEqual(second.index, 2)
        self.assertEqual([str(line) for line in second.lines], ["Top line", "Second line"])
        self.assertEqual(second.inline_style.srt_position, 8)
        self.assertEqual(second.inline_style.webvtt_position, "10%")
        self.assertTrue(second.lines[0].items[0].inline_style.srt_italics)

    def test_font_color(self):
        third = read(SAMPLE_SRT).items[2]
        red = third.lines[0].items[0]
        self.assertEqual(red.text, "Red")
        self.assertEqual(red.inline_style.srt_color, "#ff0000")
        self.assertEqual(red.inline_style.ttml_color, "#ff0000")
        self.assertIsNone(third.lines[0].items[1].inline_style)

    def test_bom_and_crlf(self):
        data = b"\xef\xbb\xbf1\r\n00:00:01,000 --> 00:00:02,000\r\nHi\r\n\r\n2\r\n00:00:03,000 --> 00:00:04,000\r\nThere\r\n"
        subtitles = read(data)
        self.assertEqual([str(item) for item in subtitles.items], ["Hi", "There"])

    def test_malformed_timestamp(self):
        with self.assertRaises(FormatError):
            read("1\n00:00:xx,000 --> 00:00:02,000\nBroken\n")

    def test_empty_input(self):
        self.assertEqual(read("").items, [])


class TestSRTWriter(unittest.TestCase):
    """Writing SubRip content"""

    def test_output(self):
        italic = StyleAttributes(srt_italics=True)
        second = Item(start_at=timedelta(seconds=3), end_at=timedelta(seconds=4),
                      inline_style=StyleAttributes(srt_position=8),
                      lines=[Line(items=[LineItem(text="Top", inline_style=italic)])])
        subtitles = Subtitles(items=[
            Item.from_text(timedelta(seconds=1), timedelta(milliseconds=2500), "Hello"),
            second,
        ])

        self.assertEqual(write(subtitles),
                         "1\n00:00:01,000 --> 00:00:02,500\nHello\n\n"
                         "2\n00:00:03,000 --> 00:00:04,000\n{\\an8}<i>Top</i>\n")

    def test_read_back(self):
        subtitles = read(SAMPLE_SRT)
        again = read(write(subtitles))
        self.assertEqual([str(item) for item in again.items], [str(item) for item in subtitles.items])
        self.assertEqual([item.start_at for item in again.items], [item.start_at for item in subtitles.items])
        self.assertEqual(again.items[2].lines[0].items[0].inline_style.srt_color, "#ff0000")

    def test_empty_document(self):
        with self.assertRaises(NoSubtitlesError):
            write(Subtitles())


if __name__ == '__main__':
    unittest.main()
