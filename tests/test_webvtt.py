"""
Tests for the WebVTT reader and writer.
"""
import io
import unittest
from datetime import timedelta

from subkit.core.errors import FormatError, NoSubtitlesError
from subkit.core.models import Item, Line, LineItem, Region, Subtitles
from subkit.core.style_attributes import StyleAttributes
from subkit.formats.webvtt import WebVTTHandler


SAMPLE_VTT = """WEBVTT
X-TIMESTAMP-MAP=LOCAL:00:00:00.000,MPEGTS:900000

NOTE header comment

REGION
id:fred width:40% lines:3 regionanchor:0%,100% viewportanchor:10%,90% scroll:up

STYLE
::cue { color: yellow }

NOTE before cue

intro
00:00:01.000 --> 00:00:02.500 region:fred align:left line:0
<v Roger>Hello &amp; <b>welcome</b>

00:01:00.000 --> 00:01:02.000
<c.yellow>Karaoke</c> <00:01:01.000>next
"""


def read(text):
    return WebVTTHandler.read(io.BytesIO(text.encode("utf-8")))


def write(subtitles):
    stream = io.BytesIO()
    WebVTTHandler.write(subtitles, stream)
    return stream.getvalue().decode("utf-8")


class TestWebVTTReader(unittest.TestCase):
    """Parsing WebVTT content"""

    def setUp(self):
        self.subtitles = read(SAMPLE_VTT)

    def test_header(self):
        timestamp_map = self.subtitles.metadata.webvtt_timestamp_map
        self.assertEqual(timestamp_map.local, timedelta(0))
        self.assertEqual(timestamp_map.mpegts, 900000)
        self.assertEqual(self.subtitles.metadata.comments, ["header comment"])

    def test_region(self):
        region = self.subtitles.regions["fred"]
        self.assertEqual(region.inline_style.webvtt_width, "40%")
        self.assertEqual(region.inline_style.webvtt_lines, 3)
        self.assertEqual(region.inline_style.webvtt_region_anchor, "0%,100%")
        self.assertEqual(region.inline_style.webvtt_viewport_anchor, "10%,90%")
        self.assertEqual(region.inline_style.webvtt_scroll, "up")

    def test_cue_settings_and_comments(self):
        first = self.subtitles.items[0]
        self.assertEqual(len(self.subtitles.items), 2)
        self.assertEqual(first.start_at, timedelta(seconds=1))
        self.assertEqual(first.end_at, timedelta(milliseconds=2500))
        self.assertIs(first.region, self.subtitles.regions["fred"])
        self.assertEqual(first.inline_style.webvtt_align, "left")
        self.assertEqual(first.inline_style.webvtt_line, "0")
        self.assertEqual(first.comments, ["before cue"])

    def test_voice_tags_and_entities(self):
        line = self.subtitles.items[0].lines[0]
        self.assertEqual(line.voice_name, "Roger")
        self.assertEqual(str(line), "Hello & welcome")
        bold = line.items[1]
        self.assertTrue(bold.inline_style.webvtt_bold)
        self.assertTrue(bold.inline_style.srt_bold)
        self.assertIsNone(line.items[0].inline_style)

    def test_classes_and_karaoke(self):
        line = self.subtitles.items[1].lines[0]
        self.assertEqual(str(line), "Karaoke next")
        karaoke = line.items[0]
        self.assertEqual(karaoke.inline_style.webvtt_tags[0].name, "c")
        self.assertEqual(karaoke.inline_style.webvtt_tags[0].classes, ["yellow"])
        self.assertIsNone(karaoke.start_at)
        self.assertEqual(line.items[-1].text, "next")
        self.assertEqual(line.items[-1].start_at, timedelta(seconds=61))

    def test_missing_header(self):
        with self.assertRaises(FormatError):
            read("00:00:01.000 --> 00:00:02.000\nHi\n")

    def test_malformed_timestamp(self):
        with self.assertRaises(FormatError):
            read("WEBVTT\n\n00:00:01.0000 --> 00:00:02.000\nHi\n")

    def test_tag_without_name(self):
        with self.assertRaises(FormatError):
            read("WEBVTT\n\n00:00:01.000 --> 00:00:02.000\n<.x>hi\n")


class TestWebVTTWriter(unittest.TestCase):
    """Writing WebVTT content"""

    def test_sample_round_trip(self):
        output = write(read(SAMPLE_VTT))
        self.assertTrue(output.startswith("WEBVTT\nX-TIMESTAMP-MAP=LOCAL:00:00:00.000,MPEGTS:900000\n\n"))
        self.assertIn("NOTE header comment\n\n", output)
        self.assertIn("REGION\nid:fred width:40% lines:3 regionanchor:0%,100% "
                      "viewportanchor:10%,90% scroll:up\n", output)
        self.assertIn("NOTE before cue\n\n1\n00:00:01.000 --> 00:00:02.500 align:left line:0 region:fred\n"
                      "<v Roger>Hello &amp; <b>welcome</b>\n", output)
        self.assertIn("2\n00:01:00.000 --> 00:01:02.000\n<c.yellow>Karaoke</c> <00:01:01.000>next\n", output)

    def test_srt_styles_and_escaping(self):
        italic = StyleAttributes(srt_italics=True)
        italic.propagate_srt_attributes()
        item = Item(start_at=timedelta(seconds=1), end_at=timedelta(seconds=2),
                    lines=[Line(items=[LineItem(text="a < b", inline_style=italic)])])
        output = write(Subtitles(items=[item]))
        self.assertEqual(output, "WEBVTT\n\n1\n00:00:01.000 --> 00:00:02.000\n<i>a &lt; b</i>\n")

    def test_region_from_ttml_layout(self):
        layout = StyleAttributes(ttml_extent="80% 20%", ttml_origin="10% 70%")
        layout.propagate_ttml_attributes()
        region = Region(id="bottom", inline_style=layout)
        item = Item.from_text(timedelta(seconds=1), timedelta(seconds=2), "Hi")
        item.region = region
        output = write(Subtitles(items=[item], regions={"bottom": region}))
        self.assertIn("REGION\nid:bottom width:80% lines:4 regionanchor:0%,0% "
                      "viewportanchor:10%,70% scroll:up\n", output)
        self.assertIn("00:00:01.000 --> 00:00:02.000 region:bottom\nHi\n", output)

    def test_empty_document(self):
        with self.assertRaises(NoSubtitlesError):
            write(Subtitles())


if __name__ == '__main__':
    unittest.main()
