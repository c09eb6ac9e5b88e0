"""
Tests for the command-line interface.
"""
import io
import logging
import tempfile
import unittest
from contextlib import redirect_stdout
from datetime import timedelta
from pathlib import Path

from subkit.core.models import Item, Subtitles
from subkit.core.subtitle_formats import SubtitleFormatFactory
from subkit.ui.cli import main
from subkit.utils.logging_config import setup_logging


def seconds(value):
    return timedelta(seconds=value)


class TestCLI(unittest.TestCase):
    """End-to-end CLI commands on temporary files"""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp = Path(self._tmp.name)
        self.source = self.tmp / "movie.srt"
        SubtitleFormatFactory.write_file(Subtitles(items=[
            Item.from_text(seconds(1), seconds(5), "Hello"),
            Item.from_text(seconds(6), seconds(7), "World"),
        ]), self.source)

    def spans(self, path):
        return [(item.start_at, item.end_at) for item in SubtitleFormatFactory.open_file(path).items]

    def test_shift_in_place(self):
        self.assertEqual(main(["shift", str(self.source), "--offset=2s"]), 0)
        self.assertEqual(self.spans(self.source), [(seconds(3), seconds(7)), (seconds(8), seconds(9))])

    def test_shift_negative_offset_with_backup(self):
        self.assertEqual(main(["shift", str(self.source), "--offset=-500ms", "--backup"]), 0)
        self.assertEqual(self.spans(self.source)[0], (seconds(0.5), seconds(4.5)))
        self.assertTrue((self.tmp / "movie.srt.bak").exists())

    def test_convert(self):
        target = self.tmp / "movie.vtt"
        self.assertEqual(main(["convert", str(self.source), str(target)]), 0)
        self.assertTrue(target.read_text(encoding="utf-8").startswith("WEBVTT"))
        self.assertEqual(self.spans(target), self.spans(self.source))

    def test_sync(self):
        target = self.tmp / "synced.srt"
        code = main(["sync", str(self.source), "--actual1", "0s", "--desired1", "0s",
                     "--actual2", "10s", "--desired2", "20s", "-o", str(target)])
        self.assertEqual(code, 0)
        self.assertEqual(self.spans(target)[0], (seconds(2), seconds(10)))

    def test_fragment_and_unfragment(self):
        fragmented = self.tmp / "fragmented.vtt"
        self.assertEqual(main(["fragment", str(self.source), "--period", "2s", "-o", str(fragmented)]), 0)
        self.assertEqual(len(self.spans(fragmented)), 4)

        self.assertEqual(main(["unfragment", str(fragmented)]), 0)
        self.assertEqual(self.spans(fragmented), self.spans(self.source))

    def test_force_duration(self):
        target = self.tmp / "padded.srt"
        code = main(["force-duration", str(self.source), "--duration", "10s", "--add-dummy",
                     "-o", str(target)])
        self.assertEqual(code, 0)
        self.assertEqual(self.spans(target)[-1], (seconds(10) - timedelta(milliseconds=1), seconds(10)))

    def test_merge(self):
        other = self.tmp / "other.srt"
        SubtitleFormatFactory.write_file(Subtitles(items=[Item.from_text(seconds(0), seconds(1), "Intro")]),
                                         other)
        target = self.tmp / "merged.srt"
        self.assertEqual(main(["merge", str(self.source), str(other), "-o", str(target)]), 0)
        self.assertEqual(self.spans(target)[0], (seconds(0), seconds(1)))
        self.assertEqual(len(self.spans(target)), 3)

    def test_info(self):
        output = io.StringIO()
        with redirect_stdout(output):
            self.assertEqual(main(["info", str(self.source)]), 0)
        self.assertIn("Cues: 2", output.getvalue())
        self.assertIn("Styles: 0", output.getvalue())

    def test_log_file(self):
        log_file = self.tmp / "subkit.log"
        self.addCleanup(setup_logging, logging.WARNING)
        self.assertEqual(main(["-v", "--log-file", str(log_file), "shift", str(self.source), "--offset=1s"]), 0)
        self.assertIn("Successfully delayed 2 items", log_file.read_text(encoding="utf-8"))

    def test_malformed_input(self):
        broken = self.tmp / "broken.vtt"
        broken.write_text("WEBVTT\n\n00:00:01.000 --> 00:00:02.000\n<.x>hi\n", encoding="utf-8")
        self.assertEqual(main(["info", str(broken)]), 1)

    def test_missing_input(self):
        self.assertEqual(main(["shift", str(self.tmp / "missing.srt"), "--offset=1s"]), 1)

    def test_unsupported_output(self):
        target = self.tmp / "movie.txt"
        self.assertEqual(main(["convert", str(self.source), str(target)]), 1)
        self.assertFalse(target.exists())

    def test_no_command(self):
        self.assertEqual(main([]), 1)


if __name__ == '__main__':
    unittest.main()
