"""
Tests for the line scanner.
"""
import io
import unittest

from subkit.core.scanner import LineScanner, scan_lines


class TestLineScanner(unittest.TestCase):
    """Terminator handling across chunk boundaries"""

    def test_mixed_terminators(self):
        lines = list(LineScanner(io.BytesIO(b"a\r\nb\rc\nd")))
        self.assertEqual(lines, [b"a", b"b", b"c", b"d"])

    def test_final_fragment_is_kept(self):
        self.assertEqual(list(scan_lines(io.BytesIO(b"first\nlast"))), [b"first", b"last"])

    def test_trailing_terminator_adds_no_empty_line(self):
        self.assertEqual(list(scan_lines(io.BytesIO(b"a\nb\n"))), [b"a", b"b"])

    def test_empty_lines_are_kept(self):
        self.assertEqual(list(scan_lines(io.BytesIO(b"a\n\nb"))), [b"a", b"", b"b"])

    def test_crlf_split_across_chunks(self):
        """A \\r at the end of a chunk must not produce an extra empty line"""
        for chunk_size in (1, 2, 3):
            with self.subTest(chunk_size=chunk_size):
                lines = list(LineScanner(io.BytesIO(b"a\r\nb\r\n\r\nc"), chunk_size=chunk_size))
                self.assertEqual(lines, [b"a", b"b", b"", b"c"])

    def test_trailing_carriage_return(self):
        self.assertEqual(list(scan_lines(io.BytesIO(b"a\r"), chunk_size=1)), [b"a"])

    def test_text_stream(self):
        self.assertEqual(list(scan_lines(io.StringIO("x\ry\r\nz"))), ["x", "y", "z"])

    def test_empty_stream(self):
        self.assertEqual(list(scan_lines(io.BytesIO(b""))), [])

    def test_invalid_chunk_size(self):
        with self.assertRaises(ValueError):
            LineScanner(io.BytesIO(b""), chunk_size=0)


if __name__ == '__main__':
    unittest.main()
