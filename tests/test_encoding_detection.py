"""
Tests for payload decoding.
"""
import unittest

from subkit.core.encoding_detection import EncodingDetector


class TestEncodingDetector(unittest.TestCase):
    """Encoding detection and decoding"""

    def test_bom(self):
        data = b"\xef\xbb\xbfHi"
        self.assertTrue(EncodingDetector.has_bom(data))
        self.assertEqual(EncodingDetector.decode(data), ("Hi", "utf-8-sig"))

    def test_plain_utf8(self):
        data = "Café".encode("utf-8")
        self.assertFalse(EncodingDetector.has_bom(data))
        self.assertEqual(EncodingDetector.decode(data), ("Café", "utf-8"))

    def test_empty_payload(self):
        self.assertEqual(EncodingDetector.decode(b""), ("", "utf-8"))

    def test_non_utf8_payload_still_decodes(self):
        data = "Ça va, très bien merci. Où êtes-vous allé hier soir ?\n".encode("cp1252") * 4
        text, encoding = EncodingDetector.decode(data)
        self.assertIsInstance(text, str)
        self.assertNotEqual(encoding, "utf-8-sig")
        self.assertTrue(text)


if __name__ == '__main__':
    unittest.main()
