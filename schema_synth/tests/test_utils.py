from unittest import TestCase

from schema_synth.utils import cleanup_lines, ends_with_punctuation, join_lines


class TestDocUtils(TestCase):
    """Test documentation line helpers"""

    def test_cleanup_lines_strips_markers(self):
        self.assertEqual(cleanup_lines(["// Pet is a pet.", "//", ""]), ["Pet is a pet."])
        self.assertEqual(cleanup_lines(["  * first", " *", " * second"]), ["first", "", "second"])
        self.assertEqual(cleanup_lines(["/**", " * |kept", " */"]), ["kept"])

    def test_cleanup_lines_empty(self):
        self.assertEqual(cleanup_lines([]), [])
        self.assertEqual(cleanup_lines(["//", "  "]), [])

    def test_join_lines(self):
        self.assertEqual(join_lines(["a", "b", "", ""]), "a\nb")
        self.assertEqual(join_lines([]), "")

    def test_ends_with_punctuation(self):
        self.assertTrue(ends_with_punctuation("A sentence."))
        self.assertTrue(ends_with_punctuation("Really!  "))
        self.assertFalse(ends_with_punctuation("no stop"))
        self.assertFalse(ends_with_punctuation(""))
