import os
import sys
import unittest

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, os.pardir))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from forwarding import symbols


class TestSymbols(unittest.TestCase):
    def test_valid_symbols(self):
        for ch in "0123456789*#":
            self.assertTrue(symbols.is_valid_symbol(ch), ch)
        for ch in ["a", " ", "+", "-", "", "12", None]:
            self.assertFalse(symbols.is_valid_symbol(ch), repr(ch))

    def test_encode(self):
        self.assertEqual(symbols.encode("0"), 0)
        self.assertEqual(symbols.encode("9"), 9)
        self.assertEqual(symbols.encode("*"), 10)
        self.assertEqual(symbols.encode("#"), 11)
        self.assertEqual(sorted(symbols.encode(ch) for ch in symbols.ALPHABET), list(range(12)))

    def test_is_number(self):
        for good in ["0", "123", "*#0", "##", "9" * 1000]:
            self.assertTrue(symbols.is_number(good), good)
        for bad in ["", "12a", "a12", "12 ", " 12", None, 123, "1\x002"]:
            self.assertFalse(symbols.is_number(bad), repr(bad))

    def test_number_length_counts_leading_run(self):
        self.assertEqual(symbols.number_length("12*x34"), 3)
        self.assertEqual(symbols.number_length("x1"), 0)
        self.assertEqual(symbols.number_length(""), 0)

    def test_are_equal(self):
        self.assertTrue(symbols.are_equal("123", "123"))
        self.assertFalse(symbols.are_equal("123", "1234"))
        self.assertFalse(symbols.are_equal("12*", "12#"))
        # comparison stops at the first invalid symbol of each argument
        self.assertTrue(symbols.are_equal("12a", "12b"))

    def test_is_prefix_of(self):
        self.assertTrue(symbols.is_prefix_of("12", "123"))
        self.assertTrue(symbols.is_prefix_of("123", "123"))
        self.assertFalse(symbols.is_prefix_of("123", "12"))
        self.assertFalse(symbols.is_prefix_of("13", "123"))
        self.assertTrue(symbols.is_prefix_of("*", "*#"))

    def test_are_suitable_for_rewrite(self):
        self.assertTrue(symbols.are_suitable_for_rewrite("1", "2"))
        self.assertTrue(symbols.are_suitable_for_rewrite("12", "1"))
        self.assertFalse(symbols.are_suitable_for_rewrite("1", "1"))
        self.assertFalse(symbols.are_suitable_for_rewrite("1", "x"))
        self.assertFalse(symbols.are_suitable_for_rewrite("", "1"))
        self.assertFalse(symbols.are_suitable_for_rewrite(None, "1"))

    def test_sort_key_puts_star_and_hash_after_nine(self):
        got = sorted(["#", "*", "9", "0", "90"], key=symbols.sort_key)
        self.assertEqual(got, ["0", "9", "90", "*", "#"])

    def test_splice(self):
        self.assertEqual(symbols.splice("601123", "602", 3), "602123")
        self.assertEqual(symbols.splice("601", "7", 3), "7")
        self.assertEqual(symbols.splice("601", "7", 2), "71")


if __name__ == "__main__":
    unittest.main(verbosity=2)
