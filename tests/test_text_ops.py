from __future__ import annotations

import logging
import unittest

from packshim.processing.text_ops import TextTransformer, chain, literal, pattern


class LiteralTests(unittest.TestCase):
    def test_replaces_all_occurrences(self) -> None:
        self.assertEqual(literal("a", "b")("a-a-a"), "b-b-b")

    def test_absent_target_returns_same_text(self) -> None:
        text = "nothing here"
        self.assertIs(literal("zzz", "y")(text), text)

    def test_rejects_replacement_containing_target(self) -> None:
        with self.assertRaises(ValueError):
            literal("noop", "var x; noop")

    def test_rejects_empty_target(self) -> None:
        with self.assertRaises(ValueError):
            literal("", "x")


class PatternTests(unittest.TestCase):
    def test_skip_if_guard(self) -> None:
        fn = pattern(r"foo", lambda m: "PRE;" + m.group(0), skip_if="PRE;", count=1)
        once = fn("foo foo")
        self.assertEqual(once, "PRE;foo foo")
        self.assertEqual(fn(once), once)

    def test_chain_runs_in_order(self) -> None:
        fn = chain(literal("a", "b"), literal("b", "c"))
        self.assertEqual(fn("a"), "c")


class ReplaceSpecTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tx = TextTransformer(logger=logging.getLogger("packshim.test.textops"))

    def test_escaped_delimiter(self) -> None:
        regex, repl, is_global = self.tx.parse_replace_spec("/a\\/b/c/g")
        self.assertEqual(regex.pattern, "a/b")
        self.assertEqual(repl, "c")
        self.assertTrue(is_global)

    def test_regex_escapes_survive(self) -> None:
        self.assertEqual(self.tx.to_transform("/\\d+/N/g")("a1b22"), "aNbN")

    def test_two_part_spec_removes_globally(self) -> None:
        self.assertEqual(self.tx.to_transform("/a/")("banana"), "bnn")

    def test_non_global_replaces_first_only(self) -> None:
        self.assertEqual(self.tx.to_transform("/a/b/")("aaa"), "baa")

    def test_quoted_spec(self) -> None:
        self.assertEqual(self.tx.to_transform("'/b/X/g'")("abc"), "aXc")

    def test_invalid_specs_are_ignored(self) -> None:
        with self.assertLogs("packshim.test.textops", level="WARNING"):
            self.assertIsNone(self.tx.parse_replace_spec("a/b/g"))
        with self.assertLogs("packshim.test.textops", level="WARNING"):
            self.assertIsNone(self.tx.parse_replace_spec("/(/x/g"))

    def test_single_char_delimiter_required(self) -> None:
        with self.assertRaises(ValueError):
            TextTransformer(regex_delim="//")


if __name__ == "__main__":
    unittest.main()
