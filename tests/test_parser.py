import unittest

from headwind.ast_nodes import Declaration, NestedRule
from headwind.exceptions import HeadwindSyntaxError
from headwind.parser import StyleParser, parse


class TestParser(unittest.TestCase):
    def test_single_declaration(self):
        self.assertEqual(parse("color: red;"), [("color", "red")])

    def test_trailing_terminator_optional(self):
        self.assertEqual(parse("color:red"), [("color", "red")])

    def test_empty(self):
        self.assertEqual(parse(""), [])
        self.assertEqual(parse("   \n  "), [])

    def test_declarations_in_order(self):
        self.assertEqual(
            parse("color: red; margin: 0 auto; --gap: 4px"),
            [("color", "red"), ("margin", "0 auto"), ("--gap", "4px")],
        )

    def test_value_keeps_colons(self):
        result = parse("background: url(http://example.com/a.png)")
        self.assertEqual(result, [Declaration("background", "url(http://example.com/a.png)")])

    def test_empty_segments_skipped(self):
        self.assertEqual(parse("a: 1;; b: 2; "), [("a", "1"), ("b", "2")])

    def test_pseudo_class_rule(self):
        result = parse("color: red; :hover { color: blue; }")
        self.assertEqual(result, [("color", "red"), (":hover", [("color", "blue")])])
        self.assertIsInstance(result[0], Declaration)
        self.assertIsInstance(result[1], NestedRule)
        self.assertTrue(result[1].is_pseudo_class)

    def test_at_rule_selector_may_contain_colon(self):
        result = parse("@media (min-width: 600px) { padding: 2rem }")
        self.assertEqual(result, [NestedRule("@media (min-width: 600px)", [Declaration("padding", "2rem")])])
        self.assertTrue(result[0].is_at_rule)

    def test_siblings_after_rule(self):
        result = parse(":hover { color: blue } margin: 0; :focus { outline: none }")
        self.assertEqual(
            result,
            [
                (":hover", [("color", "blue")]),
                ("margin", "0"),
                (":focus", [("outline", "none")]),
            ],
        )

    def test_empty_rule(self):
        self.assertEqual(parse(":hover {}"), [NestedRule(":hover", [])])

    def test_malformed_declaration_warns(self):
        with self.assertLogs("headwind.parser", level="WARNING") as logs:
            result = parse("color red; margin:")
        self.assertEqual(result, [("color red", ""), ("margin", "")])
        self.assertEqual(len(logs.records), 2)
        self.assertIn("incorrectly formatted", logs.output[0])

    def test_malformed_declaration_strict(self):
        parser = StyleParser(strict=True)
        with self.assertRaises(HeadwindSyntaxError) as ctx:
            parser.parse("color: red; margin")
        self.assertEqual(ctx.exception.position, 11)

    def test_nesting_too_deep(self):
        with self.assertRaises(HeadwindSyntaxError) as ctx:
            parse(":hover { @media print { color: red } }")
        self.assertIn("deeper than one level", str(ctx.exception))

    def test_unmatched_close(self):
        with self.assertRaises(HeadwindSyntaxError):
            parse("color: red }")

    def test_missing_close(self):
        with self.assertRaises(HeadwindSyntaxError) as ctx:
            parse("color: red; :hover { color: blue")
        self.assertIn(":hover", str(ctx.exception))

    def test_error_str_includes_position(self):
        error = HeadwindSyntaxError("Bad", source="a }", position=2)
        self.assertEqual(str(error), "Bad at position 2 in 'a }'")
        self.assertEqual(str(HeadwindSyntaxError("Bad")), "Bad")


if __name__ == "__main__":
    unittest.main()
