"""
WHERE 条件求值测试
"""

import unittest

from tabledb.core.parser.predicate import evaluate, parse_condition


class TestPredicate(unittest.TestCase):

    def setUp(self):
        self.row = {"id": 1, "name": "Alice", "city": "Paris"}

    def test_single_term(self):
        self.assertTrue(evaluate(self.row, "id=1"))
        self.assertTrue(evaluate(self.row, "name=Alice"))
        self.assertTrue(evaluate(self.row, 'name="Alice"'))
        self.assertTrue(evaluate(self.row, ' id = 1 '))
        self.assertFalse(evaluate(self.row, "id=2"))

    def test_text_equality_only(self):
        self.assertFalse(evaluate(self.row, "id=01"))
        self.assertTrue(evaluate(self.row, 'id="1"'))
        self.assertFalse(evaluate(self.row, "name=alice"))

    def test_and(self):
        self.assertTrue(evaluate(self.row, 'id=1 AND name="Alice"'))
        self.assertFalse(evaluate(self.row, 'id=1 AND name="Bob"'))

    def test_or(self):
        self.assertTrue(evaluate(self.row, 'id=2 OR name="Alice"'))
        self.assertFalse(evaluate(self.row, 'id=2 OR name="Bob"'))

    def test_and_takes_priority_over_or(self):
        # 含 " AND " 时整个条件按 AND 切分，" OR " 部分成为一个非法比较
        cond = parse_condition("id=2 OR id=1 AND city=Paris")
        self.assertEqual(cond.mode, "AND")
        self.assertFalse(cond.matches(self.row))

    def test_lowercase_keywords_are_not_combinators(self):
        self.assertFalse(evaluate(self.row, "id=1 and name=Alice"))

    def test_unknown_column_is_false(self):
        self.assertFalse(evaluate(self.row, "age=1"))
        self.assertTrue(evaluate(self.row, "age=1 OR id=1"))

    def test_malformed_terms_are_false(self):
        for cond in ["id", "id=", "id=1=1", "=1", ""]:
            with self.subTest(cond=cond):
                self.assertFalse(evaluate(self.row, cond))

    def test_empty_string_literal(self):
        self.assertTrue(evaluate({"name": ""}, 'name=""'))


if __name__ == '__main__':
    unittest.main()
