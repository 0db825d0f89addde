"""Tests for structural equality and hashing of JSON values."""

import os
import sys
import unittest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from jsonscheck.equality import (
    HashableValue,
    has_unique_elements,
    is_number,
    json_kind,
    value_hash,
    values_equal,
)


class TestJsonKind(unittest.TestCase):
    """Test JSON variant detection."""

    def test_kinds(self):
        """Native values map onto JSON variants."""
        self.assertEqual(json_kind(None), 'null')
        self.assertEqual(json_kind(True), 'boolean')
        self.assertEqual(json_kind(3), 'number')
        self.assertEqual(json_kind(3.5), 'number')
        self.assertEqual(json_kind("s"), 'string')
        self.assertEqual(json_kind([1]), 'array')
        self.assertEqual(json_kind((1,)), 'array')
        self.assertEqual(json_kind({}), 'object')
        self.assertEqual(json_kind(object()), 'unknown')

    def test_booleans_are_not_numbers(self):
        """bool is excluded from numbers."""
        self.assertTrue(is_number(0))
        self.assertTrue(is_number(0.0))
        self.assertFalse(is_number(False))


class TestValuesEqual(unittest.TestCase):
    """Test structural equality."""

    def test_numbers_unify(self):
        """Integer and floating encodings of one number are equal."""
        self.assertTrue(values_equal(1, 1.0))
        self.assertFalse(values_equal(1, 1.5))

    def test_variants_must_match(self):
        """Booleans never equal numbers, null never equals false."""
        self.assertFalse(values_equal(True, 1))
        self.assertFalse(values_equal(False, 0))
        self.assertFalse(values_equal(None, False))
        self.assertFalse(values_equal("1", 1))

    def test_arrays_are_ordered(self):
        """Arrays compare element by element."""
        self.assertTrue(values_equal([1, [2, 3]], [1.0, [2, 3]]))
        self.assertFalse(values_equal([1, 2], [2, 1]))
        self.assertFalse(values_equal([1], [1, 1]))

    def test_objects_ignore_key_order(self):
        """Objects compare by key set and member values."""
        self.assertTrue(values_equal({"a": 1, "b": [True]}, {"b": [True], "a": 1.0}))
        self.assertFalse(values_equal({"a": True}, {"a": 1}))
        self.assertFalse(values_equal({"a": 1}, {"b": 1}))
        self.assertFalse(values_equal({"a": 1}, {"a": 1, "b": 2}))


class TestValueHash(unittest.TestCase):
    """Test hashing consistent with equality."""

    def test_equal_values_hash_equal(self):
        """Equal values produce equal hashes."""
        pairs = [
            (1, 1.0),
            ({"a": 1, "b": 2}, {"b": 2, "a": 1}),
            ([{"x": [1, 2]}], [{"x": [1.0, 2.0]}]),
        ]
        for left, right in pairs:
            self.assertEqual(value_hash(left), value_hash(right))

    def test_hash_separates_booleans_from_numbers(self):
        """True and 1 hash differently."""
        self.assertNotEqual(value_hash(True), value_hash(1))

    def test_hash_binds_keys_to_values(self):
        """Swapping values between keys changes the hash."""
        self.assertNotEqual(value_hash({"a": 1, "b": 2}), value_hash({"a": 2, "b": 1}))

    def test_hashable_value(self):
        """HashableValue works as a set member."""
        seen = {HashableValue({"a": [1, 2]})}
        self.assertIn(HashableValue({"a": [1.0, 2]}), seen)
        self.assertNotIn(HashableValue({"a": [2, 1]}), seen)


class TestUniqueElements(unittest.TestCase):
    """Test the uniqueness helper."""

    def test_unique(self):
        """Distinct values are unique."""
        self.assertTrue(has_unique_elements([1, "1", True, None, [1], {"1": 1}]))
        self.assertTrue(has_unique_elements([]))

    def test_duplicates(self):
        """Structurally equal values are duplicates."""
        self.assertFalse(has_unique_elements([1, 2, 1.0]))
        self.assertFalse(has_unique_elements([{"a": 1, "b": 2}, {"b": 2, "a": 1}]))


if __name__ == '__main__':
    unittest.main()
