import unittest
from collections import OrderedDict
from dataclasses import dataclass

from adaptive_config.utils import MISSING, deep_merge, is_mergeable


@dataclass
class _Point:
    x: int


class IsMergeableTests(unittest.TestCase):
    def test_plain_dicts_are_mergeable(self) -> None:
        self.assertTrue(is_mergeable({}))
        self.assertTrue(is_mergeable({"a": 1}))

    def test_non_records_are_not_mergeable(self) -> None:
        for value in (None, 0, "x", True, [1], (1,), {1}, OrderedDict(a=1), _Point(1), MISSING):
            with self.subTest(value=value):
                self.assertFalse(is_mergeable(value))


class DeepMergeTests(unittest.TestCase):
    def test_later_sources_override(self) -> None:
        result = deep_merge({}, {"a": 1, "b": 2}, {"b": 3, "c": 4})
        self.assertEqual(result, {"a": 1, "b": 3, "c": 4})

    def test_missing_never_overrides(self) -> None:
        self.assertEqual(deep_merge({"a": 1}, {"a": MISSING, "c": []}), {"a": 1, "c": []})

    def test_none_always_overrides(self) -> None:
        self.assertEqual(deep_merge({"a": {"b": 1}}, {"a": None}), {"a": None})

    def test_lists_replace(self) -> None:
        self.assertEqual(deep_merge({"a": [1, 2]}, {"a": [3, 4]}), {"a": [3, 4]})

    def test_nested_records_merge(self) -> None:
        result = deep_merge(
            {},
            {"db": {"host": "localhost", "port": 5432}},
            {"db": {"port": 6543, "auth": {"user": "admin"}}},
        )
        self.assertEqual(result, {"db": {"host": "localhost", "port": 6543, "auth": {"user": "admin"}}})

    def test_record_replaces_primitive(self) -> None:
        self.assertEqual(deep_merge({"a": "x"}, {"a": {"b": 1}}), {"a": {"b": 1}})

    def test_no_sources_returns_target(self) -> None:
        target = {"a": 1}
        self.assertIs(deep_merge(target), target)

    def test_result_does_not_alias_sources(self) -> None:
        source = {"db": {"host": "localhost"}}
        result = deep_merge({}, source)
        result["db"]["host"] = "changed"
        self.assertEqual(source["db"]["host"], "localhost")

    def test_merge_is_associative(self) -> None:
        a = {"x": {"y": 1, "z": [1]}, "k": "a"}
        b = {"x": {"y": 2}, "m": None}
        c = {"x": {"w": {"v": 3}}, "k": "c"}
        self.assertEqual(deep_merge({}, a, b, c), deep_merge(deep_merge({}, a, b), c))

    def test_non_record_sources_are_skipped(self) -> None:
        self.assertEqual(deep_merge({"a": 1}, None, [1, 2], {"b": 2}), {"a": 1, "b": 2})


if __name__ == "__main__":
    unittest.main()
