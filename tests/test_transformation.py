import unittest

from adaptive_config.errors import NestedKeyConflictError, TransformError
from adaptive_config.models import ConfigEntry
from adaptive_config.utils import apply_data_transformation, filter_by_regex, filtered_data


class ApplyDataTransformationTests(unittest.TestCase):
    def test_no_transformations_returns_same_object(self) -> None:
        data = {"key1": "value1"}
        self.assertIs(apply_data_transformation(data), data)

    def test_transform_rewrites_entries(self) -> None:
        data = {"key1": "value1", "key2": "value2"}
        result = apply_data_transformation(
            data, lambda entry: ConfigEntry(key=entry.key.upper(), value=f"transformed_{entry.value}")
        )
        self.assertEqual(result, {"KEY1": "transformed_value1", "KEY2": "transformed_value2"})

    def test_transform_accepts_mapping_result(self) -> None:
        result = apply_data_transformation({"a": 1}, lambda entry: {"key": "b", "value": entry.value + 1})
        self.assertEqual(result, {"b": 2})

    def test_transform_false_drops_entry(self) -> None:
        data = {"keep": 1, "drop": 2}
        result = apply_data_transformation(data, lambda entry: False if entry.key == "drop" else entry)
        self.assertEqual(result, {"keep": 1})

    def test_invalid_transform_result_raises(self) -> None:
        for invalid in ("invalid", None, {"value": "test"}, {"key": "test"}, True):
            with self.subTest(invalid=invalid):
                with self.assertRaises(TransformError) as ctx:
                    apply_data_transformation({"key1": "value1"}, lambda entry, bad=invalid: bad)
                self.assertIn('Invalid transform result for key "key1"', str(ctx.exception))

    def test_nesting_separator_builds_records(self) -> None:
        data = {"database.host": "localhost", "database.port": "5432", "name": "app"}
        result = apply_data_transformation(data, nesting_separator=".")
        self.assertEqual(result, {"database": {"host": "localhost", "port": "5432"}, "name": "app"})

    def test_multi_character_separator(self) -> None:
        result = apply_data_transformation({"DB__HOST": "h", "DB__AUTH__USER": "u"}, nesting_separator="__")
        self.assertEqual(result, {"DB": {"HOST": "h", "AUTH": {"USER": "u"}}})

    def test_primitive_then_nested_conflict(self) -> None:
        with self.assertRaises(NestedKeyConflictError) as ctx:
            apply_data_transformation({"database": "x", "database.host": "y"}, nesting_separator=".")
        self.assertEqual(
            str(ctx.exception),
            'Nested key conflict: Cannot create nested object at "database" because it already exists '
            'as a primitive value. Conflicting key: "database.host" and "database"',
        )

    def test_nested_then_primitive_conflict(self) -> None:
        with self.assertRaises(NestedKeyConflictError) as ctx:
            apply_data_transformation({"database.host": "y", "database": "x"}, nesting_separator=".")
        self.assertEqual(
            str(ctx.exception),
            'Nested key conflict: "database" cannot be assigned because "database" already exists '
            "as an object (created by another key)",
        )

    def test_nested_values_are_not_split(self) -> None:
        result = apply_data_transformation({"a.b": {"c.d": 1}}, nesting_separator=".")
        self.assertEqual(result, {"a": {"b": {"c.d": 1}}})

    def test_transform_runs_before_nesting(self) -> None:
        data = {"db.host": "localhost", "db.secret": "pw"}

        def transform(entry: ConfigEntry):
            if "secret" in entry.key:
                return False
            return ConfigEntry(key=entry.key.replace("db", "database"), value=entry.value)

        result = apply_data_transformation(data, transform, ".")
        self.assertEqual(result, {"database": {"host": "localhost"}})

    def test_does_not_write_into_input_records(self) -> None:
        data = {"db": {"host": "h"}, "db.port": "1"}
        result = apply_data_transformation(data, nesting_separator=".")
        self.assertEqual(result, {"db": {"host": "h", "port": "1"}})
        self.assertEqual(data["db"], {"host": "h"})


class FilterTests(unittest.TestCase):
    def test_filter_by_regex_searches_keys(self) -> None:
        data = {"REACT_APP_NAME": "a", "APP_NAME": "b", "TEST_APP": "c"}
        self.assertEqual(filter_by_regex(data, r"_APP_"), {"REACT_APP_NAME": "a"})
        self.assertEqual(filter_by_regex(data, r"^TEST_"), {"TEST_APP": "c"})

    def test_filter_none_and_invalid(self) -> None:
        self.assertEqual(filter_by_regex(None, r"x"), {})
        with self.assertRaises(TypeError):
            filter_by_regex(["a"], r"x")

    def test_filtered_data_without_regex_is_identity(self) -> None:
        data = {"a": 1}
        self.assertIs(filtered_data(data), data)


if __name__ == "__main__":
    unittest.main()
