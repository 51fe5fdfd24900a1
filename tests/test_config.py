import os
import unittest
from unittest import mock

from heapoql.config import DEFAULT_CLASS_INTERFACE, get_settings
from heapoql.oql.factory import classes_by_class_loader_id


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        env = {k: v for k, v in os.environ.items() if not k.startswith("HEAPOQL_")}
        with mock.patch.dict(os.environ, env, clear=True), mock.patch("heapoql.config.load_dotenv"):
            s = get_settings()
        self.assertEqual(s.class_interface, DEFAULT_CLASS_INTERFACE)
        self.assertTrue(s.merge_unions)
        self.assertEqual(s.log_level, "WARNING")

    def test_overrides(self):
        env = {"HEAPOQL_CLASS_INTERFACE": "com.acme.HeapClass", "HEAPOQL_MERGE_UNIONS": "no", "HEAPOQL_LOG_LEVEL": "debug"}
        with mock.patch.dict(os.environ, env):
            s = get_settings()
            query = classes_by_class_loader_id(3)
        self.assertEqual(s.class_interface, "com.acme.HeapClass")
        self.assertFalse(s.merge_unions)
        self.assertEqual(s.log_level, "DEBUG")
        self.assertIn("c implements com.acme.HeapClass and", query)

    def test_invalid_log_level(self):
        with mock.patch.dict(os.environ, {"HEAPOQL_LOG_LEVEL": "chatty"}):
            with self.assertRaises(RuntimeError):
                get_settings()

    def test_empty_class_interface(self):
        with mock.patch.dict(os.environ, {"HEAPOQL_CLASS_INTERFACE": "  "}):
            with self.assertRaises(RuntimeError):
                get_settings()


if __name__ == "__main__":
    unittest.main()
