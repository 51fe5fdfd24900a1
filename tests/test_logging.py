import logging
import os
import unittest
from unittest import mock

from heapoql.observability.logging import get_logger


class TestGetLogger(unittest.TestCase):
    def test_unknown_level_falls_back_to_warning(self):
        with mock.patch.dict(os.environ, {"HEAPOQL_LOG_LEVEL": "chatty"}):
            logger = get_logger("heapoql.tests.chatty")
        self.assertEqual(logger.level, logging.WARNING)

    def test_level_from_env(self):
        with mock.patch.dict(os.environ, {"HEAPOQL_LOG_LEVEL": "debug"}):
            logger = get_logger("heapoql.tests.debug")
        self.assertEqual(logger.level, logging.DEBUG)

    def test_names_are_kept_under_package_namespace(self):
        self.assertEqual(get_logger("tests.outside").name, "heapoql.tests.outside")
        self.assertEqual(get_logger().name, "heapoql")

    def test_single_handler_on_repeat_calls(self):
        a = get_logger("heapoql.tests.repeat")
        b = get_logger("heapoql.tests.repeat")
        self.assertIs(a, b)
        self.assertEqual(len(b.handlers), 1)


if __name__ == "__main__":
    unittest.main()
